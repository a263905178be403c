"""
Analysis domain models.

One upload-to-result session pairing a resume with a job description.

Dependencies: pydantic
System role: Analysis lifecycle data structures
"""

import enum
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from jobmatch.models.match import MatchResult


class AnalysisStatus(str, enum.Enum):
    """
    Analysis lifecycle states.

    UPLOADED: Documents received, not yet processed
    PROCESSING: Chunking, embedding and scoring underway
    COMPLETED: Results available; questions can be asked
    ERROR: Processing failed; check the error field
    """

    UPLOADED = "uploaded"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class SourceDocument(BaseModel):
    """Extracted text of an uploaded document."""

    filename: str | None = None
    text: str = ""

    @property
    def size(self) -> int:
        return len(self.text)


class AnalysisResults(BaseModel):
    """Output of a completed processing run."""

    match: MatchResult
    resume_text: str
    job_description_text: str
    resume_chunk_count: int = 0
    job_description_chunk_count: int = 0
    processing_time_ms: int = 0
    processed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Analysis(BaseModel):
    """Analysis record owned by the analysis service."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    status: AnalysisStatus = AnalysisStatus.UPLOADED
    resume: SourceDocument
    job_description: SourceDocument
    results: AnalysisResults | None = None
    error: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
