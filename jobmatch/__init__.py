"""
jobmatch: resume / job description matching with a RAG question-answering core.
"""
