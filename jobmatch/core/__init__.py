"""
Core RAG and matching logic.

Chunking, embedding, retrieval, answer synthesis and match scoring.
"""
