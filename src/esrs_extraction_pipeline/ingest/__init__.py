"""
Ingest module - from raw files to normalised, chunked documents.

This module provides:
- normalize(): text cleanup applied before chunking
- chunk_text() / chunk_spans() / chunk_document(): sliding-window chunking
- FormatTag + read_document(): format registry and readers
"""

from esrs_extraction_pipeline.ingest.normalize import normalize, normalize_whitespace
from esrs_extraction_pipeline.ingest.chunker import (
    DEFAULT_MAX_CHARS,
    DEFAULT_OVERLAP,
    DEFAULT_MIN_CHARS,
    chunk_text,
    chunk_spans,
    chunk_document,
)
from esrs_extraction_pipeline.ingest.readers import (
    FormatTag,
    READERS,
    resolve_format,
    read_bytes,
    read_document,
    read_documents,
    build_document,
    content_hash,
)

__all__ = [
    # Normalisation
    "normalize",
    "normalize_whitespace",
    # Chunking
    "DEFAULT_MAX_CHARS",
    "DEFAULT_OVERLAP",
    "DEFAULT_MIN_CHARS",
    "chunk_text",
    "chunk_spans",
    "chunk_document",
    # Readers
    "FormatTag",
    "READERS",
    "resolve_format",
    "read_bytes",
    "read_document",
    "read_documents",
    "build_document",
    "content_hash",
]
