"""
Document readers - turn an input file into a ProcessedDocument.

Format dispatch is a closed registry: a file resolves to exactly one
FormatTag (by MIME type first, then extension) and each tag maps to one
reader function. Anything else resolves to FormatTag.UNSUPPORTED, which
read_document() reports as a Failure outcome instead of raising.

Every reader returns a list of (page, text) pairs; the shared builder
normalises each page, chunks it, and assigns chunk ids and offsets.

Libraries:
- PyMuPDF (fitz) for PDF page text
- pandas (openpyxl engine) for XLSX sheets
- zipfile + ElementTree for DOCX body text
"""

from __future__ import annotations

import csv
import hashlib
import io
import logging
import mimetypes
import zipfile
from enum import Enum
from pathlib import Path
from typing import Callable
from xml.etree import ElementTree

from esrs_extraction_pipeline.config import PipelineConfig, get_config
from esrs_extraction_pipeline.core.outcomes import BatchReport, Failure, Outcome, Success
from esrs_extraction_pipeline.errors import DocumentReadError, UnsupportedFormatError
from esrs_extraction_pipeline.ingest.chunker import chunk_document
from esrs_extraction_pipeline.ingest.normalize import normalize
from esrs_extraction_pipeline.schemas.extraction import DocumentChunk, ProcessedDocument

logger = logging.getLogger(__name__)

Page = tuple[int | None, str]
Reader = Callable[[bytes, str], list[Page]]


# ---------------------------------------------------------------------------
# FORMAT TAGS
# ---------------------------------------------------------------------------


class FormatTag(Enum):
    """Every format the pipeline can read, plus the explicit fallthrough."""

    PDF = "pdf"
    DOCX = "docx"
    XLSX = "xlsx"
    CSV = "csv"
    PLAINTEXT = "plaintext"
    UNSUPPORTED = "unsupported"


_MIME_TYPES = {
    "application/pdf": FormatTag.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": FormatTag.DOCX,
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": FormatTag.XLSX,
    "text/csv": FormatTag.CSV,
    "text/plain": FormatTag.PLAINTEXT,
}

_EXTENSIONS = {
    "pdf": FormatTag.PDF,
    "docx": FormatTag.DOCX,
    "xlsx": FormatTag.XLSX,
    "csv": FormatTag.CSV,
    "txt": FormatTag.PLAINTEXT,
}


def resolve_format(filename: str, mime_type: str | None = None) -> FormatTag:
    """Resolve a file to its FormatTag. Never raises."""
    if mime_type:
        tag = _MIME_TYPES.get(mime_type.lower())
        if tag is not None:
            return tag
    extension = Path(filename).suffix.lower().lstrip(".")
    return _EXTENSIONS.get(extension, FormatTag.UNSUPPORTED)


# ---------------------------------------------------------------------------
# READERS
# ---------------------------------------------------------------------------


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def read_pdf(data: bytes, filename: str) -> list[Page]:
    """Extract text page by page; unreadable pages are skipped."""
    import fitz  # PyMuPDF

    pages: list[Page] = []
    with fitz.open(stream=data, filetype="pdf") as pdf:
        logger.info(f"PDF loaded: {filename} ({pdf.page_count} pages)")
        for page_number, page in enumerate(pdf, start=1):
            try:
                pages.append((page_number, page.get_text("text")))
            except Exception as e:
                logger.error(f"Error processing page {page_number} of {filename}: {e}")
    return pages


_WORD_NS = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"


def read_docx(data: bytes, filename: str) -> list[Page]:
    """Raw paragraph text from the main document part."""
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        root = ElementTree.fromstring(archive.read("word/document.xml"))

    paragraphs = []
    for paragraph in root.iter(f"{_WORD_NS}p"):
        runs = [node.text or "" for node in paragraph.iter(f"{_WORD_NS}t")]
        paragraphs.append("".join(runs))
    return [(None, "\n".join(paragraphs))]


def read_xlsx(data: bytes, filename: str) -> list[Page]:
    """One page per non-empty sheet, rendered as CSV under a sheet header."""
    import pandas as pd

    sheets = pd.read_excel(io.BytesIO(data), sheet_name=None, header=None, dtype=str)
    pages: list[Page] = []
    for sheet_index, (sheet_name, frame) in enumerate(sheets.items(), start=1):
        frame = frame.dropna(how="all")
        if frame.empty:
            continue
        csv_data = frame.fillna("").to_csv(index=False, header=False)
        if csv_data.strip(", \n"):
            pages.append((sheet_index, f"Sheet: {sheet_name}\n{csv_data}"))
    return pages


def read_csv(data: bytes, filename: str) -> list[Page]:
    """Rows re-joined with commas so quoting noise does not reach the chunker."""
    rows = csv.reader(io.StringIO(_decode(data)))
    return [(None, "\n".join(", ".join(cell.strip() for cell in row) for row in rows))]


def read_plaintext(data: bytes, filename: str) -> list[Page]:
    return [(None, _decode(data))]


READERS: dict[FormatTag, Reader] = {
    FormatTag.PDF: read_pdf,
    FormatTag.DOCX: read_docx,
    FormatTag.XLSX: read_xlsx,
    FormatTag.CSV: read_csv,
    FormatTag.PLAINTEXT: read_plaintext,
}


# ---------------------------------------------------------------------------
# DOCUMENT BUILDING
# ---------------------------------------------------------------------------


def content_hash(data: bytes) -> str:
    """SHA-256 hex digest of the raw file bytes."""
    return hashlib.sha256(data).hexdigest()


def build_document(
    pages: list[Page],
    *,
    filename: str,
    mime_type: str,
    digest: str,
    config: PipelineConfig | None = None,
    total_pages: int | None = None,
) -> ProcessedDocument:
    """Normalise and chunk reader output into a ProcessedDocument."""
    config = config or get_config()

    chunks: list[DocumentChunk] = []
    offset = 0
    for page, raw_text in pages:
        text = normalize(raw_text)
        if not text:
            continue
        chunks.extend(
            chunk_document(
                text,
                source=filename,
                doc_id=digest,
                page=page,
                offset=offset,
                max_chars=config.max_chars,
                overlap=config.chunk_overlap,
                min_chars=config.min_chunk_chars,
            )
        )
        offset += len(text)

    return ProcessedDocument(
        id=digest,
        filename=filename,
        mime_type=mime_type,
        content_hash=digest,
        chunks=chunks,
        total_pages=total_pages,
        total_chars=offset,
    )


def read_bytes(
    data: bytes,
    filename: str,
    mime_type: str | None = None,
    config: PipelineConfig | None = None,
) -> ProcessedDocument:
    """
    Read an in-memory file.

    Raises:
        UnsupportedFormatError: no reader is registered for the file
        DocumentReadError: the reader failed or produced no text
    """
    tag = resolve_format(filename, mime_type)
    if tag is FormatTag.UNSUPPORTED:
        raise UnsupportedFormatError(filename, mime_type or Path(filename).suffix)

    mime_type = mime_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"
    logger.info(f"Processing document: {filename}, Type: {tag.value}, Size: {len(data)} bytes")

    try:
        pages = READERS[tag](data, filename)
    except Exception as e:
        raise DocumentReadError(f"Failed to process {filename}: {e}") from e

    total_pages = len(pages) if tag in (FormatTag.PDF, FormatTag.XLSX) else None
    document = build_document(
        pages,
        filename=filename,
        mime_type=mime_type,
        digest=content_hash(data),
        config=config,
        total_pages=total_pages,
    )

    if tag is FormatTag.PDF and not document.chunks:
        raise DocumentReadError(
            f"No text could be extracted from PDF: {filename}. "
            "The PDF might be image-based or corrupted."
        )

    logger.info(
        f"Processed {filename}: {len(document.chunks)} chunks, {document.total_chars} chars"
    )
    return document


def read_document(
    path: str | Path,
    mime_type: str | None = None,
    config: PipelineConfig | None = None,
) -> Outcome:
    """
    Read one file from disk. Never raises for per-document problems.

    Returns:
        Success(ProcessedDocument) or Failure describing why it was skipped
    """
    path = Path(path)
    try:
        document = read_bytes(path.read_bytes(), path.name, mime_type, config)
    except (UnsupportedFormatError, DocumentReadError, OSError) as e:
        logger.error(f"Document processing failed for {path.name}: {e}")
        return Failure.from_exception(path.name, e)
    return Success(item_id=path.name, value=document)


def read_documents(
    paths: list[str | Path],
    config: PipelineConfig | None = None,
) -> BatchReport:
    """Read every file, collecting one outcome per path in input order."""
    report: BatchReport = BatchReport()
    for path in paths:
        report.add(read_document(path, config=config))
    return report
