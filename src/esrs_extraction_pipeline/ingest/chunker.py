"""
Sliding-window chunker with boundary seeking.

A window of max_chars slides over the text. When the window does not reach
the end of the text, its end is pulled back to the last sentence terminator
or line break inside the window, provided that break lies past the middle of
the window. Consecutive windows overlap by `overlap` characters and always
advance by at least one character.

Chunks shorter than min_chars after trimming are dropped as noise.
"""

from __future__ import annotations

from esrs_extraction_pipeline.schemas.extraction import DocumentChunk

DEFAULT_MAX_CHARS = 800
DEFAULT_OVERLAP = 200
DEFAULT_MIN_CHARS = 50

_BREAK_CHARS = (".", "\n")


def _validate(max_chars: int, overlap: int) -> None:
    if max_chars <= 0:
        raise ValueError("max_chars must be > 0")
    if overlap < 0:
        raise ValueError("overlap must be >= 0")


def _find_break(text: str, start: int, end: int) -> int:
    """Index of the last break character in text[start:end], or -1."""
    return max(text.rfind(char, start, end) for char in _BREAK_CHARS)


def chunk_spans(
    text: str,
    max_chars: int = DEFAULT_MAX_CHARS,
    overlap: int = DEFAULT_OVERLAP,
) -> list[tuple[int, int]]:
    """
    Candidate [start, end) windows before trimming and length filtering.

    The windows are contiguous or overlapping and together cover the whole
    text.
    """
    _validate(max_chars, overlap)

    text_length = len(text)
    if text_length <= max_chars:
        return [(0, text_length)] if text_length else []

    spans: list[tuple[int, int]] = []
    start = 0

    while start < text_length:
        end = min(start + max_chars, text_length)

        if end < text_length:
            break_point = _find_break(text, start, end)
            if break_point > start + max_chars * 0.5:
                end = break_point + 1

        spans.append((start, end))

        if end >= text_length:
            break
        start = max(start + 1, end - overlap)

    return spans


def chunk_text(
    text: str,
    max_chars: int = DEFAULT_MAX_CHARS,
    overlap: int = DEFAULT_OVERLAP,
    min_chars: int = DEFAULT_MIN_CHARS,
) -> list[str]:
    """
    Split text into overlapping chunks of at most max_chars characters.

    Args:
        text: Normalised text
        max_chars: Maximum chunk length
        overlap: Characters shared by consecutive windows
        min_chars: Trimmed chunks shorter than this are dropped

    Returns:
        Ordered list of non-empty chunk strings
    """
    _validate(max_chars, overlap)

    if len(text) <= max_chars:
        return [text] if text.strip() else []

    chunks = [text[start:end].strip() for start, end in chunk_spans(text, max_chars, overlap)]
    return [chunk for chunk in chunks if len(chunk) >= min_chars]


def chunk_document(
    text: str,
    *,
    source: str,
    doc_id: str,
    page: int | None = None,
    offset: int = 0,
    max_chars: int = DEFAULT_MAX_CHARS,
    overlap: int = DEFAULT_OVERLAP,
    min_chars: int = DEFAULT_MIN_CHARS,
) -> list[DocumentChunk]:
    """
    Chunk one page (or whole document) of text into DocumentChunks.

    Offsets are positions in the normalised text of the whole document;
    `offset` is where this page starts.
    """
    _validate(max_chars, overlap)

    if len(text) <= max_chars:
        windows = [(0, len(text))] if text.strip() else []
    else:
        windows = chunk_spans(text, max_chars, overlap)

    prefix = f"{doc_id}-page-{page}" if page is not None else doc_id
    records: list[DocumentChunk] = []

    for start, end in windows:
        raw = text[start:end]
        chunk = raw.strip()
        if len(text) > max_chars and len(chunk) < min_chars:
            continue
        leading = len(raw) - len(raw.lstrip())
        chunk_start = offset + start + leading
        records.append(
            DocumentChunk(
                id=f"{prefix}-chunk-{len(records)}",
                text=chunk,
                source=source,
                page=page,
                start_char=chunk_start,
                end_char=chunk_start + len(chunk),
            )
        )

    return records
