"""
Unit Tests for Document Readers

Tests format resolution, each registered reader, and the per-document
outcome handling of read_document / read_documents.
"""

import io
import zipfile

import pandas as pd
import pytest

from esrs_extraction_pipeline.config import PipelineConfig
from esrs_extraction_pipeline.core.outcomes import Failure, Success
from esrs_extraction_pipeline.errors import DocumentReadError, UnsupportedFormatError
from esrs_extraction_pipeline.ingest.readers import (
    FormatTag,
    READERS,
    content_hash,
    read_bytes,
    read_document,
    read_documents,
    resolve_format,
)


def _docx_bytes(paragraphs: list[str]) -> bytes:
    ns = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
    body = "".join(f"<w:p><w:r><w:t>{text}</w:t></w:r></w:p>" for text in paragraphs)
    xml = f'<?xml version="1.0" encoding="UTF-8"?><w:document xmlns:w="{ns}"><w:body>{body}</w:body></w:document>'
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("word/document.xml", xml)
    return buffer.getvalue()


def _xlsx_bytes(frames: dict[str, pd.DataFrame]) -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for name, frame in frames.items():
            frame.to_excel(writer, sheet_name=name, index=False)
    return buffer.getvalue()


def _pdf_bytes(pages: list[str]) -> bytes:
    import fitz

    pdf = fitz.open()
    for text in pages:
        page = pdf.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = pdf.tobytes()
    pdf.close()
    return data


# ---------------------------------------------------------------------------
# FORMAT RESOLUTION
# ---------------------------------------------------------------------------


class TestResolveFormat:
    """Tests for resolve_format."""

    @pytest.mark.parametrize("filename,expected", [
        ("report.pdf", FormatTag.PDF),
        ("REPORT.PDF", FormatTag.PDF),
        ("report.docx", FormatTag.DOCX),
        ("data.xlsx", FormatTag.XLSX),
        ("data.csv", FormatTag.CSV),
        ("notes.txt", FormatTag.PLAINTEXT),
        ("notes.md", FormatTag.UNSUPPORTED),
        ("archive", FormatTag.UNSUPPORTED),
    ])
    def test_by_extension(self, filename, expected):
        assert resolve_format(filename) is expected

    def test_mime_type_wins_over_extension(self):
        assert resolve_format("upload.bin", "application/pdf") is FormatTag.PDF

    def test_unknown_mime_falls_back_to_extension(self):
        assert resolve_format("notes.txt", "application/x-unknown") is FormatTag.PLAINTEXT

    def test_every_supported_tag_has_a_reader(self):
        supported = {tag for tag in FormatTag if tag is not FormatTag.UNSUPPORTED}
        assert set(READERS) == supported


# ---------------------------------------------------------------------------
# READERS
# ---------------------------------------------------------------------------


class TestPlaintext:
    """Plain text files."""

    def test_single_chunk(self):
        doc = read_bytes(b"Scope 1 emissions were 1,250 tCO2e.", "report.txt")

        assert doc.filename == "report.txt"
        assert doc.mime_type == "text/plain"
        assert doc.id == content_hash(b"Scope 1 emissions were 1,250 tCO2e.")
        assert [c.text for c in doc.chunks] == ["Scope 1 emissions were 1,250 tCO2e."]
        assert doc.chunks[0].id == f"{doc.id}-chunk-0"

    def test_text_is_normalised(self):
        doc = read_bytes(b"Emissions   of 2,500k tCO2 in the re-\nporting year", "report.txt")
        assert doc.chunks[0].text == "Emissions of 2500000 tCO2e in the reporting year"

    def test_latin1_fallback(self):
        doc = read_bytes("café energy report".encode("latin-1"), "report.txt")
        assert doc.chunks[0].text == "café energy report"

    def test_empty_file_has_no_chunks(self):
        doc = read_bytes(b"   \n", "empty.txt")
        assert doc.chunks == []

    def test_long_text_is_chunked_with_config(self):
        text = ". ".join(f"Sentence number {i} about water withdrawal" for i in range(40))
        config = PipelineConfig(max_chars=120, chunk_overlap=20, min_chunk_chars=10)

        doc = read_bytes(text.encode(), "long.txt", config=config)

        assert len(doc.chunks) > 1
        assert all(len(c.text) <= 120 for c in doc.chunks)
        assert len({c.id for c in doc.chunks}) == len(doc.chunks)


class TestCsv:
    """CSV files."""

    def test_rows_rejoined(self):
        data = b'metric,value\n"Scope 1","1,250 tCO2e"\n'
        doc = read_bytes(data, "data.csv")
        assert doc.chunks[0].text == "metric, value\nScope 1, 1,250 tCO2e"


class TestDocx:
    """DOCX files."""

    def test_paragraphs_joined_by_newlines(self):
        data = _docx_bytes(["Climate", "Total energy consumption was 12,400 MWh."])
        doc = read_bytes(data, "report.docx")
        assert doc.chunks[0].text == "Climate\nTotal energy consumption was 12,400 MWh."
        assert doc.total_pages is None

    def test_corrupt_docx_raises(self):
        with pytest.raises(DocumentReadError):
            read_bytes(b"this is not a zip archive", "broken.docx")


class TestXlsx:
    """XLSX workbooks."""

    def test_one_page_per_sheet(self):
        data = _xlsx_bytes({
            "Climate": pd.DataFrame({"Metric": ["Scope 1 emissions"], "Value": ["1250 tCO2e"]}),
            "Water": pd.DataFrame({"Metric": ["Water withdrawal"], "Value": ["52000 m3"]}),
        })

        doc = read_bytes(data, "data.xlsx")

        assert doc.total_pages == 2
        assert [c.page for c in doc.chunks] == [1, 2]
        assert doc.chunks[0].text.startswith("Sheet: Climate")
        assert "Scope 1 emissions" in doc.chunks[0].text
        assert "52000 m3" in doc.chunks[1].text

    def test_empty_sheet_skipped(self):
        data = _xlsx_bytes({
            "Empty": pd.DataFrame(),
            "Data": pd.DataFrame({"Metric": ["Employees"], "Value": ["4812"]}),
        })
        doc = read_bytes(data, "data.xlsx")
        assert len(doc.chunks) == 1
        assert "Sheet: Data" in doc.chunks[0].text


class TestPdf:
    """PDF files (generated with PyMuPDF)."""

    def test_pages_become_chunks_with_running_offsets(self):
        data = _pdf_bytes(["Scope 1 emissions were 1,250 tCO2e.", "Water withdrawal was 52,000 m3."])

        doc = read_bytes(data, "report.pdf")

        assert doc.total_pages == 2
        assert [c.page for c in doc.chunks] == [1, 2]
        assert doc.chunks[0].id == f"{doc.id}-page-1-chunk-0"
        assert doc.chunks[1].id == f"{doc.id}-page-2-chunk-0"
        assert "1,250 tCO2e" in doc.chunks[0].text
        assert doc.chunks[1].start_char == doc.chunks[0].end_char

    def test_pdf_without_text_raises(self):
        with pytest.raises(DocumentReadError, match="No text could be extracted"):
            read_bytes(_pdf_bytes([""]), "scan.pdf")

    def test_corrupt_pdf_raises(self):
        with pytest.raises(DocumentReadError):
            read_bytes(b"%PDF-garbage", "broken.pdf")


class TestUnsupported:
    """Unsupported formats."""

    def test_read_bytes_raises(self):
        with pytest.raises(UnsupportedFormatError, match="notes.md"):
            read_bytes(b"# heading", "notes.md")


# ---------------------------------------------------------------------------
# OUTCOMES
# ---------------------------------------------------------------------------


class TestReadDocument:
    """read_document never raises for per-document problems."""

    def test_success(self, tmp_path):
        path = tmp_path / "report.txt"
        path.write_text("Scope 1 emissions were 1,250 tCO2e.")

        outcome = read_document(path)

        assert isinstance(outcome, Success)
        assert outcome.ok
        assert outcome.item_id == "report.txt"
        assert outcome.value.chunks[0].source == "report.txt"

    def test_unsupported_is_failure(self, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("# notes")

        outcome = read_document(path)

        assert isinstance(outcome, Failure)
        assert not outcome.ok
        assert outcome.error_type == "UnsupportedFormatError"

    def test_missing_file_is_failure(self, tmp_path):
        outcome = read_document(tmp_path / "missing.txt")
        assert isinstance(outcome, Failure)
        assert outcome.error_type == "FileNotFoundError"

    def test_corrupt_file_is_failure(self, tmp_path):
        path = tmp_path / "broken.docx"
        path.write_bytes(b"not a zip")

        outcome = read_document(path)

        assert isinstance(outcome, Failure)
        assert outcome.error_type == "DocumentReadError"

    def test_read_documents_keeps_order(self, tmp_path):
        good = tmp_path / "a.txt"
        good.write_text("Energy consumption was 12,400 MWh.")
        bad = tmp_path / "b.md"
        bad.write_text("unsupported")

        report = read_documents([bad, good])

        assert [o.item_id for o in report.outcomes] == ["b.md", "a.txt"]
        assert report.total == 2
        assert report.failure_count == 1
        assert not report.all_succeeded
        assert report.succeeded[0].filename == "a.txt"
