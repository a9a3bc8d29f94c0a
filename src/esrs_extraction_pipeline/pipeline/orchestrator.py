"""
Extraction orchestrator.

Drives one run end to end:

1. Flatten chunks across documents
2. Build the EmbeddingIndex (optionally on a thread pool), then freeze it
3. Select metrics by priority
4. Run MetricExtractor for each metric
5. Aggregate into ExtractionResult

Only structural problems raise (ModelInitializationError, NoDocumentsError,
EmbeddingDimensionError outside a metric run). A chunk that fails to embed
is left out of the index; a metric that fails becomes a failed extraction.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from esrs_extraction_pipeline.catalog import ESRS_METRICS, MetricDefinition
from esrs_extraction_pipeline.config import PipelineConfig, get_config
from esrs_extraction_pipeline.core import AbortSignal, BatchReport, Failure, Success
from esrs_extraction_pipeline.errors import NoDocumentsError
from esrs_extraction_pipeline.extraction import MetricExtractor
from esrs_extraction_pipeline.ingest import read_documents
from esrs_extraction_pipeline.models import ModelHandle
from esrs_extraction_pipeline.observability import TracerProtocol, get_tracer
from esrs_extraction_pipeline.observability.attributes import (
    EXTRACTION_DOCUMENT_COUNT,
    GEN_AI_REQUEST_MODEL,
    GEN_AI_SYSTEM,
    extraction_run_attributes,
    index_build_attributes,
)
from esrs_extraction_pipeline.pipeline.progress import (
    EMBEDDING_PHASE,
    EXTRACTION_PHASE,
    ProgressEmitter,
    ProgressEvent,
)
from esrs_extraction_pipeline.retrieval import EmbeddingIndex
from esrs_extraction_pipeline.schemas import (
    DocumentChunk,
    ExtractionResult,
    MetricExtraction,
    ProcessedDocument,
)

logger = logging.getLogger(__name__)


def flatten_chunks(
    items: Sequence[DocumentChunk | ProcessedDocument],
) -> list[DocumentChunk]:
    """All chunks in document order, then chunk order."""
    chunks: list[DocumentChunk] = []
    for item in items:
        if isinstance(item, ProcessedDocument):
            chunks.extend(item.chunks)
        else:
            chunks.append(item)
    return chunks


def select_metrics(
    catalog: Sequence[MetricDefinition],
    threshold: int,
) -> list[MetricDefinition]:
    """Metrics with priority <= threshold; stable sort keeps catalog order on ties."""
    return sorted((m for m in catalog if m.priority <= threshold), key=lambda m: m.priority)


def _aborted(abort: AbortSignal | None) -> bool:
    return abort is not None and abort.is_set()


@dataclass
class IndexBuild:
    """Result of the embedding phase."""
    index: EmbeddingIndex
    report: BatchReport
    cancelled: bool = False


@dataclass
class BatchRun:
    """Result of run_batch: the extraction plus what happened to each file."""
    result: ExtractionResult
    documents: BatchReport


class ExtractionPipeline:
    """
    Runs the full extraction over a set of chunks or documents.

    Dependencies are INJECTED: the ModelHandle owns the models, the
    ProgressEmitter receives progress, the tracer receives spans.

    Example:
        with get_model_handle(use_mock=True) as models:
            pipeline = ExtractionPipeline(models)
            result = pipeline.extract_all_metrics(documents)
    """

    def __init__(
        self,
        models: ModelHandle,
        config: PipelineConfig | None = None,
        progress: ProgressEmitter | None = None,
        catalog: Sequence[MetricDefinition] | None = None,
        tracer: TracerProtocol | None = None,
    ):
        self.models = models
        self.config = config or get_config()
        self.progress = progress or ProgressEmitter()
        self.catalog = tuple(catalog) if catalog is not None else ESRS_METRICS
        self._tracer = tracer or get_tracer()

    # -------------------------------------------------------------------------
    # EMBEDDING PHASE
    # -------------------------------------------------------------------------

    def _report_embedding(self, done: int, total: int) -> None:
        percent = round(done / total * 100) if total else 100
        self.progress.emit(ProgressEvent(EMBEDDING_PHASE, "Generating embeddings", percent))

    def build_index(
        self,
        chunks: list[DocumentChunk],
        abort: AbortSignal | None = None,
    ) -> IndexBuild:
        """
        Embed every chunk into a new index, in chunk order, and freeze it.

        With embedding_workers > 1 the embedding calls run on a thread pool;
        vectors are still inserted in chunk order.
        """
        embeddings = self.models.embeddings
        index = EmbeddingIndex(embeddings)
        report: BatchReport = BatchReport()
        build = IndexBuild(index=index, report=report)
        total = len(chunks)

        self._report_embedding(0, total)

        if self.config.embedding_workers > 1 and total > 1:
            with ThreadPoolExecutor(max_workers=self.config.embedding_workers) as pool:
                futures = [pool.submit(embeddings.embed, chunk.text) for chunk in chunks]
                for done, (chunk, future) in enumerate(zip(chunks, futures), start=1):
                    if _aborted(abort):
                        for pending in futures:
                            pending.cancel()
                        build.cancelled = True
                        break
                    try:
                        vector = future.result()
                    except Exception as e:
                        logger.warning(f"Failed to embed chunk {chunk.id}: {e}")
                        report.add(Failure.from_exception(chunk.id, e))
                    else:
                        report.add(Success(chunk.id, index.add_vector(chunk, vector)))
                    self._report_embedding(done, total)
        else:
            for done, chunk in enumerate(chunks, start=1):
                if _aborted(abort):
                    build.cancelled = True
                    break
                report.add(index.add(chunk))
                self._report_embedding(done, total)

        index.freeze()
        if report.failure_count:
            logger.warning(
                f"{report.failure_count} of {total} chunks could not be embedded"
            )
        logger.info(f"Index built: {len(index)} vectors from {total} chunks")
        return build

    # -------------------------------------------------------------------------
    # EXTRACTION PHASE
    # -------------------------------------------------------------------------

    def selected_metrics(self) -> list[MetricDefinition]:
        return select_metrics(self.catalog, self.config.priority_threshold)

    def extract_all_metrics(
        self,
        items: Sequence[DocumentChunk | ProcessedDocument],
        abort: AbortSignal | None = None,
    ) -> ExtractionResult:
        """
        Extract every selected metric from the given chunks or documents.

        Returns exactly one MetricExtraction per selected metric unless the
        run was cancelled, in which case the metrics finished so far are
        returned with cancelled=True.

        Raises:
            ModelInitializationError: if the models cannot be loaded
        """
        start = time.perf_counter()
        self.models.initialize()

        chunks = flatten_chunks(items)
        extractions: list[MetricExtraction] = []

        model_attributes = {
            GEN_AI_SYSTEM: "local" if self.config.use_mock_models else "openai",
            GEN_AI_REQUEST_MODEL: self.config.qa_model,
        }
        with self._tracer.start_span("extraction_run", attributes=model_attributes) as run_span:
            with self._tracer.start_span("index_build") as span:
                build = self.build_index(chunks, abort)
                span.set_attributes(index_build_attributes(
                    vector_count=len(build.index),
                    embedding_failures=build.report.failure_count,
                    workers=self.config.embedding_workers,
                ))

            cancelled = build.cancelled
            if not cancelled:
                extractor = MetricExtractor(
                    build.index,
                    self.models.qa,
                    top_k=self.config.top_k,
                    max_context_chars=self.config.max_context_chars,
                    tracer=self._tracer,
                )
                metrics = self.selected_metrics()
                for position, metric in enumerate(metrics):
                    if _aborted(abort):
                        cancelled = True
                        break
                    self.progress.emit(ProgressEvent(
                        EXTRACTION_PHASE,
                        metric.label,
                        round(position / len(metrics) * 100),
                    ))
                    extractions.append(extractor.extract(metric))

            result = ExtractionResult(
                extractions=extractions,
                processing_time_ms=(time.perf_counter() - start) * 1000,
                total_chunks=len(chunks),
                embedding_failures=build.report.failure_count,
                cancelled=cancelled,
            )
            gaps = sum(1 for e in extractions if e.is_gap)
            run_span.set_attributes(extraction_run_attributes(
                chunk_count=result.total_chunks,
                metric_count=len(extractions),
                gap_count=gaps,
                cancelled=cancelled,
                processing_time_ms=result.processing_time_ms,
            ))

        if cancelled:
            logger.warning(f"Extraction cancelled after {len(extractions)} metrics")
        logger.info(
            f"Extracted {len(extractions)} metrics ({gaps} gaps) from "
            f"{result.total_chunks} chunks in {result.processing_time_ms:.0f}ms"
        )
        return result

    # -------------------------------------------------------------------------
    # FILE BATCHES
    # -------------------------------------------------------------------------

    def run_batch(
        self,
        paths: Sequence[str | Path],
        abort: AbortSignal | None = None,
    ) -> BatchRun:
        """
        Read files from disk and extract metrics from everything readable.

        Unreadable or unsupported files are reported, not raised. A file
        whose content was already read under another name is skipped.

        Raises:
            NoDocumentsError: if no chunks survive reading
            ModelInitializationError: if the models cannot be loaded
        """
        report = read_documents(list(paths), config=self.config)
        for failure in report.failed:
            logger.warning(f"Skipped {failure.item_id}: {failure.error_message}")

        documents: list[ProcessedDocument] = []
        seen: set[str] = set()
        for document in report.succeeded:
            if document.content_hash in seen:
                logger.warning(f"Skipped {document.filename}: duplicate of an earlier document")
                continue
            seen.add(document.content_hash)
            documents.append(document)

        if not any(document.chunks for document in documents):
            raise NoDocumentsError(
                "No text could be extracted from the uploaded documents. "
                "Please ensure your files contain readable text."
            )

        with self._tracer.start_span(
            "document_batch", attributes={EXTRACTION_DOCUMENT_COUNT: len(documents)}
        ):
            result = self.extract_all_metrics(documents, abort=abort)
        return BatchRun(result=result, documents=report)
