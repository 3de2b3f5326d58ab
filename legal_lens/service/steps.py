from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from legal_lens.analysis.analyzer import LegalAnalyzer
from legal_lens.extraction.extractor import TextExtractor
from legal_lens.logging.logger import Log
from legal_lens.service.exceptions import DocumentValidationError
from legal_lens.service.models import ProcessedDocument
from legal_lens.service.pipeline import PipelineContext, PipelineStep
from legal_lens.service.policy import (
    NOT_LEGAL_REJECTION,
    check_upload_policy,
    classification_verdict,
)
from legal_lens.store.base import BaseDocumentStore


class CheckUploadPolicyStep(PipelineStep):
    def __init__(self, max_size_bytes: int) -> None:
        self._max_size_bytes = max_size_bytes

    async def run(self, context: PipelineContext) -> PipelineContext:
        rejection = check_upload_policy(context.file_bytes, context.mime_type, self._max_size_bytes)
        if rejection is not None:
            Log.warning(f"Upload rejected: {rejection.message}", filename=context.filename)
            raise DocumentValidationError(rejection)
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, extractor: TextExtractor) -> None:
        self._extractor = extractor

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.document_processing = await self._extractor.extract(
            context.file_bytes, context.mime_type
        )
        Log.info(
            f"Extracted {len(context.document_processing.text)} chars from {context.filename}",
            degraded=context.document_processing.degraded,
        )
        return context


class RequireLegalDocumentStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.document_processing is None:
            raise ValueError("PipelineContext.document_processing must be set before the legal check")
        if not context.document_processing.is_legal_document:
            verdict = classification_verdict(context.document_processing)
            Log.warning("Upload rejected: not a legal document", filename=context.filename)
            raise DocumentValidationError(replace(verdict, message=NOT_LEGAL_REJECTION))
        return context


class AnalyzeStep(PipelineStep):
    def __init__(self, analyzer: LegalAnalyzer) -> None:
        self._analyzer = analyzer

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.document_processing is None:
            raise ValueError("PipelineContext.document_processing must be set before analysis")
        context.legal_analysis = await self._analyzer.analyze(
            context.document_processing.text,
            context.document_processing.document_type,
        )
        Log.info(
            f"Analyzed {context.filename}",
            risk_score=context.legal_analysis.risk_score,
        )
        return context


class BuildRecordStep(PipelineStep):
    def __init__(
        self,
        *,
        id_factory: Callable[[], str],
        clock: Callable[[], datetime],
        retain_file_buffer: bool = False,
    ) -> None:
        self._id_factory = id_factory
        self._clock = clock
        self._retain_file_buffer = retain_file_buffer

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.document_processing is None or context.legal_analysis is None:
            raise ValueError("PipelineContext must hold extraction and analysis results")
        context.document = ProcessedDocument(
            id=self._id_factory(),
            original_filename=context.filename,
            mime_type=context.mime_type,
            file_hash=context.file_hash,
            file_size_bytes=len(context.file_bytes),
            document_processing=context.document_processing,
            legal_analysis=context.legal_analysis,
            upload_time=self._clock(),
            file_buffer=context.file_bytes if self._retain_file_buffer else None,
        )
        return context


class PersistDocumentStep(PipelineStep):
    def __init__(self, store: BaseDocumentStore) -> None:
        self._store = store

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before persist")
        self._store.set(context.document.id, context.document)
        Log.info(f"Stored document {context.document.id}", filename=context.filename)
        return context
