"""Orchestration of the upload → extract → analyze → store flow and document chat.

Processing flow for an upload:
1. Hash the bytes; an already stored document with the same content is
   returned as-is.
2. Concurrent uploads of the same content share one running pipeline.
3. Pipeline: upload policy → text extraction → legal-document gate →
   analysis → record creation → persistence.

Rejected uploads raise DocumentValidationError and leave the store untouched.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from legal_lens.analysis.analyzer import LegalAnalyzer
from legal_lens.analysis.factory import AnalyzerFactory
from legal_lens.analysis.models import ChatResponse, DetailedAnalysisResult
from legal_lens.config.settings import Settings
from legal_lens.extraction.extractor import TextExtractor
from legal_lens.extraction.factory import ExtractorFactory
from legal_lens.logging.logger import Log
from legal_lens.service.exceptions import DocumentNotFoundError
from legal_lens.service.fingerprint import content_hash, generate_document_id
from legal_lens.service.models import (
    DocumentForChat,
    DocumentListItem,
    DocumentSummary,
    DocumentValidationResult,
    ProcessedDocument,
)
from legal_lens.service.pipeline import PipelineContext, PipelineStep, run_pipeline
from legal_lens.service.policy import check_upload_policy, classification_verdict
from legal_lens.service.steps import (
    AnalyzeStep,
    BuildRecordStep,
    CheckUploadPolicyStep,
    ExtractTextStep,
    PersistDocumentStep,
    RequireLegalDocumentStep,
)
from legal_lens.store.base import BaseDocumentStore
from legal_lens.store.factory import DocumentStoreFactory

DOCUMENT_NOT_FOUND_MESSAGE = "Document not found. Please upload a document first."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LegalDocumentService:
    """Entry point for document processing, validation and chat."""

    def __init__(
        self,
        *,
        extractor: TextExtractor,
        analyzer: LegalAnalyzer,
        store: BaseDocumentStore,
        settings: Settings,
        id_factory: Callable[[], str] = generate_document_id,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._extractor = extractor
        self._analyzer = analyzer
        self._store = store
        self._settings = settings
        self._clock = clock
        self._in_flight: dict[str, asyncio.Task[ProcessedDocument]] = {}
        self._steps: list[PipelineStep] = [
            CheckUploadPolicyStep(settings.upload_max_size_bytes),
            ExtractTextStep(extractor),
            RequireLegalDocumentStep(),
            AnalyzeStep(analyzer),
            BuildRecordStep(
                id_factory=id_factory,
                clock=clock,
                retain_file_buffer=settings.retain_file_buffer,
            ),
            PersistDocumentStep(store),
        ]

    async def process_legal_document(
        self,
        file_bytes: bytes,
        filename: str,
        mime_type: str,
    ) -> ProcessedDocument:
        """Process an upload, or return the stored record for identical content.

        Raises:
            DocumentValidationError: upload is oversized, unsupported or not legal.
        """
        file_hash = content_hash(file_bytes)
        existing = self._find_existing(file_hash, filename, len(file_bytes))
        if existing is not None:
            Log.info(f"Using existing processed document {existing.id}", filename=filename)
            return existing

        task = self._in_flight.get(file_hash)
        if task is None:
            Log.info(f"Processing {filename}", mime_type=mime_type, size=len(file_bytes))
            task = asyncio.create_task(
                self._run_pipeline(file_bytes, filename, mime_type, file_hash)
            )
            self._in_flight[file_hash] = task
            task.add_done_callback(lambda done: self._release_in_flight(file_hash, done))
        else:
            Log.info(f"Joining in-flight processing of identical content for {filename}")
        return await asyncio.shield(task)

    async def validate_document(
        self,
        file_bytes: bytes,
        filename: str,
        mime_type: str,
    ) -> DocumentValidationResult:
        """Report whether an upload is acceptable and legal, without storing anything."""
        rejection = check_upload_policy(
            file_bytes, mime_type, self._settings.upload_max_size_bytes
        )
        if rejection is not None:
            Log.info(f"Validation rejected {filename}: {rejection.message}")
            return rejection
        processing = await self._extractor.extract(file_bytes, mime_type)
        verdict = classification_verdict(processing)
        Log.info(f"Validated {filename}: {verdict.message}")
        return verdict

    async def handle_chat_query(
        self,
        document_id: str,
        query: str,
        fallback_text: str | None = None,
        fallback_type: str | None = None,
    ) -> ChatResponse:
        """Answer a question about a stored document or about caller-supplied text.

        Raises:
            DocumentNotFoundError: unknown id and no fallback text.
            AnalysisError: the AI provider failed.
        """
        document = self._store.get(document_id)
        if document is not None:
            context = (
                f"Document: {document.original_filename}, "
                f"Type: {document.document_processing.document_type}"
            )
            text = document.document_processing.text
        elif fallback_text:
            Log.info(f"Document {document_id} not stored, answering from fallback text")
            context = f"Document Type: {fallback_type or 'Legal Document'}"
            text = fallback_text
        else:
            Log.warning(f"Chat requested for unknown document {document_id}")
            raise DocumentNotFoundError(DOCUMENT_NOT_FOUND_MESSAGE)

        response = await self._analyzer.chat(query, text, context)
        Log.info(
            f"Answered chat query for {document_id}",
            confidence=response.confidence,
            sources=len(response.sources),
        )
        return response

    async def analyze_clauses_and_risks(
        self,
        document_id: str,
        fallback_text: str | None = None,
    ) -> DetailedAnalysisResult:
        """Clause-by-clause breakdown of a stored document or of fallback text.

        Raises:
            DocumentNotFoundError: unknown id and no fallback text.
            AnalysisError: the AI provider failed or returned unusable output.
        """
        document = self._store.get(document_id)
        if document is not None:
            text = document.document_processing.text
        elif fallback_text:
            text = fallback_text
        else:
            raise DocumentNotFoundError(DOCUMENT_NOT_FOUND_MESSAGE)
        return await self._analyzer.analyze_clauses_and_risks(text)

    def get_processed_document(self, document_id: str) -> ProcessedDocument | None:
        return self._store.get(document_id)

    def get_processed_documents(self) -> list[ProcessedDocument]:
        return self._store.get_all_documents()

    def get_document_summary(self, document_id: str) -> DocumentSummary | None:
        document = self._store.get(document_id)
        if document is None:
            return None
        analysis = document.legal_analysis
        return DocumentSummary(
            id=document_id,
            filename=document.original_filename,
            document_type=document.document_processing.document_type,
            risk_score=analysis.risk_score,
            summary=analysis.summary,
            key_risks=len(analysis.key_risks),
            obligations=len(analysis.obligations),
            rights=len(analysis.rights),
            upload_time=document.upload_time,
            confidence=document.document_processing.confidence,
        )

    def get_document_for_chat(self, document_id: str) -> DocumentForChat | None:
        document = self._store.get(document_id)
        if document is None:
            return None
        return DocumentForChat(
            id=document_id,
            filename=document.original_filename,
            document_type=document.document_processing.document_type,
            extracted_text=document.document_processing.text,
            legal_analysis=document.legal_analysis,
            upload_time=document.upload_time,
            confidence=document.document_processing.confidence,
        )

    def list_processed_documents(self) -> list[DocumentListItem]:
        """All stored documents, newest first."""
        items = [
            DocumentListItem(
                id=document_id,
                filename=document.original_filename,
                document_type=document.document_processing.document_type,
                upload_time=document.upload_time,
                risk_score=document.legal_analysis.risk_score,
            )
            for document_id, document in self._store.entries()
        ]
        return sorted(items, key=lambda item: item.upload_time, reverse=True)

    def cleanup_old_documents(self, max_age: timedelta | None = None) -> int:
        """Delete documents uploaded before ``now - max_age``; return how many were removed."""
        if max_age is None:
            max_age = timedelta(hours=self._settings.document_max_age_hours)
        cutoff = self._clock() - max_age
        cleaned = 0
        for document_id, document in self._store.entries():
            if document.upload_time < cutoff and self._store.delete(document_id):
                cleaned += 1
        Log.info(f"Cleaned up {cleaned} old documents")
        return cleaned

    async def _run_pipeline(
        self,
        file_bytes: bytes,
        filename: str,
        mime_type: str,
        file_hash: str,
    ) -> ProcessedDocument:
        context = PipelineContext(
            file_bytes=file_bytes,
            filename=filename,
            mime_type=mime_type,
            file_hash=file_hash,
        )
        context = await run_pipeline(self._steps, context)
        if context.document is None:
            raise RuntimeError("Pipeline finished without building a document record")
        Log.info(f"Document processing completed: {context.document.id}")
        return context.document

    def _release_in_flight(self, file_hash: str, task: asyncio.Task[ProcessedDocument]) -> None:
        self._in_flight.pop(file_hash, None)
        if task.cancelled():
            return
        # Every caller may have been cancelled; read the failure so the loop
        # does not report it as never retrieved.
        exc = task.exception()
        if exc is not None:
            Log.debug(f"Processing of {file_hash} failed: {exc}")

    def _find_existing(
        self,
        file_hash: str,
        filename: str,
        file_size: int,
    ) -> ProcessedDocument | None:
        entries = self._store.entries()
        for _, document in entries:
            if document.file_hash == file_hash:
                return document
        # Records without a hash can only be matched by name and size.
        for _, document in entries:
            if (
                document.file_hash is None
                and document.original_filename == filename
                and document.file_size_bytes == file_size
            ):
                return document
        return None


def build_service(settings: Settings) -> LegalDocumentService:
    """Build a LegalDocumentService with the configured adapters."""
    return LegalDocumentService(
        extractor=ExtractorFactory.create(settings),
        analyzer=AnalyzerFactory.create(settings),
        store=DocumentStoreFactory.create(settings),
        settings=settings,
    )
