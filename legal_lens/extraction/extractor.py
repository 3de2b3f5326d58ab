"""Text extraction with a degraded local fallback.

Processing flow:
1. Run the configured document processor adapter (if any) in a worker thread.
2. On adapter failure or empty text, fall back to local extraction:
   plain text is decoded verbatim, anything else becomes a labeled placeholder.
3. Classify the text with the legal-document heuristic.

Extraction failures never propagate; callers tell the fallback apart by
``degraded=True`` and its fixed low confidence.
"""

import asyncio
from typing import ClassVar

from legal_lens.extraction.base import BaseDocumentProcessor
from legal_lens.extraction.classifier import LegalDocumentClassifier
from legal_lens.extraction.exceptions import ExtractionError
from legal_lens.extraction.models import DocumentProcessingResult, RawExtraction
from legal_lens.logging.logger import Log


class TextExtractor:
    """Turns raw upload bytes into classified document text."""

    DEFAULT_CONFIDENCE: ClassVar[float] = 0.85
    FALLBACK_CONFIDENCE: ClassVar[float] = 0.5
    PLACEHOLDER_TEMPLATE: ClassVar[str] = (
        "[Document content - {mime_type}] This is a placeholder for document text. "
        "No document processor is configured or it could not read this file. "
        "Configure a Document AI processor to extract the full text."
    )

    def __init__(
        self,
        processor: BaseDocumentProcessor | None = None,
        classifier: LegalDocumentClassifier | None = None,
    ) -> None:
        self._processor = processor
        self._classifier = classifier if classifier is not None else LegalDocumentClassifier()

    async def extract(self, file_bytes: bytes, mime_type: str) -> DocumentProcessingResult:
        if self._processor is None:
            Log.warning("No document processor configured, using fallback extraction")
            return self._fallback(file_bytes, mime_type)

        try:
            raw = await asyncio.to_thread(self._processor.process, file_bytes, mime_type)
        except ExtractionError as exc:
            Log.warning(f"Document processor failed, using fallback extraction: {exc}")
            return self._fallback(file_bytes, mime_type)

        if not raw.text.strip():
            Log.warning("Document processor returned no text, using fallback extraction")
            return self._fallback(file_bytes, mime_type)

        result = self._classify(raw, self._confidence(raw), degraded=False)
        Log.info(
            f"Extracted {len(result.text)} chars",
            document_type=result.document_type,
            entities=len(result.entities),
        )
        return result

    def _fallback(self, file_bytes: bytes, mime_type: str) -> DocumentProcessingResult:
        if mime_type.split(";", 1)[0].strip().lower() == "text/plain":
            text = file_bytes.decode("utf-8", errors="replace")
        else:
            text = self.PLACEHOLDER_TEMPLATE.format(mime_type=mime_type)
        return self._classify(
            RawExtraction(text=text), self.FALLBACK_CONFIDENCE, degraded=True
        )

    def _classify(
        self,
        raw: RawExtraction,
        confidence: float,
        *,
        degraded: bool,
    ) -> DocumentProcessingResult:
        classification = self._classifier.classify(raw.text, raw.entities)
        return DocumentProcessingResult(
            text=raw.text,
            confidence=confidence,
            is_legal_document=classification.is_legal,
            document_type=classification.document_type,
            entities=list(raw.entities),
            degraded=degraded,
        )

    def _confidence(self, raw: RawExtraction) -> float:
        if not raw.token_confidences:
            return self.DEFAULT_CONFIDENCE
        return sum(raw.token_confidences) / len(raw.token_confidences)
