from typing import Any

from google.api_core import exceptions as google_exceptions
from google.api_core.client_options import ClientOptions
from google.cloud import documentai

from legal_lens.extraction.base import BaseDocumentProcessor
from legal_lens.extraction.exceptions import ExtractionError
from legal_lens.extraction.models import Entity, RawExtraction


class DocumentAIAdapter(BaseDocumentProcessor):
    """Extracts text and entities with a Google Cloud Document AI processor."""

    def __init__(
        self,
        *,
        project_id: str,
        location: str,
        processor_id: str,
        client: Any | None = None,
    ) -> None:
        if client is None:
            client = documentai.DocumentProcessorServiceClient(
                client_options=ClientOptions(
                    api_endpoint=f"{location}-documentai.googleapis.com"
                )
            )
        self._client = client
        self._processor_name = (
            f"projects/{project_id}/locations/{location}/processors/{processor_id}"
        )

    def process(self, file_bytes: bytes, mime_type: str) -> RawExtraction:
        request = documentai.ProcessRequest(
            name=self._processor_name,
            raw_document=documentai.RawDocument(content=file_bytes, mime_type=mime_type),
        )
        try:
            result = self._client.process_document(request=request)
        except google_exceptions.GoogleAPIError as exc:
            raise ExtractionError(f"Document AI request failed: {exc}") from exc
        except Exception as exc:
            raise ExtractionError(f"Document AI processing failed: {exc}") from exc

        document = result.document
        if document is None or not document.text:
            raise ExtractionError("Document AI returned no text")

        return RawExtraction(
            text=document.text,
            entities=self._entities(document),
            token_confidences=self._token_confidences(document),
        )

    @staticmethod
    def _entities(document: Any) -> list[Entity]:
        return [
            Entity(
                type=entity.type_ or "UNKNOWN",
                mention_text=entity.mention_text or "",
                confidence=float(entity.confidence or 0.0),
            )
            for entity in document.entities
        ]

    @staticmethod
    def _token_confidences(document: Any) -> list[float]:
        confidences: list[float] = []
        for page in document.pages:
            for token in page.tokens:
                confidence = token.layout.confidence
                if confidence:
                    confidences.append(float(confidence))
        return confidences
