from abc import ABC, abstractmethod

from legal_lens.extraction.models import RawExtraction


class BaseDocumentProcessor(ABC):
    """Contract for all document text extraction adapters."""

    @abstractmethod
    def process(self, file_bytes: bytes, mime_type: str) -> RawExtraction:
        """Extract text, entities and token confidences from a document.

        Args:
            file_bytes: Raw uploaded file content.
            mime_type: Declared MIME type of the upload.

        Returns:
            RawExtraction with the document text and whatever entities and
            token confidences the adapter can report.

        Raises:
            ExtractionError: if extraction fails for any reason.
        """
