import io

import pdfplumber

from legal_lens.extraction.base import BaseDocumentProcessor
from legal_lens.extraction.exceptions import ExtractionError
from legal_lens.extraction.models import RawExtraction


class PdfPlumberAdapter(BaseDocumentProcessor):
    """Extracts text locally from PDF uploads using pdfplumber."""

    def process(self, file_bytes: bytes, mime_type: str) -> RawExtraction:
        if mime_type != "application/pdf":
            raise ExtractionError(f"pdfplumber cannot process '{mime_type}'")
        try:
            with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise ExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        return RawExtraction(text="\n".join(pages).strip())
