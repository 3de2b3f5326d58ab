import pymupdf

from legal_lens.extraction.base import BaseDocumentProcessor
from legal_lens.extraction.exceptions import ExtractionError
from legal_lens.extraction.models import RawExtraction


class PyMuPdfAdapter(BaseDocumentProcessor):
    """Extracts text locally from PDF uploads using PyMuPDF."""

    def process(self, file_bytes: bytes, mime_type: str) -> RawExtraction:
        if mime_type != "application/pdf":
            raise ExtractionError(f"pymupdf cannot process '{mime_type}'")
        try:
            with pymupdf.open(stream=file_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            raise ExtractionError(f"pymupdf extraction failed: {exc}") from exc
        return RawExtraction(text="\n".join(pages).strip())
