from typing import ClassVar

from legal_lens.config.settings import Settings
from legal_lens.extraction.base import BaseDocumentProcessor
from legal_lens.extraction.documentai_adapter import DocumentAIAdapter
from legal_lens.extraction.extractor import TextExtractor
from legal_lens.extraction.pdfplumber_adapter import PdfPlumberAdapter
from legal_lens.extraction.pymupdf_adapter import PyMuPdfAdapter
from legal_lens.logging.logger import Log


class ExtractorFactory:
    """Creates the text extractor with the configured document processor."""

    LOCAL_ADAPTERS: ClassVar[dict[str, type[BaseDocumentProcessor]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> TextExtractor:
        return TextExtractor(processor=cls.create_processor(settings))

    @classmethod
    def create_processor(cls, settings: Settings) -> BaseDocumentProcessor | None:
        """Return the configured adapter, or None when only the fallback is usable."""
        engine = settings.extraction_engine.lower()
        if engine == "local":
            return None
        if engine == "documentai":
            return cls._create_documentai(settings)
        adapter_cls = cls.LOCAL_ADAPTERS.get(engine)
        if adapter_cls is None:
            supported = ["documentai", "local", *sorted(cls.LOCAL_ADAPTERS)]
            raise ValueError(
                f"Unknown extraction engine '{engine}'. Choose from: {supported}"
            )
        return adapter_cls()

    @classmethod
    def _create_documentai(cls, settings: Settings) -> BaseDocumentProcessor | None:
        if not settings.documentai_processor_id or not settings.documentai_project_id:
            Log.warning(
                "Document AI project or processor ID not configured, "
                "text extraction will use the local fallback"
            )
            return None
        try:
            return DocumentAIAdapter(
                project_id=settings.documentai_project_id,
                location=settings.documentai_location,
                processor_id=settings.documentai_processor_id,
            )
        except Exception as exc:
            Log.warning(
                f"Document AI client unavailable, text extraction will use the "
                f"local fallback: {exc}"
            )
            return None
