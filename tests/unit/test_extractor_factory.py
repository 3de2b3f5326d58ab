from unittest.mock import MagicMock, patch

import pytest

from legal_lens.config.settings import Settings
from legal_lens.extraction.extractor import TextExtractor
from legal_lens.extraction.factory import ExtractorFactory
from legal_lens.extraction.pdfplumber_adapter import PdfPlumberAdapter
from legal_lens.extraction.pymupdf_adapter import PyMuPdfAdapter


class TestExtractorFactory:
    def test_creates_text_extractor(self) -> None:
        extractor = ExtractorFactory.create(Settings(extraction_engine="local"))
        assert isinstance(extractor, TextExtractor)
        assert ExtractorFactory.create_processor(Settings(extraction_engine="local")) is None

    def test_creates_pdfplumber_adapter(self) -> None:
        processor = ExtractorFactory.create_processor(Settings(extraction_engine="pdfplumber"))
        assert isinstance(processor, PdfPlumberAdapter)

    def test_is_case_insensitive(self) -> None:
        processor = ExtractorFactory.create_processor(Settings(extraction_engine="PyMuPDF"))
        assert isinstance(processor, PyMuPdfAdapter)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown extraction engine"):
            ExtractorFactory.create_processor(Settings(extraction_engine="tesseract"))

    def test_documentai_without_processor_id_degrades(self) -> None:
        settings = Settings(extraction_engine="documentai", documentai_project_id="proj")
        with patch("legal_lens.extraction.factory.Log") as mock_log:
            processor = ExtractorFactory.create_processor(settings)
        assert processor is None
        mock_log.warning.assert_called_once()

    def test_documentai_configured(self) -> None:
        settings = Settings(
            extraction_engine="documentai",
            documentai_project_id="proj",
            documentai_processor_id="proc",
        )
        with patch("legal_lens.extraction.factory.DocumentAIAdapter") as adapter_cls:
            processor = ExtractorFactory.create_processor(settings)
        assert processor is adapter_cls.return_value
        adapter_cls.assert_called_once_with(
            project_id="proj", location="us", processor_id="proc"
        )

    def test_documentai_client_failure_degrades(self) -> None:
        settings = Settings(
            extraction_engine="documentai",
            documentai_project_id="proj",
            documentai_processor_id="proc",
        )
        failing = MagicMock(side_effect=RuntimeError("no credentials"))
        with patch("legal_lens.extraction.factory.DocumentAIAdapter", failing):
            assert ExtractorFactory.create_processor(settings) is None
