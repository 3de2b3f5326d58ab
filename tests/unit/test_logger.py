import logging

import pytest

from legal_lens.logging.logger import Log


class TestLogRendering:
    def test_message_without_context_is_unchanged(self) -> None:
        assert Log._render("Stored", {}) == "Stored"

    def test_context_is_appended_as_key_value_pairs(self) -> None:
        rendered = Log._render("Stored", {"document_id": "doc_1", "size": 3})
        assert rendered == "Stored [document_id=doc_1 size=3]"


class TestLogEmission:
    def test_info_reaches_legal_lens_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="legal_lens"):
            Log.info("Processing lease.txt", size=12)
        assert "Processing lease.txt [size=12]" in caplog.text

    def test_debug_suppressed_at_info_level(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="legal_lens"):
            Log.debug("prompt body")
        assert "prompt body" not in caplog.text

    def test_configure_installs_single_handler(self) -> None:
        logger = logging.getLogger("legal_lens")
        saved_handlers, saved_level = list(logger.handlers), logger.level
        logger.handlers.clear()
        try:
            Log.configure("warning")
            Log.configure("warning")
            assert logger.level == logging.WARNING
            assert len(logger.handlers) == 1
        finally:
            logger.handlers[:] = saved_handlers
            logger.setLevel(saved_level)
