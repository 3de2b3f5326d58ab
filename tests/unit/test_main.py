import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from legal_lens.config.settings import Settings
from legal_lens.main import build_parser, guess_mime_type, main
from legal_lens.service.legal_document_service import build_service
from legal_lens.store.exceptions import DocumentStoreError
from legal_lens.store.memory import InMemoryDocumentStore


@pytest.fixture(autouse=True)
def _offline_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("ANALYSIS_PROVIDER", "example")
    monkeypatch.setenv("EXTRACTION_ENGINE", "local")
    monkeypatch.setenv("DOCUMENT_STORE", "memory")
    InMemoryDocumentStore().clear()
    with patch("legal_lens.main.Log"):
        yield


class TestParser:
    def test_analyze_accepts_many_files(self) -> None:
        args = build_parser().parse_args(["analyze", "a.pdf", "b.txt"])
        assert args.command == "analyze"
        assert [p.name for p in args.files] == ["a.pdf", "b.txt"]

    def test_ask_takes_file_and_question(self) -> None:
        args = build_parser().parse_args(["--mime-type", "text/plain", "ask", "a.txt", "Who pays?"])
        assert args.question == "Who pays?"
        assert args.mime_type == "text/plain"

    def test_mime_type_guessing(self) -> None:
        assert guess_mime_type(Path("lease.pdf")) == "application/pdf"
        assert guess_mime_type(Path("lease.txt")) == "text/plain"
        assert guess_mime_type(Path("lease"), "text/plain") == "text/plain"
        assert guess_mime_type(Path("lease.unknownext")) == "application/octet-stream"


class TestMain:
    def test_analyze_prints_summary(
        self, tmp_path: Path, lease_text: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "lease.txt"
        path.write_text(lease_text)
        assert main(["analyze", str(path)]) == 0
        output = capsys.readouterr().out
        start = output.index("{")
        summary = json.loads(output[start:output.rindex("}") + 1])
        assert summary["filename"] == "lease.txt"
        assert summary["document_type"] == "LEASE_AGREEMENT"

    def test_ask_prints_answer(
        self, tmp_path: Path, lease_text: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "lease.txt"
        path.write_text(lease_text)
        assert main(["ask", str(path), "What is the rent?"]) == 0
        assert "example answer" in capsys.readouterr().out

    def test_validation_error_goes_to_stderr(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "recipe.txt"
        path.write_text("Whisk two eggs with sugar.")
        assert main(["analyze", str(path)]) == 1
        assert "does not appear to be a legal document" in capsys.readouterr().err

    def test_missing_file_goes_to_stderr(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["details", str(tmp_path / "missing.pdf")]) == 1
        assert "missing.pdf" in capsys.readouterr().err

    def test_unknown_provider_goes_to_stderr(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("ANALYSIS_PROVIDER", "bogus")
        path = tmp_path / "lease.txt"
        path.write_text("lease")
        with patch("legal_lens.main.Log") as mock_log:
            assert main(["analyze", str(path)]) == 1
        assert "Unknown analysis provider 'bogus'" in capsys.readouterr().err
        assert mock_log.error.call_args.kwargs["error"] == "ValueError"

    def test_invalid_setting_goes_to_stderr(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("UPLOAD_MAX_SIZE_BYTES", "ten megabytes")
        assert main(["analyze", str(tmp_path / "lease.txt")]) == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_store_failure_goes_to_stderr(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch(
            "legal_lens.main.build_service",
            side_effect=DocumentStoreError("Failed to create schema"),
        ):
            assert main(["analyze", str(tmp_path / "lease.txt")]) == 1
        assert "Failed to create schema" in capsys.readouterr().err

    def test_build_service_uses_settings(self) -> None:
        with patch("legal_lens.service.legal_document_service.DocumentStoreFactory") as factory:
            factory.create.return_value = InMemoryDocumentStore()
            service = build_service(Settings())
        factory.create.assert_called_once()
        assert service.get_processed_documents() == []
