import json
from datetime import datetime, timezone

from legal_lens.analysis.models import KeyRisk, KeyTerm, LegalAnalysisResult, Obligation, PlainText
from legal_lens.extraction.models import DocumentProcessingResult, Entity
from legal_lens.service.models import ProcessedDocument
from legal_lens.store.serialization import document_from_payload, document_to_payload


def _make_document() -> ProcessedDocument:
    return ProcessedDocument(
        id="doc_abc_12345",
        original_filename="lease.pdf",
        mime_type="application/pdf",
        file_hash="d41d8cd98f00b204e9800998ecf8427e",
        file_size_bytes=2048,
        document_processing=DocumentProcessingResult(
            text="lease text",
            confidence=0.9,
            is_legal_document=True,
            document_type="LEASE_AGREEMENT",
            entities=[Entity(type="PERSON", mention_text="Jane Doe", confidence=0.8)],
        ),
        legal_analysis=LegalAnalysisResult(
            summary="A lease.",
            risk_score=35,
            key_risks=[KeyRisk(category="Deposit", severity="HIGH"), PlainText(text="Late fees")],
            obligations=[Obligation(party="Tenant", description="Pay rent")],
            key_terms=[KeyTerm(term="Deposit", definition="Held money")],
            recommendations=["Read section 4"],
        ),
        upload_time=datetime(2025, 3, 1, 12, 30, tzinfo=timezone.utc),
        file_buffer=b"%PDF",
    )


class TestDocumentPayload:
    def test_payload_is_json_serializable(self) -> None:
        payload = document_to_payload(_make_document())
        json.dumps(payload)
        assert payload["upload_time"] == "2025-03-01T12:30:00+00:00"
        assert "file_buffer" not in payload

    def test_items_keep_type_discriminator(self) -> None:
        payload = document_to_payload(_make_document())
        risks = payload["legal_analysis"]["key_risks"]
        assert [risk["type"] for risk in risks] == ["structured", "text"]

    def test_restores_tagged_variants(self) -> None:
        original = _make_document()
        restored = document_from_payload(json.loads(json.dumps(document_to_payload(original))))
        assert restored.legal_analysis == original.legal_analysis
        assert restored.document_processing == original.document_processing
        assert restored.upload_time == original.upload_time
        assert restored.file_buffer is None

    def test_naive_timestamps_are_treated_as_utc(self) -> None:
        payload = document_to_payload(_make_document())
        payload["upload_time"] = "2025-03-01T12:30:00"
        assert document_from_payload(payload).upload_time.tzinfo == timezone.utc
