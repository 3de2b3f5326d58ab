"""JSON-ready payloads for ProcessedDocument records.

Analysis items keep their ``type`` discriminator ("structured" or "text") so
tagged variants survive a round trip. The raw file buffer is never included.
"""

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from legal_lens.analysis.models import (
    KeyRisk,
    KeyTerm,
    LegalAnalysisResult,
    Obligation,
    PlainText,
    Right,
)
from legal_lens.extraction.models import DocumentProcessingResult, Entity
from legal_lens.service.models import ProcessedDocument


def document_to_payload(document: ProcessedDocument) -> dict[str, Any]:
    payload = asdict(document)
    payload.pop("file_buffer", None)
    payload["upload_time"] = document.upload_time.isoformat()
    return payload


def document_from_payload(payload: dict[str, Any]) -> ProcessedDocument:
    """Rebuild a record from ``document_to_payload`` output.

    Raises:
        KeyError, TypeError, ValueError: if the payload is incomplete.
    """
    upload_time = datetime.fromisoformat(payload["upload_time"])
    if upload_time.tzinfo is None:
        upload_time = upload_time.replace(tzinfo=timezone.utc)
    return ProcessedDocument(
        id=payload["id"],
        original_filename=payload["original_filename"],
        mime_type=payload["mime_type"],
        file_hash=payload.get("file_hash"),
        file_size_bytes=int(payload.get("file_size_bytes", 0)),
        document_processing=_processing_from_payload(payload["document_processing"]),
        legal_analysis=_analysis_from_payload(payload["legal_analysis"]),
        upload_time=upload_time,
    )


def _processing_from_payload(raw: dict[str, Any]) -> DocumentProcessingResult:
    return DocumentProcessingResult(
        text=raw["text"],
        confidence=float(raw["confidence"]),
        is_legal_document=bool(raw["is_legal_document"]),
        document_type=raw["document_type"],
        entities=[Entity(**entity) for entity in raw.get("entities", [])],
        degraded=bool(raw.get("degraded", False)),
    )


def _analysis_from_payload(raw: dict[str, Any]) -> LegalAnalysisResult:
    return LegalAnalysisResult(
        summary=raw["summary"],
        risk_score=int(raw["risk_score"]),
        key_risks=[_tagged(item, KeyRisk) for item in raw.get("key_risks", [])],
        obligations=[_tagged(item, Obligation) for item in raw.get("obligations", [])],
        rights=[_tagged(item, Right) for item in raw.get("rights", [])],
        key_terms=[_tagged(item, KeyTerm) for item in raw.get("key_terms", [])],
        recommendations=list(raw.get("recommendations", [])),
        best_effort=bool(raw.get("best_effort", False)),
    )


def _tagged(item: dict[str, Any], structured: type[Any]) -> Any:
    if item.get("type") == "text":
        return PlainText(text=item.get("text", ""))
    return structured(**item)
