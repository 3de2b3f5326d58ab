from dataclasses import dataclass
from datetime import datetime

from legal_lens.analysis.models import LegalAnalysisResult
from legal_lens.extraction.models import DocumentProcessingResult


@dataclass(frozen=True)
class ProcessedDocument:
    """A stored, fully processed upload.

    ``file_hash`` is the MD5 hex digest of the uploaded bytes. Records written
    before hashing was introduced may carry ``None``.
    """

    id: str
    original_filename: str
    mime_type: str
    file_hash: str | None
    file_size_bytes: int
    document_processing: DocumentProcessingResult
    legal_analysis: LegalAnalysisResult
    upload_time: datetime
    file_buffer: bytes | None = None


@dataclass(frozen=True)
class DocumentValidationResult:
    is_valid: bool
    is_legal: bool
    document_type: str
    confidence: float
    message: str


@dataclass(frozen=True)
class DocumentSummary:
    """Dashboard view of a stored document: counts instead of full lists."""

    id: str
    filename: str
    document_type: str
    risk_score: int
    summary: str
    key_risks: int
    obligations: int
    rights: int
    upload_time: datetime
    confidence: float


@dataclass(frozen=True)
class DocumentForChat:
    id: str
    filename: str
    document_type: str
    extracted_text: str
    legal_analysis: LegalAnalysisResult
    upload_time: datetime
    confidence: float


@dataclass(frozen=True)
class DocumentListItem:
    id: str
    filename: str
    document_type: str
    upload_time: datetime
    risk_score: int
