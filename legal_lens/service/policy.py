from legal_lens.extraction.document_types import is_supported_mime_type
from legal_lens.extraction.models import DocumentProcessingResult
from legal_lens.service.models import DocumentValidationResult

OVERSIZED = "OVERSIZED"
UNSUPPORTED = "UNSUPPORTED"

NOT_LEGAL_REJECTION = (
    "Document does not appear to be a legal document. Please upload a legal "
    "document such as contracts, leases, or agreements."
)


def check_upload_policy(
    file_bytes: bytes,
    mime_type: str,
    max_size_bytes: int,
) -> DocumentValidationResult | None:
    """Return a rejection for oversized or unsupported uploads, None if acceptable."""
    if len(file_bytes) > max_size_bytes:
        return DocumentValidationResult(
            is_valid=False,
            is_legal=False,
            document_type=OVERSIZED,
            confidence=0.0,
            message=f"File size exceeds the {round(max_size_bytes / 1024 / 1024)}MB limit",
        )
    if not is_supported_mime_type(mime_type):
        return DocumentValidationResult(
            is_valid=False,
            is_legal=False,
            document_type=UNSUPPORTED,
            confidence=0.0,
            message="Unsupported file type. Please upload PDF, DOC, DOCX, or TXT files.",
        )
    return None


def classification_verdict(processing: DocumentProcessingResult) -> DocumentValidationResult:
    if processing.is_legal_document:
        message = f"Legal document detected: {processing.document_type}"
    else:
        message = "This does not appear to be a legal document"
    return DocumentValidationResult(
        is_valid=True,
        is_legal=processing.is_legal_document,
        document_type=processing.document_type,
        confidence=processing.confidence,
        message=message,
    )
