from legal_lens.service.models import DocumentValidationResult


class ServiceError(Exception):
    """Base error for document service operations."""


class DocumentValidationError(ServiceError):
    """Raised when an upload is rejected before analysis.

    The message is user-facing; ``result`` carries the full verdict.
    """

    def __init__(self, result: DocumentValidationResult) -> None:
        super().__init__(result.message)
        self.result = result


class DocumentNotFoundError(ServiceError):
    """Raised when a document id is unknown and no fallback text was given."""
