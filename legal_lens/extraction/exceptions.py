class ExtractionError(Exception):
    """Raised when a document processor adapter cannot extract text."""
