class AnalysisError(Exception):
    """Raised when legal analysis fails."""


class AnalysisUnavailableError(AnalysisError):
    """Raised when the AI provider cannot be reached (network, auth, quota, timeout)."""


class AnalysisMalformedError(AnalysisError):
    """Raised when the model output cannot be turned into the expected structure."""
