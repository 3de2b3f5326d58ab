from legal_lens.analysis.analyzer import LegalAnalyzer
from legal_lens.analysis.factory import AnalyzerFactory
from legal_lens.analysis.models import ChatResponse, DetailedAnalysisResult, LegalAnalysisResult

__all__ = [
    "AnalyzerFactory",
    "ChatResponse",
    "DetailedAnalysisResult",
    "LegalAnalysisResult",
    "LegalAnalyzer",
]
