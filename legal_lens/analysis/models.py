from dataclasses import dataclass, field

SEVERITIES = ("LOW", "MEDIUM", "HIGH", "CRITICAL")
IMPORTANCE_LEVELS = ("LOW", "MEDIUM", "HIGH")
RISK_LEVELS = ("high", "medium", "low")


@dataclass(frozen=True)
class PlainText:
    """Unstructured item: the model returned a bare string instead of an object."""

    type: str = "text"
    text: str = ""


@dataclass(frozen=True)
class KeyRisk:
    type: str = "structured"
    category: str = ""
    description: str = ""
    severity: str = "MEDIUM"
    recommendation: str = ""


@dataclass(frozen=True)
class Obligation:
    type: str = "structured"
    party: str = ""
    description: str = ""
    deadline: str | None = None


@dataclass(frozen=True)
class Right:
    type: str = "structured"
    party: str = ""
    description: str = ""


@dataclass(frozen=True)
class KeyTerm:
    type: str = "structured"
    term: str = ""
    definition: str = ""
    importance: str = "MEDIUM"


RiskEntry = KeyRisk | PlainText
ObligationEntry = Obligation | PlainText
RightEntry = Right | PlainText
KeyTermEntry = KeyTerm | PlainText


@dataclass(frozen=True)
class LegalAnalysisResult:
    """Structured legal analysis of one document.

    ``best_effort`` is set when the result is a synthetic fallback rather than
    a parsed model answer.
    """

    summary: str
    risk_score: int
    key_risks: list[RiskEntry] = field(default_factory=list)
    obligations: list[ObligationEntry] = field(default_factory=list)
    rights: list[RightEntry] = field(default_factory=list)
    key_terms: list[KeyTermEntry] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    best_effort: bool = False


@dataclass(frozen=True)
class ChatResponse:
    response: str
    confidence: float
    sources: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Clause:
    """A clause rewritten in plain language."""

    id: str
    type: str
    title: str
    original_text: str = ""
    simplified_points: list[str] = field(default_factory=list)
    key_takeaway: str = ""


@dataclass(frozen=True)
class DetailedRisk:
    id: str
    level: str  # one of RISK_LEVELS
    title: str
    section: str = ""
    description: str = ""
    recommendation: str = ""
    impact: str = ""


@dataclass(frozen=True)
class DetailedAnalysisResult:
    """Clause-by-clause breakdown and risk list for one document."""

    clauses: list[Clause] = field(default_factory=list)
    risks: list[DetailedRisk] = field(default_factory=list)
