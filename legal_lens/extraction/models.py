from dataclasses import dataclass, field


@dataclass(frozen=True)
class Entity:
    """Named entity reported by the document processor."""

    type: str  # e.g. "PERSON", "ORGANIZATION", "DATE", "MONEY"
    mention_text: str
    confidence: float = 0.0


@dataclass(frozen=True)
class RawExtraction:
    """Output of a document processor adapter, before classification."""

    text: str
    entities: list[Entity] = field(default_factory=list)
    token_confidences: list[float] = field(default_factory=list)


@dataclass(frozen=True)
class DocumentProcessingResult:
    """Extracted text plus the legal-document classification."""

    text: str
    confidence: float
    is_legal_document: bool
    document_type: str
    entities: list[Entity] = field(default_factory=list)
    degraded: bool = False
