"""Keyword-density heuristic that decides whether text is a legal document.

The decision is advisory: it counts vocabulary hits, not legal meaning.
"""

from dataclasses import dataclass
from typing import ClassVar

from legal_lens.extraction.document_types import (
    CATEGORY_KEYWORDS,
    GENERAL_LEGAL,
    NON_LEGAL,
)
from legal_lens.extraction.models import Entity


@dataclass(frozen=True)
class Classification:
    is_legal: bool
    document_type: str
    keyword_matches: int
    keyword_density: float


class LegalDocumentClassifier:
    """Classifies extracted text into the legal document taxonomy."""

    LEGAL_KEYWORDS: ClassVar[tuple[str, ...]] = (
        "agreement", "contract", "lease", "terms and conditions", "privacy policy",
        "liability", "indemnification", "jurisdiction", "governing law",
        "whereas", "hereby", "herein", "therein", "party", "parties",
        "covenant", "warrant", "represent", "breach", "termination",
        "intellectual property", "confidentiality", "non-disclosure",
        "license", "copyright", "trademark", "patent",
        "arbitration", "mediation", "dispute resolution",
        "force majeure", "amendment", "modification", "assignment",
        "partnership", "partner", "partners", "profit sharing", "capital contribution",
        "services", "service provider", "client", "deliverables", "scope of work", "fees",
        "loan", "borrower", "lender", "interest rate", "repayment", "principal",
        "franchise", "franchisor", "franchisee", "territory", "royalty",
        "settlement", "release", "claims", "waiver",
        "shares", "shareholder", "stock", "equity", "voting rights", "dividends",
        "memorandum", "understanding", "intent", "collaboration",
    )
    LEGAL_ENTITY_TYPES: ClassVar[frozenset[str]] = frozenset(
        {"PERSON", "ORGANIZATION", "DATE", "MONEY"}
    )
    MIN_DENSITY: ClassVar[float] = 2.0  # keyword hits per 100 words
    MIN_MATCHES: ClassVar[int] = 5

    def classify(self, text: str, entities: list[Entity] | None = None) -> Classification:
        text_lower = text.lower()
        matches = sum(1 for keyword in self.LEGAL_KEYWORDS if keyword in text_lower)
        word_count = len(text.split())
        density = matches / max(word_count / 100, 1)
        has_legal_entities = any(
            entity.type.upper() in self.LEGAL_ENTITY_TYPES for entity in entities or []
        )

        is_legal = (
            density >= self.MIN_DENSITY
            or matches >= self.MIN_MATCHES
            or has_legal_entities
        )
        document_type = self._best_category(text_lower) if is_legal else NON_LEGAL
        return Classification(
            is_legal=is_legal,
            document_type=document_type,
            keyword_matches=matches,
            keyword_density=density,
        )

    @staticmethod
    def _best_category(text_lower: str) -> str:
        best_type = GENERAL_LEGAL
        best_hits = 0
        for category, keywords in CATEGORY_KEYWORDS:
            hits = sum(1 for keyword in keywords if keyword in text_lower)
            if hits > best_hits:
                best_type, best_hits = category, hits
        return best_type
