"""Advisory confidence score and source references for chat answers.

Both are keyword heuristics, not measured accuracy.
"""

import re

BASE_CONFIDENCE = 0.7
SHORT_ANSWER_CHARS = 50

HEDGING_PHRASES = (
    "i don't know",
    "i do not know",
    "not specified",
    "does not specify",
    "doesn't specify",
    "not mentioned",
)
CITING_PHRASES = (
    "specifically states",
    "according to",
    "the document states",
)

_SECTION_RE = re.compile(r"\bsection\s+\d+(?:\.\d+)*", re.IGNORECASE)
_REFERENCE_RE = re.compile(
    r"\b(?:clause|paragraph|article|subsection)\s+(?:\d+(?:\.\d+)*[a-z]?|[IVXLC]+\b)",
    re.IGNORECASE,
)


def response_confidence(response_text: str) -> float:
    """Score an answer in [0, 1]: hedging lowers it, quoting the document raises it."""
    text = response_text.lower()
    confidence = BASE_CONFIDENCE
    if any(phrase in text for phrase in HEDGING_PHRASES):
        confidence -= 0.2
    if any(phrase in text for phrase in CITING_PHRASES):
        confidence += 0.2
    if len(response_text.strip()) < SHORT_ANSWER_CHARS:
        confidence -= 0.1
    return round(min(max(confidence, 0.0), 1.0), 2)


def extract_sources(response_text: str) -> list[str]:
    """Return section/clause/paragraph references mentioned in an answer, in order."""
    found: list[tuple[int, str]] = []
    for pattern in (_SECTION_RE, _REFERENCE_RE):
        found.extend((match.start(), match.group()) for match in pattern.finditer(response_text))
    found.sort()

    sources: list[str] = []
    seen: set[str] = set()
    for _, reference in found:
        normalized = " ".join(reference.split())
        key = normalized.lower()
        if key not in seen:
            seen.add(key)
            sources.append(normalized)
    return sources
