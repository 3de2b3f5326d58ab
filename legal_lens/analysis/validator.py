"""Builds analysis models from loosely structured model output.

Unlike a strict validator, every builder here coerces instead of rejecting:
missing sections become empty lists, bare strings become ``PlainText`` items,
and enum-like fields are clamped to the nearest valid value.
"""

import math
import re
from collections.abc import Callable
from typing import Any

from legal_lens.analysis.models import (
    IMPORTANCE_LEVELS,
    RISK_LEVELS,
    SEVERITIES,
    Clause,
    DetailedAnalysisResult,
    DetailedRisk,
    KeyRisk,
    KeyTerm,
    KeyTermEntry,
    LegalAnalysisResult,
    Obligation,
    ObligationEntry,
    PlainText,
    Right,
    RightEntry,
    RiskEntry,
)

DEFAULT_RISK_SCORE = 50
DEFAULT_SUMMARY = "No summary available"

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")

_SEVERITY_ALIASES = {
    "MINOR": "LOW",
    "MINIMAL": "LOW",
    "MODERATE": "MEDIUM",
    "MED": "MEDIUM",
    "MAJOR": "HIGH",
    "SEVERE": "HIGH",
    "SIGNIFICANT": "HIGH",
    "EXTREME": "CRITICAL",
}
_IMPORTANCE_ALIASES = {
    "MINOR": "LOW",
    "MODERATE": "MEDIUM",
    "MED": "MEDIUM",
    "MAJOR": "HIGH",
    "CRITICAL": "HIGH",
    "ESSENTIAL": "HIGH",
}


def build_analysis(data: dict[str, Any]) -> LegalAnalysisResult:
    """Build a LegalAnalysisResult from a parsed JSON object."""
    summary = data.get("summary")
    return LegalAnalysisResult(
        summary=summary.strip() if isinstance(summary, str) and summary.strip() else DEFAULT_SUMMARY,
        risk_score=coerce_risk_score(data.get("riskScore")),
        key_risks=_build_items(data.get("keyRisks"), _build_key_risk),
        obligations=_build_items(data.get("obligations"), _build_obligation),
        rights=_build_items(data.get("rights"), _build_right),
        key_terms=_build_items(data.get("keyTerms"), _build_key_term),
        recommendations=_build_strings(data.get("recommendations")),
    )


def build_detailed_analysis(data: dict[str, Any]) -> DetailedAnalysisResult:
    """Build a DetailedAnalysisResult from a parsed JSON object."""
    raw_clauses = data.get("clauses")
    raw_risks = data.get("risks")
    clauses = [
        _build_clause(item, index)
        for index, item in enumerate(raw_clauses if isinstance(raw_clauses, list) else [], 1)
        if isinstance(item, dict)
    ]
    risks = [
        _build_detailed_risk(item, index)
        for index, item in enumerate(raw_risks if isinstance(raw_risks, list) else [], 1)
        if isinstance(item, dict)
    ]
    return DetailedAnalysisResult(clauses=clauses, risks=risks)


def coerce_risk_score(raw: Any) -> int:
    """Coerce a model-reported risk score to an integer in [0, 100].

    Accepts ints, floats and strings such as ``"72"`` or ``"65/100"``; anything
    without a usable number yields the default moderate score.
    """
    if isinstance(raw, bool):
        return DEFAULT_RISK_SCORE
    if isinstance(raw, (int, float)):
        number = float(raw)
    elif isinstance(raw, str):
        match = _NUMBER_RE.search(raw)
        if match is None:
            return DEFAULT_RISK_SCORE
        number = float(match.group())
    else:
        return DEFAULT_RISK_SCORE
    if math.isnan(number):
        return DEFAULT_RISK_SCORE
    if math.isinf(number):
        return 100 if number > 0 else 0
    return max(0, min(100, round(number)))


def clamp_severity(raw: Any) -> str:
    return _clamp_enum(raw, SEVERITIES, _SEVERITY_ALIASES)


def clamp_importance(raw: Any) -> str:
    return _clamp_enum(raw, IMPORTANCE_LEVELS, _IMPORTANCE_ALIASES)


def _clamp_enum(raw: Any, valid: tuple[str, ...], aliases: dict[str, str]) -> str:
    if not isinstance(raw, str):
        return "MEDIUM"
    value = raw.strip().upper()
    if value in valid:
        return value
    return aliases.get(value, "MEDIUM")


def _clamp_risk_level(raw: Any) -> str:
    if not isinstance(raw, str):
        return "medium"
    value = raw.strip().lower()
    if value in RISK_LEVELS:
        return value
    if value in ("critical", "severe", "major"):
        return "high"
    if value in ("minor", "minimal"):
        return "low"
    return "medium"


def _build_items(raw: Any, build_structured: Callable[[dict[str, Any]], Any]) -> list[Any]:
    if not isinstance(raw, list):
        return []
    items: list[Any] = []
    for item in raw:
        if isinstance(item, dict):
            items.append(build_structured(item))
        elif isinstance(item, str) and item.strip():
            items.append(PlainText(text=item.strip()))
    return items


def _build_strings(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [item.strip() for item in raw if isinstance(item, str) and item.strip()]


def _text(raw: dict[str, Any], key: str, default: str = "") -> str:
    value = raw.get(key)
    if value is None:
        return default
    return str(value).strip()


def _build_key_risk(raw: dict[str, Any]) -> RiskEntry:
    return KeyRisk(
        category=_text(raw, "category", "General"),
        description=_text(raw, "description"),
        severity=clamp_severity(raw.get("severity")),
        recommendation=_text(raw, "recommendation"),
    )


def _build_obligation(raw: dict[str, Any]) -> ObligationEntry:
    deadline = raw.get("deadline")
    if isinstance(deadline, str) and deadline.strip().lower() in ("", "null", "none"):
        deadline = None
    return Obligation(
        party=_text(raw, "party"),
        description=_text(raw, "description"),
        deadline=str(deadline).strip() if deadline is not None else None,
    )


def _build_right(raw: dict[str, Any]) -> RightEntry:
    return Right(party=_text(raw, "party"), description=_text(raw, "description"))


def _build_key_term(raw: dict[str, Any]) -> KeyTermEntry:
    return KeyTerm(
        term=_text(raw, "term"),
        definition=_text(raw, "definition"),
        importance=clamp_importance(raw.get("importance")),
    )


def _build_clause(raw: dict[str, Any], index: int) -> Clause:
    return Clause(
        id=_text(raw, "id") or f"clause_{index}",
        type=_text(raw, "type", "General"),
        title=_text(raw, "title") or f"Clause {index}",
        original_text=_text(raw, "originalText"),
        simplified_points=_build_strings(raw.get("simplifiedPoints")),
        key_takeaway=_text(raw, "keyTakeaway"),
    )


def _build_detailed_risk(raw: dict[str, Any], index: int) -> DetailedRisk:
    return DetailedRisk(
        id=_text(raw, "id") or f"risk_{index}",
        level=_clamp_risk_level(raw.get("level")),
        title=_text(raw, "title") or f"Risk {index}",
        section=_text(raw, "section"),
        description=_text(raw, "description"),
        recommendation=_text(raw, "recommendation"),
        impact=_text(raw, "impact"),
    )
