"""Best-effort deserialization of model output into a LegalAnalysisResult.

Parsing runs an ordered chain of strategies; each one either returns a JSON
object or ``None`` to hand over to the next:

1. StrictJsonStrategy    - strip markdown fences, parse as-is.
2. RepairedJsonStrategy  - slice the outermost braces, repair common
                           formatting mistakes, parse again.
3. RegexSalvageStrategy  - pull individual fields out with regexes.

A recovered object only counts when it carries ``summary`` or ``riskScore``
(directly or inside a single wrapping object); otherwise the next tier runs.
If every strategy fails, AnalysisParser returns a generic best-effort
analysis built around the raw text.
"""

import json
import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar

from legal_lens.analysis.models import KeyRisk, LegalAnalysisResult
from legal_lens.analysis.validator import DEFAULT_RISK_SCORE, build_analysis, coerce_risk_score
from legal_lens.logging.logger import Log

FALLBACK_SUMMARY = "Analysis completed but formatting error occurred."
ANALYSIS_KEYS = ("summary", "riskScore")


def strip_code_fences(raw: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```) if present."""
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines).strip()
    return cleaned


def _requote(match: re.Match[str]) -> str:
    prefix, body, suffix = match.group(1), match.group(2), match.group(3)
    body = body.replace("\\'", "'")
    body = re.sub(r'(?<!\\)"', '\\"', body)
    return f'{prefix}"{body}"{suffix}'


_Repair = tuple[re.Pattern[str], str | Callable[[re.Match[str]], str]]

_STRUCTURE_REPAIRS: tuple[_Repair, ...] = (
    (re.compile(r"```(?:json)?"), ""),
    # Missing comma between a value and the next key on a new line.
    (re.compile(r'(["\d}\]]|true|false|null)[ \t]*\r?\n(\s*)"'), r'\1,\n\2"'),
    # Newlines and tabs become spaces, other control characters are dropped.
    (re.compile(r"[\r\n\t]"), " "),
    (re.compile(r"[\x00-\x1f\x7f-\x9f]"), ""),
)

_QUOTE_REPAIRS: tuple[_Repair, ...] = (
    # Smart quotes used as delimiters.
    (re.compile(r"(?<=[{\[,:])(\s*)[“”„]"), r'\1"'),
    (re.compile(r"[“”„](?=\s*[:,}\]])"), '"'),
    (re.compile(r"(?<=[{\[,:])(\s*)[‘’‚]"), r"\1'"),
    (re.compile(r"[‘’‚](?=\s*[:,}\]])"), "'"),
    # Single-quoted keys, object values and array items.
    (re.compile(r"([{,]\s*)'((?:[^'\\]|\\.)+?)'(\s*:)"), _requote),
    (re.compile(r"(:\s*)'((?:[^'\\]|\\.)*)'(\s*[,}\]])"), _requote),
    (re.compile(r"([\[,]\s*)'((?:[^'\\]|\\.)*)'(\s*[,\]])"), _requote),
)

_COMMA_REPAIRS: tuple[_Repair, ...] = (
    (re.compile(r",(\s*,)+"), ","),
    (re.compile(r",(\s*[}\]])"), r"\1"),
    (re.compile(r"([{\[]\s*),"), r"\1"),
    # Missing commas between adjacent objects or arrays.
    (re.compile(r"}\s*{"), "}, {"),
    (re.compile(r"]\s*\["), "], ["),
)


def repair_json(text: str, *, normalize_quotes: bool = True) -> str:
    """Apply common fixes for almost-JSON produced by language models.

    Quote normalization rewrites smart and single quotes into JSON double
    quotes. It can damage apostrophes inside valid strings, so callers may
    try a pass without it first.
    """
    repairs = _STRUCTURE_REPAIRS
    if normalize_quotes:
        repairs += _QUOTE_REPAIRS
    repairs += _COMMA_REPAIRS
    for pattern, replacement in repairs:
        text = pattern.sub(replacement, text)
    return text.strip()


def slice_outer_object(text: str) -> str | None:
    """Return the span from the first '{' to the last '}', or None."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def _loads_object(text: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def analysis_fields(data: dict[str, Any] | None) -> dict[str, Any] | None:
    """Return *data* if it looks like an analysis, unwrapping ``{"analysis": {...}}``."""
    if data is None:
        return None
    if any(key in data for key in ANALYSIS_KEYS):
        return data
    if len(data) == 1:
        (inner,) = data.values()
        if isinstance(inner, dict) and any(key in inner for key in ANALYSIS_KEYS):
            return inner
    return None


class ParseStrategy(ABC):
    """One tier of the parsing chain."""

    name: ClassVar[str]

    @abstractmethod
    def parse(self, raw: str) -> dict[str, Any] | None:
        """Return a JSON object recovered from *raw*, or None if this tier fails."""


class StrictJsonStrategy(ParseStrategy):
    name = "strict"

    def parse(self, raw: str) -> dict[str, Any] | None:
        return _loads_object(strip_code_fences(raw))


class RepairedJsonStrategy(ParseStrategy):
    name = "repaired"

    def parse(self, raw: str) -> dict[str, Any] | None:
        candidate = slice_outer_object(raw)
        if candidate is None:
            return None
        parsed = _loads_object(repair_json(candidate, normalize_quotes=False))
        if parsed is not None:
            return parsed
        return _loads_object(repair_json(candidate))


class RegexSalvageStrategy(ParseStrategy):
    """Recovers summary, riskScore and keyRisks field by field."""

    name = "regex"

    _SUMMARY_RE: ClassVar[re.Pattern[str]] = re.compile(
        r'["\']summary["\']\s*:\s*"((?:[^"\\]|\\.)*)"', re.DOTALL
    )
    _RISK_SCORE_RE: ClassVar[re.Pattern[str]] = re.compile(
        r'["\']riskScore["\']\s*:\s*["\']?(-?\d+(?:\.\d+)?)'
    )
    _KEY_RISKS_RE: ClassVar[re.Pattern[str]] = re.compile(
        r'["\']keyRisks["\']\s*:\s*(\[.*?\])', re.DOTALL
    )

    def parse(self, raw: str) -> dict[str, Any] | None:
        summary = self._summary(raw)
        risk_score = self._risk_score(raw)
        if summary is None and risk_score is None:
            return None
        return {
            "summary": summary or "Analysis completed",
            "riskScore": risk_score if risk_score is not None else DEFAULT_RISK_SCORE,
            "keyRisks": self._key_risks(raw),
        }

    def _summary(self, raw: str) -> str | None:
        match = self._SUMMARY_RE.search(raw)
        if match is None:
            return None
        body = match.group(1)
        try:
            return json.loads(f'"{body}"', strict=False)
        except json.JSONDecodeError:
            return body.replace('\\"', '"')

    def _risk_score(self, raw: str) -> int | None:
        match = self._RISK_SCORE_RE.search(raw)
        if match is None:
            return None
        return coerce_risk_score(match.group(1))

    def _key_risks(self, raw: str) -> list[Any]:
        match = self._KEY_RISKS_RE.search(raw)
        if match is None:
            return []
        try:
            parsed = json.loads(repair_json(match.group(1)))
        except json.JSONDecodeError:
            return []
        return parsed if isinstance(parsed, list) else []


class AnalysisParser:
    """Runs the strategy chain and builds the final LegalAnalysisResult."""

    def __init__(self, strategies: list[ParseStrategy] | None = None) -> None:
        self._strategies = (
            strategies
            if strategies is not None
            else [StrictJsonStrategy(), RepairedJsonStrategy(), RegexSalvageStrategy()]
        )

    def parse(self, raw: str) -> LegalAnalysisResult:
        for strategy in self._strategies:
            data = analysis_fields(strategy.parse(raw))
            if data is not None:
                Log.debug(f"Analysis parsed by '{strategy.name}' strategy")
                return build_analysis(data)
        Log.warning("Analysis output could not be parsed, using generic fallback")
        return self.fallback(raw)

    @staticmethod
    def fallback(raw: str) -> LegalAnalysisResult:
        text = raw.strip()
        return LegalAnalysisResult(
            summary=text or FALLBACK_SUMMARY,
            risk_score=DEFAULT_RISK_SCORE,
            key_risks=[
                KeyRisk(
                    category="General",
                    description="Please review the document carefully for potential risks.",
                    severity="MEDIUM",
                    recommendation="Consider consulting with a legal professional.",
                )
            ],
            recommendations=[
                "Review all terms carefully",
                "Consider legal consultation if needed",
            ],
            best_effort=True,
        )
