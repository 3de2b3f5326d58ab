from legal_lens.analysis.models import Obligation
from legal_lens.analysis.validator import (
    DEFAULT_SUMMARY,
    build_analysis,
    build_detailed_analysis,
    clamp_importance,
    clamp_severity,
    coerce_risk_score,
)


class TestCoerceRiskScore:
    def test_integer_in_range(self) -> None:
        assert coerce_risk_score(42) == 42

    def test_bool_is_not_a_score(self) -> None:
        assert coerce_risk_score(True) == 50

    def test_non_finite_values(self) -> None:
        assert coerce_risk_score(float("nan")) == 50
        assert coerce_risk_score(float("inf")) == 100
        assert coerce_risk_score(float("-inf")) == 0

    def test_first_number_in_string(self) -> None:
        assert coerce_risk_score("Risk: 80 out of 100") == 80


class TestClamping:
    def test_severity_aliases(self) -> None:
        assert clamp_severity("moderate") == "MEDIUM"
        assert clamp_severity("Severe") == "HIGH"
        assert clamp_severity("critical") == "CRITICAL"
        assert clamp_severity("whatever") == "MEDIUM"
        assert clamp_severity(None) == "MEDIUM"

    def test_importance_has_no_critical_level(self) -> None:
        assert clamp_importance("CRITICAL") == "HIGH"
        assert clamp_importance("low") == "LOW"


class TestBuildAnalysis:
    def test_missing_sections_become_empty(self) -> None:
        result = build_analysis({})
        assert result.summary == DEFAULT_SUMMARY
        assert result.risk_score == 50
        assert result.key_risks == []
        assert result.obligations == []
        assert result.recommendations == []

    def test_non_list_section_is_ignored(self) -> None:
        result = build_analysis({"summary": "s", "rights": "none"})
        assert result.rights == []

    def test_null_deadline_strings(self) -> None:
        result = build_analysis(
            {"obligations": [{"party": "Tenant", "description": "Pay", "deadline": "null"}]}
        )
        assert result.obligations == [Obligation(party="Tenant", description="Pay", deadline=None)]

    def test_recommendations_keep_only_strings(self) -> None:
        result = build_analysis({"recommendations": ["  Read it  ", "", 3, None]})
        assert result.recommendations == ["Read it"]


class TestBuildDetailedAnalysis:
    def test_builds_clauses_and_risks(self) -> None:
        result = build_detailed_analysis(
            {
                "clauses": [
                    {
                        "type": "Payment Terms",
                        "title": "Rent",
                        "originalText": "Tenant shall pay $1,500.",
                        "simplifiedPoints": ["You pay $1,500 monthly"],
                        "keyTakeaway": "Pay on time",
                    }
                ],
                "risks": [{"id": "r-1", "level": "CRITICAL", "title": "Late fee"}],
            }
        )
        assert result.clauses[0].id == "clause_1"
        assert result.clauses[0].simplified_points == ["You pay $1,500 monthly"]
        assert result.risks[0].id == "r-1"
        assert result.risks[0].level == "high"

    def test_skips_non_object_items(self) -> None:
        result = build_detailed_analysis({"clauses": ["text", {"title": "A"}], "risks": None})
        assert len(result.clauses) == 1
        assert result.clauses[0].id == "clause_2"
        assert result.risks == []
