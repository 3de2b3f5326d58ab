from legal_lens.analysis.models import KeyRisk, KeyTerm, LegalAnalysisResult, Obligation, Right


def mock_analysis(document_text: str, document_type: str) -> LegalAnalysisResult:
    """Deterministic stand-in used when the AI provider is unreachable.

    Longer documents are assumed to be more complex and therefore riskier.
    """
    length = len(document_text)
    if length > 5000:
        complexity, risk_score = "HIGH", 75
    elif length > 2000:
        complexity, risk_score = "MEDIUM", 60
    else:
        complexity, risk_score = "LOW", 45

    return LegalAnalysisResult(
        summary=(
            f"This {document_type} contains key legal provisions and obligations. "
            "The document appears to be a standard legal agreement with typical terms "
            "and conditions. The AI analysis service was unavailable, so this is a "
            "fallback analysis."
        ),
        risk_score=risk_score,
        key_risks=[
            KeyRisk(
                category="Service Availability",
                description="AI analysis service temporarily unavailable - manual review recommended",
                severity="MEDIUM",
                recommendation="Check the AI provider configuration for a detailed analysis",
            ),
            KeyRisk(
                category="Document Complexity",
                description=f"Document complexity assessed as {complexity} based on length",
                severity="HIGH" if complexity == "HIGH" else "MEDIUM",
                recommendation="Consider professional legal review for complex documents",
            ),
        ],
        obligations=[
            Obligation(
                party="Both Parties",
                description="Review and understand all terms before signing",
                deadline="Before execution",
            )
        ],
        rights=[
            Right(
                party="Document Holder",
                description="Right to seek legal counsel for document interpretation",
            )
        ],
        key_terms=[
            KeyTerm(
                term="Legal Review",
                definition="Professional examination of legal document terms",
                importance="HIGH",
            )
        ],
        recommendations=[
            "Configure the AI provider for a detailed analysis",
            "Consider professional legal review",
            "Ensure all parties understand the document terms",
        ],
        best_effort=True,
    )
