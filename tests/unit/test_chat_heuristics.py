from legal_lens.analysis.chat_heuristics import extract_sources, response_confidence

LONG_NEUTRAL = "The tenant must give thirty days written notice before moving out of the unit."


class TestResponseConfidence:
    def test_neutral_answer_keeps_base_confidence(self) -> None:
        assert response_confidence(LONG_NEUTRAL) == 0.7

    def test_citing_language_raises_confidence(self) -> None:
        answer = "According to section 4, " + LONG_NEUTRAL
        assert response_confidence(answer) == 0.9

    def test_hedging_lowers_confidence(self) -> None:
        answer = "The document does not specify when the deposit is returned to the tenant."
        assert response_confidence(answer) == 0.5

    def test_short_answer_penalized(self) -> None:
        assert response_confidence("Yes.") == 0.6

    def test_short_hedge_is_clamped_at_zero_or_more(self) -> None:
        score = response_confidence("I don't know.")
        assert 0.0 <= score <= 1.0
        assert score == 0.4

    def test_hedge_and_citation_cancel_out(self) -> None:
        answer = "According to the lease, the pet policy is not specified anywhere in the text."
        assert response_confidence(answer) == 0.7


class TestExtractSources:
    def test_sections_and_clauses_in_order(self) -> None:
        answer = "See Clause 7 and Section 4.2; also section 4.2 again and Article IV."
        assert extract_sources(answer) == ["Clause 7", "Section 4.2", "Article IV"]

    def test_paragraph_and_subsection(self) -> None:
        answer = "Paragraph 3 and subsection 2a apply."
        assert extract_sources(answer) == ["Paragraph 3", "subsection 2a"]

    def test_no_references(self) -> None:
        assert extract_sources(LONG_NEUTRAL) == []
