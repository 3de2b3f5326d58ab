"""Offline analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in AnalyzerFactory.
"""

import json
from typing import ClassVar

from legal_lens.analysis.client_base import BaseAnalysisClient


class ExampleClientAdapter(BaseAnalysisClient):
    """Returns fixed, valid payloads without any network call.

    Useful for local development and tests: JSON requests receive an analysis
    object that also carries empty clause and risk lists, text requests
    receive a short canned answer.
    """

    DEFAULT_ANALYSIS: ClassVar[dict[str, object]] = {
        "summary": "Example analysis generated without an AI provider.",
        "riskScore": 50,
        "keyRisks": [],
        "obligations": [],
        "rights": [],
        "keyTerms": [],
        "recommendations": ["Configure an AI provider for a real analysis"],
        "clauses": [],
        "risks": [],
    }
    DEFAULT_ANSWER: ClassVar[str] = (
        "This is an example answer. Configure an AI provider to ask questions "
        "about your document."
    )

    async def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_output_tokens: int,
        system_prompt: str,
        user_prompt: str,
        json_output: bool,
    ) -> str:
        _ = model, temperature, max_output_tokens, system_prompt, user_prompt
        if json_output:
            return json.dumps(self.DEFAULT_ANALYSIS)
        return self.DEFAULT_ANSWER
