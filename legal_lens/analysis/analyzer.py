"""AI-powered legal analysis and document chat."""

import asyncio
from collections.abc import Awaitable
from pathlib import Path

from legal_lens.analysis.chat_heuristics import extract_sources, response_confidence
from legal_lens.analysis.client_base import BaseAnalysisClient
from legal_lens.analysis.exceptions import (
    AnalysisError,
    AnalysisMalformedError,
    AnalysisUnavailableError,
)
from legal_lens.analysis.mock_analysis import mock_analysis
from legal_lens.analysis.models import ChatResponse, DetailedAnalysisResult, LegalAnalysisResult
from legal_lens.analysis.parser import (
    AnalysisParser,
    ParseStrategy,
    RepairedJsonStrategy,
    StrictJsonStrategy,
)
from legal_lens.analysis.prompt_loader import load_json_structure, load_prompt_template
from legal_lens.analysis.validator import build_detailed_analysis
from legal_lens.logging.logger import Log

ANALYSIS_SYSTEM_PROMPT = (
    "You are a legal document analyst. Respond with a single JSON object only."
)


class LegalAnalyzer:
    """Produces structured analyses and grounded answers using an AI provider."""

    MAX_TEMPERATURE = 0.3

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.2,
        max_output_tokens: int = 8192,
        chat_max_output_tokens: int = 2048,
        timeout_seconds: float = 60,
        language: str = "English",
        parser: AnalysisParser | None = None,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(self.MAX_TEMPERATURE, temperature))
        self._max_output_tokens = max_output_tokens
        self._chat_max_output_tokens = chat_max_output_tokens
        self._timeout_seconds = timeout_seconds
        self._language = language
        self._parser = parser if parser is not None else AnalysisParser()
        self._detail_strategies: list[ParseStrategy] = [
            StrictJsonStrategy(),
            RepairedJsonStrategy(),
        ]

        self._analysis_template = load_prompt_template("analysis_prompt.txt", prompt_dir)
        self._analysis_structure = load_json_structure("analysis_structure.json", prompt_dir)
        self._chat_template = load_prompt_template("chat_prompt.txt", prompt_dir)
        self._chat_general_template = load_prompt_template("chat_general_prompt.txt", prompt_dir)
        self._clauses_template = load_prompt_template("clauses_prompt.txt", prompt_dir)
        self._clauses_structure = load_json_structure("clauses_structure.json", prompt_dir)

    async def analyze(self, document_text: str, document_type: str) -> LegalAnalysisResult:
        """Analyze a document; falls back to a mock analysis if the provider fails.

        Never raises for provider errors: unreachable providers yield the
        deterministic mock, unparseable output yields the parser fallback.
        Both are marked ``best_effort``.
        """
        prompt = self._analysis_template.format(
            document_type=document_type,
            document_text=document_text,
            json_structure=self._analysis_structure,
        )
        Log.debug(f"Analysis prompt:\n{prompt}")

        try:
            raw = await self._complete(
                system_prompt=ANALYSIS_SYSTEM_PROMPT,
                user_prompt=prompt,
                max_output_tokens=self._max_output_tokens,
                json_output=True,
            )
        except AnalysisError as exc:
            Log.warning(f"AI analysis failed, using mock analysis: {exc}")
            return mock_analysis(document_text, document_type)

        Log.debug(f"AI raw analysis response:\n{raw}")
        result = self._parser.parse(raw)
        Log.info(
            "Analysis complete",
            risk_score=result.risk_score,
            key_risks=len(result.key_risks),
            best_effort=result.best_effort,
        )
        return result

    async def chat(
        self,
        query: str,
        document_text: str,
        context: str | None = None,
    ) -> ChatResponse:
        """Answer a question, grounded in the document text when there is any.

        Raises:
            AnalysisUnavailableError: provider unreachable or timed out.
            AnalysisError: provider returned no usable answer.
        """
        if document_text.strip():
            prompt = self._chat_template.format(
                language=self._language,
                document_text=document_text,
                context=context or "",
                query=query,
            )
        else:
            prompt = self._chat_general_template.format(
                language=self._language,
                context=context or "",
                query=query,
            )
        Log.debug(f"Chat prompt:\n{prompt}")

        raw = await self._complete(
            system_prompt="",
            user_prompt=prompt,
            max_output_tokens=self._chat_max_output_tokens,
            json_output=False,
        )
        answer = raw.strip()
        Log.debug(f"AI raw chat response:\n{answer}")
        return ChatResponse(
            response=answer,
            confidence=response_confidence(answer),
            sources=extract_sources(answer),
        )

    async def analyze_clauses_and_risks(self, document_text: str) -> DetailedAnalysisResult:
        """Break a document into plain-language clauses and a risk list.

        Raises:
            AnalysisUnavailableError: provider unreachable or timed out.
            AnalysisMalformedError: output is not recoverable JSON.
        """
        prompt = self._clauses_template.format(
            document_text=document_text,
            json_structure=self._clauses_structure,
        )
        Log.debug(f"Clause analysis prompt:\n{prompt}")

        raw = await self._complete(
            system_prompt=ANALYSIS_SYSTEM_PROMPT,
            user_prompt=prompt,
            max_output_tokens=self._max_output_tokens,
            json_output=True,
        )
        Log.debug(f"AI raw clause analysis response:\n{raw}")

        for strategy in self._detail_strategies:
            data = strategy.parse(raw)
            if data is not None:
                result = build_detailed_analysis(data)
                Log.info(
                    "Clause analysis complete",
                    clauses=len(result.clauses),
                    risks=len(result.risks),
                )
                return result
        raise AnalysisMalformedError("Clause analysis response is not valid JSON")

    async def _complete(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        max_output_tokens: int,
        json_output: bool,
    ) -> str:
        call: Awaitable[str] = self._client.create_completion(
            model=self._model,
            temperature=self._temperature,
            max_output_tokens=max_output_tokens,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            json_output=json_output,
        )
        try:
            return await asyncio.wait_for(call, timeout=self._timeout_seconds)
        except asyncio.TimeoutError as exc:
            raise AnalysisUnavailableError(
                f"AI provider did not respond within {self._timeout_seconds}s"
            ) from exc
