import httpx
import openai

from legal_lens.analysis.client_base import BaseAnalysisClient
from legal_lens.analysis.exceptions import AnalysisError, AnalysisUnavailableError


class OpenAIClientAdapter(BaseAnalysisClient):
    """Analysis client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
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
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        try:
            if json_output:
                response = await self._client.chat.completions.create(
                    model=model,
                    temperature=temperature,
                    max_tokens=max_output_tokens,
                    response_format={"type": "json_object"},
                    messages=messages,
                )
            else:
                response = await self._client.chat.completions.create(
                    model=model,
                    temperature=temperature,
                    max_tokens=max_output_tokens,
                    messages=messages,
                )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisUnavailableError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise AnalysisUnavailableError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise AnalysisError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise AnalysisError("AI returned empty response")
        return content
