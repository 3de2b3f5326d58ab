import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from legal_lens.analysis.exceptions import AnalysisError, AnalysisUnavailableError
from legal_lens.analysis.openai_client_adapter import OpenAIClientAdapter


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _complete(mock_client: MagicMock, *, json_output: bool = True, system_prompt: str = "system") -> str:
    with patch(
        "legal_lens.analysis.openai_client_adapter.openai.AsyncOpenAI",
        return_value=mock_client,
    ):
        adapter = OpenAIClientAdapter(api_key="k", timeout_seconds=30, base_url=None)
        return asyncio.run(
            adapter.create_completion(
                model="m",
                temperature=0.1,
                max_output_tokens=512,
                system_prompt=system_prompt,
                user_prompt="user",
                json_output=json_output,
            )
        )


def _make_client(response: MagicMock | None = None, error: Exception | None = None) -> MagicMock:
    mock_client = MagicMock()
    mock_client.chat.completions.create = AsyncMock(return_value=response, side_effect=error)
    return mock_client


class TestOpenAIClientAdapter:
    def test_returns_content(self) -> None:
        mock_client = _make_client(_make_mock_response('{"ok": true}'))
        assert _complete(mock_client) == '{"ok": true}'

    def test_json_output_requests_json_object(self) -> None:
        mock_client = _make_client(_make_mock_response("{}"))
        _complete(mock_client)
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["max_tokens"] == 512
        assert kwargs["messages"][0] == {"role": "system", "content": "system"}

    def test_text_output_omits_response_format(self) -> None:
        mock_client = _make_client(_make_mock_response("answer"))
        _complete(mock_client, json_output=False, system_prompt="")
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert "response_format" not in kwargs
        assert kwargs["messages"] == [{"role": "user", "content": "user"}]

    def test_raises_error_for_empty_content(self) -> None:
        mock_client = _make_client(_make_mock_response(None))
        with pytest.raises(AnalysisError, match="empty response"):
            _complete(mock_client)

    def test_raises_error_for_no_choices(self) -> None:
        response = MagicMock()
        response.choices = []
        with pytest.raises(AnalysisError, match="no choices"):
            _complete(_make_client(response))

    def test_connection_failure_is_unavailable(self) -> None:
        mock_client = _make_client(error=openai.APIConnectionError(request=MagicMock()))
        with pytest.raises(AnalysisUnavailableError, match="network error"):
            _complete(mock_client)

    def test_timeout_is_unavailable(self) -> None:
        mock_client = _make_client(error=httpx.TimeoutException("timeout"))
        with pytest.raises(AnalysisUnavailableError, match="network error"):
            _complete(mock_client)

    def test_api_error_is_unavailable(self) -> None:
        mock_client = _make_client(
            error=openai.APIError(message="server error", request=MagicMock(), body=None)
        )
        with pytest.raises(AnalysisUnavailableError, match="API error"):
            _complete(mock_client)
