from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from altseo.generation.exceptions import (
    GenerationError,
    GenerationNetworkError,
    ProviderStatusError,
)
from altseo.generation.openai_client_adapter import OpenAIClientAdapter


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _make_adapter(mock_client: MagicMock) -> OpenAIClientAdapter:
    with patch(
        "altseo.generation.openai_client_adapter.openai.OpenAI",
        return_value=mock_client,
    ):
        return OpenAIClientAdapter(api_key="k", timeout_seconds=45, vision_timeout_seconds=60)


def _chat(adapter: OpenAIClientAdapter) -> str:
    return adapter.create_chat_completion(
        model="gpt-4o-mini",
        temperature=0.7,
        max_tokens=4000,
        system_prompt="system",
        user_prompt="user",
    )


class TestChatCompletion:
    def test_returns_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("seo, tips")
        adapter = _make_adapter(mock_client)

        assert _chat(adapter) == "seo, tips"

    def test_sends_system_and_user_messages(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("x")
        adapter = _make_adapter(mock_client)

        _chat(adapter)

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["messages"] == [
            {"role": "system", "content": "system"},
            {"role": "user", "content": "user"},
        ]
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 4000
        assert kwargs["top_p"] == 1

    def test_omits_empty_system_prompt(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("x")
        adapter = _make_adapter(mock_client)

        adapter.create_chat_completion(model="m", temperature=0.7, max_tokens=10, user_prompt="u")

        messages = mock_client.chat.completions.create.call_args.kwargs["messages"]
        assert messages == [{"role": "user", "content": "u"}]

    def test_disables_sdk_retries(self) -> None:
        with patch("altseo.generation.openai_client_adapter.openai.OpenAI") as mock_openai:
            OpenAIClientAdapter(api_key="k", timeout_seconds=45)

        assert mock_openai.call_args.kwargs["max_retries"] == 0

    def test_raises_error_for_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        adapter = _make_adapter(mock_client)

        with pytest.raises(GenerationError, match="empty response"):
            _chat(adapter)

    def test_raises_error_for_no_choices(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = MagicMock(choices=[])
        adapter = _make_adapter(mock_client)

        with pytest.raises(GenerationError, match="no choices"):
            _chat(adapter)

    def test_raises_network_error_on_connection_failure(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=MagicMock()
        )
        adapter = _make_adapter(mock_client)

        with pytest.raises(GenerationNetworkError, match="network error"):
            _chat(adapter)

    def test_raises_network_error_on_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = httpx.TimeoutException("timeout")
        adapter = _make_adapter(mock_client)

        with pytest.raises(GenerationNetworkError, match="network error"):
            _chat(adapter)

    def test_raises_status_error_with_code(self) -> None:
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        response = httpx.Response(429, request=request)
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.RateLimitError(
            "rate limited", response=response, body=None
        )
        adapter = _make_adapter(mock_client)

        with pytest.raises(ProviderStatusError) as exc_info:
            _chat(adapter)

        assert exc_info.value.status_code == 429
        assert exc_info.value.retryable

    def test_raises_network_error_on_api_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIError(
            message="server error",
            request=MagicMock(),
            body=None,
        )
        adapter = _make_adapter(mock_client)

        with pytest.raises(GenerationNetworkError, match="API error"):
            _chat(adapter)


class TestVisionCompletion:
    def test_sends_image_with_vision_timeout(self) -> None:
        mock_client = MagicMock()
        vision_client = mock_client.with_options.return_value
        vision_client.chat.completions.create.return_value = _make_mock_response("A red bicycle")
        adapter = _make_adapter(mock_client)

        result = adapter.create_vision_completion(
            model="gpt-4o",
            max_tokens=300,
            prompt="Describe",
            image_data_url="data:image/png;base64,AAAA",
        )

        assert result == "A red bicycle"
        mock_client.with_options.assert_called_once_with(timeout=60)
        content = vision_client.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        assert content[0] == {"type": "text", "text": "Describe"}
        assert content[1]["image_url"]["url"] == "data:image/png;base64,AAAA"
