from typing import Any

import httpx
import openai

from altseo.generation.client_base import BaseCompletionClient
from altseo.generation.exceptions import (
    GenerationError,
    GenerationNetworkError,
    ProviderStatusError,
)


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client built on the OpenAI-compatible chat API.

    The SDK's own retries are disabled; retry policy lives in call_with_backoff.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        vision_timeout_seconds: int | None = None,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            # call_with_backoff owns retries
            max_retries=0,
        )
        self._vision_timeout_seconds = vision_timeout_seconds or timeout_seconds

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        user_prompt: str,
        system_prompt: str = "",
    ) -> str:
        messages: list[dict[str, Any]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})
        return self._complete(
            self._client,
            model=model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
            top_p=1,
            frequency_penalty=0,
            presence_penalty=0,
        )

    def create_vision_completion(
        self,
        *,
        model: str,
        max_tokens: int,
        prompt: str,
        image_data_url: str,
    ) -> str:
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": image_data_url}},
                ],
            }
        ]
        client = self._client.with_options(timeout=self._vision_timeout_seconds)
        return self._complete(client, model=model, messages=messages, max_tokens=max_tokens)

    @staticmethod
    def _complete(client: openai.OpenAI, **request: Any) -> str:
        try:
            response = client.chat.completions.create(**request)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise GenerationNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIStatusError as exc:
            raise ProviderStatusError(
                f"AI provider returned HTTP {exc.status_code}: {exc.message}",
                status_code=exc.status_code,
            ) from exc
        except openai.APIError as exc:
            raise GenerationNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise GenerationError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise GenerationError("AI returned empty response")
        return content
