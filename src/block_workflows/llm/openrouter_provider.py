"""OpenRouter completion provider built on the OpenAI SDK."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping

import httpx
import openai
from openai import AsyncOpenAI

from block_workflows.config import CompletionConfig
from block_workflows.errors import (
    CompletionServiceError,
    InvalidCredentialError,
    NetworkError,
    RateLimitedError,
    RequestTimeoutError,
    UnexpectedResponseError,
)
from block_workflows.llm.provider import CompletionProvider

logger = logging.getLogger(__name__)


def _status_error_message(exc: openai.APIStatusError) -> str | None:
    body = exc.body
    if not isinstance(body, Mapping):
        return None
    error = body.get("error", body)
    if isinstance(error, Mapping):
        message = error.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


class OpenRouterProvider(CompletionProvider):
    """OpenRouter API provider implementation.

    OpenRouter speaks the OpenAI chat-completions protocol, so the OpenAI SDK
    is pointed at its base URL. SDK-level retries are disabled; every call is
    a single attempt bounded by ``config.timeout_seconds``.
    """

    def __init__(
        self,
        config: CompletionConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the OpenRouter provider.

        Args:
            config: Completion configuration.
            http_client: Optional pre-built HTTP client. The provider never
                closes a client it was given.
        """
        self.config = config
        self._http_client = http_client
        self._clients: dict[str, AsyncOpenAI] = {}

        logger.info(
            "OpenRouter provider initialized",
            extra={"model": config.model, "base_url": config.base_url},
        )

    def _client_for(self, api_key: str) -> AsyncOpenAI:
        client = self._clients.get(api_key)
        if client is None:
            client = AsyncOpenAI(
                api_key=api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout_seconds,
                max_retries=0,
                http_client=self._http_client,
            )
            self._clients[api_key] = client
        return client

    async def chat(
        self,
        messages: list[dict[str, str]],
        *,
        api_key: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """Generate a chat completion using the OpenRouter API."""
        client = self._client_for(api_key)
        temp = temperature if temperature is not None else self.config.temperature
        tokens = max_tokens if max_tokens is not None else self.config.max_tokens

        logger.debug("Requesting chat completion", extra={"message_count": len(messages)})

        try:
            async with asyncio.timeout(self.config.timeout_seconds):
                response = await client.chat.completions.create(
                    model=self.config.model,
                    messages=messages,  # type: ignore[arg-type]
                    temperature=temp,
                    max_tokens=tokens,
                )
        except (TimeoutError, openai.APITimeoutError) as exc:
            raise RequestTimeoutError() from exc
        except openai.APIConnectionError as exc:
            raise NetworkError() from exc
        except openai.AuthenticationError as exc:
            raise InvalidCredentialError() from exc
        except openai.RateLimitError as exc:
            raise RateLimitedError() from exc
        except openai.APIStatusError as exc:
            raise CompletionServiceError(exc.status_code, _status_error_message(exc)) from exc
        except (openai.APIResponseValidationError, json.JSONDecodeError) as exc:
            raise UnexpectedResponseError() from exc

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, KeyError, TypeError) as exc:
            raise UnexpectedResponseError() from exc
        if not isinstance(content, str):
            raise UnexpectedResponseError()

        logger.debug("Generated completion", extra={"characters": len(content)})
        return content

    async def aclose(self) -> None:
        clients = list(self._clients.values())
        self._clients.clear()
        if self._http_client is not None:
            return
        for client in clients:
            await client.close()
