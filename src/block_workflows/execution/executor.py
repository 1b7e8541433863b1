"""Execute a single block against one input string."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from block_workflows.blocks.registry import BlockRegistry
from block_workflows.config import CompletionConfig
from block_workflows.errors import (
    BlockNotFoundError,
    MissingCredentialError,
    RateLimitedError,
)
from block_workflows.llm.provider import CompletionProvider
from block_workflows.text.sanitizer import sanitize_output
from block_workflows.text.validation import ValidationResult, validate_input

logger = logging.getLogger(__name__)

CredentialSource = Callable[[], str | None]
Validator = Callable[[object], ValidationResult]
Sanitizer = Callable[[object], str]
Sleep = Callable[[float], Awaitable[None]]


class BlockExecutor:
    """Runs one block through the completion provider.

    HTTP 429 responses are retried with exponential backoff: the delay before
    retry ``n`` is ``initial_retry_delay * 2 ** (n - 1)``. Every other failure
    is raised immediately.
    """

    def __init__(
        self,
        *,
        registry: BlockRegistry,
        provider: CompletionProvider,
        credentials: CredentialSource,
        config: CompletionConfig | None = None,
        validator: Validator = validate_input,
        sanitizer: Sanitizer = sanitize_output,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._registry = registry
        self._provider = provider
        self._credentials = credentials
        self._config = config or CompletionConfig()
        self._validator = validator
        self._sanitizer = sanitizer
        self._sleep = sleep

    def retry_delay(self, retry_number: int) -> float:
        """Seconds to wait before the ``retry_number``-th retry (1-based)."""

        return self._config.initial_retry_delay * 2 ** (retry_number - 1)

    async def execute_block(self, block_id: str, input_text: object) -> str:
        """Run ``block_id`` on ``input_text`` and return the sanitized output.

        Raises:
            ValidationError: If the input is blank or too long.
            BlockNotFoundError: If the block id is not registered.
            MissingCredentialError: If no credential is configured.
            InvalidCredentialError: If the service rejects the credential.
            RateLimitedError: If every retry was also rate limited.
            RequestTimeoutError: If an attempt timed out.
            NetworkError: If the service could not be reached.
            CompletionServiceError: On any other HTTP error status.
            UnexpectedResponseError: If the response carried no text.
        """
        text = self._validator(input_text).unwrap()

        block = self._registry.get_block(block_id)
        if block is None:
            raise BlockNotFoundError(block_id)

        api_key = self._credentials()
        if not api_key:
            raise MissingCredentialError()

        messages = [
            {"role": "system", "content": block.prompt_template},
            {"role": "user", "content": text},
        ]

        max_retries = self._config.max_retries
        for attempt in range(max_retries + 1):
            if attempt:
                delay = self.retry_delay(attempt)
                logger.warning(
                    "Rate limited; retrying",
                    extra={
                        "block_id": block_id,
                        "attempt": attempt,
                        "max_retries": max_retries,
                        "delay_seconds": delay,
                    },
                )
                await self._sleep(delay)
            try:
                raw = await self._provider.chat(
                    messages,
                    api_key=api_key,
                    max_tokens=self._config.max_tokens,
                    temperature=self._config.temperature,
                )
            except RateLimitedError:
                if attempt >= max_retries:
                    logger.warning(
                        "Rate limit retries exhausted",
                        extra={"block_id": block_id, "attempts": attempt + 1},
                    )
                    raise
                continue
            return self._sanitizer(raw)

        raise AssertionError("unreachable")  # pragma: no cover
