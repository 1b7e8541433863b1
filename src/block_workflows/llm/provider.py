"""Abstract base class for completion providers."""

from abc import ABC, abstractmethod


class CompletionProvider(ABC):
    """Abstract base class for completion providers.

    A provider performs exactly one request per ``chat`` call. Retrying is the
    caller's job; providers only translate transport and HTTP failures into
    the ``block_workflows.errors`` taxonomy.
    """

    @abstractmethod
    async def chat(
        self,
        messages: list[dict[str, str]],
        *,
        api_key: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """Generate a chat completion from messages.

        Args:
            messages: List of message dicts with 'role' and 'content'.
            api_key: Bearer credential for this request.
            max_tokens: Maximum tokens to generate.
            temperature: Sampling temperature.

        Returns:
            The raw generated text.

        Raises:
            InvalidCredentialError: On HTTP 401.
            RateLimitedError: On HTTP 429.
            RequestTimeoutError: When the attempt exceeds its time budget.
            NetworkError: When the service cannot be reached.
            CompletionServiceError: On any other HTTP error status.
            UnexpectedResponseError: When a successful body has no text.
        """

    async def aclose(self) -> None:
        """Release pooled connections, if any."""
