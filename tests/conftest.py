"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import httpx
import pytest

from block_workflows.blocks.registry import Block, BlockRegistry
from block_workflows.config import BlockWorkflowSettings, CompletionConfig
from block_workflows.llm.provider import CompletionProvider


class FakeProvider(CompletionProvider):
    """Scripted provider: each call pops the next string or raises the next error.

    Once the script is exhausted it echoes the user message with a marker, so
    chained workflows produce predictable outputs.
    """

    def __init__(self, script: Sequence[str | Exception] = ()) -> None:
        self.script = list(script)
        self.calls: list[list[dict[str, str]]] = []
        self.closed = False

    async def chat(
        self,
        messages: list[dict[str, str]],
        *,
        api_key: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        self.calls.append(messages)
        if self.script:
            item = self.script.pop(0)
            if isinstance(item, Exception):
                raise item
            return item
        return f"{messages[-1]['content']} [{len(self.calls)}]"

    async def aclose(self) -> None:
        self.closed = True


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def completion_body(content: Any) -> dict[str, Any]:
    return {
        "id": "gen-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "test-model",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


@pytest.fixture
def fake_provider_cls() -> type[FakeProvider]:
    return FakeProvider


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def completion_response() -> Callable[[Any], dict[str, Any]]:
    """Build an OpenAI-style chat completion body around ``content``."""
    return completion_body


@pytest.fixture
def mock_http_client() -> Callable[[Callable[[httpx.Request], Any]], httpx.AsyncClient]:
    """Wrap a request handler in an ``httpx.AsyncClient`` with no network access."""

    def _build(handler: Callable[[httpx.Request], Any]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _build


@pytest.fixture
def completion_config() -> CompletionConfig:
    """Provide a test completion configuration."""
    return CompletionConfig(
        model="test-model",
        base_url="https://openrouter.test/api/v1",
        timeout_seconds=5.0,
        max_retries=3,
        initial_retry_delay=2.0,
    )


@pytest.fixture
def settings(tmp_path: Path) -> BlockWorkflowSettings:
    """Provide test settings with a credential and an isolated state directory."""
    return BlockWorkflowSettings(
        _env_file=None,
        OPENROUTER_API_KEY="test-key",
        OPENROUTER_BASE_URL="https://openrouter.test/api/v1",
        BLOCKS_MODEL="test-model",
        BLOCKS_STATE_PATH=tmp_path / "block_state",
        BLOCKS_MAX_INPUT_LENGTH=200,
        BLOCKS_INITIAL_RETRY_DELAY_SECONDS=0.0,
    )


@pytest.fixture
def registry() -> BlockRegistry:
    """Provide an isolated registry with two small blocks."""
    return BlockRegistry(
        [
            Block(
                id="upper",
                name="Uppercase",
                description="Shout the text",
                prompt_template="Uppercase the text.",
            ),
            Block(
                id="reverse",
                name="Reverse",
                description="Reverse the text",
                prompt_template="Reverse the text.",
            ),
            Block(
                id="shorten",
                name="Shorten",
                description="Shorten the text",
                prompt_template="Shorten the text.",
            ),
        ]
    )
