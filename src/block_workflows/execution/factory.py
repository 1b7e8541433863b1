"""Factory for wiring a registry, provider, executor and engine from settings."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass

import httpx

from block_workflows.blocks.registry import BlockRegistry
from block_workflows.config import BlockWorkflowSettings
from block_workflows.llm.openrouter_provider import OpenRouterProvider
from block_workflows.llm.provider import CompletionProvider
from block_workflows.text.validation import validate_input

from .engine import WorkflowEngine
from .executor import BlockExecutor, Sleep

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WorkflowComponents:
    registry: BlockRegistry
    provider: CompletionProvider
    executor: BlockExecutor
    engine: WorkflowEngine

    async def aclose(self) -> None:
        await self.provider.aclose()


class WorkflowFactory:
    """Factory for creating fully wired workflow components."""

    @staticmethod
    def create(
        settings: BlockWorkflowSettings,
        *,
        registry: BlockRegistry | None = None,
        provider: CompletionProvider | None = None,
        http_client: httpx.AsyncClient | None = None,
        sleep: Sleep | None = None,
    ) -> WorkflowComponents:
        """Create workflow components based on settings.

        Args:
            settings: Loaded settings.
            registry: Block registry; defaults to the built-in blocks.
            provider: Completion provider; defaults to OpenRouter.
            http_client: HTTP client handed to the default provider.
            sleep: Backoff sleep override, mostly for tests.

        Returns:
            The wired components sharing one registry.
        """
        config = settings.completion_config()
        registry = registry if registry is not None else BlockRegistry()
        if provider is None:
            provider = OpenRouterProvider(config, http_client=http_client)

        validator = functools.partial(validate_input, max_length=settings.max_input_length)
        executor_kwargs = {} if sleep is None else {"sleep": sleep}
        executor = BlockExecutor(
            registry=registry,
            provider=provider,
            credentials=settings.api_key,
            config=config,
            validator=validator,
            **executor_kwargs,
        )
        engine = WorkflowEngine(registry=registry, runner=executor, validator=validator)

        logger.info(
            "Workflow components created",
            extra={"blocks": len(registry), "model": config.model},
        )
        return WorkflowComponents(
            registry=registry, provider=provider, executor=executor, engine=engine
        )
