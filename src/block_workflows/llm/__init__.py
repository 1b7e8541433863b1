"""LLM package initialization."""

from block_workflows.llm.openrouter_provider import OpenRouterProvider
from block_workflows.llm.provider import CompletionProvider

__all__ = [
    "CompletionProvider",
    "OpenRouterProvider",
]
