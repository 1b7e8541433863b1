"""Configuration for block and workflow execution.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The OpenRouter credential is optional at load time; the
HTTP server and the read-only CLI commands work without it. Executing a block
without a credential fails with ``MissingCredentialError`` instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "nousresearch/hermes-3-llama-3.1-70b"
MAX_INPUT_LENGTH = 10_000


@dataclass(frozen=True, slots=True)
class CompletionConfig:
    """Fixed parameters for every completion request and its retry policy."""

    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    temperature: float = 0.7
    max_tokens: int = 1000
    timeout_seconds: float = 30.0
    max_retries: int = 3
    initial_retry_delay: float = 2.0


class BlockWorkflowSettings(BaseSettings):
    """Settings for block execution.

    Environment variables:
    - OPENROUTER_API_KEY                 (required to execute blocks)
    - OPENROUTER_BASE_URL                (optional)
    - BLOCKS_MODEL                       (optional)
    - BLOCKS_TEMPERATURE                 (optional)
    - BLOCKS_MAX_TOKENS                  (optional)
    - BLOCKS_TIMEOUT_SECONDS             (optional)
    - BLOCKS_MAX_RETRIES                 (optional)
    - BLOCKS_INITIAL_RETRY_DELAY_SECONDS (optional)
    - BLOCKS_MAX_INPUT_LENGTH            (optional)
    - BLOCKS_STATE_PATH                  (optional)
    - LOG_LEVEL                          (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `BlockWorkflowSettings(_env_file=path_to_env)`.
    """

    openrouter_api_key: str = Field(
        default="",
        validation_alias="OPENROUTER_API_KEY",
        description="Bearer credential for the OpenRouter completion API",
    )
    openrouter_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias="OPENROUTER_BASE_URL",
        description="Base URL of the OpenAI-compatible completion API",
    )

    model: str = Field(
        default=DEFAULT_MODEL,
        validation_alias="BLOCKS_MODEL",
        description="Model identifier sent with every completion request",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        validation_alias="BLOCKS_TEMPERATURE",
        description="Sampling temperature",
    )
    max_tokens: int = Field(
        default=1000,
        gt=0,
        validation_alias="BLOCKS_MAX_TOKENS",
        description="Maximum number of output tokens per completion",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="BLOCKS_TIMEOUT_SECONDS",
        description="Wall-clock budget for a single completion attempt",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        validation_alias="BLOCKS_MAX_RETRIES",
        description="Additional attempts made after an HTTP 429 response",
    )
    initial_retry_delay: float = Field(
        default=2.0,
        ge=0,
        validation_alias="BLOCKS_INITIAL_RETRY_DELAY_SECONDS",
        description="Delay before the first retry; doubles on every further retry",
    )
    max_input_length: int = Field(
        default=MAX_INPUT_LENGTH,
        gt=0,
        validation_alias="BLOCKS_MAX_INPUT_LENGTH",
        description="Maximum length of input text after trimming",
    )

    state_path: Path = Field(
        default=Path("block_state"),
        validation_alias="BLOCKS_STATE_PATH",
        description="Directory where saved workflows are persisted",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def saved_workflows_file(self) -> Path:
        """Path where named block lists are persisted."""

        return self.state_path / "saved_workflows.json"

    def api_key(self) -> str | None:
        key = self.openrouter_api_key.strip()
        return key or None

    def completion_config(self) -> CompletionConfig:
        return CompletionConfig(
            model=self.model,
            base_url=self.openrouter_base_url,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            timeout_seconds=self.timeout_seconds,
            max_retries=self.max_retries,
            initial_retry_delay=self.initial_retry_delay,
        )
