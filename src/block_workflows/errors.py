"""Error taxonomy for block and workflow execution.

Every error carries a human-readable message suitable for showing to the
person who triggered the run; ``str(err)`` returns that message.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from block_workflows.execution.engine import StepResult

CREDENTIAL_MESSAGE = "API key invalid. Please configure OpenRouter API key."


class BlockWorkflowError(Exception):
    """Base class for all user-facing failures."""

    default_message = "An error occurred during execution"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BlockWorkflowError):
    """Input text is missing, blank, or too long."""

    default_message = "Please enter some text to transform."


class EmptySelectionError(BlockWorkflowError):
    default_message = "Please select at least one block for the workflow."


class BlockNotFoundError(BlockWorkflowError):
    def __init__(self, block_id: str) -> None:
        self.block_id = block_id
        super().__init__(f"Block not found: {block_id}")


class InvalidBlockError(BlockWorkflowError):
    default_message = "Block must have id, name, description, and prompt_template"


class InvalidSelectionError(BlockWorkflowError):
    default_message = "Invalid selection."


class MissingCredentialError(BlockWorkflowError):
    default_message = CREDENTIAL_MESSAGE


class InvalidCredentialError(BlockWorkflowError):
    default_message = CREDENTIAL_MESSAGE


class RateLimitedError(BlockWorkflowError):
    default_message = "Too many requests. Please wait a moment and try again."


class RequestTimeoutError(BlockWorkflowError, TimeoutError):
    """A single completion attempt exceeded its wall-clock budget."""

    default_message = "Request timed out. Please try again with shorter text."


class NetworkError(BlockWorkflowError):
    default_message = "Unable to connect to AI service. Please check your connection."


class UnexpectedResponseError(BlockWorkflowError):
    default_message = "Unexpected response from AI service. Please try again."


class CompletionServiceError(BlockWorkflowError):
    """The completion service answered with an error status other than 401/429."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"API request failed with status {status_code}")


class WorkflowStepFailedError(BlockWorkflowError):
    """A workflow step failed; carries every step recorded up to and including it."""

    def __init__(
        self,
        *,
        step_index: int,
        block_name: str,
        reason: str,
        steps: Sequence[StepResult],
    ) -> None:
        self.step_index = step_index
        self.block_name = block_name
        self.reason = reason
        self.steps: tuple[StepResult, ...] = tuple(steps)
        super().__init__(f"Workflow failed at step {step_index} ({block_name}): {reason}")
