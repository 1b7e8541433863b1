"""Sequential multi-block workflow execution.

A workflow is an ordered list of block ids. Each step's sanitized output is
the next step's input. The run moves through ``PENDING -> RUNNING(i) ->
RUNNING(i + 1) ...`` and ends in ``COMPLETED`` or ``FAILED``; there is no
branching, skipping, or retry at this level.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from block_workflows.blocks.registry import Block, BlockRegistry
from block_workflows.errors import (
    BlockNotFoundError,
    BlockWorkflowError,
    EmptySelectionError,
    WorkflowStepFailedError,
)
from block_workflows.text.validation import validate_input

from .executor import Validator

logger = logging.getLogger(__name__)


class WorkflowState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class BlockRunner(Protocol):
    """Anything that can run one block; ``BlockExecutor`` in production."""

    async def execute_block(self, block_id: str, input_text: object) -> str: ...


@dataclass(frozen=True, slots=True)
class StepResult:
    block_id: str
    block_name: str
    input: str  # noqa: A003
    output: str = ""
    success: bool = False
    error: str | None = None

    def to_json(self) -> dict[str, object]:
        return {
            "block_id": self.block_id,
            "block_name": self.block_name,
            "input": self.input,
            "output": self.output,
            "success": self.success,
            "error": self.error,
        }


@dataclass(frozen=True, slots=True)
class WorkflowResult:
    steps: tuple[StepResult, ...]
    final_output: str

    def to_json(self) -> dict[str, object]:
        return {
            "steps": [step.to_json() for step in self.steps],
            "final_output": self.final_output,
        }


class WorkflowEngine:
    """Runs blocks one after another, chaining output to input.

    All preconditions (input text, non-empty selection, every block id known)
    are checked before the first block runs. After that, the first failing
    step aborts the run with ``WorkflowStepFailedError`` carrying every step
    recorded so far, the failed one last.
    """

    def __init__(
        self,
        *,
        registry: BlockRegistry,
        runner: BlockRunner,
        validator: Validator = validate_input,
    ) -> None:
        self._registry = registry
        self._runner = runner
        self._validator = validator

    def _resolve_all(self, block_ids: Sequence[str]) -> list[Block]:
        blocks: list[Block] = []
        for block_id in block_ids:
            block = self._registry.get_block(block_id)
            if block is None:
                raise BlockNotFoundError(block_id)
            blocks.append(block)
        return blocks

    async def execute_workflow(
        self, block_ids: Sequence[str], initial_input: object
    ) -> WorkflowResult:
        """Execute ``block_ids`` in order starting from ``initial_input``.

        Raises:
            ValidationError: If the initial input is blank or too long.
            EmptySelectionError: If no block ids were given.
            BlockNotFoundError: If any block id is unknown; no block runs.
            WorkflowStepFailedError: If a step fails; remaining steps are skipped.
        """
        current_input = self._validator(initial_input).unwrap()

        if isinstance(block_ids, str) or not block_ids:
            raise EmptySelectionError()

        blocks = self._resolve_all(block_ids)
        total = len(blocks)
        steps: list[StepResult] = []

        logger.info(
            "Workflow started",
            extra={"blocks": [b.id for b in blocks], "state": WorkflowState.PENDING.value},
        )

        for index, block in enumerate(blocks, start=1):
            logger.info(
                "Workflow step started",
                extra={
                    "step": index,
                    "total_steps": total,
                    "block_id": block.id,
                    "state": WorkflowState.RUNNING.value,
                },
            )
            try:
                output = await self._runner.execute_block(block.id, current_input)
            except BlockWorkflowError as exc:
                steps.append(
                    StepResult(
                        block_id=block.id,
                        block_name=block.name,
                        input=current_input,
                        success=False,
                        error=exc.message,
                    )
                )
                logger.warning(
                    "Workflow step failed",
                    extra={
                        "step": index,
                        "block_id": block.id,
                        "error": exc.message,
                        "state": WorkflowState.FAILED.value,
                    },
                )
                raise WorkflowStepFailedError(
                    step_index=index,
                    block_name=block.name,
                    reason=exc.message,
                    steps=steps,
                ) from exc

            steps.append(
                StepResult(
                    block_id=block.id,
                    block_name=block.name,
                    input=current_input,
                    output=output,
                    success=True,
                )
            )
            current_input = output

        logger.info(
            "Workflow finished",
            extra={"steps": len(steps), "state": WorkflowState.COMPLETED.value},
        )
        return WorkflowResult(steps=tuple(steps), final_output=current_input)
