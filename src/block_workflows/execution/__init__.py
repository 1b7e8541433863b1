"""Block and workflow execution.

This package contains:
- the single-block executor (validation, credential lookup, rate-limit retry)
- the sequential workflow engine with partial-failure results
- persistence of named block lists and Markdown export of results
"""

from block_workflows.execution.engine import StepResult, WorkflowEngine, WorkflowResult
from block_workflows.execution.executor import BlockExecutor
from block_workflows.execution.factory import WorkflowComponents, WorkflowFactory
from block_workflows.execution.store import SavedWorkflow, SavedWorkflowStore

__all__ = [
    "BlockExecutor",
    "SavedWorkflow",
    "SavedWorkflowStore",
    "StepResult",
    "WorkflowComponents",
    "WorkflowEngine",
    "WorkflowFactory",
    "WorkflowResult",
]
