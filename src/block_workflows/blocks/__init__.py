"""Block definitions and the registry that resolves them."""

from block_workflows.blocks.registry import Block, BlockRegistry
from block_workflows.blocks.samples import (
    SAMPLE_WORKFLOWS,
    SampleWorkflow,
    get_sample_data,
    get_sample_workflow,
)

__all__ = [
    "SAMPLE_WORKFLOWS",
    "Block",
    "BlockRegistry",
    "SampleWorkflow",
    "get_sample_data",
    "get_sample_workflow",
]
