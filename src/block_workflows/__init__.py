"""Block Workflows.

Apply predefined LLM text-transformation blocks to text, one at a time or
chained into a sequential workflow where each step's output feeds the next.
"""

__version__ = "0.1.0"

from block_workflows.config import BlockWorkflowSettings

__all__ = ["__version__", "BlockWorkflowSettings"]
