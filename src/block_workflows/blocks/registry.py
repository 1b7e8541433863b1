"""In-memory registry of transformation blocks."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from block_workflows.errors import InvalidBlockError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Block:
    """A named instruction applied to text through one completion call."""

    id: str  # noqa: A003
    name: str
    description: str
    prompt_template: str
    sample_input: str = ""


class BlockRegistry:
    """Blocks keyed by id.

    Registration replaces an existing entry in place (last write wins) and
    nothing is ever removed, so a registry shared between concurrent runs is
    effectively read-only while they execute.
    """

    def __init__(self, blocks: Iterable[Block] | None = None) -> None:
        self._blocks: dict[str, Block] = {}
        if blocks is None:
            from block_workflows.blocks.defaults import DEFAULT_BLOCKS

            blocks = DEFAULT_BLOCKS
        for block in blocks:
            self.register_block(block)

    def get_block(self, block_id: str) -> Block | None:
        return self._blocks.get(block_id)

    def get_all_blocks(self) -> list[Block]:
        """Return the registered blocks in registration order.

        The list is a fresh copy; mutating it does not affect the registry.
        """

        return list(self._blocks.values())

    def register_block(self, block: Block) -> None:
        """Insert ``block`` or replace the block with the same id.

        Raises:
            InvalidBlockError: If any of id, name, description or
                prompt_template is empty.
        """
        required = (block.id, block.name, block.description, block.prompt_template)
        if not all(isinstance(value, str) and value.strip() for value in required):
            raise InvalidBlockError()

        if block.id in self._blocks:
            logger.debug("Replacing block", extra={"block_id": block.id})
        self._blocks[block.id] = block

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._blocks

    def __len__(self) -> int:
        return len(self._blocks)
