"""Named block lists persisted to a local JSON file."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field

from block_workflows.errors import EmptySelectionError, InvalidSelectionError, ValidationError

logger = logging.getLogger(__name__)


class SavedWorkflow(BaseModel):
    """A named, ordered selection of block ids."""

    name: str
    blocks: list[str]
    saved_at: str = Field(default_factory=lambda: datetime.now(tz=UTC).isoformat())


class SavedWorkflowStore:
    """JSON-file backed store for saved workflows.

    Workflows are addressed by their 1-based position in the file, matching
    the numbered list shown to users.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[SavedWorkflow]:
        if not self._path.exists():
            return []

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(
                "Saved workflow file is not valid JSON; treating as empty",
                extra={"path": str(self._path)},
            )
            return []

        if raw is None:
            return []

        if not isinstance(raw, list):
            logger.warning(
                "Saved workflow file has unexpected shape; treating as empty",
                extra={"path": str(self._path)},
            )
            return []

        return [SavedWorkflow.model_validate(item) for item in raw]

    def save_all(self, workflows: list[SavedWorkflow]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = [workflow.model_dump(mode="json") for workflow in workflows]
        self._path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def add(self, name: str, blocks: Sequence[str]) -> SavedWorkflow:
        normalized = name.strip()
        if not normalized:
            raise ValidationError("Please enter a name for this workflow.")
        if not blocks:
            raise EmptySelectionError("Please select at least one block to save.")

        workflow = SavedWorkflow(name=normalized, blocks=list(blocks))
        workflows = self.load()
        workflows.append(workflow)
        self.save_all(workflows)

        logger.info(
            "Workflow saved",
            extra={"name": workflow.name, "blocks": workflow.blocks, "path": str(self._path)},
        )
        return workflow

    def get(self, index: int) -> SavedWorkflow:
        workflows = self.load()
        if not 1 <= index <= len(workflows):
            raise InvalidSelectionError()
        return workflows[index - 1]

    def delete(self, index: int) -> SavedWorkflow:
        workflows = self.load()
        if not 1 <= index <= len(workflows):
            raise InvalidSelectionError()
        removed = workflows.pop(index - 1)
        self.save_all(workflows)
        logger.info("Workflow deleted", extra={"name": removed.name, "path": str(self._path)})
        return removed
