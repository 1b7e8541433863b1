#!/usr/bin/env python3
"""Programmatic workflow example.

This demonstrates using the execution components directly:

* load settings from `.env` (OPENROUTER_API_KEY is required)
* run a two-block workflow over some text
* print each step and the final output, or the partial steps on failure
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

from block_workflows.config import BlockWorkflowSettings
from block_workflows.errors import BlockWorkflowError, WorkflowStepFailedError
from block_workflows.execution.factory import WorkflowFactory
from block_workflows.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a workflow (programmatic example).")
    parser.add_argument(
        "--blocks",
        default="summarizeText,translateText",
        help='Comma-separated block ids, e.g. "summarizeText,translateText"',
    )
    parser.add_argument("--text", required=True, help="Input text")
    return parser.parse_args(argv)


async def _run(block_ids: list[str], text: str) -> int:
    settings = BlockWorkflowSettings()
    configure_logging(settings.log_level)

    components = WorkflowFactory.create(settings)
    try:
        result = await components.engine.execute_workflow(block_ids, text)
    except WorkflowStepFailedError as exc:
        for step in exc.steps:
            print(f"{step.block_name}: {step.output or step.error}")
        print(str(exc))
        return 1
    except BlockWorkflowError as exc:
        print(str(exc))
        return 1
    finally:
        await components.aclose()

    for step in result.steps:
        print(f"{step.block_name}: {step.output}")
    print(f"Final output:\n{result.final_output}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    block_ids = [b.strip() for b in args.blocks.split(",") if b.strip()]
    return asyncio.run(_run(block_ids, args.text))


if __name__ == "__main__":
    raise SystemExit(main())
