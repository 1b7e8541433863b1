"""CLI entrypoint for running blocks and workflows."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError as SettingsValidationError

from block_workflows import __version__
from block_workflows.blocks.samples import SAMPLE_WORKFLOWS, get_sample_data
from block_workflows.config import BlockWorkflowSettings
from block_workflows.errors import BlockWorkflowError, WorkflowStepFailedError
from block_workflows.execution.engine import StepResult, WorkflowResult
from block_workflows.execution.export import default_report_name, render_markdown_report
from block_workflows.execution.factory import WorkflowComponents, WorkflowFactory
from block_workflows.execution.store import SavedWorkflowStore
from block_workflows.logging import configure_logging

logger = logging.getLogger(__name__)


def _parse_blocks(value: str | None) -> list[str]:
    if value is None:
        return []
    return [p.strip() for p in value.split(",") if p.strip()]


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", default=None, help="Input text")
    source.add_argument(
        "--file", type=Path, default=None, help="Read input text from a UTF-8 file"
    )


def _read_input(args: argparse.Namespace, fallback: str | None = None) -> str:
    if args.text is not None:
        return str(args.text)
    if args.file is not None:
        return Path(args.file).read_text(encoding="utf-8")
    if fallback is not None:
        return fallback
    if sys.stdin.isatty():
        return ""
    return sys.stdin.read()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="block-workflows",
        description="Apply LLM text-transformation blocks, alone or chained into workflows",
    )
    parser.add_argument("--version", action="version", version=f"block-workflows {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("blocks", help="List available blocks")

    sample = subparsers.add_parser("sample", help="Print a block's sample input")
    sample.add_argument("block_id", help="Block id, e.g. 'summarizeText'")

    subparsers.add_parser("sample-workflows", help="List predefined sample workflows")

    run_block = subparsers.add_parser("run-block", help="Run a single block")
    run_block.add_argument("block_id", help="Block id, e.g. 'summarizeText'")
    _add_input_arguments(run_block)

    run_workflow = subparsers.add_parser(
        "run-workflow", help="Run several blocks in sequence, feeding each output forward"
    )
    selection = run_workflow.add_mutually_exclusive_group(required=True)
    selection.add_argument(
        "--blocks",
        default=None,
        help="Comma-separated block ids, e.g. 'summarizeText,translateText'",
    )
    selection.add_argument(
        "--saved", type=int, default=None, help="Number of a saved workflow (see list-workflows)"
    )
    selection.add_argument(
        "--sample-workflow",
        choices=sorted(SAMPLE_WORKFLOWS),
        default=None,
        help="Predefined workflow; its sample input is used when no text is given",
    )
    _add_input_arguments(run_workflow)
    run_workflow.add_argument(
        "--export",
        nargs="?",
        const="",
        default=None,
        help="Write a Markdown report (optionally to the given path)",
    )

    save_workflow = subparsers.add_parser("save-workflow", help="Save a named block list")
    save_workflow.add_argument("--name", required=True, help="Workflow name")
    save_workflow.add_argument("--blocks", required=True, help="Comma-separated block ids")

    subparsers.add_parser("list-workflows", help="List saved workflows")

    delete_workflow = subparsers.add_parser("delete-workflow", help="Delete a saved workflow")
    delete_workflow.add_argument("number", type=int, help="Number shown by list-workflows")

    return parser


def _print_steps(steps: Sequence[StepResult]) -> None:
    for number, step in enumerate(steps, start=1):
        status = "ok" if step.success else "failed"
        print(f"[{number}] {step.block_name} ({status})")
        print(step.output if step.success else f"Error: {step.error}")
        print()


def _export(path_arg: str, steps: Sequence[StepResult], final_output: str | None) -> Path:
    generated_at = datetime.now(tz=UTC)
    path = Path(path_arg) if path_arg else Path(default_report_name(generated_at))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        render_markdown_report(steps, generated_at=generated_at, final_output=final_output),
        encoding="utf-8",
    )
    logger.info("Workflow report exported", extra={"path": str(path)})
    return path


async def _run_block(components: WorkflowComponents, block_id: str, text: str) -> str:
    try:
        return await components.executor.execute_block(block_id, text)
    finally:
        await components.aclose()


async def _run_workflow(
    components: WorkflowComponents, block_ids: list[str], text: str
) -> WorkflowResult:
    try:
        return await components.engine.execute_workflow(block_ids, text)
    finally:
        await components.aclose()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = BlockWorkflowSettings()
    except SettingsValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)
    store = SavedWorkflowStore(settings.saved_workflows_file)

    try:
        if args.command == "blocks":
            components = WorkflowFactory.create(settings)
            for block in components.registry.get_all_blocks():
                print(f"{block.id}\t{block.description}")
            return 0

        if args.command == "sample":
            components = WorkflowFactory.create(settings)
            sample_text = get_sample_data(components.registry, args.block_id)
            if not sample_text:
                print(f"No sample input for block: {args.block_id}", file=sys.stderr)
                return 1
            print(sample_text)
            return 0

        if args.command == "sample-workflows":
            for key, sample_workflow in SAMPLE_WORKFLOWS.items():
                print(f"{key}\t{sample_workflow.name}\t{' -> '.join(sample_workflow.blocks)}")
            return 0

        if args.command == "run-block":
            components = WorkflowFactory.create(settings)
            output = asyncio.run(_run_block(components, args.block_id, _read_input(args)))
            print(output)
            return 0

        if args.command == "run-workflow":
            fallback: str | None = None
            if args.sample_workflow is not None:
                sample_workflow = SAMPLE_WORKFLOWS[args.sample_workflow]
                block_ids = list(sample_workflow.blocks)
                fallback = sample_workflow.sample_input
            elif args.saved is not None:
                block_ids = list(store.get(args.saved).blocks)
            else:
                block_ids = _parse_blocks(args.blocks)

            components = WorkflowFactory.create(settings)
            text = _read_input(args, fallback=fallback)
            try:
                result = asyncio.run(_run_workflow(components, block_ids, text))
            except WorkflowStepFailedError as exc:
                _print_steps(exc.steps)
                if args.export is not None:
                    path = _export(args.export, exc.steps, None)
                    print(f"Partial results exported to {path}")
                raise

            _print_steps(result.steps)
            print("Final output:")
            print(result.final_output)
            if args.export is not None:
                path = _export(args.export, result.steps, result.final_output)
                print(f"Results exported to {path}")
            return 0

        if args.command == "save-workflow":
            components = WorkflowFactory.create(settings)
            block_ids = _parse_blocks(args.blocks)
            unknown = [b for b in block_ids if b not in components.registry]
            if unknown:
                print(f"Block not found: {', '.join(unknown)}", file=sys.stderr)
                return 1
            saved = store.add(args.name, block_ids)
            print(f"Saved workflow {saved.name!r} ({len(saved.blocks)} blocks)")
            return 0

        if args.command == "list-workflows":
            workflows = store.load()
            if not workflows:
                print("No saved workflows found. Create and save a workflow first.")
                return 0
            for number, workflow in enumerate(workflows, start=1):
                print(
                    f"{number}. {workflow.name} ({len(workflow.blocks)} blocks, "
                    f"saved {workflow.saved_at[:10]}): {' -> '.join(workflow.blocks)}"
                )
            return 0

        if args.command == "delete-workflow":
            removed = store.delete(args.number)
            print(f"Deleted workflow {removed.name!r}")
            return 0

        parser.error(f"Unknown command: {args.command}")
        return 2
    except BlockWorkflowError as e:
        logger.error("Command failed", extra={"command": args.command, "error": e.message})
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
