"""Render workflow steps as a Markdown report."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from .engine import StepResult


def _step_body(step: StepResult) -> str:
    if step.success:
        return step.output
    return f"Error: {step.error or 'An error occurred during execution'}"


def render_markdown_report(
    steps: Sequence[StepResult],
    *,
    generated_at: datetime,
    final_output: str | None = None,
) -> str:
    stamp = generated_at.isoformat(timespec="seconds")
    lines = ["# Workflow Results", "", f"Generated: {stamp}", ""]
    for step in steps:
        lines += [f"## {step.block_name}", "", _step_body(step), "", "---", ""]
    if final_output is not None:
        lines += ["## Final Output", "", final_output, ""]
    return "\n".join(lines)


def default_report_name(generated_at: datetime) -> str:
    return f"workflow-results-{int(generated_at.timestamp() * 1000)}.md"
