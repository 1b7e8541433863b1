"""Pydantic models for the REST server."""

from __future__ import annotations

from pydantic import BaseModel, Field

from block_workflows.blocks.registry import Block
from block_workflows.blocks.samples import SampleWorkflow
from block_workflows.execution.engine import StepResult, WorkflowResult


class ApiBlock(BaseModel):
    id: str
    name: str
    description: str

    @classmethod
    def from_block(cls, block: Block) -> ApiBlock:
        return cls(id=block.id, name=block.name, description=block.description)


class ApiSample(BaseModel):
    block_id: str
    sample_input: str


class ApiSampleWorkflow(BaseModel):
    key: str
    name: str
    blocks: list[str]
    sample_input: str

    @classmethod
    def from_sample(cls, sample: SampleWorkflow) -> ApiSampleWorkflow:
        return cls(
            key=sample.key,
            name=sample.name,
            blocks=list(sample.blocks),
            sample_input=sample.sample_input,
        )


class ExecuteBlockRequest(BaseModel):
    text: str


class ExecuteBlockResponse(BaseModel):
    block_id: str
    output: str


class ExecuteWorkflowRequest(BaseModel):
    blocks: list[str] = Field(default_factory=list)
    text: str


class ApiStepResult(BaseModel):
    block_id: str
    block_name: str
    input: str
    output: str
    success: bool
    error: str | None = None

    @classmethod
    def from_step(cls, step: StepResult) -> ApiStepResult:
        return cls.model_validate(step.to_json())


class ApiWorkflowResult(BaseModel):
    steps: list[ApiStepResult]
    final_output: str

    @classmethod
    def from_result(cls, result: WorkflowResult) -> ApiWorkflowResult:
        return cls(
            steps=[ApiStepResult.from_step(step) for step in result.steps],
            final_output=result.final_output,
        )


class SaveWorkflowRequest(BaseModel):
    name: str
    blocks: list[str] = Field(default_factory=list)


class ApiSavedWorkflow(BaseModel):
    number: int
    name: str
    blocks: list[str]
    saved_at: str


class ApiError(BaseModel):
    detail: str
    error_type: str
    step_index: int | None = None
    block_name: str | None = None
    steps: list[ApiStepResult] | None = None
