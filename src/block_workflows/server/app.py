"""FastAPI app factory.

Endpoints are thin wrappers over the block executor, the
workflow engine, and the saved-workflow store.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from block_workflows import __version__
from block_workflows.blocks.samples import SAMPLE_WORKFLOWS
from block_workflows.config import BlockWorkflowSettings
from block_workflows.errors import (
    BlockNotFoundError,
    BlockWorkflowError,
    CompletionServiceError,
    EmptySelectionError,
    InvalidBlockError,
    InvalidCredentialError,
    InvalidSelectionError,
    MissingCredentialError,
    NetworkError,
    RateLimitedError,
    RequestTimeoutError,
    UnexpectedResponseError,
    ValidationError,
    WorkflowStepFailedError,
)
from block_workflows.execution.factory import WorkflowFactory
from block_workflows.execution.store import SavedWorkflowStore
from block_workflows.llm.provider import CompletionProvider
from block_workflows.server.models import (
    ApiBlock,
    ApiError,
    ApiSample,
    ApiSampleWorkflow,
    ApiSavedWorkflow,
    ApiStepResult,
    ApiWorkflowResult,
    ExecuteBlockRequest,
    ExecuteBlockResponse,
    ExecuteWorkflowRequest,
    SaveWorkflowRequest,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[BlockWorkflowError], int], ...] = (
    (ValidationError, 400),
    (EmptySelectionError, 400),
    (InvalidBlockError, 400),
    (InvalidSelectionError, 404),
    (BlockNotFoundError, 404),
    (MissingCredentialError, 503),
    (InvalidCredentialError, 502),
    (RateLimitedError, 429),
    (RequestTimeoutError, 504),
    (NetworkError, 502),
    (UnexpectedResponseError, 502),
    (CompletionServiceError, 502),
    (WorkflowStepFailedError, 502),
)


def status_for(error: BlockWorkflowError) -> int:
    # A failed workflow step reports the status of the error that stopped it.
    if isinstance(error, WorkflowStepFailedError) and isinstance(
        error.__cause__, BlockWorkflowError
    ):
        return status_for(error.__cause__)
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 500


def _error_payload(error: BlockWorkflowError) -> ApiError:
    payload = ApiError(detail=error.message, error_type=type(error).__name__)
    if isinstance(error, WorkflowStepFailedError):
        payload.step_index = error.step_index
        payload.block_name = error.block_name
        payload.steps = [ApiStepResult.from_step(step) for step in error.steps]
    return payload


def create_app(
    settings: BlockWorkflowSettings | None = None,
    *,
    provider: CompletionProvider | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    settings = settings or BlockWorkflowSettings()
    components = WorkflowFactory.create(settings, provider=provider, http_client=http_client)
    store = SavedWorkflowStore(settings.saved_workflows_file)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        await components.aclose()

    app = FastAPI(
        title="Block Workflows",
        version=__version__,
        description="REST API for running text-transformation blocks and workflows.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    # Expose settings for request handlers that want to read it.
    app.state.settings = settings
    app.state.components = components

    @app.exception_handler(BlockWorkflowError)
    async def _handle_block_workflow_error(
        _request: Request, exc: BlockWorkflowError
    ) -> JSONResponse:
        status = status_for(exc)
        logger.warning(
            "Request failed",
            extra={"error_type": type(exc).__name__, "status": status, "error": exc.message},
        )
        return JSONResponse(
            status_code=status,
            content=_error_payload(exc).model_dump(mode="json", exclude_none=True),
        )

    @app.get("/api/health")
    def health() -> dict[str, object]:
        return {
            "status": "ok",
            "version": __version__,
            "credential_configured": settings.api_key() is not None,
        }

    @app.get("/api/blocks", response_model=list[ApiBlock])
    def list_blocks() -> list[ApiBlock]:
        return [ApiBlock.from_block(block) for block in components.registry.get_all_blocks()]

    @app.get("/api/blocks/{block_id}/sample", response_model=ApiSample)
    def block_sample(block_id: str) -> ApiSample:
        block = components.registry.get_block(block_id)
        if block is None:
            raise BlockNotFoundError(block_id)
        return ApiSample(block_id=block.id, sample_input=block.sample_input)

    @app.get("/api/sample-workflows", response_model=list[ApiSampleWorkflow])
    def sample_workflows() -> list[ApiSampleWorkflow]:
        return [ApiSampleWorkflow.from_sample(sample) for sample in SAMPLE_WORKFLOWS.values()]

    @app.post("/api/blocks/{block_id}/execute", response_model=ExecuteBlockResponse)
    async def execute_block(block_id: str, req: ExecuteBlockRequest) -> ExecuteBlockResponse:
        output = await components.executor.execute_block(block_id, req.text)
        return ExecuteBlockResponse(block_id=block_id, output=output)

    @app.post("/api/workflows/execute", response_model=ApiWorkflowResult)
    async def execute_workflow(req: ExecuteWorkflowRequest) -> ApiWorkflowResult:
        result = await components.engine.execute_workflow(req.blocks, req.text)
        return ApiWorkflowResult.from_result(result)

    @app.get("/api/workflows/saved", response_model=list[ApiSavedWorkflow])
    def list_saved_workflows() -> list[ApiSavedWorkflow]:
        return [
            ApiSavedWorkflow(number=number, **workflow.model_dump(mode="json"))
            for number, workflow in enumerate(store.load(), start=1)
        ]

    @app.post("/api/workflows/saved", response_model=ApiSavedWorkflow, status_code=201)
    def save_workflow(req: SaveWorkflowRequest) -> ApiSavedWorkflow:
        for block_id in req.blocks:
            if block_id not in components.registry:
                raise BlockNotFoundError(block_id)
        saved = store.add(req.name, req.blocks)
        return ApiSavedWorkflow(number=len(store.load()), **saved.model_dump(mode="json"))

    @app.delete("/api/workflows/saved/{number}", response_model=ApiSavedWorkflow)
    def delete_saved_workflow(number: int) -> ApiSavedWorkflow:
        removed = store.delete(number)
        return ApiSavedWorkflow(number=number, **removed.model_dump(mode="json"))

    return app
