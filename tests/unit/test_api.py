from __future__ import annotations

from fastapi.testclient import TestClient

from block_workflows.config import BlockWorkflowSettings
from block_workflows.errors import NetworkError, RateLimitedError, RequestTimeoutError
from block_workflows.server.app import create_app


def test_health_and_catalogue(settings: BlockWorkflowSettings, fake_provider_cls) -> None:
    client = TestClient(create_app(settings, provider=fake_provider_cls()))

    health = client.get("/api/health").json()
    assert health["status"] == "ok"
    assert health["credential_configured"] is True
    assert "version" in health

    blocks = client.get("/api/blocks").json()
    assert [b["id"] for b in blocks][:2] == ["summarizeText", "extractKeyPoints"]
    assert blocks[0]["description"] == "Condense text to key points"

    sample = client.get("/api/blocks/translateText/sample").json()
    assert sample["sample_input"].startswith("Welcome to our platform!")

    missing = client.get("/api/blocks/nope/sample")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Block not found: nope"

    samples = client.get("/api/sample-workflows").json()
    assert {s["key"] for s in samples} == {
        "content-pipeline",
        "communication-pipeline",
        "multilingual-workflow",
        "data-extraction",
    }


def test_execute_block(settings: BlockWorkflowSettings, fake_provider_cls) -> None:
    provider = fake_provider_cls(['{"result": "Short summary."}'])
    client = TestClient(create_app(settings, provider=provider))

    resp = client.post("/api/blocks/summarizeText/execute", json={"text": "  Long text.  "})

    assert resp.status_code == 200
    assert resp.json() == {"block_id": "summarizeText", "output": "Short summary."}
    assert provider.calls[0][-1]["content"] == "Long text."


def test_execute_block_validation_errors(settings: BlockWorkflowSettings, fake_provider_cls) -> None:
    provider = fake_provider_cls()
    client = TestClient(create_app(settings, provider=provider))

    blank = client.post("/api/blocks/summarizeText/execute", json={"text": "  "})
    assert blank.status_code == 400
    assert blank.json() == {
        "detail": "Please enter some text to transform.",
        "error_type": "ValidationError",
    }

    too_long = client.post("/api/blocks/summarizeText/execute", json={"text": "a" * 201})
    assert too_long.status_code == 400
    assert too_long.json()["detail"] == "Input text exceeds maximum length (200 characters)."

    assert provider.calls == []


def test_execute_block_service_errors(settings: BlockWorkflowSettings, fake_provider_cls) -> None:
    provider = fake_provider_cls([RateLimitedError()] * 4 + [NetworkError()])
    client = TestClient(create_app(settings, provider=provider))

    limited = client.post("/api/blocks/summarizeText/execute", json={"text": "hi"})
    assert limited.status_code == 429
    assert limited.json()["error_type"] == "RateLimitedError"

    offline = client.post("/api/blocks/summarizeText/execute", json={"text": "hi"})
    assert offline.status_code == 502
    assert offline.json()["detail"] == (
        "Unable to connect to AI service. Please check your connection."
    )


def test_missing_credential(settings: BlockWorkflowSettings, fake_provider_cls) -> None:
    no_key = settings.model_copy(update={"openrouter_api_key": ""})
    client = TestClient(create_app(no_key, provider=fake_provider_cls()))

    assert client.get("/api/health").json()["credential_configured"] is False
    resp = client.post("/api/blocks/summarizeText/execute", json={"text": "hi"})
    assert resp.status_code == 503
    assert resp.json()["error_type"] == "MissingCredentialError"


def test_execute_workflow(settings: BlockWorkflowSettings, fake_provider_cls) -> None:
    provider = fake_provider_cls(["Summary.", "- Point"])
    client = TestClient(create_app(settings, provider=provider))

    resp = client.post(
        "/api/workflows/execute",
        json={"blocks": ["summarizeText", "extractKeyPoints"], "text": "Article"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["final_output"] == "- Point"
    assert [s["output"] for s in body["steps"]] == ["Summary.", "- Point"]
    assert [s["input"] for s in body["steps"]] == ["Article", "Summary."]


def test_execute_workflow_partial_failure(
    settings: BlockWorkflowSettings, fake_provider_cls
) -> None:
    provider = fake_provider_cls(["Summary.", NetworkError()])
    client = TestClient(create_app(settings, provider=provider))

    resp = client.post(
        "/api/workflows/execute",
        json={"blocks": ["summarizeText", "translateText", "convertToTable"], "text": "Article"},
    )

    assert resp.status_code == 502
    body = resp.json()
    assert body["error_type"] == "WorkflowStepFailedError"
    assert body["step_index"] == 2
    assert body["block_name"] == "translateText"
    assert [s["success"] for s in body["steps"]] == [True, False]
    assert body["detail"].startswith("Workflow failed at step 2 (translateText): ")


def test_workflow_failure_status_follows_step_error(
    settings: BlockWorkflowSettings, fake_provider_cls
) -> None:
    timed_out = TestClient(
        create_app(settings, provider=fake_provider_cls(["Summary.", RequestTimeoutError()]))
    )
    resp = timed_out.post(
        "/api/workflows/execute",
        json={"blocks": ["summarizeText", "translateText"], "text": "Article"},
    )
    assert resp.status_code == 504
    assert resp.json()["error_type"] == "WorkflowStepFailedError"
    assert resp.json()["step_index"] == 2

    no_key = settings.model_copy(update={"openrouter_api_key": ""})
    client = TestClient(create_app(no_key, provider=fake_provider_cls()))
    resp = client.post(
        "/api/workflows/execute", json={"blocks": ["summarizeText"], "text": "Article"}
    )
    assert resp.status_code == 503
    assert resp.json()["step_index"] == 1
    assert [s["success"] for s in resp.json()["steps"]] == [False]

    blank = TestClient(create_app(settings, provider=fake_provider_cls(["   "])))
    resp = blank.post(
        "/api/workflows/execute",
        json={"blocks": ["summarizeText", "translateText"], "text": "Article"},
    )
    assert resp.status_code == 400
    assert resp.json()["block_name"] == "translateText"


def test_execute_workflow_preconditions(settings: BlockWorkflowSettings, fake_provider_cls) -> None:
    provider = fake_provider_cls()
    client = TestClient(create_app(settings, provider=provider))

    empty = client.post("/api/workflows/execute", json={"blocks": [], "text": "Article"})
    assert empty.status_code == 400
    assert empty.json()["error_type"] == "EmptySelectionError"

    unknown = client.post(
        "/api/workflows/execute", json={"blocks": ["summarizeText", "nope"], "text": "Article"}
    )
    assert unknown.status_code == 404
    assert provider.calls == []


def test_saved_workflows_api(settings: BlockWorkflowSettings, fake_provider_cls) -> None:
    client = TestClient(create_app(settings, provider=fake_provider_cls()))

    assert client.get("/api/workflows/saved").json() == []

    created = client.post(
        "/api/workflows/saved",
        json={"name": "Translate summary", "blocks": ["summarizeText", "translateText"]},
    )
    assert created.status_code == 201
    assert created.json()["number"] == 1
    assert settings.saved_workflows_file.exists()

    listed = client.get("/api/workflows/saved").json()
    assert [w["name"] for w in listed] == ["Translate summary"]

    unknown = client.post("/api/workflows/saved", json={"name": "Bad", "blocks": ["nope"]})
    assert unknown.status_code == 404

    empty = client.post("/api/workflows/saved", json={"name": "Empty", "blocks": []})
    assert empty.status_code == 400

    deleted = client.delete("/api/workflows/saved/1")
    assert deleted.status_code == 200
    assert deleted.json()["name"] == "Translate summary"

    gone = client.delete("/api/workflows/saved/1")
    assert gone.status_code == 404
    assert gone.json()["detail"] == "Invalid selection."
