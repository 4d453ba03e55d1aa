from fastapi.testclient import TestClient

from rag_assistant.config import RetrievalConfig

_DOC = "\n\n".join(
    [
        "Admissions for BS programs open in June. " * 8,
        "The admission fee is 5000 and must be paid before the entry test. " * 6,
        "The campus library is open from 9am to 9pm on weekdays. " * 6,
        "Hostel accommodation is available for outstation students. " * 6,
    ]
)


def _client() -> TestClient:
    from rag_assistant.api.main import app

    return TestClient(app)


def test_api_upload_search_trace_metrics() -> None:
    client = _client()

    upload_resp = client.post(
        "/sessions/api-flow/documents",
        json={"filename": "admissions.txt", "text": _DOC},
    )
    assert upload_resp.status_code == 200
    assert upload_resp.json()["chunks_created"] >= 2

    search_resp = client.post(
        "/sessions/api-flow/search",
        json={"query": "What is the admission fee before the entry test?", "top_k": 2},
    )
    assert search_resp.status_code == 200
    payload = search_resp.json()
    assert len(payload["items"]) == 2
    assert "admission fee is 5000" in payload["items"][0]["text"]
    assert payload["items"][0]["rank"] == 1

    trace_resp = client.get(f"/traces/{payload['trace_id']}")
    assert trace_resp.status_code == 200
    assert "admission" in trace_resp.json()["query_terms"]

    metrics_resp = client.get("/metrics")
    assert metrics_resp.status_code == 200
    assert metrics_resp.json()["total_requests"] >= 1


def test_api_conversation_history() -> None:
    client = _client()
    client.post("/sessions/chat/documents", json={"filename": "a.txt", "text": "Fees are 5000."})

    assert client.post(
        "/sessions/chat/messages", json={"role": "user", "text": "What are the fees?"}
    ).status_code == 200
    assert client.get("/sessions/chat").json()["message_count"] == 1

    assert client.delete("/sessions/chat/messages").status_code == 200
    detail = client.get("/sessions/chat").json()
    assert detail["message_count"] == 0
    assert detail["chunk_count"] == 1


def test_api_error_mapping() -> None:
    client = _client()

    assert client.post(
        "/sessions/missing/search", json={"query": "fees"}
    ).status_code == 404
    assert client.get("/traces/does-not-exist").status_code == 404

    bad_type = client.post(
        "/sessions/errors/documents", json={"filename": "brochure.pdf", "text": "x"}
    )
    assert bad_type.status_code == 400

    empty = client.post("/sessions/errors/documents", json={"filename": "empty.txt", "text": ""})
    assert empty.status_code == 200
    assert empty.json()["chunks_created"] == 0
    assert client.post("/sessions/errors/search", json={"query": "fees"}).status_code == 409


def test_api_search_defaults_to_configured_top_k() -> None:
    client = _client()
    text = "\n\n".join(f"Section {i}: admission details. " + "x" * 600 for i in range(6))
    client.post("/sessions/defaults/documents", json={"filename": "long.txt", "text": text})

    resp = client.post("/sessions/defaults/search", json={"query": "admission details"})

    assert resp.status_code == 200
    assert len(resp.json()["items"]) == RetrievalConfig().top_k


def test_health_counts_traces() -> None:
    client = _client()
    client.post("/sessions/health/documents", json={"filename": "a.txt", "text": "Fees are 5000."})
    before = client.get("/health").json()["trace_count"]

    client.post("/sessions/health/search", json={"query": "fees"})

    assert client.get("/health").json()["trace_count"] == before + 1
