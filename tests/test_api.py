from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from api.main import app
from ora.synthesizer import CAT_ANSWER

URL = "https://example.com/sample-image.jpg"
CAT = {
    "labels": [{"description": "Cat", "score": 0.9}],
    "text": "",
    "objects": [{"name": "Cat", "score": 0.9}],
}


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def test_index_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "/api/analyze-and-query" in resp.text


def test_analyze_image(client):
    resp = client.post("/api/analyze-image", json={"imageUrl": URL})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert [l["description"] for l in body["data"]["labels"]][:2] == ["Sky", "Cloud"]
    assert body["data"]["text"] == ""
    assert len(body["data"]["objects"][0]["boundingPoly"]["vertices"]) == 4


def test_analyze_image_inline_with_features(client):
    resp = client.post(
        "/api/analyze-image",
        json={"imageUrl": "data:image/png;base64,aGVsbG8=", "features": ["LABEL_DETECTION"]},
    )
    assert resp.json()["data"]["labels"][0]["description"] == "Object"


@pytest.mark.parametrize(
    "path, body, message",
    [
        ("/api/analyze-image", {}, "imageUrl is required"),
        ("/api/analyze-image", {"imageUrl": ""}, "imageUrl is required"),
        ("/api/query-ora", {"query": "hi"}, "imageAnalysis and query are required"),
        ("/api/query-ora", {"imageAnalysis": CAT}, "imageAnalysis and query are required"),
        ("/api/analyze-and-query", {"imageUrl": URL}, "imageUrl and query are required"),
        ("/api/analyze-and-query", {"query": "hi"}, "imageUrl and query are required"),
        ("/api/analyze-image", {"imageUrl": None}, "imageUrl is required"),
        ("/api/query-ora", {"imageAnalysis": None, "query": "hi"}, "imageAnalysis and query are required"),
        ("/api/analyze-and-query", {"imageUrl": URL, "query": None}, "imageUrl and query are required"),
    ],
)
def test_missing_fields(client, path, body, message):
    resp = client.post(path, json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": message}


@pytest.mark.parametrize("path", ["/api/analyze-image", "/api/query-ora", "/api/analyze-and-query"])
def test_empty_body_is_a_client_error(client, path):
    resp = client.post(path)
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_invalid_json(client):
    resp = client.post(
        "/api/analyze-image",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_query_ora(client):
    resp = client.post("/api/query-ora", json={"imageAnalysis": CAT, "query": "what animal is this"})
    assert resp.status_code == 200
    assert resp.json() == {"completion": CAT_ANSWER}


def test_query_ora_malformed_analysis(client):
    resp = client.post(
        "/api/query-ora",
        json={"imageAnalysis": {"labels": [{"score": 0.5}]}, "query": "hi"},
    )
    assert resp.status_code == 200
    assert resp.json()["error"] is True


def test_analyze_image_with_non_string_url(client):
    resp = client.post("/api/analyze-image", json={"imageUrl": 123})
    assert resp.status_code == 200
    assert resp.json() == {"success": False, "error": "imageUrl must be a string, got int"}


def test_analyze_image_with_single_feature_string(client):
    resp = client.post(
        "/api/analyze-image",
        json={"imageUrl": URL, "features": "LABEL_DETECTION"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["labels"][0]["description"] == "Sky"


@pytest.mark.parametrize(
    "body",
    [
        {"imageAnalysis": "a string", "query": "hi"},
        {"imageAnalysis": [1, 2], "query": "hi"},
        {"imageAnalysis": {"labels": []}, "query": 42},
    ],
)
def test_query_ora_with_wrongly_typed_fields(client, body):
    resp = client.post("/api/query-ora", json=body)
    assert resp.status_code == 200
    assert resp.json()["error"] is True
    assert resp.json()["message"].startswith("Failed to query ORA API:")


def test_analyze_and_query_with_non_string_query(client):
    resp = client.post("/api/analyze-and-query", json={"imageUrl": URL, "query": 42})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["oraResponse"] == {
        "error": True,
        "message": "Failed to query ORA API: query must be a string, got int",
    }


def test_analyze_and_query_with_non_string_url(client):
    resp = client.post("/api/analyze-and-query", json={"imageUrl": 123, "query": "hi"})
    assert resp.status_code == 500
    assert resp.json() == {
        "error": "Failed to analyze image: imageUrl must be a string, got int"
    }


def test_analyze_and_query_matches_separate_calls(client):
    query = "where is this"
    combined = client.post("/api/analyze-and-query", json={"imageUrl": URL, "query": query}).json()

    analysis = client.post("/api/analyze-image", json={"imageUrl": URL}).json()["data"]
    answer = client.post("/api/query-ora", json={"imageAnalysis": analysis, "query": query}).json()

    assert combined == {"success": True, "imageAnalysis": analysis, "oraResponse": answer}


@patch("pipeline.nodes.analyze_image")
def test_analyze_and_query_analysis_failure(mock_tool, client):
    mock_tool.invoke.return_value = {"success": False, "error": "boom"}
    resp = client.post("/api/analyze-and-query", json={"imageUrl": URL, "query": "hi"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to analyze image: boom"}


@patch("api.main.query_ora")
def test_unhandled_error_is_500(mock_tool, client):
    mock_tool.invoke.side_effect = RuntimeError("kaboom")
    resp = client.post("/api/query-ora", json={"imageAnalysis": CAT, "query": "hi"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "kaboom"}


def test_unknown_route(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_wrong_method_is_not_found(client):
    resp = client.get("/api/analyze-image")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_cors_allows_any_origin(client):
    resp = client.post(
        "/api/analyze-image",
        json={"imageUrl": URL},
        headers={"Origin": "http://elsewhere.test"},
    )
    assert resp.headers["access-control-allow-origin"] == "*"

    preflight = client.options(
        "/api/analyze-image",
        headers={
            "Origin": "http://elsewhere.test",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert preflight.status_code == 200
    assert preflight.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize("path", ["/api/analyze-image", "/", "/anything/else"])
def test_plain_options_request(client, path):
    resp = client.options(path)
    assert resp.status_code == 204
    assert resp.content == b""


@patch("ora.client.requests.post")
def test_remote_answer_passes_through_both_routes(mock_post, client, monkeypatch):
    monkeypatch.setenv("ORA_MODE", "remote")
    mock_post.return_value = MagicMock(**{"json.return_value": ["answer"]})
    query = "what is it?"

    combined = client.post("/api/analyze-and-query", json={"imageUrl": URL, "query": query})
    assert combined.status_code == 200

    analysis = client.post("/api/analyze-image", json={"imageUrl": URL}).json()["data"]
    answer = client.post("/api/query-ora", json={"imageAnalysis": analysis, "query": query})
    assert answer.json() == ["answer"]

    assert combined.json() == {
        "success": True,
        "imageAnalysis": analysis,
        "oraResponse": ["answer"],
    }
