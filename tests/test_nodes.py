from __future__ import annotations

from unittest.mock import patch

from langgraph.graph import END

from pipeline.graph import pipeline, should_query_ora
from pipeline.nodes import format_response, node_analyze, node_query_ora

ANALYSIS = {
    "labels": [{"description": "Cat", "score": 0.9}],
    "text": "",
    "objects": [],
}


def base_state(**kw):
    state = {
        "image_url": "https://example.com/cat.jpg",
        "query": "what animal is this",
        "features": None,
        "analysis": None,
        "ora_response": None,
        "final": None,
        "error": None,
    }
    state.update(kw)
    return state


@patch("pipeline.nodes.analyze_image")
def test_analyze_success(mock_tool):
    mock_tool.invoke.return_value = {"success": True, "data": ANALYSIS}
    result = node_analyze(base_state())
    assert result["error"] is None
    assert result["analysis"]["data"] == ANALYSIS
    mock_tool.invoke.assert_called_once_with(
        {"image_url": "https://example.com/cat.jpg", "features": None}
    )


@patch("pipeline.nodes.analyze_image")
def test_analyze_failure(mock_tool):
    mock_tool.invoke.return_value = {"success": False, "error": "boom"}
    result = node_analyze(base_state())
    assert result["error"] == "boom"


def test_analyze_requires_image():
    result = node_analyze(base_state(image_url=""))
    assert result["error"] == "imageUrl is required"


@patch("pipeline.nodes.query_ora")
def test_query_ora_uses_analysis_data(mock_tool):
    mock_tool.invoke.return_value = {"completion": "A cat."}
    state = base_state(analysis={"success": True, "data": ANALYSIS})
    assert node_query_ora(state) == {"ora_response": {"completion": "A cat."}}
    mock_tool.invoke.assert_called_once_with(
        {"image_analysis": ANALYSIS, "query": "what animal is this"}
    )


def test_router():
    assert should_query_ora(base_state(error="boom")) == END
    assert should_query_ora(base_state()) == "query_ora"


def test_format_response():
    state = base_state(
        analysis={"success": True, "data": ANALYSIS},
        ora_response={"completion": "A cat."},
    )
    assert format_response(state)["final"] == {
        "success": True,
        "imageAnalysis": ANALYSIS,
        "oraResponse": {"completion": "A cat."},
    }
    assert format_response(base_state(error="boom"))["final"] is None


def test_pipeline_with_fixture_data():
    result = pipeline.invoke(base_state(query="describe this image"))
    final = result["final"]
    assert final["success"] is True
    assert final["imageAnalysis"]["labels"][0]["description"] == "Sky"
    assert final["oraResponse"]["completion"].startswith("This image depicts a landscape photo")


@patch("pipeline.nodes.analyze_image")
def test_pipeline_stops_after_failed_analysis(mock_tool):
    mock_tool.invoke.return_value = {"success": False, "error": "boom"}
    result = pipeline.invoke(base_state())
    assert result["error"] == "boom"
    assert not result.get("final")
    assert not result.get("ora_response")
