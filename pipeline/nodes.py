from __future__ import annotations

import logging
from typing import Any, Dict

from pipeline.state import AgentState
from pipeline.tools import analyze_image, query_ora

log = logging.getLogger(__name__)


def node_analyze(state: AgentState) -> Dict[str, Any]:
    """Node wrapper around the analyze_image tool."""
    image_url = state.get("image_url")
    features = state.get("features")

    if image_url is None or image_url == "":
        return {"error": "imageUrl is required", "analysis": None}

    result = analyze_image.invoke({"image_url": image_url, "features": features})

    if not result.get("success"):
        log.warning("[ANALYZE] failed: %s", result.get("error"))
        return {"analysis": result, "error": result.get("error") or "analysis failed"}

    data = result["data"]
    log.info(
        "[ANALYZE] %d labels, %d objects",
        len(data.get("labels", [])),
        len(data.get("objects", [])),
    )
    return {"analysis": result, "error": None}


def node_query_ora(state: AgentState) -> Dict[str, Any]:
    """Node wrapper around the query_ora tool."""
    query = state.get("query")
    if query is None or query == "":
        return {"error": "query is required", "ora_response": None}

    response = query_ora.invoke(
        {
            "image_analysis": state["analysis"]["data"],
            "query": query,
        }
    )

    log.info("[ORA] response=%s", response)
    return {"ora_response": response}


def format_response(state: AgentState) -> Dict[str, Any]:
    """Packs the analysis and answer into the API response body."""
    if state.get("error"):
        return {"final": None}

    return {
        "final": {
            "success": True,
            "imageAnalysis": state["analysis"]["data"],
            "oraResponse": state.get("ora_response"),
        }
    }
