from __future__ import annotations

import logging
from typing import Any, Dict

from langchain_core.tools import tool

from ora import get_ora_client
from vision import get_adapter

log = logging.getLogger(__name__)


@tool
def analyze_image(image_url: Any, features: Any = None) -> Dict[str, Any]:
    """
    Analyzes an image with the configured vision backend.

    Args:
        image_url: Image URL, or a `data:image/...;base64,` payload.
        features: Google Vision feature names, e.g. ["LABEL_DETECTION"].
            Defaults to label, text and object detection.

    Returns:
        Dict with keys:
            - success : whether an analysis was produced
            - data    : {"labels", "text", "objects"} when successful
            - error   : failure message otherwise
    """
    try:
        if not isinstance(image_url, str):
            raise TypeError(f"imageUrl must be a string, got {type(image_url).__name__}")
        result = get_adapter().analyze(image_url, features)
        return {"success": True, "data": result.to_dict()}
    except Exception as e:
        log.error("[ANALYZE] %s", e)
        return {"success": False, "error": str(e)}


@tool
def query_ora(image_analysis: Any, query: Any) -> Any:
    """
    Answers a question about an image from its analysis data.

    Args:
        image_analysis: The `data` dict returned by `analyze_image`.
        query: The user's question about the image.

    Returns:
        Dict with `completion`, or `error` and `message` on failure.
    """
    return get_ora_client().query(image_analysis, query)
