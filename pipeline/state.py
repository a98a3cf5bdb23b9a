from typing import Any, Dict, List, Optional, TypedDict


class AgentState(TypedDict, total=False):
    """
    State passed between LangGraph nodes for one analyze-and-query run.
    """

    image_url: str  # http(s) URL or data:image/... base64 ref
    query: str
    features: Optional[List[str]]  # Google Vision feature names

    # Output of the analyze_image tool: {"success", "data"} or {"success", "error"}
    analysis: Optional[Dict[str, Any]]

    # Output of the query_ora tool: {"completion"} or {"error", "message"}
    ora_response: Optional[Dict[str, Any]]

    # Response body assembled by format_response
    final: Optional[Dict[str, Any]]

    error: Optional[str]
