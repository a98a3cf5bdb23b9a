from langgraph.graph import StateGraph, END
from pipeline.state import AgentState
from pipeline.nodes import (
    node_analyze,
    node_query_ora,
    format_response,
)


def should_query_ora(state):
    """Router: stop after a failed analysis, otherwise ask ORA."""
    if state.get("error"):
        return END
    return "query_ora"


def build_graph():
    workflow = StateGraph(AgentState)

    workflow.add_node("analyze", node_analyze)
    workflow.add_node("query_ora", node_query_ora)
    workflow.add_node("format_response", format_response)

    workflow.set_entry_point("analyze")

    # Conditional routing from analyze: either to query_ora or straight out
    workflow.add_conditional_edges(
        "analyze",
        should_query_ora,
        {
            "query_ora": "query_ora",
            END: END,
        },
    )

    workflow.add_edge("query_ora", "format_response")
    workflow.add_edge("format_response", END)

    return workflow.compile()


pipeline = build_graph()
