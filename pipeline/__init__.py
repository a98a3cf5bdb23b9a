"""
Pipeline package for the analyze-and-query flow.

Contains:
- `state`  : Typed `AgentState` definition
- `tools`  : LangChain tools wrapping the vision adapter and ORA client
- `nodes`  : LangGraph node callables operating over `AgentState`
- `graph`  : StateGraph builder and compiled `pipeline`
"""
