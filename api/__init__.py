"""
FastAPI API package for the vision agent.

Exposes:
- `main` : FastAPI application with the analyze / query-ora routes and the info page.
"""
