from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.schemas import (
    AnalyzeAndQueryRequest,
    AnalyzeAndQueryResponse,
    AnalyzeImageRequest,
    AnalyzeImageResponse,
    QueryOraRequest,
)
from pipeline.graph import pipeline
from pipeline.state import AgentState
from pipeline.tools import analyze_image, query_ora

logging.basicConfig(level=logging.INFO)
log = logging.getLogger(__name__)

app = FastAPI(
    title="Vision Agent",
    version="1.0.0",
    description="Google Vision image analysis + ORA answers, orchestrated with LangGraph.",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


@app.middleware("http")
async def catch_unhandled(request: Request, call_next):
    """Turn unexpected errors into a JSON 500 carrying the error message."""
    try:
        return await call_next(request)
    except Exception as e:
        log.exception("[API] unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": str(e)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    # Known paths hit with the wrong method are reported like unknown paths.
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "Not Found"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        message = "Invalid JSON"
    else:
        message = "; ".join(
            ".".join(str(p) for p in e.get("loc", ()) if p != "body") + ": " + e.get("msg", "")
            for e in errors
        )
    return JSONResponse(status_code=400, content={"error": message})


@app.options("/{path:path}", include_in_schema=False)
def preflight(path: str):
    """Answer any OPTIONS request that CORSMiddleware did not treat as a preflight."""
    return Response(status_code=204)


def _missing(*values) -> bool:
    return any(v is None or v == "" for v in values)


@app.post(
    "/api/analyze-image",
    response_model=AnalyzeImageResponse,
    response_model_exclude_none=True,
)
def analyze(payload: Optional[AnalyzeImageRequest] = None):
    """
    Analyze an image and return its labels, text and objects.
    """
    payload = payload or AnalyzeImageRequest()
    if _missing(payload.image_url):
        raise HTTPException(status_code=400, detail="imageUrl is required")

    return analyze_image.invoke({"image_url": payload.image_url, "features": payload.features})


@app.post("/api/query-ora")
def ask_ora(payload: Optional[QueryOraRequest] = None):
    """
    Answer a question about previously analysed image data.
    """
    payload = payload or QueryOraRequest()
    if _missing(payload.image_analysis, payload.query):
        raise HTTPException(status_code=400, detail="imageAnalysis and query are required")

    return query_ora.invoke({"image_analysis": payload.image_analysis, "query": payload.query})


@app.post("/api/analyze-and-query", response_model=AnalyzeAndQueryResponse)
def analyze_and_query(payload: Optional[AnalyzeAndQueryRequest] = None):
    """
    Run the full pipeline: analyze the image, then ask ORA about it.
    """
    payload = payload or AnalyzeAndQueryRequest()
    if _missing(payload.image_url, payload.query):
        raise HTTPException(status_code=400, detail="imageUrl and query are required")

    state: AgentState = {
        "image_url": payload.image_url,
        "query": payload.query,
        "features": payload.features,
        "analysis": None,
        "ora_response": None,
        "final": None,
        "error": None,
    }

    result = pipeline.invoke(state)

    if not result.get("final"):
        raise HTTPException(
            status_code=500,
            detail=f"Failed to analyze image: {result.get('error')}",
        )

    log.info("[API] analysis=%s", result["final"]["imageAnalysis"])
    log.info("[API] ora=%s", result["final"]["oraResponse"])
    return result["final"]


@app.get("/", response_class=HTMLResponse)
def index():
    """
    Info page listing the endpoints, plus a small analyze-and-query form.
    """
    return """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Vision Agent</title>
    <style>
      :root { color-scheme: dark; }
      body { margin: 0; font-family: ui-sans-serif, system-ui, Segoe UI, Roboto, Arial; background:#0b1020; color:#e7e7e7; }
      header { padding: 16px 20px; border-bottom: 1px solid #1f2a44; display:flex; gap:12px; align-items:center; }
      header .badge { font-size:12px; padding:4px 8px; border:1px solid #2b3a61; border-radius:999px; color:#b9c7ff; background:#101a33; }
      main { display:grid; grid-template-columns: 1fr 1fr; gap: 16px; padding: 16px; }
      .card { background:#0f1730; border:1px solid #1f2a44; border-radius:14px; padding:14px; margin-bottom:16px; }
      .card h2 { margin:0 0 10px; font-size:14px; color:#cdd6ff; letter-spacing:0.2px; }
      label { display:block; font-size:12px; color:#b8c0e0; margin:10px 0 6px; }
      input[type="text"] { width:100%; box-sizing:border-box; padding:10px 10px; border-radius:10px; border:1px solid #243153; background:#0b1124; color:#fff; }
      button { width:100%; margin-top:12px; padding:10px 12px; border-radius:12px; border:1px solid #2a3a66; background:#1b2a55; color:#fff; cursor:pointer; font-weight:600; }
      button:disabled { opacity:0.55; cursor:not-allowed; }
      .muted { color:#9aa7d0; font-size:12px; }
      pre { margin:0; padding:12px; background:#0b1124; border:1px solid #223054; border-radius:12px; overflow:auto; max-height: 420px; }
      #answer { margin:0 0 12px; line-height:1.5; }
    </style>
    <script>
      async function analyzeAndQuery() {
        const imageUrl = document.getElementById("imageUrl").value;
        const query = document.getElementById("query").value;
        const status = document.getElementById("status");
        const answer = document.getElementById("answer");
        const out = document.getElementById("out");
        if (!imageUrl || !query) { status.textContent = "Provide both an image URL and a question."; return; }

        const btn = document.getElementById("run");
        btn.disabled = true;
        status.textContent = "Processing…";
        answer.textContent = "";
        out.textContent = "";

        try {
          const resp = await fetch("/api/analyze-and-query", {
            method: "POST",
            headers: { "Content-Type": "application/json" },
            body: JSON.stringify({ imageUrl, query }),
          });
          const data = await resp.json();
          if (!resp.ok) {
            status.textContent = "Error: " + (data.error || resp.status);
            return;
          }
          status.textContent = "Done.";
          answer.textContent = data.oraResponse.completion || data.oraResponse.message || "";
          out.textContent = JSON.stringify(data.imageAnalysis, null, 2);
        } catch (err) {
          status.textContent = "Error: " + err.message;
        } finally {
          btn.disabled = false;
        }
      }
      window.addEventListener("DOMContentLoaded", () => {
        document.getElementById("run").addEventListener("click", analyzeAndQuery);
      });
    </script>
  </head>
  <body>
    <header>
      <div style="font-weight:800;">Vision Agent API</div>
      <div class="badge">Google Vision + ORA + LangGraph</div>
    </header>
    <main>
      <section>
        <div class="card">
          <h2>POST /api/analyze-image</h2>
          <p class="muted">Analyze an image with Google Vision.</p>
          <pre>{
  "imageUrl": "https://example.com/image.jpg",
  "features": ["LABEL_DETECTION", "TEXT_DETECTION", "OBJECT_LOCALIZATION"]
}</pre>
        </div>
        <div class="card">
          <h2>POST /api/query-ora</h2>
          <p class="muted">Ask ORA about existing image analysis data.</p>
          <pre>{
  "imageAnalysis": {"labels": [], "text": "", "objects": []},
  "query": "What can you tell me about this image?"
}</pre>
        </div>
        <div class="card">
          <h2>POST /api/analyze-and-query</h2>
          <p class="muted">Analyze an image and ask ORA in one request. <code>features</code> is optional.</p>
          <pre>{
  "imageUrl": "https://example.com/image.jpg",
  "query": "What can you tell me about this image?"
}</pre>
        </div>
      </section>
      <section>
        <div class="card">
          <h2>Try it</h2>
          <label>Image URL</label>
          <input id="imageUrl" type="text" placeholder="https://example.com/image.jpg" />
          <label>Question</label>
          <input id="query" type="text" value="What can you tell me about this image?" />
          <button id="run">Analyze and query</button>
          <div id="status" class="muted" style="margin-top:10px;"></div>
        </div>
        <div class="card">
          <h2>ORA response</h2>
          <p id="answer"></p>
          <pre id="out" class="muted">Results appear here.</pre>
        </div>
      </section>
    </main>
  </body>
</html>
    """
