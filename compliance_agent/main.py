from __future__ import annotations

from fastapi import FastAPI
from fastapi import HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .analyzer import analyze
from .config import cors_allow_origins
from .errors import ScanFailedError
from .models import AnalysisResult, AnalyzeHtmlRequest, ScanRequest, ScanResponse
from .page import parse_html
from .scanner import scan

app = FastAPI(title="Compliance Scanner Agent", version="0.1.0")

# Defaults to http://localhost:3000 for local dev; set COMPLIANCE_CORS_ORIGINS in production.
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/healthz")
def healthz():
    return {"ok": True}


@app.post("/scan", response_model=ScanResponse)
def scan_endpoint(req: ScanRequest):
    try:
        return scan(req.url)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ScanFailedError as e:
        raise HTTPException(status_code=502, detail=f"Scan failed: {e.reason}")


@app.post("/analyze-html", response_model=AnalysisResult)
def analyze_html_endpoint(req: AnalyzeHtmlRequest):
    return analyze(parse_html(req.html), req.url.strip())
