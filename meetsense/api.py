"""
meetsense/api.py
─────────────────────────────────────────────────────────────────────────────
meetsense — analysis API layer

TWO USAGE MODES:
  1. Importable module:
         from meetsense.api import AnalysisAPI
         api = AnalysisAPI()
         signals = api.analyze({"text": "We decided to ship Friday"})
         due     = api.due_date({"text": "I'll do it tomorrow"})

  2. FastAPI HTTP server (called once per new transcript line):
         python -m meetsense.api                   # default: port 8787
         python -m meetsense.api --port 9000
         uvicorn meetsense.api:app --port 8787

ENDPOINTS:
  POST /analyze    — {text} → emotion, sentiment, keyPoints, actionItem, decision
  POST /due-date   — {text, now?} → {dueDate}
  GET  /health     — status and version

STATUS CODES:
  200 — analysis complete (OPTIONS preflight: empty body)
  400 — text missing / not a string, now not ISO-8601, body not a JSON object
  500 — unexpected failure during analysis

Analysis is all-or-nothing: there is no partial result and no retry.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from meetsense import __version__
from meetsense.config import load_config, reference_now, reference_timezone
from meetsense.detectors.due_date import extract_due_date
from meetsense.detectors.signal_detector import analysis_to_dict, analyze_utterance
from meetsense.errors import InternalFailure, InvalidInput

logger = logging.getLogger(__name__)

PREFLIGHT_PATHS = ("/analyze", "/due-date")
ALLOW_METHODS   = ["POST", "OPTIONS", "GET"]
ALLOW_HEADERS   = ["Content-Type", "Authorization", "X-Client-Info", "Apikey"]


# ═══════════════════════════════════════════════════════════════════════════
# IMPORTABLE CLASS
# ═══════════════════════════════════════════════════════════════════════════

class AnalysisAPI:
    """
    Request/response wrapper around the detectors. No HTTP layer required.

    Payloads are plain dicts as decoded from JSON. Bad input raises
    InvalidInput; anything unexpected raises InternalFailure.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or load_config()

    # ── INTERNAL ──────────────────────────────────────────────────────────

    @staticmethod
    def _require_text(payload: Any) -> str:
        if not isinstance(payload, dict):
            raise InvalidInput("Request body must be a JSON object")
        text = payload.get("text")
        if not isinstance(text, str):
            raise InvalidInput("Text is required")
        return text

    def _parse_now(self, value: Any) -> datetime:
        if value is None:
            return reference_now(self.config)
        if not isinstance(value, str):
            raise InvalidInput("now must be an ISO-8601 timestamp")
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise InvalidInput(f"now is not an ISO-8601 timestamp: {value!r}")
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=reference_timezone(self.config))
        return parsed

    # ── OPERATIONS ────────────────────────────────────────────────────────

    def analyze(self, payload: Any) -> Dict[str, Any]:
        """All five per-utterance signals for payload["text"]."""
        text = self._require_text(payload)
        try:
            return analysis_to_dict(analyze_utterance(text))
        except Exception as exc:
            logger.error(f"Analysis failed: {exc}", exc_info=True)
            raise InternalFailure("Failed to analyze text") from exc

    def due_date(self, payload: Any) -> Dict[str, Any]:
        """{"dueDate": ISO-8601 or None} for payload["text"] relative to now."""
        text = self._require_text(payload)
        now  = self._parse_now(payload.get("now"))
        try:
            due = extract_due_date(text, now)
        except Exception as exc:
            logger.error(f"Due-date extraction failed: {exc}", exc_info=True)
            raise InternalFailure("Failed to extract due date") from exc
        return {"dueDate": due.isoformat() if due else None}


# ═══════════════════════════════════════════════════════════════════════════
# FASTAPI HTTP APP
# ═══════════════════════════════════════════════════════════════════════════

def _build_app(config: Optional[Dict[str, Any]] = None) -> FastAPI:
    """Build and return the FastAPI application instance."""
    _api = AnalysisAPI(config=config)

    _app = FastAPI(
        title       = "meetsense API",
        description = "Keyword heuristics for meeting transcript lines",
        version     = __version__,
        docs_url    = "/docs",
        redoc_url   = None,
    )

    origins = list(_api.config.get("allowed_origins") or ["*"])

    _app.add_middleware(
        CORSMiddleware,
        allow_origins     = origins,
        allow_methods     = ALLOW_METHODS,
        allow_headers     = ALLOW_HEADERS,
        allow_credentials = False,
    )

    # Registered after CORSMiddleware so it runs first: preflights on the
    # analysis endpoints always get an empty 200, whatever headers are asked for.
    @_app.middleware("http")
    async def _preflight(request: Request, call_next):
        if request.method != "OPTIONS" or request.url.path not in PREFLIGHT_PATHS:
            return await call_next(request)
        headers = {
            "Access-Control-Allow-Methods": ", ".join(ALLOW_METHODS),
            "Access-Control-Allow-Headers": request.headers.get(
                "access-control-request-headers", ", ".join(ALLOW_HEADERS)
            ),
        }
        origin = request.headers.get("origin")
        if "*" in origins:
            headers["Access-Control-Allow-Origin"] = "*"
        elif origin in origins:
            headers["Access-Control-Allow-Origin"] = origin
            headers["Vary"] = "Origin"
        return Response(status_code=200, headers=headers)

    @_app.exception_handler(RequestValidationError)
    async def _bad_body(request: Request, exc: RequestValidationError):
        # malformed JSON or a non-object body
        return JSONResponse(status_code=400, content={"detail": "Invalid request body"})

    def _run(operation, payload):
        try:
            return operation(payload)
        except InvalidInput as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        except InternalFailure as exc:
            raise HTTPException(status_code=500, detail=str(exc))
        except Exception as exc:
            logger.error(f"Endpoint error: {exc}", exc_info=True)
            raise HTTPException(status_code=500, detail="Internal error")

    # ── ENDPOINTS ───────────────────────────────────────────────────────

    @_app.post("/analyze", summary="Classify one transcript line")
    def analyze(payload: Optional[Dict[str, Any]] = Body(default=None)):
        """
        Returns emotion, sentiment, keyPoints, actionItem and decision
        for one utterance. Each call is independent of every other.
        """
        return _run(_api.analyze, payload)

    @_app.post("/due-date", summary="Infer a due date from relative-date language")
    def due_date(payload: Optional[Dict[str, Any]] = Body(default=None)):
        """
        now is optional; when omitted the current time at the configured
        reference UTC offset is used. Naive timestamps get that offset too.
        """
        return _run(_api.due_date, payload)

    @_app.get("/health", summary="Health check")
    def health():
        return {
            "status":  "ok",
            "version": __version__,
            "reference_utc_offset_hours": _api.config.get("reference_utc_offset_hours"),
        }

    return _app


# Module-level app instance — used by uvicorn meetsense.api:app
app = _build_app()


# ═══════════════════════════════════════════════════════════════════════════
# CLI ENTRYPOINT — python -m meetsense.api
# ═══════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    import argparse

    import uvicorn

    config = load_config(Path.cwd())

    parser = argparse.ArgumentParser(
        prog        = "meetsense.api",
        description = "meetsense API Server — transcript line analysis over HTTP",
    )
    parser.add_argument("--port", type=int, default=config["port"],
                        help=f"Port to bind (default: {config['port']})")
    parser.add_argument("--host", type=str, default=config["host"],
                        help=f"Host to bind (default: {config['host']})")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level   = logging.DEBUG if args.verbose else logging.INFO,
        format  = "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt = "%H:%M:%S",
    )

    print(f"""
+--------------------------------------------------+
|   meetsense API Server v{__version__:<25}|
+--------------------------------------------------+
|  Local:    http://{args.host}:{args.port}
|  Docs:     http://{args.host}:{args.port}/docs
|  Health:   http://{args.host}:{args.port}/health
+--------------------------------------------------+
""")

    uvicorn.run(
        _build_app(config),
        host      = args.host,
        port      = args.port,
        log_level = "info",
    )
