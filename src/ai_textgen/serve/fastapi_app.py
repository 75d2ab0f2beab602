"""FastAPI proxy for the Replicate predictions API.

Endpoints:
- GET  /health
- POST /api/generate        { "prompt": "...", "temperature": ..., ... }
- GET  /api/generate/{id}

The API token is attached here, server-side; upstream JSON is relayed as is.
Upstream failures become HTTP 500 with { "error": "<message>" }.
"""
from __future__ import annotations
import logging
import os
from typing import Any

import httpx
from fastapi import Body, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ai_textgen.common.logging_setup import setup_logging

LOGGER = logging.getLogger("ai_textgen.serve.app")
setup_logging()

REPLICATE_API_URL = os.getenv("REPLICATE_API_URL", "https://api.replicate.com/v1")
REPLICATE_API_TOKEN = os.getenv("REPLICATE_API_TOKEN", "")
MODEL_VERSION = os.getenv(
    "REPLICATE_MODEL_VERSION",
    "2c1608e18606fad2812020dc541930f2d0495ce32eee50074220b87300bc16e1",
)
UPSTREAM_TIMEOUT = float(os.getenv("UPSTREAM_TIMEOUT", "60"))

CREATE_ERROR = "Error connecting to Replicate"
STATUS_ERROR = "Error fetching prediction status"

app = FastAPI(title="AI Text Generator proxy")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _headers() -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Token {REPLICATE_API_TOKEN}",
    }


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


@app.on_event("startup")
def _warn_missing_token() -> None:
    if not REPLICATE_API_TOKEN:
        LOGGER.warning("REPLICATE_API_TOKEN is not set; upstream calls will be rejected")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "model": MODEL_VERSION}


@app.post("/api/generate")
def create_prediction(body: dict[str, Any] = Body(...)) -> Any:
    url = f"{REPLICATE_API_URL}/predictions"
    payload = {"version": MODEL_VERSION, "input": body}
    try:
        with httpx.Client(timeout=UPSTREAM_TIMEOUT) as client:
            r = client.post(url, headers=_headers(), json=payload)
            r.raise_for_status()
            data = r.json()
    except Exception as e:
        LOGGER.error("Replicate create failed: %s", e)
        return _error(CREATE_ERROR)

    LOGGER.info("created prediction %s", data.get("id") if isinstance(data, dict) else None)
    return data


@app.get("/api/generate/{prediction_id}")
def get_prediction(prediction_id: str) -> Any:
    url = f"{REPLICATE_API_URL}/predictions/{prediction_id}"
    try:
        with httpx.Client(timeout=UPSTREAM_TIMEOUT) as client:
            r = client.get(url, headers=_headers())
            r.raise_for_status()
            data = r.json()
    except Exception as e:
        LOGGER.error("Replicate status for %s failed: %s", prediction_id, e)
        return _error(STATUS_ERROR)
    return data
