"""FastAPI application for the Report Summary API.

Environment:
    WORKLOG_ALLOWED_ORIGINS  comma-separated CORS origins, "*" for any
    WORKLOG_JSON_LOGS        "1" to emit logs as JSON lines
    WORKLOG_LOG_LEVEL        log level (default WARNING)
"""

from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router
from worklog_tool import __version__
from worklog_tool.logging_config import configure_logging

DEFAULT_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def cors_origins(raw: str | None) -> list[str]:
    """Origins allowed by CORS; the dashboard dev server when unset."""
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    if "*" in origins:
        return ["*"]
    return origins or list(DEFAULT_ORIGINS)


configure_logging(json_format=os.environ.get("WORKLOG_JSON_LOGS", "") == "1")

app = FastAPI(
    title="Report Summary API",
    description="Cost, income and budget summaries of daily work reports.",
    version=__version__,
)

ALLOWED_ORIGINS = cors_origins(os.environ.get("WORKLOG_ALLOWED_ORIGINS"))

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    # Browsers reject credentials with a wildcard origin.
    allow_credentials=ALLOWED_ORIGINS != ["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)

app.include_router(router)


@app.get("/")
async def root():
    return {
        "name": "Report Summary API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
        "endpoints": {
            "summary": "POST /api/v1/summary",
            "budget": "POST /api/v1/budget",
            "extra_work": "POST /api/v1/extra-work",
        },
    }
