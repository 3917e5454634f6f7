"""
Visualencer live-preview server.

The editor posts its graph on every change and renders the returned script.

Start with:
    python -m visualencer.server.main

Or via uvicorn directly:
    uvicorn visualencer.server.main:app --port 3001 --reload
"""
from __future__ import annotations

import logging
import os

from dotenv import find_dotenv, load_dotenv

# Load .env before the routes build the shared state from the environment
load_dotenv(find_dotenv(usecwd=True))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from visualencer.server.routes.compile_routes import router

logging.basicConfig(level=os.environ.get("VISUALENCER_LOG_LEVEL", "INFO").upper())

# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="Visualencer Preview API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "visualencer.server.main:app",
        host="0.0.0.0",
        port=int(os.environ.get("VISUALENCER_PORT", "3001")),
        reload=True,
    )
