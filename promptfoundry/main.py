"""
Main FastAPI application for the PromptFoundry license sidecar.
Serves checkout redirect, Stripe webhook, license lookups, health, metrics
and the client-side gate script (/static/unlock.js).
"""
import logging
import time
from pathlib import Path
from uuid import uuid4

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from promptfoundry import __version__
from promptfoundry.core.config import settings
from promptfoundry.core.logging import configure_logging
from promptfoundry.api.routes import checkout, health, license, stripe_webhook
from promptfoundry.utils.metrics import router as metrics_router


configure_logging(settings.log_file, settings.log_max_bytes, settings.log_backup_count)
logger = logging.getLogger("promptfoundry.http")

STATIC_DIR = Path(__file__).resolve().parent / "static"


app = FastAPI(
    title="PromptFoundry API",
    description="Stripe subscription -> license -> unlock",
    version=__version__,
)

# CORS: the static site and local dev call us cross-origin; no cookies involved.
origins = settings.cors_origins_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=bool(origins),
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    header = settings.request_id_header
    request_id = request.headers.get(header) or uuid4().hex
    start = time.time()
    response = await call_next(request)
    response.headers[header] = request_id
    logger.info(
        "http_request",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "latency_ms": round((time.time() - start) * 1000, 2),
        },
    )
    return response


# Routers
app.include_router(health.router, tags=["health"])
app.include_router(checkout.router)
app.include_router(license.router)
app.include_router(stripe_webhook.router)
app.include_router(metrics_router)

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


if __name__ == "__main__":
    uvicorn.run("promptfoundry.main:app", host="0.0.0.0", port=settings.port)
