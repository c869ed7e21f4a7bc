"""FastAPI surface for the BudgetDate MCP tools."""
from __future__ import annotations

import argparse
import logging
import os
import time

# Load .env file before anything reads the environment
from dotenv import load_dotenv

load_dotenv()

import sentry_sdk
import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from budget_date import __version__
from budget_date.api.dependencies import get_settings, lifespan
from budget_date.api.routes import index_router, router
from budget_date.core.errors import BudgetDateError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if settings.sentry_dsn:  # pragma: no cover - runtime configuration
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        send_default_pii=False,
        traces_sample_rate=1.0,
    )

app = FastAPI(title="BudgetDate MCP", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "HEAD", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its status and duration; disable caching."""

    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers["Cache-Control"] = "no-store"
    logger.info(
        "%s %s -> %s in %.0fms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.exception_handler(BudgetDateError)
async def handle_tool_error(request: Request, exc: BudgetDateError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Tool execution failed: %s", exc.message)
    else:
        logger.warning("Tool request rejected (%s): %s", exc.status_code, exc.message)
    body = {"ok": False, "error": exc.message}
    if exc.details is not None:
        body["details"] = jsonable_encoder(exc.details)
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def handle_invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"ok": False, "error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unexpected error: %s", exc, exc_info=True)
    return JSONResponse(status_code=500, content={"ok": False, "error": str(exc) or "Internal error"})


app.include_router(index_router)
app.include_router(router)
app.include_router(router, prefix="/mcp")


def main() -> None:
    """Start the BudgetDate server via Uvicorn."""

    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "3000")))
    args = parser.parse_args()

    logger.info("BudgetDate MCP server listening on http://%s:%d", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, reload=False, loop="asyncio")


if __name__ == "__main__":
    main()
