from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from whogotpwned.config import (
    APP_NAME, APP_VERSION, CORS_ORIGINS, ENABLE_DEBUG_ROUTES, PORT, RECORD_CHECKS
)
from whogotpwned.database.store import LookupStore, build_store
from whogotpwned.errors import QueryError
from whogotpwned.services.query import QueryService
from whogotpwned.utils.logging_setup import configure_logging

# ------------------ Router Imports ------------------
from whogotpwned.api.check import router as check_router
from whogotpwned.api.debug import router as debug_router
from whogotpwned.api.stats import router as stats_router

logger = structlog.get_logger(__name__)


# ====================================================================
#  LIFESPAN
# ====================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    owns_store = app.state.store is None
    if owns_store:
        attach_store(app, build_store())

    store = app.state.store
    logger.info(
        "Starting WhoGotPwned backend",
        version=APP_VERSION,
        database=store.backend,
        breached_emails=store.count_all(),
        safe_emails=len(store.safe_emails()),
    )

    yield

    logger.info("Shutting down gracefully")
    if owns_store:
        store.close()


def attach_store(app: FastAPI, store: LookupStore) -> None:
    app.state.store = store
    app.state.query_service = QueryService(store, record_checks=app.state.record_checks)


# ====================================================================
#  ERROR HANDLERS
# ====================================================================

async def query_error_handler(request: Request, exc: QueryError):
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"success": False, "error": "Invalid request body"})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"success": False, "error": "Internal server error"})


# ====================================================================
#  APP FACTORY
# ====================================================================

def create_app(store: LookupStore = None, record_checks: bool = RECORD_CHECKS,
               enable_debug: bool = ENABLE_DEBUG_ROUTES) -> FastAPI:
    """
    Build the FastAPI app. When `store` is given it is used as-is and left
    open on shutdown; otherwise one is built from configuration at startup.
    """
    app = FastAPI(
        title=APP_NAME,
        description="Check whether an email address appears in known data breaches",
        version=APP_VERSION,
        lifespan=lifespan,
    )
    app.state.store = None
    app.state.record_checks = record_checks
    app.state.debug_routes = enable_debug
    if store is not None:
        attach_store(app, store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(QueryError, query_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(check_router)
    app.include_router(stats_router)
    if enable_debug:
        app.include_router(debug_router)

    app.add_api_route("/", root, methods=["GET"])
    app.add_api_route("/api/health", health, methods=["GET"])
    return app


# ====================================================================
#  HEALTH + ROOT
# ====================================================================

def health(request: Request):
    """Liveness plus a summary of the loaded dataset."""
    store = request.app.state.store
    try:
        breached = 0
        records = 0
        for _email, breaches in store.all_records():
            breached += 1
            records += len(breaches)
        safe = len(store.safe_emails())
        stats = {
            "emailChecks": breached + safe,
            "breachRecords": records,
            "breachedEmails": breached,
            "safeEmails": safe,
        }
    except Exception as e:
        logger.warning("Health stats unavailable", error=str(e))
        stats = {"error": "unavailable"}

    return {
        "status": "OK",
        "message": "Email Breach Checker API is running",
        "database": store.backend,
        "connected": store.ping(),
        "stats": stats,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def root(request: Request):
    store = request.app.state.store
    endpoints = {
        "POST /api/check-email": "Check if email is breached",
        "GET /api/stats": "Get database statistics",
        "GET /api/health": "Health check",
    }
    if request.app.state.debug_routes:
        endpoints["GET /api/debug/breaches"] = "View all breach data"

    return {
        "message": APP_NAME,
        "version": APP_VERSION,
        "port": PORT,
        "database": store.backend,
        "endpoints": endpoints,
        "testEmails": {
            "breached": [email for email, _ in store.all_records()],
            "safe": store.safe_emails(),
        },
    }


app = create_app()


def run():
    uvicorn.run("whogotpwned.main:app", host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    run()
