# liftlog/main.py
import os
import threading
import time
import logging
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from liftlog.core import exceptions
from liftlog.routers.catalog import router as catalog_router
from liftlog.routers.sessions import router as sessions_router
from liftlog.routers.sets import router as sets_router
from liftlog.routers.routines import router as routines_router
from liftlog.routers.stats import router as stats_router
from liftlog.db import SessionLocal  # for healthz DB check
from liftlog.settings import get_settings

log = logging.getLogger("uvicorn")


def check_database() -> None:
    with SessionLocal() as db:
        db.execute(text("SELECT 1"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One-shot readiness signal: set once, never polled
    app.state.ready = threading.Event()
    try:
        check_database()
        app.state.ready.set()
    except Exception as e:
        log.warning("database not reachable at startup: %s", e)
    yield


app = FastAPI(
    title="LiftLog API",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "catalog", "description": "Body-part categories and exercises"},
        {"name": "sessions", "description": "Daily workout sessions"},
        {"name": "sets", "description": "Individual sets"},
        {"name": "routines", "description": "Reusable routines"},
        {"name": "stats", "description": "Streaks, records, summaries and goals"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
ALLOW_ORIGINS = get_settings().ALLOW_ORIGINS.split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = req_id
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

app.add_exception_handler(RequestValidationError, exceptions.validation_exception_handler)  # type: ignore
app.add_exception_handler(IntegrityError, exceptions.integrity_exception_handler)  # type: ignore

@app.get("/")
def root():
    return {"ok": True, "name": "LiftLog API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz(request: Request):
    # Quick DB sanity check
    try:
        check_database()
    except Exception as e:
        return {"status": "degraded", "error": str(e)}
    ready = getattr(request.app.state, "ready", None)
    if ready is not None:
        ready.set()
    return {"status": "ok"}

@app.get("/version")
def version():
    return {"version": os.getenv("API_VERSION", "dev")}

# Routers
app.include_router(catalog_router)
app.include_router(sessions_router)
app.include_router(sets_router)
app.include_router(routines_router)
app.include_router(stats_router)
