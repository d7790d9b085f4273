from __future__ import annotations
import datetime as dt
import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.trustedhost import TrustedHostMiddleware
from starlette.responses import JSONResponse
from contextlib import asynccontextmanager

from api_router import router, get_profile_store
from jyotish_core.errors import GunaMilanError
from logging_setup import configure_logging
from schemas import ErrorResponse, ErrorEnvelope, ErrorDetail
from settings import APP_NAME, APP_VERSION, CORS_ALLOW_ORIGINS, TRUSTED_HOSTS, GZIP_MIN_SIZE, REQUEST_LOGGING
from middleware import RequestIDMiddleware, LoggingMiddleware

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("[startup] %s v%s starting up", APP_NAME, APP_VERSION)
    yield
    logger.info("[shutdown] Bye.")


app = FastAPI(
    title=APP_NAME,
    version=APP_VERSION,
    description="Vedic Ashtakoot Guna Milan compatibility endpoints.",
    lifespan=lifespan,
)

# --- Middleware ---
app.add_middleware(RequestIDMiddleware)
app.add_middleware(LoggingMiddleware, mode=REQUEST_LOGGING)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=GZIP_MIN_SIZE)
app.add_middleware(TrustedHostMiddleware, allowed_hosts=TRUSTED_HOSTS or ["*"])


# --- Exception handlers -> uniform envelope ---

_HTTP_ERROR_CODES: Dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def _envelope(
    status_code: int,
    code: str,
    message: str,
    details: Optional[List[ErrorDetail]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    err = ErrorEnvelope(code=code, message=message, details=details)
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=err).model_dump(), headers=headers)


@app.exception_handler(GunaMilanError)
async def on_domain_error(request: Request, exc: GunaMilanError):
    # client mistakes are warnings, data defects are errors
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(level, "%s on %s: %s", exc.code, request.url.path, exc.message)
    details = [ErrorDetail(field=exc.field, issue=exc.message)] if exc.field else None
    return _envelope(exc.status_code, exc.code, exc.message, details)


@app.exception_handler(StarletteHTTPException)
async def on_http_exception(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) and exc.detail else str(exc)
    code = _HTTP_ERROR_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")
    # keeps Allow on 405 and any auth challenge headers
    return _envelope(exc.status_code, code, message, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def on_validation_error(request: Request, exc: RequestValidationError):
    details = [
        ErrorDetail(field=".".join(str(p) for p in e.get("loc", ())), issue=e.get("msg"))
        for e in exc.errors()
    ]
    return _envelope(status.HTTP_422_UNPROCESSABLE_ENTITY, "UNPROCESSABLE_ENTITY", "Validation error", details)


@app.exception_handler(Exception)
async def on_any_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "SERVER_ERROR", str(exc))


# --- Liveness/Readiness ---
@app.get("/healthz")
async def healthz():
    return {"ok": True, "ts": dt.datetime.now(dt.timezone.utc).isoformat()}


@app.get("/readyz")
async def readyz():
    store = get_profile_store()
    return {"ready": True, "profiles": len(store)}


# --- Routes ---
app.include_router(router)


# Optional: dev run
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="127.0.0.1", port=8787, reload=True)
