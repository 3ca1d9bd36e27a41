"""
FastAPI entry point
Mock interview backend service
"""

import asyncio
import logging
import traceback
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from interview_api import __version__, config
from interview_api.api import interview
from interview_api.core.errors import InterviewError
from interview_api.models.schemas import ErrorResponse
from interview_api.services.interview_service import run_idle_sweep

# Logging setup
logging.basicConfig(
    level=config.get_log_level(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

VERSION = __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle
    """
    logger.info("Mock interview backend starting...")
    logger.info(f"Environment: {config.get_app_env()}")

    if not config.get_llm_api_key():
        # The service still starts; model calls fail until the key is set
        logger.warning("LLM_API_KEY is not set. Interview requests will fail until it is configured.")

    sweep_task: Optional[asyncio.Task] = None
    idle_minutes = config.get_session_idle_timeout_minutes()
    if idle_minutes > 0:
        sweep_task = asyncio.create_task(
            run_idle_sweep(
                interview.interview_service.store,
                timedelta(minutes=idle_minutes),
                config.get_session_sweep_interval_seconds(),
            )
        )
    else:
        logger.info("Session idle expiry disabled; sessions live until deleted")

    yield

    logger.info("Mock interview backend shutting down...")
    if sweep_task is not None:
        sweep_task.cancel()
        try:
            await sweep_task
        except asyncio.CancelledError:
            pass


# Create the FastAPI app
app = FastAPI(
    title="Mock Interview API",
    description="Turn-based mock interviews driven by a hosted chat model",
    version=VERSION,
    lifespan=lifespan
)

# Rate limit per client address; the limit string is read on every request
limiter = Limiter(key_func=get_remote_address, default_limits=[config.get_rate_limit])
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Error envelope
# ============================================================================

def error_response(status_code: int, error: str, message: str, exc: Optional[BaseException] = None) -> JSONResponse:
    """Build the uniform JSON error body; tracebacks only outside production."""
    stack = None
    if exc is not None and not config.is_production():
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    logger.error(f"[ERROR] {status_code} - {message}")
    body = ErrorResponse(error=error, message=message, stack=stack)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def validation_message(exc: RequestValidationError) -> str:
    """First validation problem as a readable sentence, e.g. "role is required."."""
    errors = exc.errors()
    if not errors:
        return "Invalid request."

    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Request body is not valid JSON."

    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body") or "body"
    if first.get("type") == "missing":
        return f"{field} is required."

    ctx_error = (first.get("ctx") or {}).get("error")
    if ctx_error:
        return str(ctx_error)
    return f"{field}: {first.get('msg', 'invalid value')}"


@app.exception_handler(InterviewError)
async def interview_exception_handler(request: Request, exc: InterviewError):
    """Domain errors carry their own status"""
    return error_response(exc.status_code, exc.error_type, exc.message, exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation errors are 400s"""
    return error_response(400, "ValidationError", validation_message(exc), exc)


@app.exception_handler(RateLimitExceeded)
def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
    """Too many requests from one client"""
    return error_response(429, "RateLimitExceeded", "Too many requests. Please slow down.")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """HTTP errors, including unknown routes"""
    if exc.status_code == 404 and exc.detail == "Not Found":
        return error_response(404, "NotFound", f"Route {request.method} {request.url.path} not found.")
    if exc.status_code == 405:
        return error_response(405, "MethodNotAllowed", f"Method {request.method} not allowed for {request.url.path}.")
    return error_response(exc.status_code, "HTTPException", str(exc.detail), exc)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Anything else"""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return error_response(500, "InternalServerError", str(exc) or "Internal Server Error", exc)


# ============================================================================
# Service info
# ============================================================================

@app.get("/")
async def root():
    """
    API information
    """
    return {
        "success": True,
        "message": "Mock Interview API is live!",
        "version": VERSION,
        "docs": "/docs",
        "endpoints": {
            "startInterview": "POST   /api/interview/start",
            "submitAnswer": "POST   /api/interview/answer",
            "getSession": "GET    /api/interview/session/{sessionId}",
            "getReport": "GET    /api/interview/report/{sessionId}",
            "deleteSession": "DELETE /api/interview/session/{sessionId}",
            "listSessions": "GET    /api/interview/sessions",
        },
    }


@app.get("/health")
async def health_check():
    """
    Health check
    """
    return {
        "status": "healthy",
        "sessions": len(interview.interview_service.store)
    }


# Routes
app.include_router(interview.router)


if __name__ == "__main__":
    import uvicorn

    host = config.get_host()
    port = config.get_port()
    debug = config.is_debug()

    logger.info(f"Starting server: http://{host}:{port}")
    logger.info(f"API base: http://{host}:{port}/api/interview")
    logger.info(f"API docs: http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=debug,
        log_level=config.get_log_level().lower()
    )
