"""
MindFlow - AI-generated visual courses.

FastAPI application entry point. Hosts the two generation proxies so the
completion API key stays on the server.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mindflow.api import router as api_router
from mindflow.api.middleware.request_id import RequestIdMiddleware
from mindflow.config import get_settings
from mindflow.logging_config import configure_logging, get_logger
from mindflow.schemas.common import HealthResponse

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Configure logging and report whether generation can work."""
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
        service=settings.project_name,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    if not settings.ai_configured:
        logger.warning("PERPLEXITY_API_KEY is not set; generation requests will fail upstream")

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.project_name,
    description="""
    MindFlow turns a topic into a short visual course.

    ## Endpoints

    - **generate-curriculum**: introduction, concepts, flowchart and quiz for a topic
    - **generate-deep-dive**: follow-up topics after a high quiz score

    Both proxy a hosted completion API; the API key never reaches the browser.
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


_cors_origins = list(settings.cors_origins)

# add_middleware stacks innermost-first: CORS added last so it wraps everything
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _cors_headers(request: Request) -> dict:
    """CORS headers for error responses (500s often bypass CORS middleware)."""
    origin = request.headers.get("origin") or ""
    if origin in _cors_origins or not _cors_origins:
        allow_origin = origin or "*"
    else:
        allow_origin = _cors_origins[0]
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "*",
        "Access-Control-Allow-Headers": "*",
    }


def _error_response(request: Request, status_code: int, error: str, extra_headers=None) -> JSONResponse:
    """Render the {"error": ...} envelope with CORS and request id headers."""
    headers = _cors_headers(request)
    if extra_headers:
        headers.update(extra_headers)
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        headers["X-Request-ID"] = req_id
    content = {"error": error}
    if req_id and status_code >= 500:
        content["request_id"] = req_id
    return JSONResponse(status_code=status_code, content=content, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """HTTPException from handlers and routing (404, 405) share one envelope."""
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        error = "Method not allowed"
    else:
        error = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _error_response(request, exc.status_code, error, getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Unparseable or mistyped request bodies are client errors (400, not 422)."""
    fields = sorted({".".join(str(loc) for loc in e["loc"] if loc != "body") for e in exc.errors()})
    fields = [f for f in fields if f]
    error = f"Invalid request body: {', '.join(fields)}" if fields else "Invalid request body"
    return _error_response(request, status.HTTP_400_BAD_REQUEST, error)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Last resort: a bare 500 in the usual envelope, with CORS so the browser can read it."""
    logger.exception("Unhandled exception: %s", exc)
    error = str(exc) if settings.debug else "Internal server error"
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, error)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Check application health."""
    return HealthResponse(
        status="ok",
        version=settings.version,
        ai_configured=get_settings().ai_configured,
    )


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs" if settings.debug else "disabled",
        "api": {
            "generate_curriculum": f"{settings.api_prefix}/generate-curriculum",
            "generate_deep_dive": f"{settings.api_prefix}/generate-deep-dive",
        },
    }


app.include_router(api_router, prefix=settings.api_prefix)


# Local development server
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mindflow.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
