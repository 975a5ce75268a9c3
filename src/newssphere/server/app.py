"""FastAPI application exposing the query endpoints under ``/api``."""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from newssphere.endpoints import (
    ArticleListResponse,
    ErrorResponse,
    HealthResponse,
    NewsEndpoints,
    TrendingResponse,
)
from newssphere.errors import (
    NewsSphereError,
    RequestValidationError,
    UpstreamConfigError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
}

router = APIRouter(prefix="/api", tags=["news"])


def get_endpoints(request: Request) -> NewsEndpoints:
    return request.app.state.endpoints


def status_code_for(error: NewsSphereError) -> int:
    """HTTP status for a handler failure."""
    if isinstance(error, RequestValidationError):
        return 400
    if isinstance(error, UpstreamConfigError):
        return 503
    if isinstance(error, UpstreamError):
        return 502
    return 500


@router.get(
    "/headlines",
    response_model=ArticleListResponse,
    responses={502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def get_headlines(
    country: str = Query("us", description="Two-letter country code"),
    category: str | None = Query(None, description="Provider category"),
    page: str | None = Query(None, description="Continuation token, absent for page one"),
    page_size: str | None = Query(None, alias="pageSize", description="Articles wanted, max 50"),
    endpoints: NewsEndpoints = Depends(get_endpoints),
) -> ArticleListResponse:
    """Latest headlines for a country and optional category."""
    return await endpoints.headlines(
        country=country, category=category, page=page, page_size=page_size
    )


@router.get(
    "/search",
    response_model=ArticleListResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def get_search(
    q: str | None = Query(None, description="Search term"),
    language: str | None = Query(None, description="Language filter"),
    page: str | None = Query(None, description="Continuation token"),
    page_size: str | None = Query(None, alias="pageSize", description="Articles wanted, max 50"),
    endpoints: NewsEndpoints = Depends(get_endpoints),
) -> ArticleListResponse:
    """Keyword search over the latest articles."""
    return await endpoints.search(q=q, page=page, page_size=page_size, language=language)


@router.get(
    "/trending",
    response_model=TrendingResponse,
    responses={502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def get_trending(
    page_size: str | None = Query(None, alias="pageSize", description="Ignored; kept for clients"),
    endpoints: NewsEndpoints = Depends(get_endpoints),
) -> TrendingResponse:
    """Shuffled sample of one random category."""
    return await endpoints.trending()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Report whether the provider credential is configured."""
    return HealthResponse(api_key_configured=request.app.state.has_credential())


def create_app(
    endpoints: NewsEndpoints,
    *,
    static_dir: Path | str | None = None,
    has_credential: Callable[[], bool] = lambda: True,
) -> FastAPI:
    """Build the application.

    Args:
        endpoints: Query handlers shared by all requests.
        static_dir: Directory served at ``/`` when it exists.
        has_credential: Reports whether the provider API key is set.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not has_credential():
            logger.warning("NEWSDATA_API_KEY not set. Get a key at https://newsdata.io")
        yield

    app = FastAPI(title="NewsSphere", version="1.0.0", lifespan=lifespan)
    app.state.endpoints = endpoints
    app.state.has_credential = has_credential

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        return response

    @app.exception_handler(NewsSphereError)
    async def handle_news_error(request: Request, exc: NewsSphereError) -> JSONResponse:
        status_code = status_code_for(exc)
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    app.include_router(router)

    if static_dir is not None and Path(static_dir).is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")

    return app
