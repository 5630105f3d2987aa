"""HTTP query surface for launch data."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from launchfeed.data import QueryParameters
from launchfeed.engine import QueryEngine
from launchfeed.errors import InvalidQueryError, UnsupportedStatusValue, UpstreamUnavailable

logger = logging.getLogger(__name__)

UPSTREAM_ERROR_MESSAGE = "Failed to fetch data"


def create_app(engine: QueryEngine) -> FastAPI:
    """Build the FastAPI application around a query engine.

    Args:
        engine: Engine answering every request of this app.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(title="Launch Feed API", version="1.0.0")
    app.state.engine = engine

    @app.exception_handler(UpstreamUnavailable)
    async def _upstream_unavailable(request: Request, exc: UpstreamUnavailable) -> JSONResponse:
        logger.error("Upstream unavailable for %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": UPSTREAM_ERROR_MESSAGE})

    @app.exception_handler(UnsupportedStatusValue)
    async def _unsupported_status(request: Request, exc: UnsupportedStatusValue) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(InvalidQueryError)
    async def _invalid_query(request: Request, exc: InvalidQueryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = ", ".join(".".join(str(p) for p in err["loc"][1:]) for err in exc.errors())
        return JSONResponse(status_code=400, content={"error": f"Invalid query parameters: {fields}"})

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "cachedViews": engine.cached_views}

    @app.get("/launches")
    async def list_launches(
        search: str = "",
        year: str = "",
        status: str = "",
        offset: int = 0,
        limit: int = 10,
    ) -> dict:
        params = QueryParameters.parse(
            search=search,
            year=year,
            status=status,
            offset=offset,
            limit=limit,
        )
        page = await engine.query(params)
        return page.to_dict()

    @app.get("/launches/years")
    async def list_years() -> dict:
        return {"years": await engine.available_years()}

    return app
