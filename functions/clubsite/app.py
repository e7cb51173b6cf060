"""
FastAPI application entry point for the club data API.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from clubsite.config import get_settings
from clubsite.errors import ClubDataError
from clubsite.routes import router
from clubsite.schemas import ErrorResponse

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


async def handle_club_data_error(request: Request, exc: ClubDataError) -> JSONResponse:
    return JSONResponse(
        ErrorResponse(error=exc.message).model_dump(), status_code=exc.status_code
    )


async def add_cors_headers(request: Request, call_next):
    try:
        response = await call_next(request)
    except Exception:
        # Backend failures (Redis, database) still answer with JSON and CORS.
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        response = JSONResponse(
            ErrorResponse(error="Internal error").model_dump(), status_code=500
        )
    response.headers.update(CORS_HEADERS)
    return response


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Club Data API", version="0.1.0")
    app.include_router(router, prefix=settings.api_prefix)
    app.add_exception_handler(ClubDataError, handle_club_data_error)
    app.middleware("http")(add_cors_headers)
    return app


app = create_app()
