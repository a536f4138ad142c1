"""
AI Photo Editor - Relay Server

Stateless FastAPI backend that forwards edit and suggestion requests
from the editor to the Gemini API. Every failure is returned as
{"error": message}.
"""

import argparse
import logging
import sys

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__, config
from .api import edit_router, suggestions_router
from .models import ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "Invalid request body."
BODY_TOO_LARGE_MESSAGE = "Request body too large."


def create_app() -> FastAPI:
    """Build the relay application."""
    app = FastAPI(
        title="AI Photo Editor Relay",
        description="Relay between the photo editor and the Gemini API",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        """Reject bodies over the configured size before parsing them."""
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > config.MAX_BODY_BYTES:
            logger.warning(f"Rejected {request.url.path}: body of {content_length} bytes")
            return JSONResponse(status_code=413, content=ErrorResponse(error=BODY_TOO_LARGE_MESSAGE).model_dump())
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail)).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid body for {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content=ErrorResponse(error=INVALID_BODY_MESSAGE).model_dump())

    app.include_router(edit_router, prefix="/api", tags=["edit"])
    app.include_router(suggestions_router, prefix="/api", tags=["suggestions"])

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint"""
        return HealthResponse(status="ok")

    return app


app = create_app()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the AI Photo Editor relay server")
    parser.add_argument("--host", default=config.HOST, help="Bind address")
    parser.add_argument("--port", type=int, default=config.PORT, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config.get_api_key()
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"Starting relay server on {args.host}:{args.port}...")
    uvicorn.run(
        "photo_editor.server.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
