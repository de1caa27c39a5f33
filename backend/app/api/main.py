"""
FastAPI application factory and main entry point.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.middleware import WideEventMiddleware, add_ai_failure_to_wide_event
from app.api.routes import ai, generate, grammar, health, ocr, transliterate
from app.core.config import settings
from app.core.logging import configure_logging
from app.services.ai.errors import MissingCredentialError, TransportError
from app.services.grammar.errors import InvalidGrammarRequestError, MalformedResponseError
from app.services.transliteration import TransliterationError

# Configure structured logging with wide events support
configure_logging(
    json_logs=settings.log_json,
    log_level=settings.log_level,
)

logger = structlog.get_logger()


def _error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "message": message,
                "type": error_type,
            }
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    logger.info(
        "Starting SentenceCraft API",
        version=settings.app_version,
        environment=settings.environment,
        gemini_model=settings.gemini_model,
        chat_completion_model=settings.chat_completion_model,
    )

    yield

    logger.info("Shutting down SentenceCraft API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="AI-assisted English grammar practice for Hindi speakers",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Wide Events middleware - canonical log line per request
    app.add_middleware(WideEventMiddleware)

    app.include_router(health.router, tags=["Health"])
    app.include_router(generate.router, prefix="/api/v1/generate", tags=["Sentence Builder"])
    app.include_router(grammar.router, prefix="/api/v1/grammar", tags=["Grammar Lab"])
    app.include_router(ocr.router, prefix="/api/v1/ocr", tags=["OCR"])
    app.include_router(ai.router, prefix="/api/v1/ai", tags=["AI"])
    app.include_router(transliterate.router, prefix="/api/v1/transliterate", tags=["Transliteration"])

    # Exception Handlers
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle FastAPI validation errors"""
        logger.warning("Validation error", url=str(request.url), errors=exc.errors())
        return JSONResponse(
            status_code=422,
            content={
                "error": {
                    "message": "Validation failed",
                    "type": "validation_error",
                    "details": [
                        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
                        for err in exc.errors()
                    ],
                }
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Route-level rejections in the same envelope as every other error"""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": {"message": exc.detail, "type": "http_error"}},
            headers=exc.headers,
        )

    @app.exception_handler(MissingCredentialError)
    async def missing_credential_handler(request: Request, exc: MissingCredentialError):
        """No API key supplied for the selected provider"""
        logger.info("Missing API key", url=str(request.url))
        add_ai_failure_to_wide_event("missing_credential", exc.message)
        return _error_response(400, exc.message, "missing_credential")

    @app.exception_handler(TransportError)
    async def transport_error_handler(request: Request, exc: TransportError):
        """Provider call failed; surface the provider's own message"""
        logger.error(
            "AI provider error",
            url=str(request.url),
            message=exc.message,
            upstream_status=exc.status_code,
        )
        add_ai_failure_to_wide_event("transport_error", exc.message)
        return _error_response(502, exc.message, "ai_provider_error")

    @app.exception_handler(MalformedResponseError)
    async def malformed_response_handler(request: Request, exc: MalformedResponseError):
        """Provider answered but not in the expected shape"""
        logger.warning("Malformed AI response", url=str(request.url), message=exc.message)
        add_ai_failure_to_wide_event("malformed_response", exc.message)
        return _error_response(502, exc.message, "malformed_ai_response")

    @app.exception_handler(InvalidGrammarRequestError)
    async def invalid_request_handler(request: Request, exc: InvalidGrammarRequestError):
        logger.info("Invalid grammar request", url=str(request.url), message=exc.message)
        return _error_response(400, exc.message, "invalid_request")

    @app.exception_handler(TransliterationError)
    async def transliteration_error_handler(request: Request, exc: TransliterationError):
        logger.warning("Transliteration error", url=str(request.url), message=exc.message)
        return _error_response(502, exc.message, "transliteration_error")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions"""
        logger.error("Unexpected error", url=str(request.url), error=str(exc), exc_info=True)

        # Don't expose internal details in production
        message = str(exc) if settings.debug else "An unexpected error occurred"
        return _error_response(500, message, "internal_server_error")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
