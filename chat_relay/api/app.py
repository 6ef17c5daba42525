"""
Application Module

This module builds the FastAPI application: CORS, exception handlers that
render every failure as a `{"success": false, "error": ...}` envelope, and
the relay routes.
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chat_relay import __version__
from chat_relay.api.routes import router
from chat_relay.chat.gateway import ChatGateway
from chat_relay.exceptions import ChatRelayError
from chat_relay.utils.logger import get_logger

logger = get_logger("chat_relay.api")


def describe_validation_error(exc: RequestValidationError) -> str:
    """
    Turn a request validation failure into a one-line message naming the
    offending fields.
    """
    messages = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            return "Request body must be valid JSON"
        fields = [str(part) for part in error.get("loc", ()) if part != "body"]
        if fields:
            messages.append(f"{'.'.join(fields)}: {error.get('msg', 'invalid value')}")
        else:
            messages.append("Request body must be a JSON object")
    return "; ".join(messages) or "Invalid request body"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers on the FastAPI application.

    Args:
        app (FastAPI): The FastAPI application instance to configure.
    """

    @app.exception_handler(ChatRelayError)
    async def chat_relay_exception_handler(request: Request, exc: ChatRelayError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.warning(f"{request.method} {request.url.path} rejected: {type(exc).__name__}")
            logger.debug(f"{request.method} {request.url.path} rejection detail: {exc.message}")
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        message = describe_validation_error(exc)
        logger.warning(f"{request.method} {request.url.path} rejected: {message}")
        return _error_response(400, message)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} raised {type(exc).__name__}")
        return _error_response(500, str(exc) or type(exc).__name__)


def create_app(gateway: ChatGateway, config: Optional[Dict[str, Any]] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        gateway (ChatGateway): The gateway used by every route.
        config (Optional[Dict[str, Any]]): Application configuration. Only
            `cors_origins` is read here.

    Returns:
        FastAPI: The application.
    """
    config = config or {}

    app = FastAPI(
        title="Chat Relay",
        description="HTTP relay for sending Google Chat messages as a bot",
        version=__version__,
    )
    app.state.gateway = gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get("cors_origins") or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)
    app.include_router(router)

    return app
