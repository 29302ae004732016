"""
FastAPI application for the promptgate gateway.

Wires the tool router, health and info endpoints, and the error handlers that
turn gateway exceptions, unknown routes and malformed bodies into the JSON
(or HTML) responses callers expect.
"""

import time
from typing import Optional

import httpx
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from promptgate import __version__
from promptgate.core.errors import GatewayError
from promptgate.core.logging import get_logger, setup_logging
from promptgate.core.settings import Settings, get_settings
from promptgate.core.time import isoformat_utc
from promptgate.dependencies import get_app_settings, get_http_client
from promptgate.llm.provider import LLMProviderFactory
from promptgate.tools.routes import router as tools_router

logger = get_logger(__name__)

NOT_FOUND_PAGE = """<!DOCTYPE html>
<html>
<head>
  <title>404 - Page Not Found</title>
  <style>
    body { font-family: Arial, sans-serif; text-align: center; padding: 50px; }
    h1 { color: #667eea; }
    a { color: #667eea; text-decoration: none; }
  </style>
</head>
<body>
  <h1>404 - Page Not Found</h1>
  <p>The page you're looking for doesn't exist.</p>
  <a href="/">&larr; Go back to home</a>
</body>
</html>
"""


def _register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = [
            {"field": ".".join(str(part) for part in error.get("loc", ())[1:]), "message": error.get("msg", "")}
            for error in exc.errors()
        ]
        return JSONResponse(status_code=400, content={"error": "Invalid request body", "details": details})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Wrong method on a known path is reported like an unknown path
        if exc.status_code in (404, 405):
            if request.url.path.startswith("/api/"):
                return JSONResponse(
                    status_code=404,
                    content={"error": "API endpoint not found", "path": request.url.path},
                )
            return HTMLResponse(status_code=404, content=NOT_FOUND_PAGE)
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(exc) or "An unexpected error occurred"},
        )


def create_app(settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """
    Create the gateway application.

    Args:
        settings: Configuration; read from the environment when omitted
        transport: httpx transport used for every outbound call (tests inject
            a mock transport here)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    setup_logging("promptgate", settings=settings)

    app = FastAPI(
        title="promptgate",
        description="Prompt templating gateway in front of hosted text-generation APIs",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.transport = transport
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)
    app.include_router(tools_router)

    @app.get("/health", tags=["System"])
    async def health_check(request: Request):
        """Liveness probe; makes no upstream calls."""
        return {
            "status": "ok",
            "timestamp": isoformat_utc(),
            "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        }

    @app.get("/", tags=["System"])
    async def root(
        settings: Settings = Depends(get_app_settings),
        client: httpx.AsyncClient = Depends(get_http_client),
    ):
        """Service information and configured backends."""
        backends = []
        for name in LLMProviderFactory.list_providers():
            provider = LLMProviderFactory.create_provider(name, settings, client)
            backends.append(await provider.health_check())
        return {
            "service": settings.app_name,
            "version": __version__,
            "environment": settings.environment,
            "backends": backends,
            "news_configured": settings.news_configured,
            "endpoints": sorted(
                f"{','.join(sorted(route.methods))} {route.path}"
                for route in app.routes
                if route.path.startswith("/api/") and getattr(route, "methods", None)
            ),
        }

    logger.info(
        f"promptgate {__version__} ready "
        f"(huggingface: {'yes' if settings.huggingface_configured else 'no'}, "
        f"openrouter: {'yes' if settings.openrouter_configured else 'no'}, "
        f"news: {'yes' if settings.news_configured else 'no'})"
    )
    return app


app = create_app()


def main() -> None:
    """Run the gateway with uvicorn."""
    settings = get_settings()
    logger.info(f"Starting promptgate on {settings.service_host}:{settings.port}")
    uvicorn.run(
        "promptgate.app:app",
        host=settings.service_host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
