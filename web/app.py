"""
kbengine Web Application

Exposes the knowledge engine over HTTP: one operation-discriminated endpoint
and a health probe.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kbengine import KnowledgeEngine, __version__, to_error_response
from kbengine.config.settings import settings
from kbengine.errors import InvalidRequestError
from kbengine.observability import configure_logging, init_tracer, shutdown_tracer
from web.routers import health_router, knowledge_router

# Setup logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("web-app")


def create_app(engine: KnowledgeEngine | None = None) -> FastAPI:
    """Build the application.

    Args:
        engine: Pre-built engine (tests inject one); built from settings at
            startup when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        configure_logging(settings.LOG_LEVEL)
        if settings.OTEL_ENABLED:
            init_tracer(service_name="kbengine", endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT)

        if engine is None:
            logger.info("Initializing knowledge engine from settings...")
            app.state.engine = KnowledgeEngine.from_settings(settings)
        else:
            app.state.engine = engine

        logger.info("Application started successfully")

        yield

        # Shutdown
        logger.info("Application shutting down...")
        if settings.OTEL_ENABLED:
            shutdown_tracer()

    app = FastAPI(
        title="kbengine API",
        description="Knowledge base ingestion and semantic search",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = InvalidRequestError(
            "Invalid request",
            hint="Check the request fields against the operation",
            details={"errors": [
                {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
                for e in exc.errors()
            ]},
        )
        return JSONResponse(status_code=400, content=to_error_response(error, None).to_wire())

    app.include_router(knowledge_router)
    app.include_router(health_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
