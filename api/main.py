import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError

from api.deps import get_service_config
from api.routes.elevator_conf import router as elevator_conf_router
from core.config import ServiceConfig
from infrastructure.metrics import get_metrics_response

logger = logging.getLogger(__name__)


def create_app(config: ServiceConfig | None = None) -> FastAPI:
    """Build the FastAPI app.

    Args:
        config: Service configuration. Read from the environment when omitted;
            when given, it also decides which database the store uses.
    """
    app = FastAPI(title="Elevator State Service")
    if config is None:
        config = get_service_config()
    else:
        app.dependency_overrides[get_service_config] = lambda: config
    config.configure_logging()

    # CORS: allow the elevator dashboard (React dev server) to call the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(elevator_conf_router, prefix=config.api_prefix)

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Answer storage-engine failures with a generic 500."""
        logger.exception(
            "Storage failure on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(status_code=500, content={"detail": "Storage error"})

    @app.get(f"{config.api_prefix}/health")
    def health() -> dict[str, str]:
        """Return a simple liveness check."""
        return {"status": "ok"}

    @app.get(f"{config.api_prefix}/status")
    def status() -> dict[str, str]:
        """Return a short readiness string for probes."""
        return {"status": "OK"}

    @app.get(f"{config.api_prefix}/metrics")
    def metrics() -> Response:
        """Prometheus metrics endpoint in text exposition format."""
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


app = create_app()
