import json
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Routers
from .routers.prediction import router as prediction_router

# Core modules
from .core.config import settings
from .core.logging import configure_logging, CorrelationIdMiddleware
from .core.metrics import PREDICTION_OUTCOMES, PromMiddleware, metrics_endpoint
from .core.utils import truncate
from .errors import MethodNotAllowed, PredictionError

logger = logging.getLogger(__name__)

def _diagnostics(exc: PredictionError) -> str:
    parts = [f"{exc.kind}: {exc.message}"]
    if exc.details is not None:
        parts.append(f"details={truncate(exc.details)}")
    if exc.raw is not None:
        parts.append(f"raw={truncate(exc.raw)}")
    if exc.prediction is not None:
        parts.append(f"prediction={truncate(json.dumps(exc.prediction, default=str))}")
    return " ".join(parts)

async def prediction_error_handler(request: Request, exc: PredictionError):
    """
    Renders every prediction failure as {"error": ..., ...} with its status.
    """
    log = logger.warning if exc.status_code < 500 else logger.error
    log("%s %s failed: %s", request.method, request.url.path, _diagnostics(exc))
    PREDICTION_OUTCOMES.labels(outcome=exc.kind).inc()
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """
    Keeps framework errors (404, 405) in the same envelope as ours.
    """
    headers = getattr(exc, "headers", None)
    if exc.status_code == 405:
        err = MethodNotAllowed()
        logger.warning("%s %s rejected: %s", request.method, request.url.path, err.message)
        return JSONResponse(status_code=err.status_code, content=err.to_payload(), headers=headers)
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=headers)

def create_app() -> FastAPI:
    """
    App factory so tests and ASGI servers can instantiate cleanly.
    """
    configure_logging()  # Set up JSON logs + request-id context

    app = FastAPI(
        title="Resale Price Prediction API",
        version="1.0.0",
        description="Estimates used-market pricing for a product description using an LLM completion service.",
    )

    # CORS: allow the static front-end to call the API.
    allow_origins = [o.strip() for o in settings.ALLOW_ORIGINS.split(",")] if settings.ALLOW_ORIGINS else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    # Observability middlewares
    app.add_middleware(CorrelationIdMiddleware)  # Adds/propagates X-Request-Id
    if settings.PROMETHEUS_ENABLED:
        app.add_middleware(PromMiddleware)       # Records req/latency metrics

    app.add_exception_handler(PredictionError, prediction_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # Meta routes
    @app.get("/v1/health", tags=["meta"])
    def health():
        return {"status": "ok"}

    @app.get("/v1/ping", tags=["meta"])
    def ping():
        return {"pong": True}

    if settings.PROMETHEUS_ENABLED:
        # Standard Prometheus scrape endpoint
        app.add_route("/v1/metrics", metrics_endpoint, methods=["GET"])

    # Business routes
    app.include_router(prediction_router, prefix="/v1", tags=["prediction"])

    return app

app = create_app()
