"""
SolarView Pro - Solar installation tracking API.
Back-office for installers and administrators: status workflow, Kanban boards,
installer field reports and the public tracking page.
"""
from typing import Callable, Awaitable, Dict, Any
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import time
from uuid import uuid4

from solarview.core.config import settings
from solarview.core.database import init_db
from solarview.core.logger import logger
from solarview.board.router import router as board_router
from solarview.calendar.router import router as calendar_router
from solarview.catalog.router import router as catalog_router
from solarview.clients.router import router as clients_router
from solarview.equipment.router import router as equipment_router
from solarview.installations.router import router as installations_router
from solarview.reports.router import router as reports_router
from solarview.tracking.router import router as tracking_router
from solarview.workflow.router import router as workflow_router
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management (startup/shutdown hooks)."""
    # Startup
    logger.info(f"Initializing {settings.APP_NAME} v{settings.VERSION}")
    init_db()
    logger.info("Database initialized")

    yield

    # Shutdown
    logger.info("Shutting down application")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description=(
        "Solar installation tracking: protocol, project approval, scheduling, "
        "installation, homologation and installer reports."
    ),
    lifespan=lifespan
)

# Trust X-Forwarded-Proto headers from the load balancer
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_correlation_id(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """
    Middleware for distributed tracing.
    Injects a unique Correlation ID into the request context and propagates it to the response headers.
    """
    correlation_id = request.headers.get("X-Correlation-ID", str(uuid4()))
    request.state.correlation_id = correlation_id

    start_time = time.time()

    logger.info(
        f"Request: {request.method} {request.url.path}",
        extra={"correlation_id": correlation_id}
    )

    response = await call_next(request)

    process_time = time.time() - start_time
    response.headers["X-Correlation-ID"] = correlation_id
    response.headers["X-Process-Time"] = str(process_time)

    logger.info(
        f"Response: {response.status_code} | {process_time:.3f}s",
        extra={"correlation_id": correlation_id}
    )

    return response


# Router Registration
app.include_router(catalog_router, prefix="/status-catalog")
app.include_router(installations_router, prefix="/installations")
app.include_router(workflow_router, prefix="/installations")
app.include_router(board_router, prefix="/board")
app.include_router(clients_router, prefix="/clients")
app.include_router(equipment_router, prefix="/equipment")
app.include_router(reports_router, prefix="/reports")
app.include_router(calendar_router, prefix="/calendar")
app.include_router(tracking_router, prefix="/tracking")


@app.get("/api-info", tags=["Health"])
def api_info() -> Dict[str, Any]:
    """
    Endpoint exposing API metadata and service discovery links.
    """
    return {
        "app": settings.APP_NAME,
        "version": settings.VERSION,
        "status": "online",
        "endpoints": {
            "status_catalog": "/status-catalog",
            "installations": "/installations",
            "board": "/board/{track}",
            "clients": "/clients",
            "equipment": "/equipment",
            "reports": "/reports",
            "calendar": "/calendar",
            "tracking": "/tracking/{installation_id}",
            "docs": "/docs",
            "redoc": "/redoc"
        }
    }


@app.get("/health", tags=["Health"])
def health_check() -> Dict[str, str]:
    """
    Liveness probe endpoint for orchestration systems.
    """
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.VERSION
    }


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    correlation_id = getattr(request.state, "correlation_id", "N/A")

    logger.info(
        f"HTTPException: {exc.status_code} | {exc.detail}",
        extra={"correlation_id": correlation_id}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "correlation_id": correlation_id}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception barrier.
    Captures unhandled exceptions, logs stack traces with Correlation IDs,
    and returns a sanitized 500 Internal Server Error response.
    """
    correlation_id = getattr(request.state, "correlation_id", "N/A")

    logger.error(
        f"Unhandled exception: {str(exc)}",
        exc_info=True,
        extra={"correlation_id": correlation_id}
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal Server Error",
            "correlation_id": correlation_id
        }
    )
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "solarview.main:app",
        host="0.0.0.0",  # nosec
        port=8000,
        reload=settings.DEBUG
    )
