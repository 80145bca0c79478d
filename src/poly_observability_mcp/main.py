# FastAPI application entry point
# Defines the HTTP transport app and its lifecycle

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI
from pydantic import BaseModel

from . import __version__
from .api import tools
from .config import settings
from .services.gateway import Gateway

logger = logging.getLogger(__name__)

GatewayFactory = Callable[[], Gateway]


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    tools: int = 0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    # Startup
    gateway: Optional[Gateway] = getattr(app.state, "gateway", None)
    if gateway is None or gateway.stopped:
        # A stopped gateway cannot be restarted; each run gets a new one
        factory: Optional[GatewayFactory] = getattr(app.state, "gateway_factory", None)
        if factory is None:
            raise RuntimeError("Gateway was stopped and the app has no gateway_factory")
        gateway = factory()
        app.state.gateway = gateway

    if not gateway.started:
        await gateway.start()
    logger.info("Gateway initialization complete")

    yield

    # Shutdown
    logger.info("Shutting down poly-observability-mcp...")
    await gateway.stop()
    logger.info("Shutdown complete")


def _gateway_from_settings() -> Gateway:
    logger.info(f"Loading gateway configuration from {settings.config_path}")
    return Gateway.from_config_file(settings.config_path)


def create_app(
    gateway: Optional[Gateway] = None, gateway_factory: Optional[GatewayFactory] = None
) -> FastAPI:
    """Build the HTTP app.

    Args:
        gateway: Already configured gateway, used for the first run only
        gateway_factory: Builds a gateway for every later run. Defaults to
            loading the configuration file when no gateway is given.
    """
    if gateway is None and gateway_factory is None:
        gateway_factory = _gateway_from_settings

    app = FastAPI(
        title="poly-observability-mcp",
        description="Unified MCP gateway for observability backends",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.gateway_factory = gateway_factory
    if gateway is not None:
        app.state.gateway = gateway

    app.include_router(tools.router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "Welcome to poly-observability-mcp"}

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Health check endpoint."""
        current = getattr(app.state, "gateway", None)
        if current is None or not current.started:
            return HealthResponse(status="starting", message="Gateway not initialized")
        return HealthResponse(
            status="healthy", message="Service is running", tools=len(current.registry)
        )

    return app


app = create_app()
