# Unified MCP gateway for observability backends
# Main module initialization

import sys

__version__ = "1.0.0"

from .main import app as app  # noqa: E402


def main() -> None:
    """CLI entry point for the application."""
    from .config import configure_logging, settings

    configure_logging(settings.log_level)

    # Check if running as HTTP API
    if "--http" in sys.argv:
        import uvicorn

        uvicorn.run("poly_observability_mcp.main:app", host=settings.host, port=settings.port)
    else:
        # Run as MCP server using stdio transport
        import asyncio

        from .mcp_server import run_stdio
        from .services.gateway import Gateway

        gateway = Gateway.from_config_file(settings.config_path)
        asyncio.run(run_stdio(gateway))
