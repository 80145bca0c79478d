# API package
# Contains HTTP endpoints for tool discovery and invocation

from . import tools

__all__ = ["tools"]
