"""
HTTP API for cotflow.
"""

from .app import create_app
from .router import create_router

__all__ = ["create_app", "create_router", "start_server"]


def start_server(
    host: str = "0.0.0.0",
    port: int = 8900,
    reload: bool = False,
    **kwargs,
):
    """Start the standalone API server.

    Args:
        host: Bind host
        port: Bind port
        reload: Enable auto-reload for development
        **kwargs: Additional uvicorn arguments
    """
    import uvicorn

    uvicorn.run(
        "cotflow.api.app:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
        **kwargs,
    )
