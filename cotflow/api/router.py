"""
Main API router - aggregates all sub-routers.
"""

from fastapi import APIRouter


def create_router(prefix: str = "") -> APIRouter:
    """
    Create the main API router.

    Args:
        prefix: URL prefix for all routes

    Example:
        from fastapi import FastAPI
        from cotflow.api import create_router

        app = FastAPI()
        app.include_router(create_router(prefix="/cotflow"))
    """
    from .routes import agents, health, tools

    router = APIRouter(prefix=prefix)
    router.include_router(health.router, tags=["Health"])
    router.include_router(agents.router, tags=["Agents"])
    router.include_router(tools.router, tags=["Tools"])
    return router
