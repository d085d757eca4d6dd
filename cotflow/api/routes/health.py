"""
Health check routes.
"""

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel

from cotflow import __version__

router = APIRouter(prefix="/health")


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str


@router.get("", response_model=HealthResponse)
async def health_check():
    """Basic health check."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now().isoformat(),
    )
