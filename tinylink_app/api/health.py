from fastapi import APIRouter
from tinylink_app.config import settings
from tinylink_app.schemas.link import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(ok=True, version=settings.app_version)
