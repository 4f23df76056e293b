"""Health check endpoint."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from nas_api.core.config import Settings
from nas_api.core.state import get_settings_dep
from nas_api.schemas import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(settings: Annotated[Settings, Depends(get_settings_dep)]) -> HealthResponse:
    """
    Return service health status. No authentication.
    Used by load balancers and monitoring.
    """
    return HealthResponse(environment=settings.APP_ENV, timestamp=datetime.now(UTC))
