"""
FastAPI Router for the public installation status page.
"""
from fastapi import APIRouter, Depends, HTTPException

from solarview.core.dependencies import get_installation_repository
from solarview.core.exceptions import NotFoundError
from solarview.installations.repository import InstallationRepository
from solarview.tracking.service import TrackingPage, build_tracking_page

router = APIRouter(tags=["Tracking"])


@router.get("/{installation_id}", response_model=TrackingPage)
def read_tracking_page(
    installation_id: int,
    repository: InstallationRepository = Depends(get_installation_repository)
) -> TrackingPage:
    """Customer-facing progress of one installation."""
    try:
        installation = repository.find(installation_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Instalação não encontrada")
    return build_tracking_page(installation)
