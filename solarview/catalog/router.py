"""
FastAPI Router for the status catalog (settings screen).
"""
from typing import List
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Header

from solarview.catalog.schemas import (
    StatusCategory,
    StatusConfig,
    StatusLabelRequest,
    StatusRenameRequest,
    StatusReorderRequest,
)
from solarview.catalog.service import StatusCatalog
from solarview.core.exceptions import InvalidInputError
from solarview.core.logger import audit_log, get_logger_with_correlation
from solarview.core.dependencies import get_status_catalog

router = APIRouter(tags=["Status Catalog"])


@router.get("/", response_model=StatusConfig)
def read_status_config(catalog: StatusCatalog = Depends(get_status_catalog)) -> StatusConfig:
    """Returns the three catalogs, initialized to the defaults when nothing was saved yet."""
    return catalog.load()


@router.put("/", response_model=StatusConfig)
def save_status_config(
    data: StatusConfig,
    catalog: StatusCatalog = Depends(get_status_catalog),
    x_correlation_id: str = Header(default=None)
) -> StatusConfig:
    """
    **Salvar Todas as Alterações**

    Replaces the three catalogs at once. Installations holding removed labels are not migrated.
    """
    correlation_id = x_correlation_id or str(uuid4())
    config = catalog.replace_config(data)
    audit_log(
        action="status_catalog_replaced",
        user="admin",
        resource="statusConfig",
        details={"correlation_id": correlation_id, **config.model_dump()}
    )
    return config


@router.get("/{category}", response_model=List[str])
def list_statuses(
    category: StatusCategory,
    catalog: StatusCatalog = Depends(get_status_catalog)
) -> List[str]:
    return catalog.list_statuses(category)


def _apply(action: str, category: StatusCategory, correlation_id: str, operation, **details) -> List[str]:
    logger = get_logger_with_correlation(correlation_id)
    try:
        labels = operation()
    except InvalidInputError as e:
        logger.warning(f"Status catalog rejected {action}: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))

    audit_log(
        action=f"status_{action}",
        user="admin",
        resource=f"statusConfig.{category.value}",
        details={"correlation_id": correlation_id, **details}
    )
    return labels


@router.post("/{category}", response_model=List[str], status_code=201)
def add_status(
    category: StatusCategory,
    data: StatusLabelRequest,
    catalog: StatusCatalog = Depends(get_status_catalog),
    x_correlation_id: str = Header(default=None)
) -> List[str]:
    return _apply(
        "added", category, x_correlation_id or str(uuid4()),
        lambda: catalog.add_status(category, data.label),
        label=data.label
    )


@router.patch("/{category}/rename", response_model=List[str])
def rename_status(
    category: StatusCategory,
    data: StatusRenameRequest,
    catalog: StatusCatalog = Depends(get_status_catalog),
    x_correlation_id: str = Header(default=None)
) -> List[str]:
    return _apply(
        "renamed", category, x_correlation_id or str(uuid4()),
        lambda: catalog.rename_status(category, data.old, data.new),
        old=data.old, new=data.new
    )


@router.put("/{category}/order", response_model=List[str])
def reorder_statuses(
    category: StatusCategory,
    data: StatusReorderRequest,
    catalog: StatusCatalog = Depends(get_status_catalog),
    x_correlation_id: str = Header(default=None)
) -> List[str]:
    return _apply(
        "reordered", category, x_correlation_id or str(uuid4()),
        lambda: catalog.reorder(category, data.order),
        order=data.order
    )


@router.delete("/{category}/{label}", response_model=List[str])
def delete_status(
    category: StatusCategory,
    label: str,
    catalog: StatusCatalog = Depends(get_status_catalog),
    x_correlation_id: str = Header(default=None)
) -> List[str]:
    return _apply(
        "deleted", category, x_correlation_id or str(uuid4()),
        lambda: catalog.delete_status(category, label),
        label=label
    )
