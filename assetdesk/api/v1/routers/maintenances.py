from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from assetdesk.api.v1.dependencies import get_maintenance_service, require_admin
from assetdesk.core.schemas import DataOut, MessageOut
from assetdesk.features.assets.schemas import MaintenanceCreateIn, MaintenanceOut, MaintenanceUpdateIn
from assetdesk.features.assets.services import MaintenanceService

router = APIRouter(
    prefix="/maintenances",
    tags=["maintenances"],
    dependencies=[Depends(require_admin)],
    responses={404: {"description": "Not Found"}},
)


@router.get("", summary="Lister les maintenances", response_model=DataOut[List[MaintenanceOut]])
def list_maintenances(
    intervention_id: Optional[int] = Query(None, ge=1),
    svc: MaintenanceService = Depends(get_maintenance_service),
):
    items = svc.list(intervention_id=intervention_id)
    return DataOut[List[MaintenanceOut]](data=[MaintenanceOut.model_validate(m) for m in items])


@router.post(
    "",
    summary="Planifier une maintenance",
    status_code=status.HTTP_201_CREATED,
    response_model=DataOut[MaintenanceOut],
)
def create_maintenance(payload: MaintenanceCreateIn, svc: MaintenanceService = Depends(get_maintenance_service)):
    maintenance = svc.create(payload)
    return DataOut[MaintenanceOut](
        message="Maintenance created successfully",
        data=MaintenanceOut.model_validate(maintenance),
    )


@router.get("/{maintenance_id}", summary="Détail d'une maintenance", response_model=DataOut[MaintenanceOut])
def get_maintenance(
    maintenance_id: int = Path(...),
    svc: MaintenanceService = Depends(get_maintenance_service),
):
    return DataOut[MaintenanceOut](data=MaintenanceOut.model_validate(svc.get(maintenance_id)))


@router.put(
    "/{maintenance_id}",
    summary="Modifier une maintenance",
    description="performed_date, next_maintenance_date et observations peuvent être remis à null.",
    response_model=DataOut[MaintenanceOut],
)
def update_maintenance(
    payload: MaintenanceUpdateIn,
    maintenance_id: int = Path(...),
    svc: MaintenanceService = Depends(get_maintenance_service),
):
    maintenance = svc.update(maintenance_id, payload)
    return DataOut[MaintenanceOut](
        message="Maintenance updated successfully",
        data=MaintenanceOut.model_validate(maintenance),
    )


@router.delete("/{maintenance_id}", summary="Supprimer une maintenance", response_model=MessageOut)
def delete_maintenance(
    maintenance_id: int = Path(...),
    svc: MaintenanceService = Depends(get_maintenance_service),
):
    svc.delete(maintenance_id)
    return MessageOut(message="Maintenance deleted successfully")
