from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from assetdesk.api.v1.dependencies import get_equipment_service, require_admin
from assetdesk.core.schemas import DataOut, MessageOut
from assetdesk.db.models.equipments import EquipmentStatus
from assetdesk.features.assets.schemas import EquipmentCreateIn, EquipmentOut, EquipmentUpdateIn
from assetdesk.features.assets.services import EquipmentService

router = APIRouter(
    prefix="/equipments",
    tags=["equipments"],
    dependencies=[Depends(require_admin)],
    responses={404: {"description": "Not Found"}},
)


@router.get("", summary="Lister le matériel", response_model=DataOut[List[EquipmentOut]])
def list_equipments(
    status_filter: Optional[EquipmentStatus] = Query(None, alias="status", description="active | on_hold | in_progress"),
    svc: EquipmentService = Depends(get_equipment_service),
):
    items = svc.list(status=status_filter)
    return DataOut[List[EquipmentOut]](data=items)


@router.post(
    "",
    summary="Créer un équipement",
    status_code=status.HTTP_201_CREATED,
    response_model=DataOut[EquipmentOut],
)
def create_equipment(payload: EquipmentCreateIn, svc: EquipmentService = Depends(get_equipment_service)):
    equipment = svc.create(payload)
    return DataOut[EquipmentOut](message="Equipment created successfully", data=EquipmentOut.model_validate(equipment))


@router.get("/{equipment_id}", summary="Détail d'un équipement", response_model=DataOut[EquipmentOut])
def get_equipment(
    equipment_id: int = Path(...),
    svc: EquipmentService = Depends(get_equipment_service),
):
    return DataOut[EquipmentOut](data=EquipmentOut.model_validate(svc.get(equipment_id)))


@router.put("/{equipment_id}", summary="Modifier un équipement", response_model=DataOut[EquipmentOut])
def update_equipment(
    payload: EquipmentUpdateIn,
    equipment_id: int = Path(...),
    svc: EquipmentService = Depends(get_equipment_service),
):
    equipment = svc.update(equipment_id, payload)
    return DataOut[EquipmentOut](message="Equipment updated successfully", data=EquipmentOut.model_validate(equipment))


@router.delete(
    "/{equipment_id}",
    summary="Supprimer un équipement",
    description="Supprime aussi ses interventions (et leurs maintenances) et ses licences.",
    response_model=MessageOut,
)
def delete_equipment(
    equipment_id: int = Path(...),
    svc: EquipmentService = Depends(get_equipment_service),
):
    svc.delete(equipment_id)
    return MessageOut(message="Equipment deleted successfully")
