from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from assetdesk.api.v1.dependencies import get_intervention_service, require_admin
from assetdesk.core.schemas import DataOut, MessageOut
from assetdesk.features.assets.schemas import InterventionCreateIn, InterventionOut, InterventionUpdateIn
from assetdesk.features.assets.services import InterventionService

router = APIRouter(
    prefix="/interventions",
    tags=["interventions"],
    dependencies=[Depends(require_admin)],
    responses={404: {"description": "Not Found"}},
)


@router.get("", summary="Lister les interventions", response_model=DataOut[List[InterventionOut]])
def list_interventions(
    equipment_id: Optional[int] = Query(None, ge=1),
    svc: InterventionService = Depends(get_intervention_service),
):
    items = svc.list(equipment_id=equipment_id)
    return DataOut[List[InterventionOut]](data=items)


@router.post(
    "",
    summary="Enregistrer une intervention",
    status_code=status.HTTP_201_CREATED,
    response_model=DataOut[InterventionOut],
)
def create_intervention(payload: InterventionCreateIn, svc: InterventionService = Depends(get_intervention_service)):
    intervention = svc.create(payload)
    return DataOut[InterventionOut](
        message="Intervention created successfully",
        data=InterventionOut.model_validate(intervention),
    )


@router.get("/{intervention_id}", summary="Détail d'une intervention", response_model=DataOut[InterventionOut])
def get_intervention(
    intervention_id: int = Path(...),
    svc: InterventionService = Depends(get_intervention_service),
):
    return DataOut[InterventionOut](data=InterventionOut.model_validate(svc.get(intervention_id)))


@router.put("/{intervention_id}", summary="Modifier une intervention", response_model=DataOut[InterventionOut])
def update_intervention(
    payload: InterventionUpdateIn,
    intervention_id: int = Path(...),
    svc: InterventionService = Depends(get_intervention_service),
):
    intervention = svc.update(intervention_id, payload)
    return DataOut[InterventionOut](
        message="Intervention updated successfully",
        data=InterventionOut.model_validate(intervention),
    )


@router.delete("/{intervention_id}", summary="Supprimer une intervention", response_model=MessageOut)
def delete_intervention(
    intervention_id: int = Path(...),
    svc: InterventionService = Depends(get_intervention_service),
):
    svc.delete(intervention_id)
    return MessageOut(message="Intervention deleted successfully")
