from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from assetdesk.api.v1.dependencies import get_license_service, require_admin
from assetdesk.core.schemas import DataOut, MessageOut
from assetdesk.features.assets.schemas import LicenseCreateIn, LicenseOut, LicenseUpdateIn
from assetdesk.features.assets.services import LicenseService

router = APIRouter(
    prefix="/licenses",
    tags=["licenses"],
    dependencies=[Depends(require_admin)],
    responses={404: {"description": "Not Found"}},
)


@router.get("", summary="Lister les licences", response_model=DataOut[List[LicenseOut]])
def list_licenses(
    equipment_id: Optional[int] = Query(None, ge=1),
    svc: LicenseService = Depends(get_license_service),
):
    items = svc.list(equipment_id=equipment_id)
    return DataOut[List[LicenseOut]](data=[LicenseOut.model_validate(x) for x in items])


@router.post(
    "",
    summary="Ajouter une licence",
    status_code=status.HTTP_201_CREATED,
    response_model=DataOut[LicenseOut],
)
def create_license(payload: LicenseCreateIn, svc: LicenseService = Depends(get_license_service)):
    license_ = svc.create(payload)
    return DataOut[LicenseOut](message="License created successfully", data=LicenseOut.model_validate(license_))


@router.get("/{license_id}", summary="Détail d'une licence", response_model=DataOut[LicenseOut])
def get_license(
    license_id: int = Path(...),
    svc: LicenseService = Depends(get_license_service),
):
    return DataOut[LicenseOut](data=LicenseOut.model_validate(svc.get(license_id)))


@router.put("/{license_id}", summary="Modifier une licence", response_model=DataOut[LicenseOut])
def update_license(
    payload: LicenseUpdateIn,
    license_id: int = Path(...),
    svc: LicenseService = Depends(get_license_service),
):
    license_ = svc.update(license_id, payload)
    return DataOut[LicenseOut](message="License updated successfully", data=LicenseOut.model_validate(license_))


@router.delete("/{license_id}", summary="Supprimer une licence", response_model=MessageOut)
def delete_license(
    license_id: int = Path(...),
    svc: LicenseService = Depends(get_license_service),
):
    svc.delete(license_id)
    return MessageOut(message="License deleted successfully")
