from typing import List, Sequence

from fastapi import APIRouter, Depends, Path, status

from assetdesk.api.v1.dependencies import get_directory_service, require_admin
from assetdesk.core.schemas import MessageOut
from assetdesk.db.models.services import Service
from assetdesk.features.directory.schemas import (
    ServiceEnvelope,
    ServiceIn,
    ServiceListOut,
    ServiceMessageOut,
    ServiceOut,
    ServiceSearchIn,
)
from assetdesk.features.directory.services import DirectoryService

router = APIRouter(
    prefix="/services",
    tags=["services"],
    dependencies=[Depends(require_admin)],
    responses={404: {"description": "Not Found"}},
)


def _out_list(services: Sequence[Service]) -> List[ServiceOut]:
    return [ServiceOut.model_validate(s) for s in services]


@router.get("", summary="Lister les services", response_model=ServiceListOut)
def list_services(svc: DirectoryService = Depends(get_directory_service)):
    return ServiceListOut(services=_out_list(svc.list()))


@router.post(
    "",
    summary="Créer un service",
    status_code=status.HTTP_201_CREATED,
    response_model=ServiceMessageOut,
)
def create_service(payload: ServiceIn, svc: DirectoryService = Depends(get_directory_service)):
    service = svc.create(payload.name)
    return ServiceMessageOut(message="Service created successfully", service=ServiceOut.model_validate(service))


@router.post("/search", summary="Rechercher par nom", response_model=ServiceListOut)
def search_services(payload: ServiceSearchIn, svc: DirectoryService = Depends(get_directory_service)):
    return ServiceListOut(services=_out_list(svc.search(payload.name)))


@router.get("/{service_id}", summary="Détail d'un service", response_model=ServiceEnvelope)
def get_service(
    service_id: int = Path(...),
    svc: DirectoryService = Depends(get_directory_service),
):
    return ServiceEnvelope(service=ServiceOut.model_validate(svc.get(service_id)))


@router.put("/{service_id}", summary="Renommer un service", response_model=ServiceMessageOut)
def update_service(
    payload: ServiceIn,
    service_id: int = Path(...),
    svc: DirectoryService = Depends(get_directory_service),
):
    service = svc.update(service_id, payload.name)
    return ServiceMessageOut(message="Service updated successfully", service=ServiceOut.model_validate(service))


@router.delete(
    "/{service_id}",
    summary="Supprimer un service",
    description="Les employés rattachés sont d'abord réaffectés à un autre service (ou à « Default Service »).",
    response_model=MessageOut,
)
def delete_service(
    service_id: int = Path(...),
    svc: DirectoryService = Depends(get_directory_service),
):
    svc.delete(service_id)
    return MessageOut(message="Service deleted successfully")
