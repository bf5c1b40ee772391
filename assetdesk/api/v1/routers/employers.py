from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from assetdesk.api.v1.dependencies import (
    get_declaration_service,
    get_employer_service,
    require_admin,
)
from assetdesk.features.declarations.schemas import DeclarationGroupedOut
from assetdesk.features.declarations.services import DeclarationService
from assetdesk.features.employers.schemas import (
    EmployerCreateIn,
    EmployerEnvelope,
    EmployerListOut,
    EmployerMessageOut,
    EmployerSearchIn,
    EmployerUpdateIn,
    ToggleActiveOut,
)
from assetdesk.features.employers.services import EmployerService
from assetdesk.security.principals import AdminPrincipal

router = APIRouter(
    prefix="/employers",
    tags=["employers"],
    responses={404: {"description": "Not Found"}},
)

# Pas de suppression : un employé se désactive (toggle-active)


@router.get("", summary="Lister les employés", response_model=EmployerListOut)
def list_employers(
    _: AdminPrincipal = Depends(require_admin),
    svc: EmployerService = Depends(get_employer_service),
):
    return EmployerListOut(employers=svc.list())


@router.post(
    "",
    summary="Créer un employé",
    description="Crée User + Employer, génère un mot de passe et l'envoie par email. Tout ou rien.",
    status_code=status.HTTP_201_CREATED,
    response_model=EmployerMessageOut,
)
def create_employer(
    payload: EmployerCreateIn,
    _: AdminPrincipal = Depends(require_admin),
    svc: EmployerService = Depends(get_employer_service),
):
    employer = svc.create(payload)
    return EmployerMessageOut(message="Employer created successfully", employer=employer)


@router.post("/search", summary="Rechercher par nom complet", response_model=EmployerListOut)
def search_employers(
    payload: EmployerSearchIn,
    _: AdminPrincipal = Depends(require_admin),
    svc: EmployerService = Depends(get_employer_service),
):
    return EmployerListOut(employers=svc.search(payload.name))


@router.get("/{employer_id}", summary="Détail d'un employé", response_model=EmployerEnvelope)
def get_employer(
    employer_id: int = Path(...),
    _: AdminPrincipal = Depends(require_admin),
    svc: EmployerService = Depends(get_employer_service),
):
    return EmployerEnvelope(employer=svc.get(employer_id))


@router.put("/{employer_id}", summary="Modifier un employé", response_model=EmployerMessageOut)
def update_employer(
    payload: EmployerUpdateIn,
    employer_id: int = Path(...),
    _: AdminPrincipal = Depends(require_admin),
    svc: EmployerService = Depends(get_employer_service),
):
    employer = svc.update(employer_id, payload)
    return EmployerMessageOut(message="Employer updated successfully", employer=employer)


@router.patch(
    "/{employer_id}/toggle-active",
    summary="Activer / désactiver un employé",
    description="Les tokens déjà émis restent valides ; seule la connexion est refusée.",
    response_model=ToggleActiveOut,
)
def toggle_active(
    employer_id: int = Path(...),
    _: AdminPrincipal = Depends(require_admin),
    svc: EmployerService = Depends(get_employer_service),
):
    is_active = svc.toggle_active(employer_id)
    return ToggleActiveOut(message="Employer status updated successfully", is_active=is_active)


@router.get(
    "/{employer_id}/declarations",
    summary="Déclarations d'un employé",
    response_model=DeclarationGroupedOut,
)
def employer_declarations(
    employer_id: int = Path(...),
    status_filter: Optional[str] = Query(None, alias="status"),
    principal: AdminPrincipal = Depends(require_admin),
    svc: DeclarationService = Depends(get_declaration_service),
):
    return svc.list_by_employer(principal, employer_id=employer_id, status=status_filter)
