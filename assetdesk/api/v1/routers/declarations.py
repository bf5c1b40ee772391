from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from assetdesk.api.v1.dependencies import (
    get_current_principal,
    get_declaration_service,
    require_admin,
)
from assetdesk.core.schemas import DataOut, MessageOut
from assetdesk.features.declarations.schemas import (
    DeclarationCreateIn,
    DeclarationGroupedOut,
    DeclarationOut,
    DeclarationProcessIn,
    DeclarationUpdateIn,
)
from assetdesk.features.declarations.services import DeclarationService
from assetdesk.security.principals import AdminPrincipal, Principal

router = APIRouter(
    tags=["declarations"],
    responses={403: {"description": "Forbidden"}, 404: {"description": "Not Found"}},
)

# -----------------------------
# Listes
# -----------------------------
@router.get(
    "/declarations",
    summary="Lister les déclarations",
    description="Admin : toutes. Employé : les siennes.",
    response_model=DataOut[List[DeclarationOut]],
)
def list_declarations(
    principal: Principal = Depends(get_current_principal),
    svc: DeclarationService = Depends(get_declaration_service),
):
    return DataOut[List[DeclarationOut]](data=svc.index(principal))


@router.get(
    "/all-declarations",
    summary="Toutes les déclarations, regroupées par statut (admin)",
    description="Filtre `status` limité à pending / approved / rejected ; toute autre valeur est ignorée.",
    response_model=DeclarationGroupedOut,
)
def all_declarations(
    status_filter: Optional[str] = Query(None, alias="status"),
    _: AdminPrincipal = Depends(require_admin),
    svc: DeclarationService = Depends(get_declaration_service),
):
    return svc.list_all(status_filter)


@router.get(
    "/my-declarations",
    summary="Mes déclarations, regroupées par statut",
    description="Employé : les siennes. Admin : toutes.",
    response_model=DeclarationGroupedOut,
)
def my_declarations(
    status_filter: Optional[str] = Query(None, alias="status"),
    principal: Principal = Depends(get_current_principal),
    svc: DeclarationService = Depends(get_declaration_service),
):
    return svc.list_by_employer(principal, status=status_filter)

# -----------------------------
# CRUD
# -----------------------------
@router.post(
    "/declarations",
    summary="Déclarer un incident (employé)",
    status_code=status.HTTP_201_CREATED,
    response_model=DataOut[DeclarationOut],
)
def create_declaration(
    payload: DeclarationCreateIn,
    principal: Principal = Depends(get_current_principal),
    svc: DeclarationService = Depends(get_declaration_service),
):
    declaration = svc.create(principal, payload.model_dump())
    return DataOut[DeclarationOut](message="Declaration created successfully", data=declaration)


@router.get("/declarations/{declaration_id}", summary="Détail d'une déclaration", response_model=DataOut[DeclarationOut])
def get_declaration(
    declaration_id: int = Path(...),
    principal: Principal = Depends(get_current_principal),
    svc: DeclarationService = Depends(get_declaration_service),
):
    return DataOut[DeclarationOut](data=svc.show(declaration_id, principal))


@router.put(
    "/declarations/{declaration_id}",
    summary="Modifier une déclaration",
    description=(
        "Employé : issue_title / description uniquement. "
        "Admin : status / admin_comment uniquement. Les autres champs sont ignorés."
    ),
    response_model=DataOut[DeclarationOut],
)
def update_declaration(
    payload: DeclarationUpdateIn,
    declaration_id: int = Path(...),
    principal: Principal = Depends(get_current_principal),
    svc: DeclarationService = Depends(get_declaration_service),
):
    message, declaration = svc.update(declaration_id, principal, payload.model_dump(exclude_unset=True))
    return DataOut[DeclarationOut](message=message, data=declaration)


@router.delete("/declarations/{declaration_id}", summary="Supprimer une déclaration", response_model=MessageOut)
def delete_declaration(
    declaration_id: int = Path(...),
    principal: Principal = Depends(get_current_principal),
    svc: DeclarationService = Depends(get_declaration_service),
):
    svc.delete(declaration_id, principal)
    return MessageOut(message="Declaration deleted successfully")

# -----------------------------
# Traitement admin
# -----------------------------
@router.post(
    "/declarations/{declaration_id}/process",
    summary="Approuver ou rejeter (admin)",
    description="status ∈ {approved, rejected} ; resolved passe par PUT /declarations/{id}.",
    response_model=DataOut[DeclarationOut],
)
def process_declaration(
    payload: DeclarationProcessIn,
    declaration_id: int = Path(...),
    principal: AdminPrincipal = Depends(require_admin),
    svc: DeclarationService = Depends(get_declaration_service),
):
    message, declaration = svc.process(declaration_id, principal, payload.model_dump())
    return DataOut[DeclarationOut](message=message, data=declaration)
