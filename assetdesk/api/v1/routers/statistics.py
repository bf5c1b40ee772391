from typing import Any, Dict

from fastapi import APIRouter, Depends

from assetdesk.api.v1.dependencies import get_statistics_service, require_admin, require_employer
from assetdesk.features.statistics.services import StatisticsService
from assetdesk.security.principals import AdminPrincipal, EmployerPrincipal

router = APIRouter(tags=["statistics"])


@router.get(
    "/statistics",
    summary="Tableau de bord admin",
    description="Agrégats globaux, mis en cache quelques minutes.",
    response_model=Dict[str, Any],
)
def admin_statistics(
    _: AdminPrincipal = Depends(require_admin),
    svc: StatisticsService = Depends(get_statistics_service),
):
    return svc.admin_statistics()


@router.get(
    "/my-statistics",
    summary="Tableau de bord employé",
    description="Agrégats limités à l'employé connecté et à son matériel.",
    response_model=Dict[str, Any],
)
def employer_statistics(
    principal: EmployerPrincipal = Depends(require_employer),
    svc: StatisticsService = Depends(get_statistics_service),
):
    return svc.employer_statistics(principal.employer_id)
