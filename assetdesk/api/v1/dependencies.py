"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_employer_service() : crée un EmployerService à partir d'une session DB.

get_current_principal() : résout le Bearer token en AdminPrincipal / EmployerPrincipal.

require_admin / require_employer : garde de rôle au niveau route (403 sinon).

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à remplacer dans les tests (app.dependency_overrides).
"""

from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from assetdesk.core.config import jwt_settings, settings
from assetdesk.core.errors import Forbidden, Unauthenticated
from assetdesk.db.session import get_session

from assetdesk.db.repositories.access_tokens import AccessTokenRepository
from assetdesk.db.repositories.declarations import DeclarationRepository
from assetdesk.db.repositories.employers import EmployerRepository
from assetdesk.db.repositories.equipments import EquipmentRepository
from assetdesk.db.repositories.interventions import InterventionRepository
from assetdesk.db.repositories.licenses import LicenseRepository
from assetdesk.db.repositories.maintenances import MaintenanceRepository
from assetdesk.db.repositories.services import ServiceRepository
from assetdesk.db.repositories.users import UserRepository

from assetdesk.features.assets.services import (
    EquipmentService,
    InterventionService,
    LicenseService,
    MaintenanceService,
)
from assetdesk.features.authentication.services import AuthService
from assetdesk.features.declarations.services import DeclarationService
from assetdesk.features.directory.services import DirectoryService
from assetdesk.features.employers.services import EmployerService
from assetdesk.features.statistics.cache import TTLCache
from assetdesk.features.statistics.services import StatisticsService

from assetdesk.security.principals import AdminPrincipal, EmployerPrincipal, Principal
from assetdesk.utils.mailer import Mailer, make_mailer


# -----------------------------
# Repositories
# -----------------------------
def get_user_repository(session: Session = Depends(get_session)) -> UserRepository:
    return UserRepository(session)

def get_employer_repository(session: Session = Depends(get_session)) -> EmployerRepository:
    return EmployerRepository(session)

def get_service_repository(session: Session = Depends(get_session)) -> ServiceRepository:
    return ServiceRepository(session)

def get_access_token_repository(session: Session = Depends(get_session)) -> AccessTokenRepository:
    return AccessTokenRepository(session)

def get_equipment_repository(session: Session = Depends(get_session)) -> EquipmentRepository:
    return EquipmentRepository(session)

def get_intervention_repository(session: Session = Depends(get_session)) -> InterventionRepository:
    return InterventionRepository(session)

def get_maintenance_repository(session: Session = Depends(get_session)) -> MaintenanceRepository:
    return MaintenanceRepository(session)

def get_license_repository(session: Session = Depends(get_session)) -> LicenseRepository:
    return LicenseRepository(session)

def get_declaration_repository(session: Session = Depends(get_session)) -> DeclarationRepository:
    return DeclarationRepository(session)


# -----------------------------
# Infrastructure
# -----------------------------
def get_mailer() -> Mailer:
    return make_mailer()


# Unique instance pour tout le processus ; remplacée dans les tests
_statistics_cache = TTLCache(settings.STATISTICS_CACHE_TTL_SECONDS)

def get_statistics_cache() -> TTLCache:
    return _statistics_cache


# -----------------------------
# Auth
# -----------------------------
def get_auth_service(
    session: Session = Depends(get_session),
    user_repo: UserRepository = Depends(get_user_repository),
    employer_repo: EmployerRepository = Depends(get_employer_repository),
    service_repo: ServiceRepository = Depends(get_service_repository),
    token_repo: AccessTokenRepository = Depends(get_access_token_repository),
) -> AuthService:
    return AuthService(
        session=session,
        user_repo=user_repo,
        employer_repo=employer_repo,
        service_repo=service_repo,
        token_repo=token_repo,
        jwt_settings=jwt_settings,
    )


bearer_scheme = HTTPBearer(auto_error=False)

def get_access_token_from_bearer(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> str:
    if not credentials or credentials.scheme.lower() != "bearer":
        raise Unauthenticated()
    return credentials.credentials


def get_current_principal(
    access_token: str = Depends(get_access_token_from_bearer),
    auth_svc: AuthService = Depends(get_auth_service),
) -> Principal:
    return auth_svc.resolve_principal(access_token)


def require_admin(principal: Principal = Depends(get_current_principal)) -> AdminPrincipal:
    if not isinstance(principal, AdminPrincipal):
        raise Forbidden()
    return principal


def require_employer(principal: Principal = Depends(get_current_principal)) -> EmployerPrincipal:
    if not isinstance(principal, EmployerPrincipal):
        raise Forbidden()
    return principal


# -----------------------------
# Feature services
# -----------------------------
def get_directory_service(
    session: Session = Depends(get_session),
    service_repo: ServiceRepository = Depends(get_service_repository),
    employer_repo: EmployerRepository = Depends(get_employer_repository),
) -> DirectoryService:
    return DirectoryService(session=session, service_repo=service_repo, employer_repo=employer_repo)


def get_employer_service(
    session: Session = Depends(get_session),
    employer_repo: EmployerRepository = Depends(get_employer_repository),
    user_repo: UserRepository = Depends(get_user_repository),
    service_repo: ServiceRepository = Depends(get_service_repository),
    mailer: Mailer = Depends(get_mailer),
) -> EmployerService:
    return EmployerService(
        session=session,
        employer_repo=employer_repo,
        user_repo=user_repo,
        service_repo=service_repo,
        mailer=mailer,
        password_length=settings.GENERATED_PASSWORD_LENGTH,
    )


def get_equipment_service(
    repo: EquipmentRepository = Depends(get_equipment_repository),
    employer_repo: EmployerRepository = Depends(get_employer_repository),
) -> EquipmentService:
    return EquipmentService(repo=repo, employer_repo=employer_repo)


def get_intervention_service(
    repo: InterventionRepository = Depends(get_intervention_repository),
    equipment_repo: EquipmentRepository = Depends(get_equipment_repository),
) -> InterventionService:
    return InterventionService(repo=repo, equipment_repo=equipment_repo)


def get_maintenance_service(
    repo: MaintenanceRepository = Depends(get_maintenance_repository),
    intervention_repo: InterventionRepository = Depends(get_intervention_repository),
) -> MaintenanceService:
    return MaintenanceService(repo=repo, intervention_repo=intervention_repo)


def get_license_service(
    repo: LicenseRepository = Depends(get_license_repository),
    equipment_repo: EquipmentRepository = Depends(get_equipment_repository),
) -> LicenseService:
    return LicenseService(repo=repo, equipment_repo=equipment_repo)


def get_declaration_service(
    repo: DeclarationRepository = Depends(get_declaration_repository),
    employer_repo: EmployerRepository = Depends(get_employer_repository),
) -> DeclarationService:
    return DeclarationService(repo=repo, employer_repo=employer_repo)


def get_statistics_service(
    cache: TTLCache = Depends(get_statistics_cache),
    user_repo: UserRepository = Depends(get_user_repository),
    employer_repo: EmployerRepository = Depends(get_employer_repository),
    service_repo: ServiceRepository = Depends(get_service_repository),
    equipment_repo: EquipmentRepository = Depends(get_equipment_repository),
    intervention_repo: InterventionRepository = Depends(get_intervention_repository),
    license_repo: LicenseRepository = Depends(get_license_repository),
    declaration_repo: DeclarationRepository = Depends(get_declaration_repository),
) -> StatisticsService:
    return StatisticsService(
        cache=cache,
        user_repo=user_repo,
        employer_repo=employer_repo,
        service_repo=service_repo,
        equipment_repo=equipment_repo,
        intervention_repo=intervention_repo,
        license_repo=license_repo,
        declaration_repo=declaration_repo,
    )
