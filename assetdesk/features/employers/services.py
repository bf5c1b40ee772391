import logging
from typing import List

from sqlmodel import Session

from assetdesk.core.errors import NotFound, TransactionFailed, ValidationFailed
from assetdesk.db.models.employers import Employer
from assetdesk.db.models.services import Service
from assetdesk.db.models.users import User, UserRole
from assetdesk.db.repositories.employers import EmployerRepository
from assetdesk.db.repositories.services import ServiceRepository
from assetdesk.db.repositories.users import UserRepository
from assetdesk.features.employers.schemas import EmployerCreateIn, EmployerOut, EmployerUpdateIn
from assetdesk.security.password import generate_password, hash_password
from assetdesk.utils.mailer import Mailer, build_credentials_email

logger = logging.getLogger(__name__)


class EmployerService:
    """
    Gestion des comptes employés (réservé aux admins).

    - create : User + Employer + email d'identifiants, tout ou rien.
    - update : champs User (nom, email) et Employer (poste, téléphone, service), tout ou rien.
    - toggle_active : bascule is_active, sans révoquer les tokens déjà émis.
    """

    def __init__(
        self,
        *,
        session: Session,
        employer_repo: EmployerRepository,
        user_repo: UserRepository,
        service_repo: ServiceRepository,
        mailer: Mailer,
        password_length: int = 10,
    ):
        self.session = session
        self.repo = employer_repo
        self.users = user_repo
        self.services = service_repo
        self.mailer = mailer
        self.password_length = password_length

    # --------------- Helpers ---------------
    @staticmethod
    def _to_out(employer: Employer, user: User, service: Service | None) -> EmployerOut:
        return EmployerOut(
            id=employer.id,
            user_id=user.id,
            full_name=user.full_name,
            email=user.email,
            poste=employer.poste,
            phone=employer.phone,
            service=service.name if service else None,
            service_id=employer.service_id,
            is_active=employer.is_active,
            created_at=employer.created_at,
        )

    def _get_or_404(self, employer_id: int) -> Employer:
        employer = self.repo.get(employer_id)
        if not employer:
            raise NotFound.resource("Employer")
        return employer

    def _ensure_service_exists(self, service_id: int) -> Service:
        service = self.services.get(service_id)
        if not service:
            raise ValidationFailed.single("service_id", "The selected service id is invalid.")
        return service

    def _ensure_email_free(self, email: str, *, exclude_user_id: int | None = None) -> None:
        if self.users.email_taken(email, exclude_user_id=exclude_user_id):
            raise ValidationFailed.single("email", "The email has already been taken.")

    # --------------- Queries ---------------
    def list(self) -> List[EmployerOut]:
        return [self._to_out(*row) for row in self.repo.list_joined()]

    def get(self, employer_id: int) -> EmployerOut:
        row = self.repo.get_joined(employer_id)
        if not row:
            raise NotFound.resource("Employer")
        return self._to_out(*row)

    def search(self, name: str) -> List[EmployerOut]:
        return [self._to_out(*row) for row in self.repo.search_by_name(name)]

    # --------------- Commands ---------------
    def create(self, payload: EmployerCreateIn) -> EmployerOut:
        self._ensure_email_free(payload.email)
        service = self._ensure_service_exists(payload.service_id)

        password = generate_password(self.password_length)
        try:
            user = self.users.create(
                commit=False,
                full_name=payload.full_name,
                email=payload.email,
                hashed_password=hash_password(password),
                role=UserRole.Employer,
            )
            employer = self.repo.create(
                commit=False,
                user_id=user.id,
                poste=payload.poste,
                phone=payload.phone,
                service_id=service.id,
                is_active=True,
            )
            # L'envoi fait partie de la transaction : un échec annule la création
            self.mailer.send(
                build_credentials_email(full_name=user.full_name, email=user.email, password=password)
            )
            self.session.commit()
        except Exception as exc:
            self.session.rollback()
            raise TransactionFailed("Failed to create employer", cause=exc) from exc

        self.session.refresh(user)
        self.session.refresh(employer)
        logger.info("Employer %s created (user_id=%s, service_id=%s)", employer.id, user.id, service.id)
        return self._to_out(employer, user, service)

    def update(self, employer_id: int, payload: EmployerUpdateIn) -> EmployerOut:
        employer = self._get_or_404(employer_id)
        user = self.users.get(employer.user_id)
        changes = payload.model_dump(exclude_unset=True)
        ValidationFailed.reject_nulls(changes, ("full_name", "email", "poste", "phone", "service_id"))

        if "email" in changes:
            self._ensure_email_free(changes["email"], exclude_user_id=employer.user_id)
        if "service_id" in changes:
            self._ensure_service_exists(changes["service_id"])

        user_changes = {k: changes[k] for k in ("full_name", "email") if k in changes}
        employer_changes = {k: changes[k] for k in ("poste", "phone", "service_id") if k in changes}
        try:
            if user_changes:
                self.users.update(user, commit=False, **user_changes)
            if employer_changes:
                self.repo.update(employer, commit=False, **employer_changes)
            self.session.commit()
        except Exception as exc:
            self.session.rollback()
            raise TransactionFailed("Failed to update employer", cause=exc) from exc

        return self.get(employer_id)

    def toggle_active(self, employer_id: int) -> bool:
        employer = self._get_or_404(employer_id)
        updated = self.repo.update(employer, is_active=not employer.is_active)
        logger.info("Employer %s is_active=%s", employer_id, updated.is_active)
        return updated.is_active
