"""
➡️ But : Logique métier des services (départements).

DirectoryService : CRUD + recherche, et la règle de suppression :
avant de supprimer un service, tous ses employés sont réaffectés à un autre service
existant (ou à un "Default Service" créé pour l'occasion), le tout dans une seule transaction.
"""

import logging
from typing import Sequence

from sqlmodel import Session

from assetdesk.core.errors import NotFound, TransactionFailed, ValidationFailed
from assetdesk.db.models.services import Service
from assetdesk.db.repositories.employers import EmployerRepository
from assetdesk.db.repositories.services import ServiceRepository

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "Default Service"


class DirectoryService:
    def __init__(self, *, session: Session, service_repo: ServiceRepository, employer_repo: EmployerRepository):
        self.session = session
        self.repo = service_repo
        self.employers = employer_repo

    def list(self) -> Sequence[Service]:
        return self.repo.list()

    def get(self, service_id: int) -> Service:
        service = self.repo.get(service_id)
        if not service:
            raise NotFound.resource("Service")
        return service

    def _ensure_name_free(self, name: str, *, exclude_id: int | None = None) -> None:
        if self.repo.name_taken(name, exclude_id=exclude_id):
            raise ValidationFailed.single("name", "The name has already been taken.")

    def create(self, name: str) -> Service:
        self._ensure_name_free(name)
        return self.repo.create(name=name)

    def update(self, service_id: int, name: str) -> Service:
        service = self.get(service_id)
        self._ensure_name_free(name, exclude_id=service.id)
        return self.repo.update(service, name=name)

    def search(self, name: str) -> Sequence[Service]:
        return self.repo.search(name)

    def delete(self, service_id: int) -> int:
        """
        Supprime un service après avoir réaffecté ses employés.
        Retourne le nombre d'employés réaffectés.
        """
        service = self.get(service_id)
        try:
            employers = self.employers.list_by_service(service.id)
            if employers:
                fallback = self.repo.first_other_than(service.id)
                if fallback is None:
                    if service.name == DEFAULT_SERVICE_NAME:
                        # libère le nom unique avant de recréer le service par défaut
                        self.repo.update(service, commit=False, name=f"{DEFAULT_SERVICE_NAME} #{service.id}")
                    fallback = self.repo.create(commit=False, name=DEFAULT_SERVICE_NAME)
                for employer in employers:
                    self.employers.update(employer, commit=False, service_id=fallback.id)
                logger.info(
                    "Reassigned %d employer(s) from service %s to service %s",
                    len(employers), service.id, fallback.id,
                )
            self.repo.delete(service, commit=False)
            self.session.commit()
        except Exception as exc:
            self.session.rollback()
            raise TransactionFailed("Failed to delete service", cause=exc) from exc
        logger.info("Service %s deleted", service_id)
        return len(employers)
