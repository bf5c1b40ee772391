from typing import Optional, Sequence, Tuple

from sqlmodel import select

from assetdesk.db.repositories.base import BaseRepository
from assetdesk.db.models.employers import Employer
from assetdesk.db.models.services import Service
from assetdesk.db.models.users import User


# Ligne employé "jointe" : (Employer, User, Service)
EmployerRow = Tuple[Employer, User, Service]


class EmployerRepository(BaseRepository[Employer]):
    model = Employer

    def _joined(self):
        return (
            select(Employer, User, Service)
            .join(User, User.id == Employer.user_id)
            .join(Service, Service.id == Employer.service_id)
        )

    def get_by_user_id(self, user_id: int) -> Optional[Employer]:
        return self.session.exec(select(Employer).where(Employer.user_id == user_id)).first()

    def get_joined(self, employer_id: int) -> Optional[EmployerRow]:
        return self.session.exec(self._joined().where(Employer.id == employer_id)).first()

    def list_joined(self) -> Sequence[EmployerRow]:
        return self.session.exec(self._joined().order_by(Employer.id)).all()

    def search_by_name(self, name: str) -> Sequence[EmployerRow]:
        stmt = self._joined().where(User.full_name.ilike(f"%{name}%")).order_by(Employer.id)
        return self.session.exec(stmt).all()

    def list_by_service(self, service_id: int) -> Sequence[Employer]:
        return self.session.exec(select(Employer).where(Employer.service_id == service_id)).all()
