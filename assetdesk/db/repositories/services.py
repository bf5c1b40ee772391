from typing import Optional, Sequence, Tuple

from sqlmodel import select, func

from assetdesk.db.repositories.base import BaseRepository
from assetdesk.db.models.services import Service
from assetdesk.db.models.employers import Employer


class ServiceRepository(BaseRepository[Service]):
    model = Service

    def get_by_name(self, name: str) -> Optional[Service]:
        return self.session.exec(select(Service).where(Service.name == name)).first()

    def name_taken(self, name: str, *, exclude_id: Optional[int] = None) -> bool:
        stmt = select(Service.id).where(Service.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Service.id != exclude_id)
        return self.session.exec(stmt).first() is not None

    def search(self, name: str) -> Sequence[Service]:
        stmt = select(Service).where(Service.name.ilike(f"%{name}%")).order_by(Service.id)
        return self.session.exec(stmt).all()

    def first_other_than(self, service_id: int) -> Optional[Service]:
        stmt = select(Service).where(Service.id != service_id).order_by(Service.id)
        return self.session.exec(stmt).first()

    def with_employer_counts(self) -> Sequence[Tuple[Service, int]]:
        """(service, nombre d'employés) pour tous les services, les plus peuplés d'abord."""
        employers_count = func.count(Employer.id).label("employers_count")
        stmt = (
            select(Service, employers_count)
            .join(Employer, Employer.service_id == Service.id, isouter=True)
            .group_by(Service.id)
            .order_by(employers_count.desc(), Service.id)
        )
        return self.session.exec(stmt).all()
