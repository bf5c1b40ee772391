from typing import Optional, Sequence, Tuple

from sqlmodel import select, func

from assetdesk.db.repositories.base import BaseRepository
from assetdesk.db.models.equipments import Equipment, EquipmentStatus
from assetdesk.db.models.employers import Employer
from assetdesk.db.models.users import User


class EquipmentRepository(BaseRepository[Equipment]):
    model = Equipment

    def list_with_owner(
        self,
        *,
        status: Optional[EquipmentStatus] = None,
        employer_id: Optional[int] = None,
    ) -> Sequence[Tuple[Equipment, str]]:
        """Équipements filtrés, chacun avec le nom complet de son propriétaire."""
        stmt = (
            select(Equipment, User.full_name)
            .join(Employer, Employer.id == Equipment.employer_id)
            .join(User, User.id == Employer.user_id)
        )
        if status is not None:
            stmt = stmt.where(Equipment.status == status)
        if employer_id is not None:
            stmt = stmt.where(Equipment.employer_id == employer_id)
        return self.session.exec(stmt.order_by(Equipment.id)).all()

    def ids_for_employer(self, employer_id: int) -> Sequence[int]:
        return self.session.exec(
            select(Equipment.id).where(Equipment.employer_id == employer_id)
        ).all()

    def count_by(self, column, *conditions) -> dict:
        """{valeur de colonne: nombre} (ex. par type ou par marque)."""
        stmt = select(column, func.count(Equipment.id))
        for condition in conditions:
            stmt = stmt.where(condition)
        rows = self.session.exec(stmt.group_by(column)).all()
        return {_key(value): count for value, count in rows}

    def latest_with_owner(self, limit: int = 5) -> Sequence[Tuple[Equipment, str]]:
        stmt = (
            select(Equipment, User.full_name)
            .join(Employer, Employer.id == Equipment.employer_id)
            .join(User, User.id == Employer.user_id)
            .order_by(Equipment.created_at.desc(), Equipment.id.desc())
            .limit(limit)
        )
        return self.session.exec(stmt).all()


def _key(value):
    # Les colonnes Enum remontent des membres Enum : on expose la valeur brute
    return getattr(value, "value", value)
