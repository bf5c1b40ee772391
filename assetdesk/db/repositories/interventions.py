from typing import Optional, Sequence, Tuple

from sqlmodel import select

from assetdesk.db.repositories.base import BaseRepository
from assetdesk.db.models.interventions import Intervention
from assetdesk.db.models.equipments import Equipment


class InterventionRepository(BaseRepository[Intervention]):
    model = Intervention

    def list_with_equipment(self, *, equipment_id: Optional[int] = None) -> Sequence[Tuple[Intervention, str]]:
        stmt = select(Intervention, Equipment.name).join(Equipment, Equipment.id == Intervention.equipment_id)
        if equipment_id is not None:
            stmt = stmt.where(Intervention.equipment_id == equipment_id)
        return self.session.exec(stmt.order_by(Intervention.id)).all()

    def latest_with_equipment(
        self,
        *,
        equipment_ids: Optional[Sequence[int]] = None,
        limit: int = 5,
    ) -> Sequence[Tuple[Intervention, str]]:
        """Dernières interventions (par date) avec le nom de l'équipement concerné."""
        stmt = select(Intervention, Equipment.name).join(Equipment, Equipment.id == Intervention.equipment_id)
        if equipment_ids is not None:
            stmt = stmt.where(Intervention.equipment_id.in_(equipment_ids))
        stmt = stmt.order_by(Intervention.date.desc(), Intervention.id.desc()).limit(limit)
        return self.session.exec(stmt).all()

    def dates_between(self, start, end) -> Sequence:
        return self.session.exec(
            select(Intervention.date).where(Intervention.date >= start, Intervention.date < end)
        ).all()
