from typing import Optional, Sequence

from sqlmodel import select

from assetdesk.db.repositories.base import BaseRepository
from assetdesk.db.models.maintenances import Maintenance


class MaintenanceRepository(BaseRepository[Maintenance]):
    model = Maintenance

    def list_filtered(self, *, intervention_id: Optional[int] = None) -> Sequence[Maintenance]:
        stmt = select(Maintenance)
        if intervention_id is not None:
            stmt = stmt.where(Maintenance.intervention_id == intervention_id)
        return self.session.exec(stmt.order_by(Maintenance.id)).all()
