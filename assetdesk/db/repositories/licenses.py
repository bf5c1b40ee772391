from typing import Optional, Sequence

from sqlmodel import select, func

from assetdesk.db.repositories.base import BaseRepository
from assetdesk.db.models.licenses import License


class LicenseRepository(BaseRepository[License]):
    model = License

    def list_filtered(self, *, equipment_id: Optional[int] = None) -> Sequence[License]:
        stmt = select(License)
        if equipment_id is not None:
            stmt = stmt.where(License.equipment_id == equipment_id)
        return self.session.exec(stmt.order_by(License.id)).all()

    def count_by_type(self) -> dict:
        rows = self.session.exec(
            select(License.type, func.count(License.id)).group_by(License.type)
        ).all()
        return {type_: count for type_, count in rows}
