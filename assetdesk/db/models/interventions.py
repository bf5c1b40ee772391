from datetime import datetime

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field

from .base import BaseModelDB


class Intervention(BaseModelDB, table=True):
    """Passage d'un technicien sur un équipement."""

    date: datetime = Field(index=True)
    technician_name: str
    note: str

    # Supprimé avec son équipement (contrainte côté base)
    equipment_id: int = Field(
        sa_column=Column(Integer, ForeignKey("equipment.id", ondelete="CASCADE"), nullable=False, index=True)
    )
