from datetime import date
from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field

from .base import BaseModelDB


class Maintenance(BaseModelDB, table=True):
    """Maintenance planifiée/réalisée, rattachée à une intervention."""

    maintenance_type: str
    scheduled_date: date
    performed_date: Optional[date] = None
    next_maintenance_date: Optional[date] = None
    observations: Optional[str] = None

    intervention_id: int = Field(
        sa_column=Column(Integer, ForeignKey("intervention.id", ondelete="CASCADE"), nullable=False, index=True)
    )
