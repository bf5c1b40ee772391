from enum import Enum

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field

from .base import BaseModelDB


class EquipmentStatus(str, Enum):
    active = "active"
    on_hold = "on_hold"
    in_progress = "in_progress"


class Equipment(BaseModelDB, table=True):
    """Matériel du parc, rattaché à un seul employé."""

    name: str
    type: str = Field(index=True)
    nsc: str
    status: EquipmentStatus = Field(default=EquipmentStatus.active)
    ip_address: str
    serial_number: str
    processor: str
    brand: str = Field(index=True)
    office_version: str
    label: str
    backup_enabled: bool = Field(default=False)

    employer_id: int = Field(
        sa_column=Column(Integer, ForeignKey("employer.id", ondelete="CASCADE"), nullable=False, index=True)
    )
