from datetime import date

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field

from .base import BaseModelDB


class License(BaseModelDB, table=True):
    name: str
    type: str = Field(index=True)
    key: str
    expiration_date: date = Field(index=True)

    equipment_id: int = Field(
        sa_column=Column(Integer, ForeignKey("equipment.id", ondelete="CASCADE"), nullable=False, index=True)
    )
