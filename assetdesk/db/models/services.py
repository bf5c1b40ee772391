from sqlmodel import Field

from .base import BaseModelDB


class Service(BaseModelDB, table=True):
    """Service / département regroupant des employés."""

    name: str = Field(index=True, unique=True)
