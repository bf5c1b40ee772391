from sqlmodel import Field

from .base import BaseModelDB


class Employer(BaseModelDB, table=True):
    """Extension 1:1 d'un User de rôle Employer (poste, téléphone, service, activité)."""

    user_id: int = Field(foreign_key="user.id", unique=True, index=True)
    poste: str
    phone: str
    # Jamais orphelin : la suppression d'un service réaffecte ses employés d'abord
    service_id: int = Field(foreign_key="service.id", index=True)
    is_active: bool = Field(default=True)
