from enum import Enum
from typing import Optional

from sqlmodel import Field

from .base import BaseModelDB


class DeclarationStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    resolved = "resolved"
    rejected = "rejected"


class Declaration(BaseModelDB, table=True):
    """Déclaration d'incident déposée par un employé, traitée par un admin."""

    issue_title: str
    description: str
    status: DeclarationStatus = Field(default=DeclarationStatus.pending, index=True)
    admin_comment: Optional[str] = None

    # Immuable après création
    employer_id: int = Field(foreign_key="employer.id", index=True)
