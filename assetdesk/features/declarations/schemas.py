from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from assetdesk.db.models.declarations import DeclarationStatus


class DeclarationCreateIn(BaseModel):
    issue_title: str = Field(..., min_length=1, max_length=255, examples=["Imprimante bloquée"])
    description: str = Field(..., min_length=1)


class DeclarationUpdateIn(BaseModel):
    """Champs possibles, non typés : le rôle de l'appelant décide lesquels sont appliqués et workflow.py les valide."""

    issue_title: Any = None
    description: Any = None
    status: Any = Field(None, examples=["approved"])
    admin_comment: Any = None


class DeclarationProcessIn(BaseModel):
    status: Any = Field(None, examples=["approved"])
    admin_comment: Any = None


class DeclarationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    issue_title: str
    description: str
    status: DeclarationStatus
    admin_comment: Optional[str] = None
    employer_id: int
    employer_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GroupedDeclarations(BaseModel):
    pending: List[DeclarationOut]
    approved: List[DeclarationOut]
    rejected: List[DeclarationOut]
    all: List[DeclarationOut]


class DeclarationCounts(BaseModel):
    pending: int
    approved: int
    rejected: int
    total: int


class DeclarationGroupedOut(BaseModel):
    status: str = "success"
    data: List[DeclarationOut]
    grouped: GroupedDeclarations
    counts: DeclarationCounts
