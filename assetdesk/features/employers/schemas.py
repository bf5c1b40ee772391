from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class EmployerCreateIn(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255, examples=["Sara Benali"])
    email: EmailStr
    poste: str = Field(..., min_length=1, max_length=255, examples=["Comptable"])
    phone: str = Field(..., min_length=1, max_length=255)
    service_id: int


class EmployerUpdateIn(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    poste: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, min_length=1, max_length=255)
    service_id: Optional[int] = None


class EmployerSearchIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class EmployerOut(BaseModel):
    id: int
    user_id: int
    full_name: str
    email: str
    poste: str
    phone: str
    service: Optional[str]
    service_id: int
    is_active: bool
    created_at: Optional[datetime] = None


class EmployerListOut(BaseModel):
    employers: List[EmployerOut]


class EmployerEnvelope(BaseModel):
    employer: EmployerOut


class EmployerMessageOut(BaseModel):
    message: str
    employer: EmployerOut


class ToggleActiveOut(BaseModel):
    message: str
    is_active: bool
