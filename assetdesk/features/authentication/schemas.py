from typing import Optional

from pydantic import BaseModel, EmailStr, Field

# ---------- Inputs ----------

class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

class ProfileUpdateIn(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    # Ignorés pour un admin
    poste: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, min_length=1, max_length=255)


# ---------- Outputs ----------

class LoginUserOut(BaseModel):
    id: int
    full_name: str
    email: str

class LoginOut(BaseModel):
    token: str
    role: str
    user: LoginUserOut

class ProfileOut(BaseModel):
    poste: str
    phone: str
    service_id: int
    service_name: Optional[str]
    is_active: bool

class CurrentUserOut(BaseModel):
    id: int
    full_name: str
    email: str
    role: str
    profile: Optional[ProfileOut] = None

class CurrentUserEnvelope(BaseModel):
    user: CurrentUserOut
