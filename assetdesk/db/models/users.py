"""
➡️ But : Tables liées à l'identité : User (compte + rôle) et Admin (extension 1:1 d'un User admin).

Un User possède au plus une extension : Admin ou Employer (voir employers.py).
"""

from enum import Enum

from sqlmodel import Field

from .base import BaseModelDB


class UserRole(str, Enum):
    Admin = "Admin"
    Employer = "Employer"


class User(BaseModelDB, table=True):
    full_name: str
    email: str = Field(index=True, unique=True)
    hashed_password: str
    role: UserRole = Field(default=UserRole.Employer)


class Admin(BaseModelDB, table=True):
    user_id: int = Field(foreign_key="user.id", unique=True, index=True)
