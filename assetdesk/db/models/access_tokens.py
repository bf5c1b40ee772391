from datetime import datetime
from typing import Optional

from sqlmodel import Field

from .base import BaseModelDB


class AccessToken(BaseModelDB, table=True):
    __tablename__ = "access_token"

    jti: str = Field(index=True, unique=True)
    user_id: int = Field(index=True, foreign_key="user.id")
    expires_at: datetime
    revoked_at: Optional[datetime] = Field(default=None)
