from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DataOut(BaseModel, Generic[T]):
    """Enveloppe commune : {"status": "success", "message": ..., "data": ...}."""

    status: str = "success"
    message: Optional[str] = None
    data: T


class MessageOut(BaseModel):
    status: str = "success"
    message: str
