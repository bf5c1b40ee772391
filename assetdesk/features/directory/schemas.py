from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class ServiceIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["IT"])


class ServiceSearchIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class ServiceOut(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ServiceListOut(BaseModel):
    services: List[ServiceOut]


class ServiceEnvelope(BaseModel):
    service: ServiceOut


class ServiceMessageOut(BaseModel):
    message: str
    service: ServiceOut
