from datetime import date, datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field

from assetdesk.db.models.base import as_utc
from assetdesk.db.models.equipments import EquipmentStatus

_Str255 = dict(min_length=1, max_length=255)

# Les dates sans fuseau sont lues comme UTC
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


# ==========================================================
# Equipment
# ==========================================================

class EquipmentCreateIn(BaseModel):
    name: str = Field(..., **_Str255, examples=["PC-Compta-01"])
    type: str = Field(..., **_Str255, examples=["Laptop"])
    nsc: str = Field(..., **_Str255)
    status: EquipmentStatus
    ip_address: str = Field(..., **_Str255, examples=["192.168.1.20"])
    serial_number: str = Field(..., **_Str255)
    processor: str = Field(..., **_Str255)
    brand: str = Field(..., **_Str255, examples=["Dell"])
    office_version: str = Field(..., **_Str255)
    label: str = Field(..., **_Str255)
    backup_enabled: bool = False
    employer_id: int


class EquipmentUpdateIn(BaseModel):
    name: Optional[str] = Field(None, **_Str255)
    type: Optional[str] = Field(None, **_Str255)
    nsc: Optional[str] = Field(None, **_Str255)
    status: Optional[EquipmentStatus] = None
    ip_address: Optional[str] = Field(None, **_Str255)
    serial_number: Optional[str] = Field(None, **_Str255)
    processor: Optional[str] = Field(None, **_Str255)
    brand: Optional[str] = Field(None, **_Str255)
    office_version: Optional[str] = Field(None, **_Str255)
    label: Optional[str] = Field(None, **_Str255)
    backup_enabled: Optional[bool] = None
    employer_id: Optional[int] = None


class EquipmentOut(BaseModel):
    id: int
    name: str
    type: str
    nsc: str
    status: EquipmentStatus
    ip_address: str
    serial_number: str
    processor: str
    brand: str
    office_version: str
    label: str
    backup_enabled: bool
    employer_id: int
    employer_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ==========================================================
# Intervention
# ==========================================================

class InterventionCreateIn(BaseModel):
    date: UtcDatetime
    technician_name: str = Field(..., min_length=1)
    note: str = Field(..., min_length=1)
    equipment_id: int


class InterventionUpdateIn(BaseModel):
    date: Optional[UtcDatetime] = None
    technician_name: Optional[str] = Field(None, min_length=1)
    note: Optional[str] = Field(None, min_length=1)
    equipment_id: Optional[int] = None


class InterventionOut(BaseModel):
    id: int
    date: UtcDatetime
    technician_name: str
    note: str
    equipment_id: int
    equipment_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ==========================================================
# Maintenance
# ==========================================================

class MaintenanceCreateIn(BaseModel):
    intervention_id: int
    maintenance_type: str = Field(..., **_Str255, examples=["preventive"])
    scheduled_date: date
    performed_date: Optional[date] = None
    next_maintenance_date: Optional[date] = None
    observations: Optional[str] = None


class MaintenanceUpdateIn(BaseModel):
    intervention_id: Optional[int] = None
    maintenance_type: Optional[str] = Field(None, **_Str255)
    scheduled_date: Optional[date] = None
    # Nullable : on peut les remettre à vide explicitement
    performed_date: Optional[date] = None
    next_maintenance_date: Optional[date] = None
    observations: Optional[str] = None


class MaintenanceOut(BaseModel):
    id: int
    intervention_id: int
    maintenance_type: str
    scheduled_date: date
    performed_date: Optional[date]
    next_maintenance_date: Optional[date]
    observations: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ==========================================================
# License
# ==========================================================

class LicenseCreateIn(BaseModel):
    name: str = Field(..., **_Str255, examples=["Office 365"])
    type: str = Field(..., **_Str255, examples=["subscription"])
    key: str = Field(..., **_Str255)
    expiration_date: date
    equipment_id: int


class LicenseUpdateIn(BaseModel):
    name: Optional[str] = Field(None, **_Str255)
    type: Optional[str] = Field(None, **_Str255)
    key: Optional[str] = Field(None, **_Str255)
    expiration_date: Optional[date] = None
    equipment_id: Optional[int] = None


class LicenseOut(BaseModel):
    id: int
    name: str
    type: str
    key: str
    expiration_date: date
    equipment_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
