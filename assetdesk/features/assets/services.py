"""
➡️ But : Logique métier du parc : équipements, interventions, maintenances, licences.

Chaîne de propriété : Employer → Equipment → Intervention → Maintenance, Equipment → License.
Chaque création/modification vérifie que le parent référencé existe (422 sinon).
Les suppressions en cascade sont faites par la base (ON DELETE CASCADE), pas ici.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from assetdesk.core.errors import NotFound, ValidationFailed
from assetdesk.db.models.equipments import Equipment, EquipmentStatus
from assetdesk.db.models.interventions import Intervention
from assetdesk.db.models.licenses import License
from assetdesk.db.models.maintenances import Maintenance
from assetdesk.db.repositories.employers import EmployerRepository
from assetdesk.db.repositories.equipments import EquipmentRepository
from assetdesk.db.repositories.interventions import InterventionRepository
from assetdesk.db.repositories.licenses import LicenseRepository
from assetdesk.db.repositories.maintenances import MaintenanceRepository
from assetdesk.features.assets.schemas import (
    EquipmentCreateIn,
    EquipmentOut,
    EquipmentUpdateIn,
    InterventionCreateIn,
    InterventionOut,
    InterventionUpdateIn,
    LicenseCreateIn,
    LicenseUpdateIn,
    MaintenanceCreateIn,
    MaintenanceUpdateIn,
)

logger = logging.getLogger(__name__)


def _changes(payload, *, nullable: Sequence[str] = ()) -> Dict[str, Any]:
    """Champs envoyés ; null n'est accepté que pour les colonnes nullables."""
    changes = payload.model_dump(exclude_unset=True)
    ValidationFailed.reject_nulls(changes, [k for k in changes if k not in nullable])
    return changes


def _ensure_parent(repo, parent_id: int, field: str) -> None:
    if not repo.exists(parent_id):
        raise ValidationFailed.single(field, f"The selected {field.replace('_', ' ')} is invalid.")


class EquipmentService:
    def __init__(self, *, repo: EquipmentRepository, employer_repo: EmployerRepository):
        self.repo = repo
        self.employers = employer_repo

    def list(self, *, status: Optional[EquipmentStatus] = None) -> List[EquipmentOut]:
        return [
            EquipmentOut.model_validate(equipment).model_copy(update={"employer_name": name})
            for equipment, name in self.repo.list_with_owner(status=status)
        ]

    def get(self, equipment_id: int) -> Equipment:
        equipment = self.repo.get(equipment_id)
        if not equipment:
            raise NotFound.resource("Equipment")
        return equipment

    def create(self, payload: EquipmentCreateIn) -> Equipment:
        _ensure_parent(self.employers, payload.employer_id, "employer_id")
        equipment = self.repo.create(**payload.model_dump())
        logger.info("Equipment %s created for employer %s", equipment.id, equipment.employer_id)
        return equipment

    def update(self, equipment_id: int, payload: EquipmentUpdateIn) -> Equipment:
        equipment = self.get(equipment_id)
        changes = _changes(payload)
        if "employer_id" in changes:
            _ensure_parent(self.employers, changes["employer_id"], "employer_id")
        return self.repo.update(equipment, **changes)

    def delete(self, equipment_id: int) -> None:
        equipment = self.get(equipment_id)
        self.repo.delete(equipment)
        logger.info("Equipment %s deleted (interventions and licenses cascaded)", equipment_id)


class InterventionService:
    def __init__(self, *, repo: InterventionRepository, equipment_repo: EquipmentRepository):
        self.repo = repo
        self.equipments = equipment_repo

    def list(self, *, equipment_id: Optional[int] = None) -> List[InterventionOut]:
        return [
            InterventionOut.model_validate(intervention).model_copy(update={"equipment_name": name})
            for intervention, name in self.repo.list_with_equipment(equipment_id=equipment_id)
        ]

    def get(self, intervention_id: int) -> Intervention:
        intervention = self.repo.get(intervention_id)
        if not intervention:
            raise NotFound.resource("Intervention")
        return intervention

    def create(self, payload: InterventionCreateIn) -> Intervention:
        _ensure_parent(self.equipments, payload.equipment_id, "equipment_id")
        return self.repo.create(**payload.model_dump())

    def update(self, intervention_id: int, payload: InterventionUpdateIn) -> Intervention:
        intervention = self.get(intervention_id)
        changes = _changes(payload)
        if "equipment_id" in changes:
            _ensure_parent(self.equipments, changes["equipment_id"], "equipment_id")
        return self.repo.update(intervention, **changes)

    def delete(self, intervention_id: int) -> None:
        self.repo.delete(self.get(intervention_id))


class MaintenanceService:
    NULLABLE = ("performed_date", "next_maintenance_date", "observations")

    def __init__(self, *, repo: MaintenanceRepository, intervention_repo: InterventionRepository):
        self.repo = repo
        self.interventions = intervention_repo

    def list(self, *, intervention_id: Optional[int] = None) -> Sequence[Maintenance]:
        return self.repo.list_filtered(intervention_id=intervention_id)

    def get(self, maintenance_id: int) -> Maintenance:
        maintenance = self.repo.get(maintenance_id)
        if not maintenance:
            raise NotFound.resource("Maintenance")
        return maintenance

    def create(self, payload: MaintenanceCreateIn) -> Maintenance:
        _ensure_parent(self.interventions, payload.intervention_id, "intervention_id")
        return self.repo.create(**payload.model_dump())

    def update(self, maintenance_id: int, payload: MaintenanceUpdateIn) -> Maintenance:
        maintenance = self.get(maintenance_id)
        changes = _changes(payload, nullable=self.NULLABLE)
        if "intervention_id" in changes:
            _ensure_parent(self.interventions, changes["intervention_id"], "intervention_id")
        return self.repo.update(maintenance, **changes)

    def delete(self, maintenance_id: int) -> None:
        self.repo.delete(self.get(maintenance_id))


class LicenseService:
    def __init__(self, *, repo: LicenseRepository, equipment_repo: EquipmentRepository):
        self.repo = repo
        self.equipments = equipment_repo

    def list(self, *, equipment_id: Optional[int] = None) -> Sequence[License]:
        return self.repo.list_filtered(equipment_id=equipment_id)

    def get(self, license_id: int) -> License:
        license_ = self.repo.get(license_id)
        if not license_:
            raise NotFound.resource("License")
        return license_

    def create(self, payload: LicenseCreateIn) -> License:
        _ensure_parent(self.equipments, payload.equipment_id, "equipment_id")
        return self.repo.create(**payload.model_dump())

    def update(self, license_id: int, payload: LicenseUpdateIn) -> License:
        license_ = self.get(license_id)
        changes = _changes(payload)
        if "equipment_id" in changes:
            _ensure_parent(self.equipments, changes["equipment_id"], "equipment_id")
        return self.repo.update(license_, **changes)

    def delete(self, license_id: int) -> None:
        self.repo.delete(self.get(license_id))
