"""
➡️ But : Calculer les agrégats des tableaux de bord (admin global, employé restreint).

Lecture seule. Les résultats sont mis en cache (TTLCache injecté) sous la clé
"admin" ou "employer:{id}" ; une donnée peut donc avoir jusqu'à TTL secondes de retard.

Les regroupements par mois se font en Python sur les lignes de l'année courante
(portable SQLite / PostgreSQL).
"""

import calendar
import logging
from collections import Counter
from datetime import date, datetime, timezone
from typing import Callable, Iterable, List, Optional, Sequence

from assetdesk.db.models.base import utcnow
from assetdesk.db.models.declarations import Declaration, DeclarationStatus
from assetdesk.db.models.employers import Employer
from assetdesk.db.models.equipments import Equipment, EquipmentStatus
from assetdesk.db.models.interventions import Intervention
from assetdesk.db.models.licenses import License
from assetdesk.db.models.users import User, UserRole
from assetdesk.db.repositories.declarations import DeclarationRepository
from assetdesk.db.repositories.employers import EmployerRepository
from assetdesk.db.repositories.equipments import EquipmentRepository
from assetdesk.db.repositories.interventions import InterventionRepository
from assetdesk.db.repositories.licenses import LicenseRepository
from assetdesk.db.repositories.services import ServiceRepository
from assetdesk.db.repositories.users import UserRepository
from assetdesk.features.statistics.cache import TTLCache

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


def add_months(day: date, months: int) -> date:
    """Ajoute des mois calendaires ; le jour est ramené au dernier jour du mois si besoin (31/01 + 1 → 28 ou 29/02)."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    return day.replace(year=year, month=month, day=min(day.day, calendar.monthrange(year, month)[1]))


def by_month(moments: Iterable[datetime], year: int) -> List[dict]:
    """[{month, year, count}] pour les mois de `year` ayant au moins une ligne, mois croissant."""
    counts = Counter(m.month for m in moments if m is not None and m.year == year)
    return [{"month": month, "year": year, "count": counts[month]} for month in sorted(counts)]


def _year_bounds(year: int):
    return datetime(year, 1, 1, tzinfo=timezone.utc), datetime(year + 1, 1, 1, tzinfo=timezone.utc)


class StatisticsService:
    def __init__(
        self,
        *,
        cache: TTLCache,
        user_repo: UserRepository,
        employer_repo: EmployerRepository,
        service_repo: ServiceRepository,
        equipment_repo: EquipmentRepository,
        intervention_repo: InterventionRepository,
        license_repo: LicenseRepository,
        declaration_repo: DeclarationRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.cache = cache
        self.users = user_repo
        self.employers = employer_repo
        self.services = service_repo
        self.equipments = equipment_repo
        self.interventions = intervention_repo
        self.licenses = license_repo
        self.declarations = declaration_repo
        self.clock = clock

    # ---------- entrées ----------

    def admin_statistics(self) -> dict:
        return self.cache.get_or_set("admin", self._compute_admin)

    def employer_statistics(self, employer_id: int) -> dict:
        return self.cache.get_or_set(f"employer:{employer_id}", lambda: self._compute_employer(employer_id))

    # ---------- blocs communs ----------

    def _license_buckets(self, *conditions) -> dict:
        today = self.clock().date()
        return {
            "total": self.licenses.count(*conditions),
            "expiring_soon": self.licenses.count(
                *conditions,
                License.expiration_date >= today,
                License.expiration_date <= add_months(today, 1),
            ),
            "expired": self.licenses.count(*conditions, License.expiration_date < today),
        }

    def _declaration_counts(self, *conditions) -> dict:
        counts = {"total": self.declarations.count(*conditions)}
        for status in DeclarationStatus:
            counts[status.value] = self.declarations.count(*conditions, Declaration.status == status)
        return counts

    def _equipment_counts(self, *conditions) -> dict:
        counts = {"total": self.equipments.count(*conditions)}
        for status in EquipmentStatus:
            counts[status.value] = self.equipments.count(*conditions, Equipment.status == status)
        return counts

    def _recent_interventions(self, equipment_ids: Optional[Sequence[int]] = None) -> List[dict]:
        return [
            {
                "id": intervention.id,
                "date": intervention.date,
                "technician_name": intervention.technician_name,
                "equipment_name": equipment_name,
            }
            for intervention, equipment_name in self.interventions.latest_with_equipment(
                equipment_ids=equipment_ids, limit=RECENT_LIMIT
            )
        ]

    # ---------- admin ----------

    def _compute_admin(self) -> dict:
        logger.debug("Computing admin statistics")
        year = self.clock().year
        start, end = _year_bounds(year)

        users = {
            "total": self.users.count(),
            "admins": self.users.count(User.role == UserRole.Admin),
            "employers": self.users.count(User.role == UserRole.Employer),
            "active_employers": self.employers.count(Employer.is_active == True),  # noqa: E712
            "inactive_employers": self.employers.count(Employer.is_active == False),  # noqa: E712
            "recent_users": [
                {
                    "id": u.id,
                    "full_name": u.full_name,
                    "email": u.email,
                    "role": u.role.value,
                    "created_at": u.created_at,
                }
                for u in self.users.latest(limit=RECENT_LIMIT)
            ],
            "employers_by_service": {
                service.name: count for service, count in self.services.with_employer_counts() if count
            },
        }

        equipment = self._equipment_counts()
        equipment.update(
            {
                "by_type": self.equipments.count_by(Equipment.type),
                "by_brand": self.equipments.count_by(Equipment.brand),
                "backup_enabled_count": self.equipments.count(Equipment.backup_enabled == True),  # noqa: E712
                "backup_disabled_count": self.equipments.count(Equipment.backup_enabled == False),  # noqa: E712
                "recent": [
                    {
                        "id": e.id,
                        "name": e.name,
                        "type": e.type,
                        "status": e.status.value,
                        "employer_name": owner,
                    }
                    for e, owner in self.equipments.latest_with_owner(limit=RECENT_LIMIT)
                ],
            }
        )

        distribution = self.services.with_employer_counts()
        with_employers = sum(1 for _, count in distribution if count)
        services = {
            "total": len(distribution),
            "with_employers": with_employers,
            "without_employers": len(distribution) - with_employers,
            "employers_distribution": [
                {"id": service.id, "name": service.name, "employers_count": count}
                for service, count in distribution[:RECENT_LIMIT]
            ],
        }

        declarations = self._declaration_counts()
        declarations["recent"] = [
            {
                "id": d.id,
                "issue_title": d.issue_title,
                "status": d.status.value,
                "employer_name": name,
                "created_at": d.created_at,
            }
            for d, name in self.declarations.latest_with_employer_name(limit=RECENT_LIMIT)
        ]

        interventions = {
            "total": self.interventions.count(),
            "recent": self._recent_interventions(),
            "by_month": by_month(self.interventions.dates_between(start, end), year),
        }

        licenses = self._license_buckets()
        licenses["by_type"] = self.licenses.count_by_type()

        time_stats = {
            "declarations_by_month": by_month(
                (d.created_at for d in self.declarations.list_where(
                    Declaration.created_at >= start, Declaration.created_at < end
                )),
                year,
            ),
            "equipment_by_month": by_month(
                (e.created_at for e in self.equipments.list_where(
                    Equipment.created_at >= start, Equipment.created_at < end
                )),
                year,
            ),
            "users_by_month": by_month((u.created_at for u in self.users.created_since(start)), year),
        }

        return {
            "users": users,
            "equipment": equipment,
            "services": services,
            "declarations": declarations,
            "interventions": interventions,
            "licenses": licenses,
            "time_stats": time_stats,
        }

    # ---------- employé ----------

    def _compute_employer(self, employer_id: int) -> dict:
        logger.debug("Computing statistics for employer %s", employer_id)
        equipment_ids = list(self.equipments.ids_for_employer(employer_id))

        declarations = self._declaration_counts(Declaration.employer_id == employer_id)
        declarations["recent"] = [
            {
                "id": d.id,
                "issue_title": d.issue_title,
                "status": d.status.value,
                "created_at": d.created_at,
            }
            for d in self.declarations.latest(Declaration.employer_id == employer_id, limit=RECENT_LIMIT)
        ]

        equipment = self._equipment_counts(Equipment.employer_id == employer_id)
        equipment["recent"] = [
            {"id": e.id, "name": e.name, "type": e.type, "status": e.status.value}
            for e in self.equipments.latest(Equipment.employer_id == employer_id, limit=RECENT_LIMIT)
        ]

        interventions = {
            "total": self.interventions.count(Intervention.equipment_id.in_(equipment_ids)),
            "recent": self._recent_interventions(equipment_ids),
        }

        licenses = self._license_buckets(License.equipment_id.in_(equipment_ids))

        return {
            "declarations": declarations,
            "equipment": equipment,
            "interventions": interventions,
            "licenses": licenses,
        }
