from pathlib import Path
from typing import Any, Dict, List

import yaml
from sqlmodel import Session

from assetdesk.db.models.users import UserRole
from assetdesk.db.repositories.employers import EmployerRepository
from assetdesk.db.repositories.services import ServiceRepository
from assetdesk.db.repositories.users import AdminRepository, UserRepository
from assetdesk.security.password import hash_password

DEFAULT_SEED_PATH = Path(__file__).with_name("seed_data.yaml")


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


# -----------------------------
# Seeders (idempotents : ce qui existe déjà est ignoré)
# -----------------------------
def seed_admins(session: Session, data: Dict[str, Any]) -> int:
    users = UserRepository(session)
    admins = AdminRepository(session)
    admins_yaml: List[Dict[str, Any]] = data.get("admins", [])
    created = 0
    for a in admins_yaml:
        if users.get_by_email(a["email"]):
            print(f"ℹ️ Admin déjà présent: {a['email']}")
            continue
        user = users.create(
            commit=False,
            full_name=a["full_name"],
            email=a["email"],
            hashed_password=hash_password(a["password"]),
            role=UserRole.Admin,
        )
        admins.create(commit=False, user_id=user.id)
        created += 1
    session.commit()
    print(f"✅ {created} admin(s) inséré(s).")
    return created


def seed_services(session: Session, data: Dict[str, Any]) -> int:
    services = ServiceRepository(session)
    names: List[str] = data.get("services", [])
    created = 0
    for name in names:
        if services.get_by_name(name):
            continue
        services.create(commit=False, name=name)
        created += 1
    session.commit()
    print(f"✅ {created} service(s) inséré(s).")
    return created


def seed_employers(session: Session, data: Dict[str, Any]) -> int:
    users = UserRepository(session)
    employers = EmployerRepository(session)
    services = ServiceRepository(session)
    employers_yaml: List[Dict[str, Any]] = data.get("employers", [])
    created = 0
    for e in employers_yaml:
        if users.get_by_email(e["email"]):
            print(f"ℹ️ Employé déjà présent: {e['email']}")
            continue
        service = services.get_by_name(e["service"])
        if service is None:
            print(f"⚠️ Service inconnu '{e['service']}' pour {e['email']} (ignoré)")
            continue
        user = users.create(
            commit=False,
            full_name=e["full_name"],
            email=e["email"],
            hashed_password=hash_password(e["password"]),
            role=UserRole.Employer,
        )
        employers.create(
            commit=False,
            user_id=user.id,
            poste=e["poste"],
            phone=e["phone"],
            service_id=service.id,
            is_active=e.get("is_active", True),
        )
        created += 1
    session.commit()
    print(f"✅ {created} employé(s) inséré(s).")
    return created


def seed_all(*, session: Session, seed_path: str | Path | None = None) -> None:
    data = load_seed_yaml(seed_path or DEFAULT_SEED_PATH)
    seed_admins(session, data)
    seed_services(session, data)
    seed_employers(session, data)
