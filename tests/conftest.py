import os
from pathlib import Path
import tempfile

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

os.environ.setdefault("ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("JWT_SECRET_KEY", "tests-secret-key")
os.environ.setdefault("MAIL_BACKEND", "console")
os.environ.setdefault("SQLITE_PATH", str(Path(tempfile.gettempdir()) / "assetdesk-tests.sqlite3"))

from assetdesk.api.v1.dependencies import get_mailer, get_statistics_cache  # noqa: E402
from assetdesk.db.models.users import UserRole  # noqa: E402
from assetdesk.db.repositories.employers import EmployerRepository  # noqa: E402
from assetdesk.db.repositories.services import ServiceRepository  # noqa: E402
from assetdesk.db.repositories.users import AdminRepository, UserRepository  # noqa: E402
from assetdesk.db.session import build_engine, get_session, init_db  # noqa: E402
from assetdesk.features.statistics.cache import TTLCache  # noqa: E402
from assetdesk.main import app  # noqa: E402
from assetdesk.security.password import hash_password  # noqa: E402
from assetdesk.utils.mailer import ConsoleMailer  # noqa: E402

PASSWORD = "password"
API = "/api/v1"


@pytest.fixture()
def engine():
    # Une seule connexion partagée : la base en mémoire survit entre les sessions
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def mailer():
    return ConsoleMailer()


@pytest.fixture()
def stats_cache():
    return TTLCache(300)


@pytest.fixture()
def client(engine, mailer, stats_cache):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_statistics_cache] = lambda: stats_cache
    # Pas de `with` : l'évènement startup (init_db sur la vraie base) n'est pas déclenché
    yield TestClient(app)
    app.dependency_overrides.clear()


class Factory:
    """Crée directement en base les comptes et services nécessaires aux tests."""

    def __init__(self, engine):
        self.engine = engine

    def service(self, name: str = "IT") -> int:
        with Session(self.engine) as session:
            return ServiceRepository(session).create(name=name).id

    def admin(self, email: str = "admin@example.com", full_name: str = "Admin User") -> int:
        with Session(self.engine) as session:
            user = UserRepository(session).create(
                full_name=full_name,
                email=email,
                hashed_password=hash_password(PASSWORD),
                role=UserRole.Admin,
            )
            AdminRepository(session).create(user_id=user.id)
            return user.id

    def employer(
        self,
        email: str = "employer@example.com",
        *,
        service_id: int,
        full_name: str = "Employer User",
        is_active: bool = True,
    ) -> int:
        with Session(self.engine) as session:
            user = UserRepository(session).create(
                full_name=full_name,
                email=email,
                hashed_password=hash_password(PASSWORD),
                role=UserRole.Employer,
            )
            employer = EmployerRepository(session).create(
                user_id=user.id,
                poste="Technicien",
                phone="0600000000",
                service_id=service_id,
                is_active=is_active,
            )
            return employer.id


@pytest.fixture()
def factory(engine):
    return Factory(engine)


def login(client: TestClient, email: str, password: str = PASSWORD) -> dict:
    response = client.post(f"{API}/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def admin_headers(client, factory):
    factory.admin()
    return login(client, "admin@example.com")


@pytest.fixture()
def service_id(factory):
    return factory.service("IT")


@pytest.fixture()
def employer_id(factory, service_id):
    return factory.employer("employer@example.com", service_id=service_id)


@pytest.fixture()
def employer_headers(client, employer_id):
    return login(client, "employer@example.com")
