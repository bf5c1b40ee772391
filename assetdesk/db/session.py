"""
➡️ But : Configurer la base et gérer les sessions de base de données.

engine : connexion à la base (SQLite par défaut, DATABASE_URL sinon).

init_db() : crée les tables à partir des modèles SQLModel.

get_session() : dépendance FastAPI qui ouvre une session, la fournit aux routes, puis la ferme proprement.
"""

from typing import Any, Dict

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine

# Import all models for creating all tables
from assetdesk.db.models.users import User, Admin
from assetdesk.db.models.services import Service
from assetdesk.db.models.employers import Employer
from assetdesk.db.models.equipments import Equipment
from assetdesk.db.models.interventions import Intervention
from assetdesk.db.models.maintenances import Maintenance
from assetdesk.db.models.licenses import License
from assetdesk.db.models.declarations import Declaration
from assetdesk.db.models.access_tokens import AccessToken

from assetdesk.core.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite n'applique les FK (et donc les ON DELETE CASCADE) que si on le demande
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, *, echo: bool = False, **kwargs: Any) -> Engine:
    is_sqlite = url.startswith("sqlite")

    connect_args: Dict[str, Any] = kwargs.pop("connect_args", {})
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args.setdefault("check_same_thread", False)

    engine = create_engine(
        url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,
        **kwargs,
    )
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


engine: Engine = build_engine(settings.DATABASE_URL, echo=(settings.ENV == "dev"))


def init_db(bind: Engine | None = None) -> None:
    """
    Crée les tables si elles n'existent pas (usage dev/demo).
    En prod, préfère des migrations.
    """
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    """
    Dépendance FastAPI : fournit une session par requête.
    Utilisation :
        def route(..., session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
