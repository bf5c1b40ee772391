"""
➡️ But : Centraliser tous les paramètres configurables (nom d’app, chemin DB, secrets, mail, cache...).

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from assetdesk.core.config import settings
print(settings.APP_NAME)
"""

from datetime import timedelta
from typing import List, Optional

from pydantic_settings import BaseSettings
from assetdesk.security.tokens import JWTSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "AssetDesk"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "assetdesk.db"
    # Postgres/MySQL : définir DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None

    # -----------------------------
    # JWT / Auth
    # -----------------------------
    JWT_SECRET_KEY: str = "CHANGE_ME"     # ⚠️ change en prod
    JWT_ISSUER: str = "assetdesk-api"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TTL_MINUTES: int = 60 * 12

    # Mot de passe généré à la création d'un employé
    GENERATED_PASSWORD_LENGTH: int = 10

    # -----------------------------
    # Mail (identifiants des employés)
    # -----------------------------
    MAIL_BACKEND: str = "console"  # console | smtp
    MAIL_HOST: str = "localhost"
    MAIL_PORT: int = 587
    MAIL_USERNAME: Optional[str] = None
    MAIL_PASSWORD: Optional[str] = None
    MAIL_USE_TLS: bool = True
    MAIL_FROM: str = "no-reply@assetdesk.local"

    # -----------------------------
    # Statistiques
    # -----------------------------
    STATISTICS_CACHE_TTL_SECONDS: int = 300

    # -----------------------------
    # Seed
    # -----------------------------
    SEED_PATH: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    def model_post_init(self, __context):
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")


settings = Settings()

jwt_settings = JWTSettings(
    secret=settings.JWT_SECRET_KEY,
    issuer=settings.JWT_ISSUER,
    algorithm=settings.JWT_ALGORITHM,
    access_ttl=timedelta(minutes=settings.ACCESS_TTL_MINUTES),
)
