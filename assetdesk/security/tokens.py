import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TypedDict

from jose import jwt

# ==========================================================
# 🔧 Configuration : paramètres de génération/validation JWT
# ==========================================================

@dataclass(frozen=True)
class JWTSettings:
    """
    Configuration des tokens JWT.

    - `secret` : clé secrète pour signer/valider les tokens
    - `issuer` : émetteur (utilisé dans le payload)
    - `algorithm` : algo de signature (HS256 recommandé)
    - `access_ttl` : durée de vie d’un access token
    """
    secret: str
    issuer: str = "assetdesk-api"
    algorithm: str = "HS256"
    access_ttl: timedelta = timedelta(hours=12)


# ==========================================================
# 🧱 Types
# ==========================================================

class DecodedToken(TypedDict, total=False):
    iss: str
    sub: str            # identifiant utilisateur
    role: str           # "Admin" | "Employer"
    typ: str            # "access"
    jti: str
    iat: int
    exp: int


class IssuedToken(TypedDict):
    token: str
    jti: str
    expires_at: datetime


# ==========================================================
# 🧩 Fonctions utilitaires
# ==========================================================

def _now() -> datetime:
    """Renvoie l'heure UTC actuelle."""
    return datetime.now(timezone.utc)

def new_jti() -> str:
    """Crée un identifiant unique pour un token."""
    return str(uuid.uuid4())


# ==========================================================
# 🎟️ Génération
# ==========================================================

def create_access_token(*, user_id: int, role: str, settings: JWTSettings) -> IssuedToken:
    """
    Crée un access token JWT. Le JTI retourné doit être stocké côté serveur
    (table access_token) pour permettre la révocation au logout.
    """
    now = _now()
    jti = new_jti()
    expires_at = now + settings.access_ttl
    payload: DecodedToken = {
        "iss": settings.issuer,
        "sub": str(user_id),
        "role": role,
        "typ": "access",
        "jti": jti,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    token = jwt.encode(payload, settings.secret, algorithm=settings.algorithm)
    return {"token": token, "jti": jti, "expires_at": expires_at}


# ==========================================================
# 🔍 Décodage / Validation
# ==========================================================

def decode_token(token: str, settings: JWTSettings) -> DecodedToken:
    """
    Décode et valide un token JWT (signature + expiration + émetteur).
    Lève JWTError en cas de signature invalide ou expirée.
    """
    decoded = jwt.decode(
        token,
        settings.secret,
        algorithms=[settings.algorithm],
        issuer=settings.issuer,
        options={"verify_aud": False},
    )
    return decoded  # type: ignore[return-value]
