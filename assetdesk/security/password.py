import secrets
import string

from passlib.context import CryptContext

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

_ALPHABET = string.ascii_letters + string.digits


def hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return _pwd_context.verify(password, hashed_password)


def generate_password(length: int = 10) -> str:
    """Mot de passe aléatoire alphanumérique (envoyé par mail au nouvel employé)."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))
