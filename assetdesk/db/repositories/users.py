"""
➡️ But : Encapsuler toutes les opérations de base de données sur User et Admin.

Ne contient aucune logique métier, juste de la persistance.
"""

from __future__ import annotations

from typing import Optional, Sequence
from sqlmodel import select

from assetdesk.db.repositories.base import BaseRepository
from assetdesk.db.models.users import Admin, User


class UserRepository(BaseRepository[User]):
    """
    Repository pour la table User.
    Hérite du CRUD générique de BaseRepository.
    """
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(
            select(self.model).where(self.model.email == email)
        ).first()

    def email_taken(self, email: str, *, exclude_user_id: Optional[int] = None) -> bool:
        statement = select(self.model.id).where(self.model.email == email)
        if exclude_user_id is not None:
            statement = statement.where(self.model.id != exclude_user_id)
        return self.session.exec(statement).first() is not None

    def created_since(self, since) -> Sequence[User]:
        return self.session.exec(
            select(self.model).where(self.model.created_at >= since)
        ).all()


class AdminRepository(BaseRepository[Admin]):
    model = Admin

    def get_by_user_id(self, user_id: int) -> Optional[Admin]:
        return self.session.exec(
            select(self.model).where(self.model.user_id == user_id)
        ).first()
