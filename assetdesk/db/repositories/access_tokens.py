from typing import Optional

from sqlmodel import select

from assetdesk.db.models.base import utcnow
from assetdesk.db.repositories.base import BaseRepository
from assetdesk.db.models.access_tokens import AccessToken


class AccessTokenRepository(BaseRepository[AccessToken]):
    model = AccessToken

    def get_by_jti(self, jti: str) -> Optional[AccessToken]:
        return self.session.exec(
            select(self.model).where(self.model.jti == jti)
        ).first()

    def get_active(self, jti: str) -> Optional[AccessToken]:
        return self.session.exec(
            select(self.model)
            .where(self.model.jti == jti)
            .where(self.model.revoked_at.is_(None))
            .where(self.model.expires_at > utcnow())
        ).first()

    def revoke(self, jti: str) -> None:
        token = self.get_by_jti(jti)
        if not token or token.revoked_at:
            return
        token.revoked_at = utcnow()
        self.session.add(token)
        self.session.commit()

    def delete_expired(self, *, commit: bool = True) -> int:
        """Purge les jetons expirés (révoqués ou non) ; appelé à chaque connexion."""
        expired = self.session.exec(
            select(self.model).where(self.model.expires_at <= utcnow())
        ).all()
        for token in expired:
            self.session.delete(token)
        if commit:
            self.session.commit()
        else:
            self.session.flush()
        return len(expired)
