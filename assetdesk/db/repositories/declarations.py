from typing import Iterable, Optional, Sequence, Tuple

from sqlmodel import select

from assetdesk.db.repositories.base import BaseRepository
from assetdesk.db.models.declarations import Declaration, DeclarationStatus
from assetdesk.db.models.employers import Employer
from assetdesk.db.models.users import User


class DeclarationRepository(BaseRepository[Declaration]):
    model = Declaration

    def list_with_employer_name(
        self,
        *,
        employer_id: Optional[int] = None,
        statuses: Optional[Iterable[DeclarationStatus]] = None,
    ) -> Sequence[Tuple[Declaration, Optional[str]]]:
        """Déclarations + nom complet de l'employé déclarant."""
        stmt = (
            select(Declaration, User.full_name)
            .join(Employer, Employer.id == Declaration.employer_id)
            .join(User, User.id == Employer.user_id)
        )
        if employer_id is not None:
            stmt = stmt.where(Declaration.employer_id == employer_id)
        if statuses is not None:
            stmt = stmt.where(Declaration.status.in_(list(statuses)))
        return self.session.exec(stmt.order_by(Declaration.id)).all()

    def latest_with_employer_name(self, limit: int = 5) -> Sequence[Tuple[Declaration, Optional[str]]]:
        stmt = (
            select(Declaration, User.full_name)
            .join(Employer, Employer.id == Declaration.employer_id)
            .join(User, User.id == Employer.user_id)
            .order_by(Declaration.created_at.desc(), Declaration.id.desc())
            .limit(limit)
        )
        return self.session.exec(stmt).all()

    def get_with_employer_name(self, declaration_id: int) -> Optional[Tuple[Declaration, Optional[str]]]:
        stmt = (
            select(Declaration, User.full_name)
            .join(Employer, Employer.id == Declaration.employer_id)
            .join(User, User.id == Employer.user_id)
            .where(Declaration.id == declaration_id)
        )
        return self.session.exec(stmt).first()
