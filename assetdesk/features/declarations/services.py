"""
➡️ But : Cas d'usage des déclarations (tickets d'incident).

Contrôle d'accès en deux temps :
- la route filtre le rôle (require_admin / require_employer) quand l'endpoint est réservé ;
- ici, pour toute opération sur un id : NotFound d'abord si l'id n'existe pas,
  puis Forbidden si un employé vise la déclaration d'un autre.

Les règles de transition sont dans workflow.py ; ce module applique et persiste.
"""

import logging
from typing import Any, Mapping, Optional, Sequence, Tuple

from assetdesk.core.errors import Forbidden, NotFound, ValidationFailed
from assetdesk.db.models.declarations import Declaration, DeclarationStatus
from assetdesk.db.repositories.declarations import DeclarationRepository
from assetdesk.db.repositories.employers import EmployerRepository
from assetdesk.features.declarations import workflow
from assetdesk.features.declarations.schemas import (
    DeclarationCounts,
    DeclarationGroupedOut,
    DeclarationOut,
    GroupedDeclarations,
)
from assetdesk.security.principals import EmployerPrincipal, Principal, is_admin

logger = logging.getLogger(__name__)


def to_out(declaration: Declaration, employer_name: Optional[str] = None) -> DeclarationOut:
    out = DeclarationOut.model_validate(declaration)
    out.employer_name = employer_name
    return out


def group(rows: Sequence[Tuple[Declaration, Optional[str]]]) -> DeclarationGroupedOut:
    """Liste plate + regroupement par statut + compteurs."""
    items = [to_out(d, name) for d, name in rows]

    def bucket(status: DeclarationStatus):
        return [item for item in items if item.status == status]

    grouped = GroupedDeclarations(
        pending=bucket(DeclarationStatus.pending),
        approved=bucket(DeclarationStatus.approved),
        rejected=bucket(DeclarationStatus.rejected),
        all=items,
    )
    counts = DeclarationCounts(
        pending=len(grouped.pending),
        approved=len(grouped.approved),
        rejected=len(grouped.rejected),
        total=len(items),
    )
    return DeclarationGroupedOut(data=items, grouped=grouped, counts=counts)


class DeclarationService:
    def __init__(self, *, repo: DeclarationRepository, employer_repo: EmployerRepository):
        self.repo = repo
        self.employers = employer_repo

    # ---------- helpers ----------

    def _load(self, declaration_id: int, principal: Principal, action: str) -> Tuple[Declaration, Optional[str]]:
        row = self.repo.get_with_employer_name(declaration_id)
        if row is None:
            raise NotFound.resource("Declaration")
        declaration, _ = row
        if isinstance(principal, EmployerPrincipal) and not principal.owns(declaration.employer_id):
            raise Forbidden(f"Unauthorized. You can only {action} your own declarations.")
        return row

    @staticmethod
    def _apply_rules(rule, payload: Mapping[str, Any]):
        try:
            return rule(payload)
        except workflow.WorkflowError as exc:
            raise ValidationFailed.single(exc.field, exc.message) from exc

    # ---------- read ----------

    def index(self, principal: Principal) -> Sequence[DeclarationOut]:
        employer_id = None if is_admin(principal) else principal.employer_id
        return [to_out(d, name) for d, name in self.repo.list_with_employer_name(employer_id=employer_id)]

    def list_all(self, status: Optional[str] = None) -> DeclarationGroupedOut:
        wanted = workflow.filter_status(status)
        rows = self.repo.list_with_employer_name(statuses=[wanted] if wanted else None)
        return group(rows)

    def list_by_employer(
        self,
        principal: Principal,
        *,
        employer_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> DeclarationGroupedOut:
        if employer_id is not None:
            if isinstance(principal, EmployerPrincipal):
                if not principal.owns(employer_id):
                    raise Forbidden("Unauthorized. You can only view your own declarations.")
            elif not self.employers.exists(employer_id):
                raise NotFound.resource("Employer")
        elif isinstance(principal, EmployerPrincipal):
            employer_id = principal.employer_id

        wanted = workflow.filter_status(status)
        rows = self.repo.list_with_employer_name(
            employer_id=employer_id,
            statuses=[wanted] if wanted else None,
        )
        return group(rows)

    def show(self, declaration_id: int, principal: Principal) -> DeclarationOut:
        return to_out(*self._load(declaration_id, principal, "view"))

    # ---------- write ----------

    def create(self, principal: Principal, payload: Mapping[str, Any]) -> DeclarationOut:
        if not isinstance(principal, EmployerPrincipal):
            raise Forbidden("Unauthorized. Only employers can create declarations.")
        fields = self._apply_rules(workflow.creation_fields, payload)
        declaration = self.repo.create(employer_id=principal.employer_id, **fields)
        logger.info("Declaration %s created by employer %s", declaration.id, principal.employer_id)
        return to_out(declaration)

    def update(self, declaration_id: int, principal: Principal, payload: Mapping[str, Any]) -> Tuple[str, DeclarationOut]:
        """Retourne (message, déclaration). Les champs non autorisés pour le rôle sont ignorés."""
        declaration, name = self._load(declaration_id, principal, "update")
        if is_admin(principal):
            changes = self._apply_rules(workflow.admin_changes, payload)
            message = workflow.update_message(changes)
        else:
            changes = self._apply_rules(workflow.employer_changes, payload)
            message = workflow.update_message({})
        if changes:
            declaration = self.repo.update(declaration, **changes)
        return message, to_out(declaration, name)

    def process(self, declaration_id: int, principal: Principal, payload: Mapping[str, Any]) -> Tuple[str, DeclarationOut]:
        if not is_admin(principal):
            raise Forbidden("Unauthorized. Only administrators can approve or reject declarations.")
        declaration, name = self._load(declaration_id, principal, "update")
        changes = self._apply_rules(workflow.process_changes, payload)
        declaration = self.repo.update(declaration, **changes)
        logger.info("Declaration %s processed: %s", declaration.id, declaration.status.value)
        return workflow.process_message(declaration.status), to_out(declaration, name)

    def delete(self, declaration_id: int, principal: Principal) -> None:
        declaration, _ = self._load(declaration_id, principal, "delete")
        self.repo.delete(declaration)
        logger.info("Declaration %s deleted", declaration_id)
