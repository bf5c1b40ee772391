"""
➡️ But : Règles du cycle de vie d'une déclaration, sans dépendance au web ni à la base.

États : pending (initial) → approved | resolved | rejected.

- Employé : crée (toujours pending), modifie titre/description ; status et admin_comment ignorés.
- Admin (édition) : status parmi les 4 valeurs et/ou admin_comment ; titre/description ignorés.
- Admin (process) : status ∈ {approved, rejected} uniquement, commentaire optionnel.

Chaque fonction reçoit le dict des champs envoyés et retourne les changements à appliquer.
"""

from typing import Any, Dict, Mapping, Optional

from assetdesk.db.models.declarations import DeclarationStatus

# Filtre de liste historique : "resolved" n'y figure pas
FILTERABLE = frozenset({DeclarationStatus.pending, DeclarationStatus.approved, DeclarationStatus.rejected})
PROCESSABLE = frozenset({DeclarationStatus.approved, DeclarationStatus.rejected})

TITLE_MAX_LENGTH = 255


class WorkflowError(ValueError):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


def _parse_status(value: Any, allowed) -> DeclarationStatus:
    try:
        status = DeclarationStatus(value)
    except ValueError:
        status = None
    if status not in allowed:
        raise WorkflowError("status", "The selected status is invalid.")
    return status


def _required_text(payload: Mapping[str, Any], field: str, max_length: Optional[int] = None) -> str:
    value = payload.get(field)
    if not isinstance(value, str) or not value.strip():
        raise WorkflowError(field, f"The {field.replace('_', ' ')} field is required.")
    if max_length is not None and len(value) > max_length:
        raise WorkflowError(field, f"The {field.replace('_', ' ')} must not be greater than {max_length} characters.")
    return value


def filter_status(value: Optional[str]) -> Optional[DeclarationStatus]:
    """Statut de filtre retenu, ou None (valeur absente ou hors liste = pas de filtre)."""
    if value is None:
        return None
    try:
        status = DeclarationStatus(value)
    except ValueError:
        return None
    return status if status in FILTERABLE else None


def creation_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "issue_title": _required_text(payload, "issue_title", TITLE_MAX_LENGTH),
        "description": _required_text(payload, "description"),
        "status": DeclarationStatus.pending,
        "admin_comment": None,
    }


def employer_changes(payload: Mapping[str, Any]) -> Dict[str, Any]:
    changes: Dict[str, Any] = {}
    if "issue_title" in payload:
        changes["issue_title"] = _required_text(payload, "issue_title", TITLE_MAX_LENGTH)
    if "description" in payload:
        changes["description"] = _required_text(payload, "description")
    return changes


def admin_changes(payload: Mapping[str, Any]) -> Dict[str, Any]:
    changes: Dict[str, Any] = {}
    if "status" in payload:
        changes["status"] = _parse_status(payload["status"], set(DeclarationStatus))
    if "admin_comment" in payload:
        comment = payload["admin_comment"]
        if comment is not None and not isinstance(comment, str):
            raise WorkflowError("admin_comment", "The admin comment must be a string.")
        changes["admin_comment"] = comment
    return changes


def process_changes(payload: Mapping[str, Any]) -> Dict[str, Any]:
    if payload.get("status") is None:
        raise WorkflowError("status", "The status field is required.")
    comment = payload.get("admin_comment")
    if comment is not None and not isinstance(comment, str):
        raise WorkflowError("admin_comment", "The admin comment must be a string.")
    return {
        "status": _parse_status(payload["status"], PROCESSABLE),
        "admin_comment": comment,
    }


def update_message(changes: Mapping[str, Any]) -> str:
    status = changes.get("status")
    if status is not None:
        return f"Declaration status has been updated to {DeclarationStatus(status).value} successfully"
    return "Declaration updated successfully"


def process_message(status: DeclarationStatus) -> str:
    return f"Declaration has been {DeclarationStatus(status).value} successfully"
