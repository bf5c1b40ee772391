"""
➡️ But : Représenter l'appelant authentifié une fois pour toutes.

Principal = AdminPrincipal | EmployerPrincipal, décidé à l'authentification puis
transporté dans la requête via Depends(get_current_principal).
Les services testent le type (isinstance) au lieu de comparer des chaînes de rôle.
"""

from dataclasses import dataclass
from typing import Union

from assetdesk.db.models.users import UserRole


@dataclass(frozen=True)
class AdminPrincipal:
    user_id: int
    jti: str

    role = UserRole.Admin


@dataclass(frozen=True)
class EmployerPrincipal:
    user_id: int
    jti: str
    employer_id: int

    role = UserRole.Employer

    def owns(self, employer_id: int) -> bool:
        return self.employer_id == employer_id


Principal = Union[AdminPrincipal, EmployerPrincipal]


def is_admin(principal: Principal) -> bool:
    return isinstance(principal, AdminPrincipal)
