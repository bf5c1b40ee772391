import logging

from jose import JWTError
from sqlmodel import Session

from assetdesk.core.errors import (
    AccountDeactivated,
    InvalidCredentials,
    TransactionFailed,
    Unauthenticated,
    ValidationFailed,
)
from assetdesk.db.models.users import User, UserRole
from assetdesk.db.repositories.access_tokens import AccessTokenRepository
from assetdesk.db.repositories.employers import EmployerRepository
from assetdesk.db.repositories.services import ServiceRepository
from assetdesk.db.repositories.users import UserRepository
from assetdesk.security.password import verify_password
from assetdesk.security.principals import AdminPrincipal, EmployerPrincipal, Principal
from assetdesk.security.tokens import JWTSettings, create_access_token, decode_token
from assetdesk.features.authentication.schemas import (
    CurrentUserEnvelope,
    CurrentUserOut,
    LoginIn,
    LoginOut,
    LoginUserOut,
    ProfileOut,
    ProfileUpdateIn,
)

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service d'authentification : orchestre les repositories + tokens.
    Ne contient pas d'accès SQL direct et lève des erreurs métier (core.errors).
    """

    def __init__(
        self,
        *,
        session: Session,
        user_repo: UserRepository,
        employer_repo: EmployerRepository,
        service_repo: ServiceRepository,
        token_repo: AccessTokenRepository,
        jwt_settings: JWTSettings,
    ):
        self.session = session
        self.users = user_repo
        self.employers = employer_repo
        self.services = service_repo
        self.tokens = token_repo
        self.jwt = jwt_settings

    # ---------- Login ----------
    def login(self, payload: LoginIn) -> LoginOut:
        user = self.users.get_by_email(payload.email)
        if not user or not verify_password(payload.password, user.hashed_password):
            # Ne pas révéler si l'utilisateur existe
            logger.warning("Failed login attempt for %s", payload.email)
            raise InvalidCredentials()

        if user.role == UserRole.Employer:
            employer = self.employers.get_by_user_id(user.id)
            if not employer or not employer.is_active:
                logger.warning("Login refused for deactivated employer user_id=%s", user.id)
                raise AccountDeactivated()

        purged = self.tokens.delete_expired(commit=False)
        if purged:
            logger.debug("Purged %s expired access tokens", purged)

        issued = create_access_token(user_id=user.id, role=user.role.value, settings=self.jwt)
        self.tokens.create(
            jti=issued["jti"],
            user_id=user.id,
            expires_at=issued["expires_at"],
        )
        logger.info("User %s logged in as %s", user.id, user.role.value)

        return LoginOut(
            token=issued["token"],
            role=user.role.value,
            user=LoginUserOut(id=user.id, full_name=user.full_name, email=user.email),
        )

    # ---------- Logout ----------
    def logout(self, principal: Principal) -> None:
        # Seul le token présenté est révoqué
        self.tokens.revoke(principal.jti)

    # ---------- Principal depuis le bearer ----------
    def resolve_principal(self, access_token: str) -> Principal:
        try:
            decoded = decode_token(access_token, self.jwt)
        except JWTError:
            raise Unauthenticated()

        if decoded.get("typ") != "access" or not decoded.get("jti") or not decoded.get("sub"):
            raise Unauthenticated()

        if not self.tokens.get_active(decoded["jti"]):
            raise Unauthenticated()

        user = self.users.get(int(decoded["sub"]))
        if not user:
            raise Unauthenticated()

        if user.role == UserRole.Admin:
            return AdminPrincipal(user_id=user.id, jti=decoded["jti"])

        employer = self.employers.get_by_user_id(user.id)
        if not employer:
            raise Unauthenticated("Employer profile not found.")
        # is_active n'est vérifié qu'au login : un token déjà émis reste valide
        return EmployerPrincipal(user_id=user.id, jti=decoded["jti"], employer_id=employer.id)

    # ---------- Utilisateur courant ----------
    def _user_or_401(self, principal: Principal) -> User:
        user = self.users.get(principal.user_id)
        if not user:
            raise Unauthenticated()
        return user

    def current_user(self, principal: Principal) -> CurrentUserEnvelope:
        user = self._user_or_401(principal)
        out = CurrentUserOut(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            role=user.role.value,
        )
        if isinstance(principal, EmployerPrincipal):
            employer = self.employers.get(principal.employer_id)
            if employer:
                service = self.services.get(employer.service_id)
                out.profile = ProfileOut(
                    poste=employer.poste,
                    phone=employer.phone,
                    service_id=employer.service_id,
                    service_name=service.name if service else None,
                    is_active=employer.is_active,
                )
        return CurrentUserEnvelope(user=out)

    # ---------- Mise à jour du profil ----------
    def update_profile(self, principal: Principal, payload: ProfileUpdateIn) -> CurrentUserEnvelope:
        user = self._user_or_401(principal)
        sent = payload.model_dump(exclude_unset=True)
        required = ("full_name", "email")
        if isinstance(principal, EmployerPrincipal):
            required += ("poste", "phone")
        ValidationFailed.reject_nulls(sent, required)
        changes = {k: v for k, v in sent.items() if v is not None}

        if "email" in changes and self.users.email_taken(changes["email"], exclude_user_id=user.id):
            raise ValidationFailed.single("email", "The email has already been taken.")

        user_changes = {k: changes[k] for k in ("full_name", "email") if k in changes}
        employer_changes = {}
        if isinstance(principal, EmployerPrincipal):
            employer_changes = {k: changes[k] for k in ("poste", "phone") if k in changes}

        try:
            if user_changes:
                self.users.update(user, commit=False, **user_changes)
            if employer_changes:
                employer = self.employers.get(principal.employer_id)
                if employer:
                    self.employers.update(employer, commit=False, **employer_changes)
            self.session.commit()
        except Exception as exc:
            self.session.rollback()
            raise TransactionFailed("Failed to update profile", cause=exc) from exc

        self.session.refresh(user)
        return self.current_user(principal)
