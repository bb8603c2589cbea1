"""
Comptes du back-office : creation, authentification, roles.

Les mots de passe sont hashes avec argon2 via pwdlib ; le hash ne quitte
jamais ce module et le repository.
"""

import secrets
from typing import Optional

from loguru import logger
from pwdlib import PasswordHash

from kalanara.core.entities import AdminUser
from kalanara.core.errors import AdminUserError, AuthenticationError
from kalanara.core.ports.repositories import IAdminUserRepository
from kalanara.core.value_objects import AdminRole

_password_hash = PasswordHash.recommended()

TEMPORARY_PASSWORD_BYTES = 12


def hash_password(password: str) -> str:
    """Hash argon2 d'un mot de passe non vide."""
    candidate = password.strip()
    if not candidate:
        raise ValueError("Password must not be empty")
    return _password_hash.hash(candidate)


def verify_password(password: str, hashed: str) -> bool:
    """Retourne True si le mot de passe correspond au hash."""
    if not hashed:
        return False
    return _password_hash.verify(password.strip(), hashed)


class AdminUserService:
    """
    Gestion des comptes administrateurs.

    Example:
        user, temporary_password = service.create_user("a@b.c", "Ayu", AdminRole.STAFF)
        service.authenticate("a@b.c", temporary_password)
    """

    def __init__(self, user_repo: IAdminUserRepository) -> None:
        self._users = user_repo

    def list_users(self) -> list[AdminUser]:
        return self._users.list_all()

    def get(self, user_id: str) -> AdminUser:
        """Raises: AdminUserError"""
        user = self._users.get_by_id(user_id)
        if user is None:
            raise AdminUserError(f"Compte introuvable : {user_id}")
        return user

    def create_user(
        self,
        email: str,
        name: str,
        role: AdminRole,
        password: Optional[str] = None,
    ) -> tuple[AdminUser, Optional[str]]:
        """
        Cree un compte.

        Sans mot de passe fourni, un mot de passe temporaire est genere et
        retourne une seule fois (second element du tuple).

        Raises:
            AdminUserError: E-mail vide ou deja utilise
        """
        normalized = email.strip().lower()
        if not normalized or "@" not in normalized:
            raise AdminUserError("Adresse e-mail invalide")
        if self._users.get_by_email(normalized):
            raise AdminUserError(f"Un compte existe deja pour {normalized}")

        temporary = None
        if not password:
            temporary = secrets.token_urlsafe(TEMPORARY_PASSWORD_BYTES)
            password = temporary

        user = self._users.save(
            AdminUser(
                email=normalized,
                name=name.strip() or normalized,
                role=AdminRole(role),
                password_hash=hash_password(password),
            )
        )
        logger.info("Compte admin cree", user_id=user.id, role=user.role.value)
        return user, temporary

    def authenticate(self, email: str, password: str) -> AdminUser:
        """
        Verifie les identifiants.

        Raises:
            AuthenticationError: Compte inconnu, inactif ou mot de passe faux
        """
        user = self._users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Echec de connexion admin", email=email.strip().lower())
            raise AuthenticationError()
        if not user.is_active:
            logger.warning("Connexion d'un compte desactive", user_id=user.id)
            raise AuthenticationError("Compte desactive")
        return user

    def _active_super_admins(self) -> list[AdminUser]:
        return [
            u
            for u in self._users.list_all()
            if u.is_active and u.role is AdminRole.SUPER_ADMIN
        ]

    def _ensure_not_last_super_admin(self, user: AdminUser) -> None:
        if user.role is not AdminRole.SUPER_ADMIN or not user.is_active:
            return
        if len(self._active_super_admins()) <= 1:
            raise AdminUserError("Impossible de retirer le dernier SUPER_ADMIN actif")

    def change_role(self, user_id: str, role: AdminRole) -> AdminUser:
        """Raises: AdminUserError"""
        user = self.get(user_id)
        role = AdminRole(role)
        if role is not AdminRole.SUPER_ADMIN:
            self._ensure_not_last_super_admin(user)
        user.role = role
        saved = self._users.save(user)
        logger.info("Role admin modifie", user_id=user_id, role=role.value)
        return saved

    def deactivate(self, user_id: str) -> AdminUser:
        """Raises: AdminUserError"""
        user = self.get(user_id)
        self._ensure_not_last_super_admin(user)
        user.is_active = False
        saved = self._users.save(user)
        logger.info("Compte admin desactive", user_id=user_id)
        return saved

    def set_password(self, user_id: str, password: str) -> AdminUser:
        user = self.get(user_id)
        user.password_hash = hash_password(password)
        return self._users.save(user)
