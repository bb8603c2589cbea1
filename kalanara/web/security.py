"""
Session admin : cookie HttpOnly contenant un JWT signe (HS256).

Le jeton porte l'identifiant du compte (sub), son role et son expiration.
A chaque requete le compte est relu : un admin desactive ou dont le role
a change perd ses droits sans attendre l'expiration du jeton.
Les routes du back-office declarent les roles autorises via require_roles.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import jwt
from fastapi import HTTPException, Request, Response, status

from ..config import Settings
from ..core.entities import AdminUser
from ..core.value_objects import ADMIN_ROLES, AdminRole
from ..utils.clock import utcnow

JWT_ALGORITHM = "HS256"


@dataclass(frozen=True)
class SessionUser:
    """Identite extraite du cookie de session."""

    id: str
    email: str
    role: AdminRole


def create_session_token(user: AdminUser, settings: Settings) -> str:
    now = utcnow()
    payload = {
        "sub": user.id,
        "email": user.email,
        "role": user.role.value,
        "iat": now,
        "exp": now + timedelta(minutes=settings.session_ttl_minutes),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=JWT_ALGORITHM)


def decode_session_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Raises:
        jwt.PyJWTError: Signature invalide, jeton expire ou mal forme
    """
    return jwt.decode(
        token,
        settings.session_secret,
        algorithms=[JWT_ALGORITHM],
        options={"require": ["sub", "role", "exp"]},
    )


def set_session_cookie(response: Response, settings: Settings, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_minutes * 60,
        path="/",
        secure=settings.app_url.lower().startswith("https://"),
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(settings.session_cookie_name, path="/")


def get_session_user(request: Request) -> SessionUser:
    """
    Dependance FastAPI : identite de l'admin connecte.

    Raises:
        HTTPException 401: Cookie absent, jeton invalide ou compte desactive
        HTTPException 403: Role hors back-office
    """
    settings: Settings = request.app.state.container.config()
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Authentification requise")
    try:
        claims = decode_session_token(token, settings)
    except jwt.PyJWTError as exc:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Session invalide") from exc

    account = request.app.state.container.admin_user_repository().get_by_id(claims["sub"])
    if account is None or not account.is_active:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Session invalide")
    if account.role not in ADMIN_ROLES:
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail="Acces refuse")
    return SessionUser(id=account.id, email=account.email, role=account.role)


def require_roles(*roles: AdminRole):
    """
    Fabrique une dependance limitant l'acces aux roles donnes.

    Sans argument, tous les roles du back-office sont acceptes.

    Usage:
        @router.get("/users", dependencies=[Depends(require_roles(AdminRole.SUPER_ADMIN))])
    """
    allowed = frozenset(roles) or ADMIN_ROLES

    def dependency(request: Request) -> SessionUser:
        user = get_session_user(request)
        if user.role not in allowed:
            raise HTTPException(status.HTTP_403_FORBIDDEN, detail="Acces refuse")
        return user

    return dependency
