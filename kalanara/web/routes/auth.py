"""
Connexion au back-office.
"""

from fastapi import APIRouter, Depends, Request, Response

from ..schemas import AdminUserOut, LoginPayload
from ..security import (
    SessionUser,
    clear_session_cookie,
    create_session_token,
    require_roles,
    set_session_cookie,
)

router = APIRouter(prefix="/admin", tags=["auth"])


@router.post("/login", response_model=AdminUserOut)
def login(payload: LoginPayload, request: Request, response: Response):
    """Verifie les identifiants et pose le cookie de session."""
    container = request.app.state.container
    user = container.admin_user_service().authenticate(payload.email, payload.password)
    settings = container.config()
    set_session_cookie(response, settings, create_session_token(user, settings))
    return user


@router.post("/logout")
def logout(request: Request, response: Response):
    clear_session_cookie(response, request.app.state.container.config())
    return {"status": "ok"}


@router.get("/me", response_model=AdminUserOut)
def me(request: Request, user: SessionUser = Depends(require_roles())):
    container = request.app.state.container
    return container.admin_user_service().get(user.id)
