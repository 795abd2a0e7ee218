"""Session-based authentication dependencies.

The session id travels in the ``session`` cookie, or in the
``X-Session-Id`` header for non-browser clients, and is resolved against
the server-side session store on every request.

    OptionalUserDep  → User | None   (anonymous allowed)
    UserDep          → User          (401 otherwise)
    AdminDep         → User          (401 anonymous, 403 non-admin)

Login flows that create sessions are outside this service; sessions are
minted by the user store (CLI ``create-session`` or tests).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from src.interfaces.user_store import IUserStore
from src.models.user import User
from src.utils.errors import AuthenticationError, PermissionDeniedError

SESSION_COOKIE = "session"
SESSION_HEADER = "X-Session-Id"


def session_id_from_request(request: Request) -> str | None:
    return request.cookies.get(SESSION_COOKIE) or request.headers.get(SESSION_HEADER)


def _get_user_store(request: Request) -> IUserStore:
    """Return the user store from application state."""
    return request.app.state.user_store


UserStoreDep = Annotated[IUserStore, Depends(_get_user_store)]


async def optional_user(request: Request, users: UserStoreDep) -> User | None:
    session_id = session_id_from_request(request)
    if not session_id:
        return None
    return await users.get_session_user(session_id)


async def require_user(request: Request, users: UserStoreDep) -> User:
    session_id = session_id_from_request(request)
    if not session_id:
        raise AuthenticationError(message="Not authenticated")
    user = await users.get_session_user(session_id)
    if user is None:
        raise AuthenticationError(message="Invalid or expired session")
    return user


async def require_admin(user: Annotated[User, Depends(require_user)]) -> User:
    if not user.is_admin:
        raise PermissionDeniedError(message="Admin access required")
    return user


OptionalUserDep = Annotated[User | None, Depends(optional_user)]
UserDep = Annotated[User, Depends(require_user)]
AdminDep = Annotated[User, Depends(require_admin)]
