"""Session and page-level access checks shared by every controller."""
from __future__ import annotations

from typing import Mapping, MutableMapping, Optional, Sequence

from ..core.constants import ADMIN_ROLES
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..users.service import SessionUser


def store_session_user(session: MutableMapping, user: SessionUser) -> None:
    session["user_id"] = user.user_id
    session["name"] = user.name
    session["role"] = user.role.value


def current_user(session: Mapping) -> Optional[SessionUser]:
    if "user_id" not in session:
        return None
    try:
        role = Role(session.get("role") or Role.USER.value)
    except ValueError:
        role = Role.USER
    return SessionUser(user_id=int(session["user_id"]), name=session.get("name"), role=role)


def require_auth(session: Mapping) -> SessionUser:
    user = current_user(session)
    if user is None:
        raise AuthenticationError("Unauthorized: Please login")
    return user


def is_admin_role(role: Optional[Role]) -> bool:
    return role in ADMIN_ROLES


def require_admin(user: SessionUser) -> SessionUser:
    if not is_admin_role(user.role):
        raise AuthorizationError("Unauthorized")
    return user


class PageAccessPolicy:
    """Role-based page access.

    ``rbac_config`` maps a page path to the roles allowed to open it. ADMIN is
    always allowed; pages missing from the config (or no config at all) are open
    to any authenticated user.
    """

    def __init__(self, rbac_config: Optional[Mapping[str, Sequence[str]]] = None):
        self._config = {page: {str(r).upper() for r in roles} for page, roles in (rbac_config or {}).items()}

    def allows(self, user: SessionUser, page: str) -> bool:
        if user.role == Role.ADMIN:
            return True
        allowed = self._config.get(page)
        if allowed is None:
            return True
        return user.role.value in allowed

    def require(self, user: SessionUser, page: str) -> None:
        if not self.allows(user, page):
            raise AuthorizationError(f"Forbidden: no access to {page}")
