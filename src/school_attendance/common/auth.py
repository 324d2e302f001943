"""Principal resolution.

Identity is issued by an external service which stores the principal in the
Flask session (``user_id`` and ``role``). The core trusts these values.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import g, session

from ..core.enums import Role
from .responses import fail


@dataclass(frozen=True)
class Principal:
    user_id: str
    role: Role


def current_principal() -> Optional[Principal]:
    user_id = session.get("user_id")
    role = session.get("role")
    if not user_id or not role:
        return None
    try:
        return Principal(user_id=str(user_id), role=Role(role))
    except ValueError:
        return None


def roles_required(*roles: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            principal = current_principal()
            if principal is None:
                return fail("Authentication required", 401)
            if roles and principal.role not in roles:
                return fail("You do not have permission to perform this action", 403)
            g.principal = principal
            return view(*args, **kwargs)

        return wrapper

    return decorator
