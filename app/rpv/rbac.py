from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, redirect, url_for

from app.rpv.constants import FORBIDDEN_MESSAGE
from app.rpv.errors import ForbiddenError
from app.rpv.models import UserRole
from app.rpv.sessions import SessionRecord


def session_has_role(record: SessionRecord | None, role: UserRole) -> bool:
    return record is not None and record.user.role == role


def require_login(fn: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(fn)
    def wrapped(*args: Any, **kwargs: Any):
        # Unauthenticated → redirect to login (soft failure).
        if getattr(g, "current_session", None) is None:
            return redirect(url_for("auth.login_get"))
        return fn(*args, **kwargs)

    return wrapped


def require_role(role: UserRole) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Authentication first, then role. A request failing authentication never
    reaches the role check.
    """

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        @require_login
        @wraps(fn)
        def wrapped(*args: Any, **kwargs: Any):
            # Authenticated but wrong role → 403
            if not session_has_role(g.current_session, role):
                raise ForbiddenError(FORBIDDEN_MESSAGE.format(role=role.value.capitalize()))
            return fn(*args, **kwargs)

        return wrapped

    return decorator
