# modules/auth/session.py
"""
Signed-in user as an explicit value.

The snapshot lives in the Flask session cookie only as a convenience to skip
re-authentication; the users table stays the source of truth. Views get the
context from ``g.session_ctx`` and pass it to the permission gate.
"""
from dataclasses import asdict, dataclass, field

from flask import session

from modules.users.models import Permission

SESSION_KEY = "ombor_current_user"


@dataclass(frozen=True)
class SessionContext:
    user_id: str
    username: str
    full_name: str
    permissions: frozenset = field(default_factory=frozenset)

    @classmethod
    def from_user(cls, user) -> "SessionContext":
        return cls(
            user_id=user.id,
            username=user.username,
            full_name=user.full_name,
            permissions=frozenset(user.permissions),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["permissions"] = sorted(p.value for p in self.permissions)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SessionContext":
        return cls(
            user_id=data["user_id"],
            username=data["username"],
            full_name=data["full_name"],
            permissions=frozenset(Permission(p) for p in data.get("permissions", [])),
        )


def start_session(user) -> SessionContext:
    ctx = SessionContext.from_user(user)
    session[SESSION_KEY] = ctx.to_dict()
    return ctx


def current_session():
    data = session.get(SESSION_KEY)
    if not data:
        return None
    try:
        return SessionContext.from_dict(data)
    except (KeyError, ValueError, TypeError):
        # stale or tampered snapshot
        session.pop(SESSION_KEY, None)
        return None


def end_session() -> None:
    session.pop(SESSION_KEY, None)
