from __future__ import annotations

from dataclasses import dataclass

from .enums import Role
from .exceptions import AuthorizationError

PAYROLL_READ_ROLES = frozenset({Role.SUPER_ADMIN, Role.ADMIN, Role.HR_MANAGER, Role.TEAM_LEADER})
PAYROLL_WRITE_ROLES = frozenset({Role.SUPER_ADMIN, Role.ADMIN, Role.HR_MANAGER})


@dataclass(frozen=True)
class Actor:
    """The user performing an operation, passed explicitly into every service call."""

    user_id: int
    role: Role


def require_payroll_read(actor: Actor) -> None:
    if actor.role not in PAYROLL_READ_ROLES:
        raise AuthorizationError("You do not have access to payroll")


def require_payroll_write(actor: Actor) -> None:
    if actor.role not in PAYROLL_WRITE_ROLES:
        raise AuthorizationError("You are not allowed to change payroll")
