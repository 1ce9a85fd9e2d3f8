from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local, parse_month
from ..core.context import Actor, require_payroll_read, require_payroll_write
from ..core.exceptions import DuplicateRecordError, PayrollLockedError, ValidationError
from .model import PayrollLock
from .repository import PayrollLockRepository

log = logging.getLogger(__name__)


class PayrollLockService:
    """Locks a payroll month so payments and undo are rejected until it is unlocked."""

    def __init__(self, locks: PayrollLockRepository, *, clock: Callable[[], datetime] = now_local):
        self._locks = locks
        self._clock = clock

    def status(self, *, actor: Actor, month: str) -> Optional[PayrollLock]:
        require_payroll_read(actor)
        return self._locks.get(parse_month(month).month)

    def ensure_unlocked(self, month: str) -> None:
        if self._locks.get(month):
            raise PayrollLockedError(f"Payroll for {month} is locked. Unlock it before making changes.")

    def lock(self, *, actor: Actor, month: str) -> PayrollLock:
        require_payroll_write(actor)
        month = parse_month(month).month

        if self._locks.get(month):
            raise ValidationError(f"Payroll for {month} is already locked")
        try:
            lock = self._locks.create(month=month, locked_by=actor.user_id, locked_at=self._clock())
        except DuplicateRecordError:
            raise ValidationError(f"Payroll for {month} is already locked")

        log.info("Payroll month %s locked by user %s", month, actor.user_id)
        return lock

    def unlock(self, *, actor: Actor, month: str) -> None:
        require_payroll_write(actor)
        month = parse_month(month).month

        if not self._locks.delete(month):
            raise ValidationError(f"Payroll for {month} is not locked")
        log.info("Payroll month %s unlocked by user %s", month, actor.user_id)
