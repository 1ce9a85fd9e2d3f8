from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentMethod, PaymentType
from .model import PaymentRecord, PayrollLock


class PaymentRepository(Protocol):
    """Payment ledger storage.

    Implementations must enforce at most one active record per
    (staff_id, month, payment_type) with a unique key, not an in-memory check.
    """

    def get_active(self, *, staff_id: int, month: str, payment_type: PaymentType) -> Optional[PaymentRecord]:
        raise NotImplementedError

    def list_active_for_month(
        self,
        *,
        month: str,
        payment_type: Optional[PaymentType] = None,
    ) -> Sequence[PaymentRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        staff_id: int,
        month: str,
        payment_type: PaymentType,
        base_amount: Decimal,
        bonus: Decimal,
        deduction: Decimal,
        final_amount: Decimal,
        payment_method: PaymentMethod,
        note: Optional[str],
        created_by: int,
        created_at: datetime,
    ) -> PaymentRecord:
        """Insert an active payment.

        Raises DuplicateRecordError when an active payment already exists.
        """

        raise NotImplementedError

    def void_active(
        self,
        *,
        staff_id: int,
        month: str,
        payment_type: PaymentType,
        voided_by: int,
        voided_at: datetime,
    ) -> Optional[PaymentRecord]:
        """Mark the active payment voided. Returns the voided record, or None if none was active."""

        raise NotImplementedError


class PayrollLockRepository(Protocol):
    def get(self, month: str) -> Optional[PayrollLock]:
        raise NotImplementedError

    def create(self, *, month: str, locked_by: int, locked_at: datetime) -> PayrollLock:
        """Raises DuplicateRecordError if the month is already locked."""

        raise NotImplementedError

    def delete(self, month: str) -> bool:
        raise NotImplementedError
