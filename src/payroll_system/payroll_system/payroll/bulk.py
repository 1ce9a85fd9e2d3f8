from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Union

from ..common.datetime_utils import parse_month
from ..common.validators import parse_payment_method, parse_payment_type
from ..core.context import Actor, require_payroll_write
from ..core.exceptions import (
    AlreadyPaidError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    PayrollLockedError,
    PersistenceError,
    ValidationError,
)
from .ledger import PaymentLedger
from .lock import PayrollLockService
from .model import (
    AdjustmentDraft,
    BulkPaymentEntry,
    BulkPaymentError,
    BulkPaymentResult,
    StaffPayrollRecord,
)

log = logging.getLogger(__name__)

_ERROR_CODES = (
    (AlreadyPaidError, "already_paid"),
    (NotFoundError, "not_found"),
    (PayrollLockedError, "payroll_locked"),
    (AuthorizationError, "forbidden"),
    (ValidationError, "validation_error"),
    (PersistenceError, "persistence_error"),
)


def error_code(exc: Exception) -> str:
    for cls, code in _ERROR_CODES:
        if isinstance(exc, cls):
            return code
    return "error"


def _entry_data(entry: Any) -> Dict[str, Any]:
    if isinstance(entry, BulkPaymentEntry):
        return asdict(entry)
    if isinstance(entry, Mapping):
        return dict(entry)
    raise ValidationError("Each payment must be an object")


def build_entries(
    records: Iterable[StaffPayrollRecord],
    drafts: Mapping[int, AdjustmentDraft],
) -> List[BulkPaymentEntry]:
    """Turn preview rows plus held adjustment drafts into bulk entries.

    Already paid rows are skipped.
    """
    entries = []
    for r in records:
        if r.payment_id is not None:
            continue
        draft = drafts.get(r.staff_id) or AdjustmentDraft(staff_id=r.staff_id)
        entries.append(draft.to_entry(r.payable_salary))
    return entries


class BulkPaymentOrchestrator:
    """Applies a batch of payments one by one; one failing entry never aborts the rest."""

    def __init__(self, ledger: PaymentLedger, locks: PayrollLockService):
        self._ledger = ledger
        self._locks = locks

    def bulk_process(
        self,
        *,
        actor: Actor,
        month: str,
        method: Any = None,
        payments: Sequence[Union[BulkPaymentEntry, Mapping[str, Any]]],
        payment_type: Any = None,
    ) -> BulkPaymentResult:
        require_payroll_write(actor)
        month_range = parse_month(month)
        method_e = parse_payment_method(method)
        type_e = parse_payment_type(payment_type)

        if not payments:
            raise ValidationError("No payments to process")
        self._locks.ensure_unlocked(month_range.month)

        result = BulkPaymentResult()
        for entry in payments:
            staff_id = entry.get("staff_id") if isinstance(entry, Mapping) else getattr(entry, "staff_id", None)
            try:
                data = _entry_data(entry)
                record = self._ledger.record_payment(
                    created_by=actor.user_id,
                    staff_id=staff_id,
                    month=month_range,
                    amount=data.get("amount"),
                    bonus=data.get("bonus"),
                    deduction=data.get("deduction"),
                    method=method_e,
                    note=data.get("note"),
                    payment_type=type_e,
                    check_lock=False,
                )
            except (DomainError, PersistenceError) as e:
                log.warning("Bulk payment for staff %s (%s) failed: %s", staff_id, month_range.month, e)
                result.errors.append(BulkPaymentError(staff_id=staff_id, message=str(e), error=error_code(e)))
                continue
            result.results.append(record)

        log.info(
            "Bulk %s payment for %s by user %s: %d succeeded, %d failed",
            type_e.value,
            month_range.month,
            actor.user_id,
            result.success_count,
            result.error_count,
        )
        return result
