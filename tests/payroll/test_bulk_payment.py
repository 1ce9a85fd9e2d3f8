from __future__ import annotations

import threading
from decimal import Decimal

import pytest

from src.payroll_system.payroll_system.core.exceptions import PayrollLockedError, PersistenceError, ValidationError
from src.payroll_system.payroll_system.payroll.bulk import build_entries
from src.payroll_system.payroll_system.payroll.model import AdjustmentDraft


def test_bulk_reports_partial_success(store, container, hr):
    for i in range(1, 6):
        store.add_staff(i)
    existing = container.payment_ledger.process_payment(actor=hr, staff_id=3, month="2026-03", amount="1000")

    result = container.bulk_orchestrator.bulk_process(
        actor=hr,
        month="2026-03",
        method="cash",
        payments=[{"staff_id": i, "amount": 1000} for i in range(1, 6)],
    )

    assert result.success_count == 4
    assert result.error_count == 1
    assert result.errors[0].staff_id == 3
    assert result.errors[0].error == "already_paid"
    assert {r.staff_id for r in result.results} == {1, 2, 4, 5}
    assert len(store.payments.records) == 5
    assert store.payments.get_active(staff_id=3, month="2026-03", payment_type=existing.payment_type) == existing

def test_bulk_collects_each_kind_of_failure(store, container, hr):
    store.add_staff(1)

    result = container.bulk_orchestrator.bulk_process(
        actor=hr,
        month="2026-03",
        payments=[
            {"staff_id": 99, "amount": 1000},
            {"staff_id": 1, "amount": -5},
            {"staff_id": 1, "amount": 1000},
        ],
    )

    assert [e.error for e in result.errors] == ["not_found", "validation_error"]
    assert result.success_count == 1


def test_bulk_collects_store_failures(store, container, hr, monkeypatch):
    store.add_staff(1)
    store.add_staff(2)
    original = store.payments.create

    def flaky_create(**kwargs):
        if kwargs["staff_id"] == 1:
            raise PersistenceError("connection lost")
        return original(**kwargs)

    monkeypatch.setattr(store.payments, "create", flaky_create)

    result = container.bulk_orchestrator.bulk_process(
        actor=hr,
        month="2026-03",
        payments=[{"staff_id": 1, "amount": 1000}, {"staff_id": 2, "amount": 1000}],
    )

    assert [e.error for e in result.errors] == ["persistence_error"]
    assert [r.staff_id for r in result.results] == [2]


def test_empty_batch_is_rejected(container, hr):
    with pytest.raises(ValidationError):
        container.bulk_orchestrator.bulk_process(actor=hr, month="2026-03", payments=[])


def test_locked_month_rejects_whole_batch(store, container, hr):
    store.add_staff(1)
    container.lock_service.lock(actor=hr, month="2026-03")

    with pytest.raises(PayrollLockedError):
        container.bulk_orchestrator.bulk_process(
            actor=hr, month="2026-03", payments=[{"staff_id": 1, "amount": 1000}]
        )

    assert store.payments.records == []


def test_concurrent_bulk_submissions_create_one_active_record(store, container, hr):
    store.add_staff(1)
    results = []
    start = threading.Barrier(8)

    def submit():
        start.wait()
        results.append(
            container.bulk_orchestrator.bulk_process(
                actor=hr, month="2026-03", payments=[{"staff_id": 1, "amount": 1000}]
            )
        )

    threads = [threading.Thread(target=submit) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sum(r.success_count for r in results) == 1
    assert sum(r.error_count for r in results) == 7
    assert len([r for r in store.payments.records if r.is_active]) == 1


def test_build_entries_applies_drafts_and_skips_paid(store, container, hr):
    for i in (1, 2, 3):
        store.add_staff(i)
        store.fill_month(i, "2026-03")
    container.payment_ledger.process_payment(actor=hr, staff_id=3, month="2026-03", amount="1000")
    records = container.preview_service.preview(actor=hr, month="2026-03")
    drafts = {
        1: AdjustmentDraft(staff_id=1, bonus=Decimal("500"), deduction=Decimal("200")),
        2: AdjustmentDraft(staff_id=2, base_amount=Decimal("25000")),
    }

    entries = build_entries(records, drafts)

    assert [(e.staff_id, e.amount, e.bonus, e.deduction) for e in entries] == [
        (1, Decimal("30000.00"), Decimal("500"), Decimal("200")),
        (2, Decimal("25000"), Decimal("0.00"), Decimal("0.00")),
    ]

    result = container.bulk_orchestrator.bulk_process(actor=hr, month="2026-03", method="bank_transfer", payments=entries)
    assert result.success_count == 2
    assert {r.staff_id: r.final_amount for r in result.results} == {1: Decimal("30300.00"), 2: Decimal("25000.00")}


def test_entry_that_is_not_an_object_does_not_abort_batch(store, container, hr):
    store.add_staff(1)
    store.add_staff(2)

    result = container.bulk_orchestrator.bulk_process(
        actor=hr,
        month="2026-03",
        payments=[{"staff_id": 1, "amount": 1000}, 5, {"staff_id": 2, "amount": 1000}],
    )

    assert [r.staff_id for r in result.results] == [1, 2]
    assert [(e.staff_id, e.error) for e in result.errors] == [(None, "validation_error")]


def test_oversized_amount_does_not_abort_batch(store, container, hr):
    for i in (1, 2, 3):
        store.add_staff(i)

    result = container.bulk_orchestrator.bulk_process(
        actor=hr,
        month="2026-03",
        payments=[
            {"staff_id": 1, "amount": 1000},
            {"staff_id": 2, "amount": "1e30"},
            {"staff_id": 3, "amount": 1000},
        ],
    )

    assert [r.staff_id for r in result.results] == [1, 3]
    assert [(e.staff_id, e.error) for e in result.errors] == [(2, "validation_error")]
