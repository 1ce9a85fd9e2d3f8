from __future__ import annotations

import csv
import io
from functools import wraps

from flask import Flask, request, session

from ..common.http import fail, ok
from ..common.validators import optional_note, require_amount, require_positive_id
from ..core.context import Actor
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container
from .bulk import build_entries
from .model import AdjustmentDraft

_BANK_SHEET_FIELDS = [
    "sl",
    "staff_id",
    "name",
    "branch",
    "designation",
    "bank_name",
    "bank_account_no",
    "amount",
]


def _parse_drafts(items) -> dict:
    if items is None:
        return {}
    if not isinstance(items, list):
        raise ValidationError("adjustments must be a list")

    drafts = {}
    for item in items:
        if not isinstance(item, dict):
            raise ValidationError("Each adjustment must be an object")
        staff_id = require_positive_id(item.get("staff_id"), "Staff")
        base = item.get("base_amount")
        drafts[staff_id] = AdjustmentDraft(
            staff_id=staff_id,
            bonus=require_amount(item.get("bonus"), "Bonus"),
            deduction=require_amount(item.get("deduction"), "Deduction"),
            note=optional_note(item.get("note")),
            base_amount=require_amount(base, "Amount") if base not in (None, "") else None,
        )
    return drafts


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return fail("Authentication required", status=401, code="UNAUTHENTICATED")
            return view(*args, **kwargs)

        return wrapper

    def _actor() -> Actor:
        try:
            role = Role(session.get("role"))
        except ValueError:
            raise AuthorizationError("Unknown role")
        return Actor(user_id=int(session["user_id"]), role=role)

    def _body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    @app.route("/api/payroll/preview", methods=["GET"], endpoint="payroll_preview")
    @login_required
    def payroll_preview():
        records = container.preview_service.preview(
            actor=_actor(),
            month=request.args.get("month", ""),
            branch_id=request.args.get("branch_id"),
        )
        return ok([r.to_dict() for r in records])

    @app.route("/api/payroll/absent-dates", methods=["GET"], endpoint="payroll_absent_dates")
    @login_required
    def payroll_absent_dates():
        dates = container.grace_service.get_absent_dates(
            actor=_actor(),
            staff_id=request.args.get("staff_id"),
            month=request.args.get("month", ""),
        )
        return ok([d.isoformat() for d in dates])

    @app.route("/api/payroll/grace", methods=["POST"], endpoint="payroll_grace")
    @login_required
    def payroll_grace():
        data = _body()
        record = container.grace_service.apply_grace(
            actor=_actor(),
            staff_id=data.get("staff_id"),
            work_date=data.get("date") or "",
            note=data.get("note"),
        )
        return ok(record.to_dict(), message="Grace applied", status=201)

    @app.route("/api/payroll/process", methods=["POST"], endpoint="payroll_process")
    @login_required
    def payroll_process():
        data = _body()
        record = container.payment_ledger.process_payment(
            actor=_actor(),
            staff_id=data.get("staff_id"),
            month=data.get("month") or "",
            amount=data.get("amount"),
            bonus=data.get("bonus"),
            deduction=data.get("deduction"),
            method=data.get("payment_method"),
            note=data.get("note"),
            payment_type=data.get("payment_type"),
        )
        return ok(record.to_dict(), message="Payment processed", status=201)

    @app.route("/api/payroll/bulk-process", methods=["POST"], endpoint="payroll_bulk_process")
    @login_required
    def payroll_bulk_process():
        data = _body()
        actor = _actor()
        month = data.get("month") or ""

        payments = data.get("payments")
        if payments is None and data.get("from_preview"):
            records = container.preview_service.preview(actor=actor, month=month, branch_id=data.get("branch_id"))
            payments = build_entries(records, _parse_drafts(data.get("adjustments")))
        if payments is not None and not isinstance(payments, list):
            raise ValidationError("payments must be a list")

        result = container.bulk_orchestrator.bulk_process(
            actor=actor,
            month=month,
            method=data.get("payment_method"),
            payments=payments or [],
            payment_type=data.get("payment_type"),
        )
        return ok(
            result.to_dict(),
            message=f"Processed {result.success_count} payments, {result.error_count} failed",
        )

    @app.route("/api/payroll/undo", methods=["POST"], endpoint="payroll_undo")
    @login_required
    def payroll_undo():
        data = _body()
        record = container.payment_ledger.undo_payment(
            actor=_actor(),
            staff_id=data.get("staff_id"),
            month=data.get("month") or "",
            payment_type=data.get("payment_type"),
        )
        return ok(record.to_dict(), message="Payment undone")

    @app.route("/api/payroll/lock-status", methods=["GET"], endpoint="payroll_lock_status")
    @login_required
    def payroll_lock_status():
        lock = container.lock_service.status(actor=_actor(), month=request.args.get("month", ""))
        return ok({"locked": lock is not None, "lock": lock.to_dict() if lock else None})

    @app.route("/api/payroll/lock", methods=["POST"], endpoint="payroll_lock")
    @login_required
    def payroll_lock():
        lock = container.lock_service.lock(actor=_actor(), month=_body().get("month") or "")
        return ok(lock.to_dict(), message=f"Payroll for {lock.month} locked")

    @app.route("/api/payroll/unlock", methods=["POST"], endpoint="payroll_unlock")
    @login_required
    def payroll_unlock():
        month = _body().get("month") or ""
        container.lock_service.unlock(actor=_actor(), month=month)
        return ok(None, message=f"Payroll for {month} unlocked")

    @app.route("/api/payroll/bank-settings", methods=["GET"], endpoint="payroll_bank_settings")
    @login_required
    def payroll_bank_settings():
        settings = container.bank_transfer_service.list_settings(actor=_actor())
        return ok([s.to_dict() for s in settings])

    @app.route("/api/payroll/bank-settings", methods=["POST"], endpoint="payroll_create_bank_setting")
    @login_required
    def payroll_create_bank_setting():
        data = _body()
        setting = container.bank_transfer_service.create_setting(
            actor=_actor(),
            bank_name=data.get("bank_name") or "",
            bank_account_no=data.get("bank_account_no") or "",
            company_name=data.get("company_name") or "",
            branch_name=data.get("branch_name"),
            branch_location=data.get("branch_location"),
            is_default=bool(data.get("is_default")),
        )
        return ok(setting.to_dict(), message="Bank setting created", status=201)

    @app.route("/api/payroll/bank-transfer.csv", methods=["GET"], endpoint="payroll_bank_transfer_csv")
    @login_required
    def payroll_bank_transfer_csv():
        sheet = container.bank_transfer_service.build_sheet(
            actor=_actor(),
            month=request.args.get("month", ""),
            branch_id=request.args.get("branch_id"),
        )

        out = io.StringIO()
        if sheet.setting:
            csv.writer(out).writerow([sheet.setting.company_name, sheet.setting.bank_name, sheet.setting.bank_account_no])
        writer = csv.DictWriter(out, fieldnames=_BANK_SHEET_FIELDS)
        writer.writeheader()
        for i, r in enumerate(sheet.rows, start=1):
            writer.writerow(
                {
                    "sl": i,
                    "staff_id": r.staff_id,
                    "name": r.name,
                    "branch": r.branch or "",
                    "designation": r.designation or "",
                    "bank_name": r.bank_name or "",
                    "bank_account_no": r.bank_account_no or "",
                    "amount": f"{r.amount:.2f}",
                }
            )
        writer.writerow({"name": "Total", "amount": f"{sheet.total:.2f}"})

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=bank_transfer_{sheet.month}.csv"},
        )
