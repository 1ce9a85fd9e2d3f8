from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from ..common.datetime_utils import parse_month
from ..common.validators import optional_text, require_non_empty, require_positive_id
from ..core.context import Actor, require_payroll_read, require_payroll_write
from ..core.enums import PaymentMethod, PaymentType
from ..payroll.repository import PaymentRepository
from ..staff.repository import StaffRepository
from .model import BankSetting, BankTransferRow, BankTransferSheet
from .repository import BankSettingsRepository

log = logging.getLogger(__name__)


class BankTransferService:
    def __init__(
        self,
        settings: BankSettingsRepository,
        payments: PaymentRepository,
        staff: StaffRepository,
    ):
        self._settings = settings
        self._payments = payments
        self._staff = staff

    def list_settings(self, *, actor: Actor) -> Sequence[BankSetting]:
        require_payroll_read(actor)
        return self._settings.list_all()

    def create_setting(
        self,
        *,
        actor: Actor,
        bank_name: str,
        bank_account_no: str,
        company_name: str,
        branch_name: Optional[str] = None,
        branch_location: Optional[str] = None,
        is_default: bool = False,
    ) -> BankSetting:
        require_payroll_write(actor)
        setting = self._settings.create(
            bank_name=require_non_empty(bank_name, "Bank name"),
            bank_account_no=require_non_empty(bank_account_no, "Bank account number"),
            company_name=require_non_empty(company_name, "Company name"),
            branch_name=optional_text(branch_name, "Branch name"),
            branch_location=optional_text(branch_location, "Branch location"),
            is_default=bool(is_default),
        )
        log.info("Bank setting %s created by user %s", setting.bank_setting_id, actor.user_id)
        return setting

    def build_sheet(self, *, actor: Actor, month: str, branch_id: Any = None) -> BankTransferSheet:
        """Active bank-transfer salary payments of the month, with staff account numbers."""
        require_payroll_read(actor)
        month = parse_month(month).month
        branch = require_positive_id(branch_id, "Branch") if branch_id not in (None, "") else None

        payments = [
            p
            for p in self._payments.list_active_for_month(month=month, payment_type=PaymentType.SALARY)
            if p.payment_method == PaymentMethod.BANK_TRANSFER
        ]
        staff_by_id = self._staff.get_many([p.staff_id for p in payments])

        rows: List[BankTransferRow] = []
        for p in payments:
            staff = staff_by_id.get(p.staff_id)
            if not staff or (branch is not None and staff.branch_id != branch):
                continue
            rows.append(
                BankTransferRow(
                    staff_id=staff.staff_id,
                    name=staff.name,
                    branch=staff.branch_name,
                    designation=staff.designation,
                    bank_name=staff.bank_name,
                    bank_account_no=staff.bank_account_no,
                    amount=p.final_amount,
                    payment_id=p.payment_id,
                )
            )

        rows.sort(key=lambda r: r.name)
        return BankTransferSheet(month=month, setting=self._settings.get_default(), rows=rows)
