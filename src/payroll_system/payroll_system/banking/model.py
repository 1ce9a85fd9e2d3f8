from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from ..common.money import ZERO


@dataclass(frozen=True)
class BankSetting:
    """A company bank account used as the source of bank-transfer salaries."""

    bank_setting_id: int
    bank_name: str
    bank_account_no: str
    company_name: str
    branch_name: Optional[str] = None
    branch_location: Optional[str] = None
    is_default: bool = False

    def to_dict(self) -> dict:
        return {
            "bank_setting_id": self.bank_setting_id,
            "bank_name": self.bank_name,
            "bank_account_no": self.bank_account_no,
            "company_name": self.company_name,
            "branch_name": self.branch_name,
            "branch_location": self.branch_location,
            "is_default": self.is_default,
        }


@dataclass(frozen=True)
class BankTransferRow:
    staff_id: int
    name: str
    branch: Optional[str]
    designation: Optional[str]
    bank_name: Optional[str]
    bank_account_no: Optional[str]
    amount: Decimal
    payment_id: int


@dataclass(frozen=True)
class BankTransferSheet:
    month: str
    setting: Optional[BankSetting]
    rows: List[BankTransferRow] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((r.amount for r in self.rows), ZERO)
