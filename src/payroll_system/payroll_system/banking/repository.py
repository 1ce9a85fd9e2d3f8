from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import BankSetting


class BankSettingsRepository(Protocol):
    def list_all(self) -> Sequence[BankSetting]:
        raise NotImplementedError

    def get_default(self) -> Optional[BankSetting]:
        raise NotImplementedError

    def create(
        self,
        *,
        bank_name: str,
        bank_account_no: str,
        company_name: str,
        branch_name: Optional[str],
        branch_location: Optional[str],
        is_default: bool,
    ) -> BankSetting:
        """Insert a bank setting. A new default clears the previous default in the same transaction."""

        raise NotImplementedError
