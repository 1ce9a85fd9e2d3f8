from __future__ import annotations

from typing import Dict, Iterable, Optional, Protocol, Sequence

from .model import Staff


class StaffRepository(Protocol):
    """Staff directory interface.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        raise NotImplementedError

    def list_active(self, *, branch_id: Optional[int] = None) -> Sequence[Staff]:
        """Active staff ordered by name, optionally scoped to one branch."""

        raise NotImplementedError

    def get_many(self, staff_ids: Iterable[int]) -> Dict[int, Staff]:
        """Staff by id, active or not."""

        raise NotImplementedError
