from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class UserRepository(Protocol):
    """Roster/identity storage.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(
        self,
        *,
        user_id: Optional[int] = None,
        department: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Sequence[Employee]:
        raise NotImplementedError

    def list_departments(self) -> Sequence[str]:
        raise NotImplementedError

    def department_breakdown(self) -> Sequence[tuple[str, int]]:
        """Active employees per department, largest first."""

        raise NotImplementedError
