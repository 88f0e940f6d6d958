from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Roster entry. Read-only reference data for attendance and leave logic."""

    user_id: int
    employee_id: str
    name: str
    email: str
    department: str
    position: str
    role: Role
    password_hash: str = ""
    is_active: bool = True

    def display(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "employeeId": self.employee_id,
            "department": self.department,
            "position": self.position,
        }


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, as asserted by the identity collaborator."""

    user_id: int
    name: str
    employee_id: str
    role: Role
    department: Optional[str] = None
