from __future__ import annotations

from dataclasses import dataclass

ADMIN = "admin"
LENDER = "lender"
BORROWER = "borrower"


@dataclass(frozen=True)
class RoleAssignment:
    user_id: str
    role: str
