from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ProfileEntity:
    user_id: str  # user id from Supabase auth
    email: str | None
    role: str | None = None  # "borrower" | "lender" | "admin"
    full_name: str | None = None
    country_code: str | None = None
    stripe_customer_id: str | None = None
    created_at: datetime | None = None
    # Raw row as returned by PostgREST, echoed by the lookup routes
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)
