from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MeResponse(BaseModel):
    """The authenticated identity with its roles and profile row."""
    id: str
    email: str | None = None
    roles: list[str] = Field(default_factory=list)
    profile: dict[str, Any] | None = None


class RoleDiagnosticResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    email: str | None = None
    roles: list[str] = Field(default_factory=list)
    has_admin_role: bool = Field(False, alias="hasAdminRole")
    has_lender_role: bool = Field(False, alias="hasLenderRole")
    has_borrower_role: bool = Field(False, alias="hasBorrowerRole")


class LenderDistributionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_lenders: int = Field(..., alias="totalLenders")
    country_distribution: dict[str, int] = Field(default_factory=dict, alias="countryDistribution")
