from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AccountDiagnosticResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    profile: dict[str, Any]
    lender: dict[str, Any]
    subscription: dict[str, Any]


class ProfileCheckResponse(BaseModel):
    user_id: str
    profile: dict[str, Any] | None = None
    lender: dict[str, Any] | None = None
    currency: dict[str, Any] | None = None


class TierCheckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    email: str | None = None
    subscription: dict[str, Any] | None = None
    effective_tier: Any = Field("FREE", alias="effectiveTier")
    tier_error: str | None = Field(None, alias="tierError")
    lender_country: str | None = Field(None, alias="lenderCountry")
    business_name: str | None = Field(None, alias="businessName")
