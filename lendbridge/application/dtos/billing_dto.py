from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PortalSessionResponse(BaseModel):
    url: str = Field(..., description="Billing portal URL to redirect the user to")


class CheckoutBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    plan_id: str | None = Field(None, alias="planId", examples=["lender_starter"])
    billing_period: str | None = Field(None, alias="billingPeriod", examples=["monthly"])
    user_role: str | None = Field(None, alias="userRole", examples=["lender"])


class CheckoutResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")


class WebhookResponse(BaseModel):
    received: bool = True
