from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class InviteBorrowerBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    borrower_id: str | None = Field(None, alias="borrowerId")
    email: str | None = Field(None, examples=["borrower@example.com"])
    phone: str | None = Field(None, examples=["+264811234567"])


class InviteBorrowerResponse(BaseModel):
    success: bool = True
    message: str = "Invitation sent successfully"
