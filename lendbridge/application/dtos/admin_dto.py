from __future__ import annotations

from pydantic import BaseModel, Field


class VerifyBorrowerBody(BaseModel):
    """Admin decision on a borrower's self-verification."""
    borrower_id: str | None = Field(None, description="Borrower under review")
    action: str | None = Field(None, description="approve | reject", examples=["approve"])
    reason: str | None = Field(None, description="Required when rejecting")


class VerifyBorrowerResponse(BaseModel):
    success: bool = True
    message: str = Field(..., examples=["Verification approved successfully"])
