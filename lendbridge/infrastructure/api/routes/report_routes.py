from __future__ import annotations

from fastapi import APIRouter, Depends

from lendbridge.application.dtos.common_dto import ErrorResponse
from lendbridge.application.dtos.report_dto import InviteBorrowerBody, InviteBorrowerResponse
from lendbridge.application.use_cases.invite_borrower import InviteBorrowerUseCase
from lendbridge.domain.entities.identity import Identity
from lendbridge.domain.entities.role import LENDER
from lendbridge.infrastructure.api.dependencies import (
    get_borrower_repo,
    json_body,
    json_body_schema,
    require_roles,
)
from lendbridge.infrastructure.database.repositories.borrower_repository import BorrowerRepository

router = APIRouter(prefix="/api/reports", tags=["Reports"])

require_lender = require_roles(LENDER, message="Only lenders can invite borrowers")


@router.post(
    "/invite",
    response_model=InviteBorrowerResponse,
    summary="Invite Borrower",
    openapi_extra=json_body_schema(InviteBorrowerBody),
    description="""
    Invite an unregistered borrower to join the platform.

    **Request Requirements:**
    - `borrowerId` is required
    - at least one of `email` or `phone`

    **Authentication required**: Yes, lender role
    """,
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - Missing fields"},
        401: {"model": ErrorResponse, "description": "Unauthenticated"},
        403: {"model": ErrorResponse, "description": "Forbidden - Not a lender"},
        500: {"model": ErrorResponse, "description": "Backend failure"},
    },
)
def invite_borrower(
    lender: Identity = Depends(require_lender),
    body: InviteBorrowerBody = Depends(json_body(InviteBorrowerBody)),
    borrowers: BorrowerRepository = Depends(get_borrower_repo),
):
    return InviteBorrowerUseCase(borrowers=borrowers).execute(lender, body)
