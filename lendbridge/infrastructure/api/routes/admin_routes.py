from __future__ import annotations

from fastapi import APIRouter, Depends

from lendbridge.application.dtos.admin_dto import VerifyBorrowerBody, VerifyBorrowerResponse
from lendbridge.application.dtos.common_dto import ErrorResponse
from lendbridge.application.use_cases.review_verification import ReviewVerificationUseCase
from lendbridge.domain.entities.identity import Identity
from lendbridge.domain.entities.role import ADMIN
from lendbridge.infrastructure.api.dependencies import (
    get_admin_borrower_repo,
    get_notification_repo,
    json_body,
    json_body_schema,
    require_roles,
)
from lendbridge.infrastructure.database.repositories.borrower_repository import BorrowerRepository
from lendbridge.infrastructure.database.repositories.notification_repository import (
    NotificationRepository,
)

router = APIRouter(prefix="/api/admin", tags=["Admin"])

require_admin = require_roles(ADMIN, message="Admin access required")


@router.post(
    "/verify-borrower",
    response_model=VerifyBorrowerResponse,
    summary="Review Borrower Verification",
    description="""
    Approve or reject a borrower's self-verification. The borrower is sent an
    in-app notification; a failed notification does not undo the decision.

    **Request Requirements:**
    - `borrower_id` and `action` (`approve` or `reject`)
    - `reason` when rejecting

    **Authentication required**: Yes, admin role
    """,
    openapi_extra=json_body_schema(VerifyBorrowerBody),
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - Missing or invalid fields"},
        401: {"model": ErrorResponse, "description": "Unauthenticated"},
        403: {"model": ErrorResponse, "description": "Forbidden - Not an admin"},
        404: {"model": ErrorResponse, "description": "Verification record not found"},
        500: {"model": ErrorResponse, "description": "Backend failure"},
    },
)
def verify_borrower(
    admin: Identity = Depends(require_admin),
    body: VerifyBorrowerBody = Depends(json_body(VerifyBorrowerBody)),
    borrowers: BorrowerRepository = Depends(get_admin_borrower_repo),
    notifications: NotificationRepository = Depends(get_notification_repo),
):
    uc = ReviewVerificationUseCase(borrowers=borrowers, notifications=notifications)
    return uc.execute(admin, body)
