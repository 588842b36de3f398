from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile, status
from starlette.concurrency import run_in_threadpool

from lendbridge.application.dtos.borrower_dto import (
    DocumentMetadataResponse,
    UploadDocumentBody,
    UploadDocumentResponse,
    VerificationStatusResponse,
)
from lendbridge.application.dtos.common_dto import ERROR_RESPONSES, ErrorResponse
from lendbridge.application.use_cases.check_verification import CheckVerificationUseCase
from lendbridge.application.use_cases.upload_document import UploadDocumentUseCase
from lendbridge.domain.entities.identity import Identity
from lendbridge.infrastructure.api.dependencies import (
    get_borrower_repo,
    get_current_identity,
    get_document_repo,
)
from lendbridge.infrastructure.database.repositories.borrower_repository import BorrowerRepository
from lendbridge.infrastructure.database.repositories.document_repository import DocumentRepository
from lendbridge.infrastructure.documents.exif_reader import extract_metadata

router = APIRouter(
    prefix="/api/borrower",
    tags=["Borrower"],
)


@router.get(
    "/check-verification",
    response_model=VerificationStatusResponse,
    response_model_exclude_unset=True,
    summary="Check Verification Status",
    description="""
    Report the borrower self-verification state of the signed-in user and the
    page the client should send them to next.

    - No borrower link: `has_borrower_record` is false and the message points
      to onboarding.
    - `pending`: the message points to the pending-verification view.
    - `approved`: the user should have access.

    **Authentication required**: Yes
    """,
    responses=ERROR_RESPONSES,
)
def check_verification(
    identity: Identity = Depends(get_current_identity),
    borrowers: BorrowerRepository = Depends(get_borrower_repo),
):
    return CheckVerificationUseCase(borrowers=borrowers).execute(identity)


@router.post(
    "/upload-document",
    response_model=UploadDocumentResponse,
    status_code=status.HTTP_200_OK,
    summary="Record Borrower Document",
    description="""
    Store the metadata of a borrower identity or income document and score
    its fraud risk.

    **Required fields**: `borrowerId`, `userId`, `documentType`, `fileHash`.
    Documents without EXIF metadata are flagged with `missing_exif_data` and
    a base risk score of 20. The write runs with the service role.
    """,
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - Missing required fields"},
        500: {"model": ErrorResponse, "description": "Backend failure"},
    },
)
def upload_document(
    body: UploadDocumentBody,
    documents: DocumentRepository = Depends(get_document_repo),
):
    row = UploadDocumentUseCase(documents=documents).execute(body)
    return UploadDocumentResponse(data=row)


@router.post(
    "/extract-metadata",
    response_model=DocumentMetadataResponse,
    summary="Extract Document Metadata",
    description="""
    Read an uploaded document image and return its SHA-256 hash, size,
    dimensions and EXIF metadata, ready to be sent to `upload-document`.

    **Supported formats**: JPEG, PNG, TIFF, WEBP and the other formats Pillow reads
    **Authentication required**: Yes
    """,
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - Not a readable image"},
        401: {"model": ErrorResponse, "description": "Unauthenticated"},
    },
)
async def extract_document_metadata(
    file: UploadFile = File(..., description="Document image to inspect"),
    identity: Identity = Depends(get_current_identity),
):
    payload = await file.read()
    meta = await run_in_threadpool(extract_metadata, payload, file.filename)
    return DocumentMetadataResponse(
        file_hash=meta.file_hash,
        file_size_bytes=meta.file_size_bytes,
        file_extension=meta.file_extension,
        width=meta.width,
        height=meta.height,
        format=meta.format,
        exif_data=meta.exif_data,
    )
