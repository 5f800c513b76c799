import asyncio

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from ...models import (
    CamelModel,
    CreatorSubmission,
    PaymentStatus,
    ReviewStatus,
    SubmissionStoreDocument,
)
from ...services import SubmissionStore, UploadService
from ..deps import get_store, get_upload_service

router = APIRouter(tags=["creators"])


class UploadResponse(CamelModel):
    success: bool
    message: str
    creator_id: str
    files_received: int


class StatusUpdateRequest(CamelModel):
    status: PaymentStatus
    amount: int | float | None = None


class ReviewUpdateRequest(CamelModel):
    status: ReviewStatus


async def _handle_upload(request: Request, uploads: UploadService) -> UploadResponse:
    async with request.form(max_files=uploads.max_files + 1) as form:
        fields = {key: value for key, value in form.multi_items() if isinstance(value, str)}
        files = [value for value in form.getlist("projectFiles") if isinstance(value, UploadFile)]
        submission = await uploads.submit(fields, files)
    return UploadResponse(
        success=True,
        message="Creator application submitted successfully",
        creator_id=submission.id,
        files_received=len(submission.files),
    )


@router.post("/creator-upload", response_model=UploadResponse)
async def creator_upload(
    request: Request, uploads: UploadService = Depends(get_upload_service)
) -> UploadResponse:
    """Receive a creator application (multipart form + projectFiles)."""
    return await _handle_upload(request, uploads)


@router.post("/submissions", response_model=UploadResponse)
async def create_submission(
    request: Request, uploads: UploadService = Depends(get_upload_service)
) -> UploadResponse:
    """Alias of /creator-upload."""
    return await _handle_upload(request, uploads)


@router.get("/creators", response_model=SubmissionStoreDocument)
async def list_creators(store: SubmissionStore = Depends(get_store)) -> SubmissionStoreDocument:
    """All submissions with totalSubmissions / totalEarnings."""
    return await asyncio.to_thread(store.snapshot)


@router.get("/creators/{creator_id}", response_model=CreatorSubmission)
async def get_creator(creator_id: str, store: SubmissionStore = Depends(get_store)) -> CreatorSubmission:
    return await asyncio.to_thread(store.get, creator_id)


@router.patch("/creators/{creator_id}/status", response_model=CreatorSubmission)
async def update_payment_status(
    creator_id: str,
    request: StatusUpdateRequest,
    store: SubmissionStore = Depends(get_store),
) -> CreatorSubmission:
    """Advance a creator's payment status (pending -> processed -> paid)."""
    return await asyncio.to_thread(store.update_status, creator_id, request.status, request.amount)


@router.patch("/creators/{creator_id}/review", response_model=CreatorSubmission)
async def update_review_status(
    creator_id: str,
    request: ReviewUpdateRequest,
    store: SubmissionStore = Depends(get_store),
) -> CreatorSubmission:
    return await asyncio.to_thread(store.set_review_status, creator_id, request.status)
