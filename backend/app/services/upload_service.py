from __future__ import annotations

import asyncio
import logging
import math
import re
import shutil
import time
import uuid
from pathlib import Path
from typing import Iterable, Mapping

from starlette.datastructures import UploadFile

from ..errors import PayloadTooLargeError, StorageError, ValidationError
from ..models import (
    ContactInfo,
    CreatorSubmission,
    PaymentInfo,
    ProfessionalInfo,
    ProjectInfo,
    SubmittedFile,
)
from .submission_store import SubmissionStore

logger = logging.getLogger("uvicorn.error")

UPLOAD_CHUNK_SIZE = 1024 * 1024
FILES_FIELD = "projectFiles"
REQUIRED_FIELDS = ("fullName", "email", "experience", "specialty", "projectDescription")

_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


def _optional(fields: Mapping[str, str], name: str) -> str | None:
    value = (fields.get(name) or "").strip()
    return value or None


def _parse_project_count(raw: str | None) -> int:
    if raw is None:
        return 1
    try:
        count = int(raw)
    except ValueError:
        raise ValidationError(f"projectCount must be a whole number, got {raw!r}", field="projectCount")
    if count < 1:
        raise ValidationError("projectCount must be at least 1", field="projectCount")
    return count


def _parse_estimated_value(raw: str | None) -> float:
    if raw is None:
        return 0.0
    try:
        value = float(raw)
    except ValueError:
        raise ValidationError(f"estimatedValue must be a number, got {raw!r}", field="estimatedValue")
    if not math.isfinite(value) or value < 0:
        raise ValidationError("estimatedValue must be a non-negative number", field="estimatedValue")
    return value


class UploadService:
    """Turns a multipart creator application into a stored submission."""

    def __init__(
        self,
        store: SubmissionStore,
        *,
        uploads_dir: Path,
        max_files: int,
        max_file_size: int,
        max_total_size: int,
        allowed_extensions: Iterable[str],
    ):
        self.store = store
        self.uploads_dir = uploads_dir
        self.max_files = max_files
        self.max_file_size = max_file_size
        self.max_total_size = max_total_size
        self.allowed_extensions = {ext.lower() for ext in allowed_extensions}

    def build_submission(self, fields: Mapping[str, str]) -> CreatorSubmission:
        """Validate form fields. The first missing required field is reported."""
        for name in REQUIRED_FIELDS:
            if _optional(fields, name) is None:
                raise ValidationError(f"Missing required field: {name}", field=name)

        email = _optional(fields, "email") or ""
        if not _EMAIL_RE.fullmatch(email):
            raise ValidationError(f"Invalid email address: {email}", field="email")

        return CreatorSubmission(
            contact=ContactInfo(
                full_name=_optional(fields, "fullName") or "",
                email=email,
                phone=_optional(fields, "phone"),
                location=_optional(fields, "location"),
            ),
            professional=ProfessionalInfo(
                experience=_optional(fields, "experience") or "",
                specialty=_optional(fields, "specialty") or "",
                portfolio=_optional(fields, "portfolio"),
                social_media=_optional(fields, "socialMedia"),
            ),
            project_info=ProjectInfo(
                description=_optional(fields, "projectDescription") or "",
                count=_parse_project_count(_optional(fields, "projectCount")),
                estimated_value=_parse_estimated_value(_optional(fields, "estimatedValue")),
            ),
            payment=PaymentInfo(method=_optional(fields, "paymentMethod")),
        )

    def check_files(self, uploads: list[UploadFile]) -> None:
        if len(uploads) > self.max_files:
            raise ValidationError(
                f"Too many files: {len(uploads)} (max {self.max_files})", field=FILES_FIELD
            )
        for upload in uploads:
            ext = Path(upload.filename or "").suffix.lower()
            if ext not in self.allowed_extensions:
                raise ValidationError(f"File type {ext or '(none)'} not allowed", field=FILES_FIELD)

    @staticmethod
    def _stored_name(original_name: str) -> str:
        suffix = Path(original_name).suffix.lower()
        return f"{FILES_FIELD}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{suffix}"

    async def _write_upload(self, upload: UploadFile, destination: Path, budget: int) -> int:
        """Stream one upload to disk in chunks; returns its size."""
        written = 0
        with destination.open("wb") as out:
            while True:
                chunk = await upload.read(UPLOAD_CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > self.max_file_size:
                    raise PayloadTooLargeError(
                        f"File {upload.filename} exceeds the {self.max_file_size} byte limit",
                        field=FILES_FIELD,
                    )
                if written > budget:
                    raise PayloadTooLargeError(
                        f"Upload exceeds the {self.max_total_size} byte total limit",
                        field=FILES_FIELD,
                    )
                out.write(chunk)
        return written

    async def save_files(self, submission_id: str, uploads: list[UploadFile]) -> list[SubmittedFile]:
        target_dir = self.uploads_dir / submission_id
        remaining = self.max_total_size
        saved: list[SubmittedFile] = []
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            for upload in uploads:
                original_name = Path(upload.filename or "").name
                stored_name = self._stored_name(original_name)
                size = await self._write_upload(upload, target_dir / stored_name, remaining)
                remaining -= size
                saved.append(
                    SubmittedFile(original_name=original_name, stored_name=stored_name, size=size)
                )
        except ValidationError:
            shutil.rmtree(target_dir, ignore_errors=True)
            raise
        except OSError as exc:
            shutil.rmtree(target_dir, ignore_errors=True)
            raise StorageError(f"Failed to save uploaded files: {exc}") from exc
        return saved

    async def submit(self, fields: Mapping[str, str], uploads: list[UploadFile]) -> CreatorSubmission:
        """Validate, save files, and append the submission to the store."""
        uploads = [u for u in uploads if u.filename]
        submission = self.build_submission(fields)
        self.check_files(uploads)

        if uploads:
            submission.files = await self.save_files(submission.id, uploads)
        try:
            return await asyncio.to_thread(self.store.append, submission)
        except Exception:
            shutil.rmtree(self.uploads_dir / submission.id, ignore_errors=True)
            raise
