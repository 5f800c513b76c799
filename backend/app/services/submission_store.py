from __future__ import annotations

import logging
import math
import os
import tempfile
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Callable, TypeVar

from pydantic import ValidationError as ModelValidationError

from ..errors import InvalidTransitionError, NotFoundError, StorageError, ValidationError
from ..models import (
    CreatorSubmission,
    PaymentBreakdown,
    PaymentStatus,
    ReviewStatus,
    SubmissionStoreDocument,
)

logger = logging.getLogger("uvicorn.error")

T = TypeVar("T")


class SubmissionStore:
    """Append-only JSON store of creator submissions.

    The whole store is one document on disk. Every read-modify-write runs
    under ``_lock``; a mutation is applied to a copy of the document, written
    to disk, and only then becomes the current state.
    """

    def __init__(self, path: Path):
        self.path = path
        self._lock = Lock()
        self._document = SubmissionStoreDocument()
        self.load()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> SubmissionStoreDocument:
        """(Re)load the document from disk. A missing file is an empty store."""
        with self._lock:
            self._document = self._read()
            return self._document.model_copy(deep=True)

    def persist(self) -> None:
        """Write the current document to disk."""
        with self._lock:
            self._write(self._document)

    def _read(self) -> SubmissionStoreDocument:
        if not self.path.exists():
            return SubmissionStoreDocument()
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Failed to read submission store {self.path}: {exc}") from exc
        if not text.strip():
            return SubmissionStoreDocument()
        try:
            return SubmissionStoreDocument.model_validate_json(text)
        except ModelValidationError as exc:
            raise StorageError(f"Submission store {self.path} is corrupt: {exc}") from exc

    def _write_once(self, document: SubmissionStoreDocument) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = document.model_dump_json(indent=2, by_alias=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".creators-", suffix=".json", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _write(self, document: SubmissionStoreDocument) -> None:
        """Write atomically, retrying once before giving up."""
        try:
            self._write_once(document)
            return
        except OSError as exc:
            logger.warning("Writing submission store failed (%s), retrying once", exc)
        try:
            self._write_once(document)
        except OSError as exc:
            raise StorageError(f"Failed to write submission store {self.path}: {exc}") from exc

    def _mutate(self, change: Callable[[SubmissionStoreDocument], T]) -> T:
        with self._lock:
            draft = self._document.model_copy(deep=True)
            result = change(draft)
            draft.last_updated = datetime.now()
            self._write(draft)
            self._document = draft
            return result

    @staticmethod
    def _find(document: SubmissionStoreDocument, submission_id: str) -> CreatorSubmission:
        for submission in document.creators:
            if submission.id == submission_id:
                return submission
        raise NotFoundError(f"Creator not found: {submission_id}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, submission_id: str) -> CreatorSubmission:
        with self._lock:
            return self._find(self._document, submission_id).model_copy(deep=True)

    def list_all(self) -> list[CreatorSubmission]:
        with self._lock:
            return [s.model_copy(deep=True) for s in self._document.creators]

    def snapshot(self) -> SubmissionStoreDocument:
        with self._lock:
            return self._document.model_copy(deep=True)

    def stats(self) -> dict:
        with self._lock:
            document = self._document
            return {
                "totalSubmissions": document.total_submissions,
                "totalEarnings": document.total_earnings,
                "lastUpdated": document.last_updated.isoformat() if document.last_updated else None,
            }

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def append(self, submission: CreatorSubmission) -> CreatorSubmission:
        """Store a new submission and return the stored copy."""

        def change(document: SubmissionStoreDocument) -> CreatorSubmission:
            if any(s.id == submission.id for s in document.creators):
                raise ValidationError(f"Duplicate creator id: {submission.id}", field="id")
            stored = submission.model_copy(deep=True)
            document.creators.append(stored)
            return stored.model_copy(deep=True)

        stored = self._mutate(change)
        logger.info(
            "Creator submission stored: %s (%s) - %d files",
            stored.id,
            stored.contact.full_name,
            len(stored.files),
        )
        return stored

    def set_review_status(self, submission_id: str, status: ReviewStatus) -> CreatorSubmission:
        def change(document: SubmissionStoreDocument) -> CreatorSubmission:
            submission = self._find(document, submission_id)
            submission.review_status = status
            return submission.model_copy(deep=True)

        return self._mutate(change)

    def update_status(
        self,
        submission_id: str,
        status: PaymentStatus,
        amount: int | float | None = None,
    ) -> CreatorSubmission:
        """Move a submission's payment forward: pending -> processed -> paid."""
        if amount is not None:
            if not math.isfinite(amount):
                raise ValidationError("amount must be finite", field="amount")
            if amount < 0:
                raise ValidationError("amount must not be negative", field="amount")

        def change(document: SubmissionStoreDocument) -> CreatorSubmission:
            submission = self._find(document, submission_id)
            payment = submission.payment
            current = payment.status

            if status.rank != current.rank + 1:
                raise InvalidTransitionError(
                    f"Cannot move payment of {submission_id} from '{current.value}' to '{status.value}'"
                )
            if amount is not None:
                if payment.amount is not None and payment.amount != amount:
                    raise InvalidTransitionError(
                        f"Payment amount for {submission_id} is already set to {payment.amount}"
                    )
                payment.amount = amount
            if payment.amount is None:
                raise ValidationError(
                    f"An amount is required to mark {submission_id} as '{status.value}'",
                    field="amount",
                )

            now = datetime.now()
            payment.status = status
            if status == PaymentStatus.PROCESSED:
                payment.processed_at = now
            elif status == PaymentStatus.PAID:
                payment.paid_at = now
            return submission.model_copy(deep=True)

        updated = self._mutate(change)
        logger.info("Payment status of %s set to %s", submission_id, status.value)
        return updated

    def attach_payment(
        self, submission_id: str, breakdown: PaymentBreakdown
    ) -> tuple[CreatorSubmission, bool]:
        """Record a computed payment and mark it processed.

        Returns ``(submission, applied)``; ``applied`` is False when the
        submission already carried a payment, which is left untouched.
        """
        existing = self.get(submission_id)
        if existing.payment.amount is not None or existing.payment.status != PaymentStatus.PENDING:
            return existing, False

        def change(document: SubmissionStoreDocument) -> tuple[CreatorSubmission, bool]:
            submission = self._find(document, submission_id)
            payment = submission.payment
            if payment.amount is not None or payment.status != PaymentStatus.PENDING:
                return submission.model_copy(deep=True), False
            payment.amount = breakdown.final_payment
            payment.breakdown = breakdown.model_dump(mode="json", by_alias=True)
            payment.status = PaymentStatus.PROCESSED
            payment.processed_at = datetime.now()
            return submission.model_copy(deep=True), True

        return self._mutate(change)
