from enum import Enum
from datetime import datetime
from typing import Any
import uuid

from pydantic import Field, computed_field

from .base import CamelModel


class ReviewStatus(str, Enum):
    """Editorial review of a creator application."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentStatus(str, Enum):
    """Payment lifecycle. Only moves forward: pending -> processed -> paid."""

    PENDING = "pending"
    PROCESSED = "processed"
    PAID = "paid"

    @property
    def rank(self) -> int:
        return _PAYMENT_STATUS_ORDER.index(self)

    @property
    def counts_as_earned(self) -> bool:
        return self in (PaymentStatus.PROCESSED, PaymentStatus.PAID)


_PAYMENT_STATUS_ORDER = [PaymentStatus.PENDING, PaymentStatus.PROCESSED, PaymentStatus.PAID]


class ContactInfo(CamelModel):
    full_name: str
    email: str
    phone: str | None = None
    location: str | None = None


class ProfessionalInfo(CamelModel):
    experience: str  # Bucket key such as "3-5"
    specialty: str
    portfolio: str | None = None
    social_media: str | None = None


class ProjectInfo(CamelModel):
    description: str
    count: int = Field(default=1, ge=1)
    estimated_value: float = Field(default=0.0, ge=0)


class PaymentInfo(CamelModel):
    method: str | None = None
    status: PaymentStatus = PaymentStatus.PENDING
    amount: int | float | None = None
    breakdown: dict[str, Any] | None = None  # PaymentBreakdown dump, kept for auditing
    processed_at: datetime | None = None
    paid_at: datetime | None = None


class SubmittedFile(CamelModel):
    original_name: str
    stored_name: str
    size: int
    uploaded_at: datetime = Field(default_factory=datetime.now)


class CreatorSubmission(CamelModel):
    """A creator's application: contact, professional profile, project, payment and files."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    submitted_at: datetime = Field(default_factory=datetime.now)
    review_status: ReviewStatus = ReviewStatus.PENDING
    contact: ContactInfo
    professional: ProfessionalInfo
    project_info: ProjectInfo
    payment: PaymentInfo = Field(default_factory=PaymentInfo)
    files: list[SubmittedFile] = Field(default_factory=list)


class SubmissionStoreDocument(CamelModel):
    """On-disk shape of the submission store.

    Aggregates are derived from ``creators`` so they can never drift from it.
    """

    creators: list[CreatorSubmission] = Field(default_factory=list)
    last_updated: datetime | None = None

    @computed_field(alias="totalSubmissions")
    @property
    def total_submissions(self) -> int:
        return len(self.creators)

    @computed_field(alias="totalEarnings")
    @property
    def total_earnings(self) -> int | float:
        return sum(
            c.payment.amount or 0
            for c in self.creators
            if c.payment.status.counts_as_earned
        )
