from pydantic import Field

from .base import CamelModel
from .submission import CreatorSubmission


class PaymentInput(CamelModel):
    """Attributes of a submission that drive its payment."""

    experience: str
    specialty: str
    project_count: int = 0
    estimated_value: float = 0

    @classmethod
    def from_submission(cls, submission: CreatorSubmission) -> "PaymentInput":
        return cls(
            experience=submission.professional.experience,
            specialty=submission.professional.specialty,
            project_count=submission.project_info.count,
            estimated_value=submission.project_info.estimated_value,
        )


class PaymentBreakdown(CamelModel):
    """Every term of the payment formula, kept for auditing."""

    base_payment: float
    experience_multiplier: float
    specialty_bonus: float
    project_bonus: float
    value_bonus: float
    final_payment: int

    # Echoed inputs
    experience: str
    specialty: str
    project_count: float
    estimated_value: float

    # False when the key fell back to the neutral default
    experience_recognized: bool = True
    specialty_recognized: bool = True


class PaymentResult(CamelModel):
    success: bool
    creator_id: str
    payment: PaymentBreakdown | None = None
    skipped: bool = False
    message: str
    error: str | None = None


class TopEarner(CamelModel):
    creator_id: str
    name: str
    specialty: str
    payment: int | float


class PaymentReport(CamelModel):
    total_creators: int
    total_submissions: int
    total_earnings: int | float
    pending_payments: int
    processed_payments: int
    average_payment: int
    top_earners: list[TopEarner] = Field(default_factory=list)
