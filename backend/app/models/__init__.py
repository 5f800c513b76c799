from .base import CamelModel
from .style import (
    Pacing,
    Transition,
    ColorGrading,
    AudioMixing,
    StyleSettings,
    StyleDefinition,
)
from .submission import (
    ReviewStatus,
    PaymentStatus,
    ContactInfo,
    ProfessionalInfo,
    ProjectInfo,
    PaymentInfo,
    SubmittedFile,
    CreatorSubmission,
    SubmissionStoreDocument,
)
from .payment import PaymentInput, PaymentBreakdown, PaymentResult, TopEarner, PaymentReport
from .editing import EditingRequest, EditingResult

__all__ = [
    "CamelModel",
    "Pacing", "Transition", "ColorGrading", "AudioMixing", "StyleSettings", "StyleDefinition",
    "ReviewStatus", "PaymentStatus", "ContactInfo", "ProfessionalInfo", "ProjectInfo",
    "PaymentInfo", "SubmittedFile", "CreatorSubmission", "SubmissionStoreDocument",
    "PaymentInput", "PaymentBreakdown", "PaymentResult", "TopEarner", "PaymentReport",
    "EditingRequest", "EditingResult",
]
