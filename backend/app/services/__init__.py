from .style_catalog import StyleCatalog
from .payment_calculator import PaymentCalculator, PaymentConfig
from .submission_store import SubmissionStore
from .payment_service import PaymentService
from .upload_service import UploadService
from .editing_automation import EditingAutomationService

__all__ = [
    "StyleCatalog",
    "PaymentCalculator", "PaymentConfig",
    "SubmissionStore",
    "PaymentService",
    "UploadService",
    "EditingAutomationService",
]
