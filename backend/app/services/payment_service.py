from __future__ import annotations

import logging

from ..errors import EditAIError
from ..models import (
    PaymentInput,
    PaymentReport,
    PaymentResult,
    PaymentStatus,
    ReviewStatus,
    TopEarner,
)
from .payment_calculator import PaymentCalculator, round_half_up
from .submission_store import SubmissionStore

logger = logging.getLogger("uvicorn.error")

TOP_EARNERS_LIMIT = 5


class PaymentService:
    """Creator compensation: single and batch processing plus reporting."""

    def __init__(self, store: SubmissionStore, calculator: PaymentCalculator):
        self.store = store
        self.calculator = calculator

    def process_payment(self, creator_id: str) -> PaymentResult:
        """Compute and attach the payment for one creator.

        Raises NotFoundError for unknown ids. A creator that already has a
        payment is skipped and its existing payment returned.
        """
        submission = self.store.get(creator_id)
        applied = False
        if submission.payment.amount is None:
            breakdown = self.calculator.compute_payment(PaymentInput.from_submission(submission))
            stored, applied = self.store.attach_payment(creator_id, breakdown)
        else:
            stored = submission

        if not applied:
            logger.info("Payment for %s already recorded, skipping", creator_id)
            return PaymentResult(
                success=True,
                creator_id=creator_id,
                skipped=True,
                message=f"Payment already recorded ({stored.payment.status.value}: ${stored.payment.amount})",
            )

        logger.info(
            "Payment processed for %s (%s): $%d",
            creator_id,
            stored.contact.full_name,
            breakdown.final_payment,
        )
        return PaymentResult(
            success=True,
            creator_id=creator_id,
            payment=breakdown,
            message=f"Payment of ${breakdown.final_payment} processed successfully",
        )

    @staticmethod
    def _is_payable(submission) -> bool:
        return (
            submission.review_status == ReviewStatus.APPROVED
            and submission.payment.status == PaymentStatus.PENDING
            and submission.payment.amount is None
        )

    def process_all_pending(self) -> list[PaymentResult]:
        """Process every approved creator without a payment.

        Running it again right away finds nothing to do.
        """
        pending = [s for s in self.store.list_all() if self._is_payable(s)]
        logger.info("Processing payments for %d creators", len(pending))

        results: list[PaymentResult] = []
        for submission in pending:
            try:
                results.append(self.process_payment(submission.id))
            except EditAIError as exc:
                logger.error("Payment processing failed for %s: %s", submission.id, exc.message)
                results.append(
                    PaymentResult(
                        success=False,
                        creator_id=submission.id,
                        message="Payment processing failed",
                        error=exc.message,
                    )
                )

        logger.info("Processed %d payments", sum(1 for r in results if r.success and not r.skipped))
        return results

    def generate_report(self) -> PaymentReport:
        document = self.store.snapshot()
        creators = document.creators
        paid = [c for c in creators if c.payment.amount is not None and c.payment.status.counts_as_earned]
        top = sorted(paid, key=lambda c: c.payment.amount or 0, reverse=True)[:TOP_EARNERS_LIMIT]

        return PaymentReport(
            total_creators=len(creators),
            total_submissions=document.total_submissions,
            total_earnings=document.total_earnings,
            pending_payments=sum(1 for c in creators if self._is_payable(c)),
            processed_payments=len(paid),
            average_payment=round_half_up(document.total_earnings / len(paid)) if paid else 0,
            top_earners=[
                TopEarner(
                    creator_id=c.id,
                    name=c.contact.full_name,
                    specialty=c.professional.specialty,
                    payment=c.payment.amount or 0,
                )
                for c in top
            ],
        )
