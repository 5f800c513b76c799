import asyncio

from fastapi import APIRouter, Depends

from ...models import PaymentBreakdown, PaymentInput, PaymentReport, PaymentResult
from ...services import PaymentCalculator, PaymentService
from ..deps import get_calculator, get_payment_service

router = APIRouter(tags=["payments"])


@router.post("/payments/quote", response_model=PaymentBreakdown)
async def quote_payment(
    request: PaymentInput, calculator: PaymentCalculator = Depends(get_calculator)
) -> PaymentBreakdown:
    """Price arbitrary creator attributes without touching the store."""
    return calculator.compute_payment(request)


@router.post("/payments/process", response_model=list[PaymentResult])
async def process_pending_payments(
    payments: PaymentService = Depends(get_payment_service),
) -> list[PaymentResult]:
    """Process every approved creator that has no payment yet."""
    return await asyncio.to_thread(payments.process_all_pending)


@router.post("/creators/{creator_id}/payment", response_model=PaymentResult)
async def process_creator_payment(
    creator_id: str, payments: PaymentService = Depends(get_payment_service)
) -> PaymentResult:
    return await asyncio.to_thread(payments.process_payment, creator_id)


@router.get("/payments/report", response_model=PaymentReport)
async def payment_report(payments: PaymentService = Depends(get_payment_service)) -> PaymentReport:
    return await asyncio.to_thread(payments.generate_report)
