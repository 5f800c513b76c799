"""Accessors for the service instances built by ``create_app``."""

from fastapi import Request

from ..services import (
    EditingAutomationService,
    PaymentCalculator,
    PaymentService,
    StyleCatalog,
    SubmissionStore,
    UploadService,
)


def get_catalog(request: Request) -> StyleCatalog:
    return request.app.state.catalog


def get_store(request: Request) -> SubmissionStore:
    return request.app.state.store


def get_calculator(request: Request) -> PaymentCalculator:
    return request.app.state.calculator


def get_payment_service(request: Request) -> PaymentService:
    return request.app.state.payments


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.uploads


def get_editing_service(request: Request) -> EditingAutomationService:
    return request.app.state.editing
