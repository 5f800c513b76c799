import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import Settings, settings as default_settings
from .api import api_router
from .errors import EditAIError
from .services import (
    EditingAutomationService,
    PaymentCalculator,
    PaymentConfig,
    PaymentService,
    StyleCatalog,
    SubmissionStore,
    UploadService,
)


# Reuse uvicorn's logger so startup diagnostics are visible in normal dev logs.
logger = logging.getLogger("uvicorn.error")


def _init_services(app: FastAPI, settings: Settings) -> None:
    """Build the service graph once; routes reach it through app.state."""
    settings.ensure_dirs()

    catalog = StyleCatalog.from_directory(settings.styles_dir)
    calculator = PaymentCalculator(PaymentConfig.load(settings.payment_config_path))
    store = SubmissionStore(settings.creators_data_path)

    app.state.settings = settings
    app.state.catalog = catalog
    app.state.calculator = calculator
    app.state.store = store
    app.state.payments = PaymentService(store, calculator)
    app.state.uploads = UploadService(
        store,
        uploads_dir=settings.uploads_dir,
        max_files=settings.upload_max_files,
        max_file_size=settings.upload_max_file_size,
        max_total_size=settings.upload_max_total_size,
        allowed_extensions=settings.upload_allowed_extensions,
    )
    app.state.editing = EditingAutomationService(
        catalog,
        command=settings.automation_command,
        jobs_dir=settings.jobs_dir,
        timeout_seconds=settings.automation_timeout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log what was loaded on startup."""
    stats = app.state.store.stats()
    logger.info(
        "Edit.ai started: %d styles, %d submissions, $%s total earnings",
        len(app.state.catalog),
        stats["totalSubmissions"],
        stats["totalEarnings"],
    )
    if not app.state.editing.is_configured():
        logger.info("No editing automation command configured; /api/start-editing jobs will not run")
    yield


async def _editai_error_handler(request: Request, exc: EditAIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=400,
        content={"error": "validation_error", "message": "; ".join(messages)},
    )


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = "not_found" if exc.status_code == 404 else "http_error"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": kind, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "message": "Internal server error"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title="Edit.ai Creator Platform",
        description="Creator submissions, payments and editing styles for automated video editing",
        version=__version__,
        lifespan=lifespan,
    )
    _init_services(app, settings)

    # CORS middleware for the creator platform frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(EditAIError, _editai_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    # Include API routes
    app.include_router(api_router)
    return app


app = create_app()
