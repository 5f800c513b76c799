from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.config import PROJECT_ROOT, Settings
from app.main import create_app
from app.models import ContactInfo, CreatorSubmission, ProfessionalInfo, ProjectInfo
from app.services import PaymentCalculator, PaymentService, SubmissionStore


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    data_dir = tmp_path / "data"
    return Settings(
        _env_file=None,
        data_dir=data_dir,
        creators_data_path=data_dir / "creators" / "creators-data.json",
        uploads_dir=data_dir / "uploads",
        jobs_dir=data_dir / "jobs",
        styles_dir=PROJECT_ROOT / "config" / "styles",
        payment_config_path=PROJECT_ROOT / "config" / "payments" / "config.yaml",
        upload_max_files=3,
        upload_max_file_size=1024,
        upload_max_total_size=2048,
        automation_command=[],
    )


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def store(tmp_path: Path) -> SubmissionStore:
    return SubmissionStore(tmp_path / "creators-data.json")


@pytest.fixture
def payments(store: SubmissionStore) -> PaymentService:
    return PaymentService(store, PaymentCalculator())


def make_submission(
    name: str = "Ada Editor",
    experience: str = "3-5",
    specialty: str = "wedding",
    count: int = 3,
    estimated_value: float = 500,
) -> CreatorSubmission:
    return CreatorSubmission(
        contact=ContactInfo(full_name=name, email=f"{name.split()[0].lower()}@example.com"),
        professional=ProfessionalInfo(experience=experience, specialty=specialty),
        project_info=ProjectInfo(description="Wedding highlight reel", count=count, estimated_value=estimated_value),
    )


@pytest.fixture
def submission_factory():
    return make_submission
