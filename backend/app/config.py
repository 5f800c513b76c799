from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[2]
BACKEND_ROOT = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="EDITAI_",
        env_file=(PROJECT_ROOT / ".env", BACKEND_ROOT / ".env"),
        env_file_encoding="utf-8",
    )

    # Paths
    data_dir: Path = BACKEND_ROOT / "data"
    creators_data_path: Path = BACKEND_ROOT / "data" / "creators" / "creators-data.json"
    uploads_dir: Path = BACKEND_ROOT / "data" / "uploads"
    jobs_dir: Path = BACKEND_ROOT / "data" / "jobs"

    # Configuration documents
    styles_dir: Path = PROJECT_ROOT / "config" / "styles"
    payment_config_path: Path = PROJECT_ROOT / "config" / "payments" / "config.yaml"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Uploads
    upload_max_files: int = 10
    upload_max_file_size: int = 500 * 1024 * 1024
    upload_max_total_size: int = 2 * 1024 * 1024 * 1024
    upload_allowed_extensions: list[str] = [".prproj", ".mp4", ".mov", ".avi", ".m4v", ".mkv"]

    # Editing automation (external desktop editor bridge)
    # Each item is formatted with {config}, {style}, {media_folder}, {output_path}.
    automation_command: list[str] = []
    automation_timeout: int = 15 * 60  # seconds

    def ensure_dirs(self) -> None:
        """Create the writable data directories."""
        for path in (self.data_dir, self.creators_data_path.parent, self.uploads_dir, self.jobs_dir):
            path.mkdir(parents=True, exist_ok=True)


settings = Settings()
