from datetime import datetime
import uuid

from pydantic import Field

from .base import CamelModel


class EditingRequest(CamelModel):
    style: str
    media_folder: str
    output_path: str


class EditingResult(CamelModel):
    """Outcome of one automation invocation.

    ``confirmed`` is only true when the command exited cleanly and the output
    file exists; anything else is reported, never retried.
    """

    job_id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    style: str
    media_folder: str
    output_path: str
    confirmed: bool = False
    message: str = ""
    returncode: int | None = None
    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime | None = None
