"""Bridge to the desktop video editor.

The editor is driven by an external, configurable command (an osascript or
ExtendScript launcher). It is invoked exactly once per job; whatever it does
is opaque to us, so a job is only *confirmed* when the command exits cleanly
and the output file exists.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Sequence

from ..errors import ExternalToolError, ValidationError
from ..models import EditingResult
from ..utils.subprocess_runner import CommandTimeoutError, run_command
from .style_catalog import StyleCatalog

logger = logging.getLogger("uvicorn.error")

NOT_CONFIRMED = "automation not confirmed"


class EditingAutomationService:
    def __init__(
        self,
        catalog: StyleCatalog,
        *,
        command: Sequence[str],
        jobs_dir: Path,
        timeout_seconds: float,
    ):
        self.catalog = catalog
        self.command = list(command)
        self.jobs_dir = jobs_dir
        self.timeout_seconds = timeout_seconds

    def is_configured(self) -> bool:
        return bool(self.command)

    def _write_job_config(self, config_path: Path, result: EditingResult) -> None:
        style = self.catalog.get_style(result.style)
        config = {
            "jobId": result.job_id,
            "style": style.model_dump(mode="json", by_alias=True),
            "mediaFolder": result.media_folder,
            "outputPath": result.output_path,
            "timestamp": result.started_at.isoformat(),
        }
        try:
            self.jobs_dir.mkdir(parents=True, exist_ok=True)
            config_path.write_text(json.dumps(config, indent=2), encoding="utf-8")
        except OSError as exc:
            raise ExternalToolError(f"Could not write job config: {exc}") from exc

    def _build_command(self, config_path: Path, result: EditingResult) -> list[str]:
        values = {
            "config": str(config_path),
            "style": result.style,
            "media_folder": result.media_folder,
            "output_path": result.output_path,
        }
        try:
            return [part.format(**values) for part in self.command]
        except (KeyError, IndexError, ValueError, AttributeError) as exc:
            raise ExternalToolError(f"Invalid automation command template: {exc}") from exc

    async def _invoke(self, config_path: Path, result: EditingResult) -> None:
        cmd = self._build_command(config_path, result)
        try:
            outcome = await run_command(cmd, timeout_seconds=self.timeout_seconds)
        except CommandTimeoutError as exc:
            raise ExternalToolError(str(exc)) from exc
        except OSError as exc:
            raise ExternalToolError(f"Could not start {cmd[0]}: {exc}") from exc
        result.returncode = outcome.returncode
        if not outcome.ok:
            raise ExternalToolError(
                f"{cmd[0]} exited with code {outcome.returncode}: {outcome.stderr_tail()}"
            )
        if not Path(result.output_path).exists():
            raise ExternalToolError(f"No output produced at {result.output_path}")

    async def start_editing(self, style_id: str, media_folder: str, output_path: str) -> EditingResult:
        """Run one automation job.

        Raises NotFoundError for an unknown style and ValidationError for bad
        paths. Failures of the editor itself come back as an unconfirmed result.
        """
        self.catalog.get_style(style_id)
        if not media_folder or not Path(media_folder).is_dir():
            raise ValidationError("Media folder does not exist", field="mediaFolder")
        if not output_path or not output_path.strip():
            raise ValidationError("Output path is required", field="outputPath")

        result = EditingResult(style=style_id, media_folder=media_folder, output_path=output_path)

        if not self.is_configured():
            result.message = f"{NOT_CONFIRMED}: no automation command configured"
            result.finished_at = datetime.now()
            logger.warning("Editing job %s not run: no automation command configured", result.job_id)
            return result

        config_path = self.jobs_dir / f"config_{result.job_id}.json"
        logger.info("Editing job %s started: style=%s media=%s", result.job_id, style_id, media_folder)
        try:
            self._write_job_config(config_path, result)
            await self._invoke(config_path, result)
            result.confirmed = True
            result.message = f"Output written to {output_path}"
            logger.info("Editing job %s confirmed: %s", result.job_id, output_path)
        except ExternalToolError as exc:
            result.message = f"{NOT_CONFIRMED}: {exc.message}"
            logger.warning("Editing job %s %s", result.job_id, result.message)
        finally:
            result.finished_at = datetime.now()
            if config_path.exists():
                config_path.unlink()
        return result
