"""Async subprocess helpers with timeout and cancellation-safe cleanup."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence


@dataclass
class CommandResult:
    """Result of a subprocess execution."""

    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def stderr_tail(self, limit: int = 500) -> str:
        """Last ``limit`` characters of stderr (or stdout when stderr is empty)."""
        text = (self.stderr or self.stdout).decode("utf-8", errors="replace").strip()
        return text[-limit:]


class CommandTimeoutError(RuntimeError):
    """Raised when a subprocess exceeds the configured timeout."""


async def terminate_process(
    process: asyncio.subprocess.Process,
    *,
    terminate_grace_seconds: float = 3.0,
) -> None:
    """Terminate a subprocess, escalating to kill after the grace period."""
    if process.returncode is not None:
        return
    try:
        process.terminate()
        await asyncio.wait_for(process.wait(), timeout=terminate_grace_seconds)
        return
    except ProcessLookupError:
        return
    except asyncio.TimeoutError:
        pass
    try:
        process.kill()
        await process.wait()
    except ProcessLookupError:
        pass


async def run_command(
    cmd: Sequence[str],
    *,
    cwd: str | Path | None = None,
    timeout_seconds: float | None = None,
) -> CommandResult:
    """Run a command once and capture stdout/stderr.

    Raises OSError when the executable cannot be started and
    CommandTimeoutError when it runs past ``timeout_seconds``.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd is not None else None,
    )

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout_seconds)
    except asyncio.TimeoutError as exc:
        await terminate_process(process)
        raise CommandTimeoutError(
            f"Command timed out after {timeout_seconds:.1f}s: {cmd[0]}"
        ) from exc
    except asyncio.CancelledError:
        await terminate_process(process)
        raise
    return CommandResult(returncode=process.returncode or 0, stdout=stdout, stderr=stderr)
