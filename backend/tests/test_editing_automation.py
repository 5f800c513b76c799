import asyncio
import sys

import pytest

from app.config import PROJECT_ROOT
from app.errors import NotFoundError, ValidationError
from app.services import EditingAutomationService, StyleCatalog

CATALOG = StyleCatalog.from_directory(PROJECT_ROOT / "config" / "styles")

# Reads the job config, checks the style was handed over, writes the output file.
WRITE_OUTPUT = (
    "import json, pathlib, sys; "
    "job = json.loads(pathlib.Path(sys.argv[1]).read_text()); "
    "assert job['style']['id'] == sys.argv[2]; "
    "pathlib.Path(sys.argv[3]).write_text('rendered')"
)


def _service(tmp_path, command, timeout=30.0):
    return EditingAutomationService(
        CATALOG,
        command=command,
        jobs_dir=tmp_path / "jobs",
        timeout_seconds=timeout,
    )


def _run(service, tmp_path, style="wedding"):
    media = tmp_path / "media"
    media.mkdir(exist_ok=True)
    output = tmp_path / "out.mp4"
    return asyncio.run(service.start_editing(style, str(media), str(output))), output


def test_confirmed_when_command_succeeds_and_output_exists(tmp_path):
    service = _service(
        tmp_path, [sys.executable, "-c", WRITE_OUTPUT, "{config}", "{style}", "{output_path}"]
    )
    result, output = _run(service, tmp_path)

    assert result.confirmed is True
    assert result.returncode == 0
    assert output.read_text() == "rendered"
    assert result.finished_at is not None
    assert list((tmp_path / "jobs").iterdir()) == []


def test_non_zero_exit_is_not_confirmed(tmp_path):
    service = _service(tmp_path, [sys.executable, "-c", "import sys; sys.exit(3)"])
    result, _ = _run(service, tmp_path)

    assert result.confirmed is False
    assert result.returncode == 3
    assert result.message.startswith("automation not confirmed")


def test_missing_output_is_not_confirmed(tmp_path):
    service = _service(tmp_path, [sys.executable, "-c", "pass"])
    result, _ = _run(service, tmp_path)

    assert result.confirmed is False
    assert result.returncode == 0
    assert "No output produced" in result.message


def test_missing_executable_is_not_confirmed(tmp_path):
    service = _service(tmp_path, [str(tmp_path / "no-such-editor")])
    result, _ = _run(service, tmp_path)

    assert result.confirmed is False
    assert "Could not start" in result.message


def test_timeout_is_not_confirmed(tmp_path):
    service = _service(tmp_path, [sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.5)
    result, _ = _run(service, tmp_path)

    assert result.confirmed is False
    assert "timed out" in result.message


def test_bad_command_template_is_not_confirmed(tmp_path):
    service = _service(tmp_path, ["osascript", "{unknown}"])
    result, _ = _run(service, tmp_path)

    assert result.confirmed is False
    assert "template" in result.message


def test_unknown_style_raises(tmp_path):
    service = _service(tmp_path, ["true"])
    with pytest.raises(NotFoundError):
        _run(service, tmp_path, style="vaporwave")


def test_missing_media_folder_raises(tmp_path):
    service = _service(tmp_path, ["true"])
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(service.start_editing("wedding", str(tmp_path / "absent"), str(tmp_path / "out.mp4")))
    assert excinfo.value.field == "mediaFolder"


@pytest.mark.parametrize("part", ["{", "{style.missing}"])
def test_malformed_command_template_is_not_confirmed(tmp_path, part):
    service = _service(tmp_path, ["osascript", part])
    result, _ = _run(service, tmp_path)

    assert result.confirmed is False
    assert result.message.startswith("automation not confirmed")
    assert "template" in result.message


def test_unwritable_jobs_dir_is_not_confirmed(tmp_path):
    blocker = tmp_path / "jobs"
    blocker.write_text("not a directory")
    service = _service(tmp_path, [sys.executable, "-c", "pass"])
    result, _ = _run(service, tmp_path)

    assert result.confirmed is False
    assert "Could not write job config" in result.message
    assert blocker.read_text() == "not a directory"
