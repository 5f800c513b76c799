import json

import pytest
from pydantic import ValidationError as ModelValidationError

from app.config import PROJECT_ROOT
from app.errors import NotFoundError
from app.models import AudioMixing, ColorGrading, Pacing, Transition
from app.services import StyleCatalog

STYLES_DIR = PROJECT_ROOT / "config" / "styles"


def _write_style(directory, name, **overrides):
    document = {
        "displayName": name.title(),
        "description": "",
        "settings": {
            "pacing": "medium",
            "transitions": ["cut"],
            "colorGrading": "neutral",
            "audioMixing": "balanced",
        },
    }
    document.update(overrides)
    (directory / f"{name}.json").write_text(json.dumps(document), encoding="utf-8")


def test_shipped_styles_load_in_definition_order():
    catalog = StyleCatalog.from_directory(STYLES_DIR)
    assert [s.id for s in catalog.list_styles()] == ["corporate", "educational", "music-video", "wedding"]


def test_get_style_returns_full_settings():
    style = StyleCatalog.from_directory(STYLES_DIR).get_style("wedding")

    assert style.display_name == "Wedding Cinematic"
    assert style.settings.pacing is Pacing.EMOTIONAL
    assert style.settings.transitions == (Transition.CROSS_DISSOLVE, Transition.FADE_TO_BLACK)
    assert style.settings.color_grading is ColorGrading.WARM_CINEMATIC
    assert style.settings.audio_mixing is AudioMixing.ROMANTIC_MUSIC_HEAVY


def test_unknown_style_raises_not_found():
    catalog = StyleCatalog.from_directory(STYLES_DIR)
    with pytest.raises(NotFoundError):
        catalog.get_style("vaporwave")


def test_styles_are_immutable():
    style = StyleCatalog.from_directory(STYLES_DIR).get_style("corporate")
    with pytest.raises(ModelValidationError):
        style.display_name = "Changed"


def test_invalid_documents_are_skipped(tmp_path):
    _write_style(tmp_path, "good")
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "list.json").write_text("[]", encoding="utf-8")
    _write_style(tmp_path, "bad-enum", settings={"pacing": "glacial", "transitions": ["cut"],
                                                 "colorGrading": "neutral", "audioMixing": "balanced"})

    catalog = StyleCatalog.from_directory(tmp_path)
    assert [s.id for s in catalog.list_styles()] == ["good"]


def test_duplicate_ids_are_rejected(tmp_path):
    _write_style(tmp_path, "one", id="same")
    _write_style(tmp_path, "two", id="same")
    with pytest.raises(ValueError):
        StyleCatalog.from_directory(tmp_path)


def test_missing_directory_gives_empty_catalog(tmp_path):
    catalog = StyleCatalog.from_directory(tmp_path / "nowhere")
    assert len(catalog) == 0
    assert catalog.list_styles() == []
