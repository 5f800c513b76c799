"""
Editing style catalog: wedding, music video, corporate, educational, ...

Styles are JSON documents (one per style, file stem = style id) read once at
startup. The catalog is immutable afterwards.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError as ModelValidationError

from ..errors import NotFoundError
from ..models import StyleDefinition

logger = logging.getLogger("uvicorn.error")


class StyleCatalog:
    """Read-only lookup of editing styles, kept in definition order."""

    def __init__(self, styles: Iterable[StyleDefinition]):
        by_id: dict[str, StyleDefinition] = {}
        for style in styles:
            if style.id in by_id:
                raise ValueError(f"Duplicate style id '{style.id}'")
            by_id[style.id] = style
        self._styles = by_id

    @classmethod
    def from_directory(cls, styles_dir: Path) -> "StyleCatalog":
        """Load every ``*.json`` style document, in filename order.

        Unreadable or invalid documents are logged and skipped.
        """
        if not styles_dir.is_dir():
            logger.info("Styles directory not found at %s, no styles loaded", styles_dir)
            return cls([])

        styles: list[StyleDefinition] = []
        for path in sorted(styles_dir.glob("*.json")):
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError):
                logger.exception("Failed to read style file %s", path)
                continue
            if not isinstance(raw, dict):
                logger.warning("Style file %s must contain a JSON object, skipping", path)
                continue
            raw.setdefault("id", path.stem)
            try:
                styles.append(StyleDefinition.model_validate(raw))
            except ModelValidationError as exc:
                logger.warning("Invalid style file %s: %s", path, exc)
        catalog = cls(styles)
        logger.info("Loaded %d editing styles from %s", len(catalog), styles_dir)
        return catalog

    def __len__(self) -> int:
        return len(self._styles)

    def __contains__(self, style_id: object) -> bool:
        return style_id in self._styles

    def get_style(self, style_id: str) -> StyleDefinition:
        """Get a style by ID."""
        style = self._styles.get(style_id)
        if style is None:
            raise NotFoundError(f"Style not found: {style_id}")
        return style

    def list_styles(self) -> list[StyleDefinition]:
        """Get all available styles."""
        return list(self._styles.values())
