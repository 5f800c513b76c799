from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..errors import ValidationError
from ..models import PaymentBreakdown, PaymentInput

logger = logging.getLogger("uvicorn.error")


DEFAULT_EXPERIENCE_MULTIPLIERS: dict[str, float] = {
    "0-1": 1.0,
    "1-3": 1.2,
    "3-5": 1.4,
    "5-10": 1.6,
    "10+": 1.8,
}

DEFAULT_SPECIALTY_BONUSES: dict[str, float] = {
    "wedding": 20,
    "music-video": 30,
    "corporate": 15,
    "educational": 10,
    "documentary": 25,
    "social-media": 5,
    "cinematic": 35,
    "other": 0,
}


@dataclass(frozen=True)
class PaymentConfig:
    base_payment: float = 50
    experience_multipliers: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_EXPERIENCE_MULTIPLIERS)
    )
    specialty_bonuses: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_SPECIALTY_BONUSES)
    )
    project_bonus_per_project: float = 10
    project_bonus_cap: float = 50
    value_bonus_rate: float = 0.1
    value_bonus_cap: float = 100
    # Unknown experience/specialty keys raise instead of using neutral values
    strict_lookups: bool = False

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> "PaymentConfig":
        if not isinstance(raw, dict):
            raise ValueError("Payment config root must be a mapping")

        defaults = cls()
        kwargs: dict[str, Any] = {}
        for name in (
            "base_payment",
            "project_bonus_per_project",
            "project_bonus_cap",
            "value_bonus_rate",
            "value_bonus_cap",
        ):
            if name not in raw:
                continue
            value = raw[name]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be numeric")
            if value < 0:
                raise ValueError(f"{name} must not be negative")
            kwargs[name] = float(value)

        for name in ("experience_multipliers", "specialty_bonuses"):
            if name not in raw:
                continue
            table = raw[name]
            if not isinstance(table, dict):
                raise ValueError(f"{name} must be a mapping")
            parsed: dict[str, float] = {}
            for key, value in table.items():
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ValueError(f"{name}['{key}'] must be numeric")
                if value < 0:
                    raise ValueError(f"{name}['{key}'] must not be negative")
                parsed[str(key).strip()] = float(value)
            kwargs[name] = parsed

        strict = raw.get("strict_lookups", defaults.strict_lookups)
        if not isinstance(strict, bool):
            raise ValueError("strict_lookups must be a boolean")
        kwargs["strict_lookups"] = strict

        return cls(**kwargs)

    @classmethod
    def load(cls, path: Path) -> "PaymentConfig":
        """Load payment tables from YAML; a missing file gives the defaults."""
        if not path.exists():
            return cls()
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except Exception as exc:
            raise ValueError(f"Failed to parse payment config YAML: {exc}") from exc
        if raw is None:
            return cls()
        return cls.from_mapping(raw)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class PaymentCalculator:
    """Prices a submission.

    final = round((base + specialty_bonus + project_bonus + value_bonus) * experience_multiplier)
    """

    def __init__(self, config: PaymentConfig | None = None):
        self.config = config or PaymentConfig()

    def _check_amount(self, name: str, value: float) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(f"{name} must be a number", field=name)
        if not math.isfinite(value):
            raise ValidationError(f"{name} must be finite", field=name)
        if value < 0:
            raise ValidationError(f"{name} must not be negative, got {value}", field=name)
        return float(value)

    def compute_payment(self, payment_input: PaymentInput) -> PaymentBreakdown:
        config = self.config
        project_count = self._check_amount("projectCount", payment_input.project_count)
        estimated_value = self._check_amount("estimatedValue", payment_input.estimated_value)

        experience = payment_input.experience.strip()
        specialty = payment_input.specialty.strip()

        experience_recognized = experience in config.experience_multipliers
        specialty_recognized = specialty in config.specialty_bonuses
        if config.strict_lookups:
            if not experience_recognized:
                raise ValidationError(f"Unknown experience bucket '{experience}'", field="experience")
            if not specialty_recognized:
                raise ValidationError(f"Unknown specialty '{specialty}'", field="specialty")
        if not experience_recognized:
            logger.warning("Unknown experience bucket %r, using multiplier 1.0", experience)
        if not specialty_recognized:
            logger.warning("Unknown specialty %r, using bonus 0", specialty)

        experience_multiplier = config.experience_multipliers.get(experience, 1.0)
        specialty_bonus = config.specialty_bonuses.get(specialty, 0.0)
        project_bonus = min(project_count * config.project_bonus_per_project, config.project_bonus_cap)
        value_bonus = min(estimated_value * config.value_bonus_rate, config.value_bonus_cap)

        final_payment = round_half_up(
            (config.base_payment + specialty_bonus + project_bonus + value_bonus) * experience_multiplier
        )

        return PaymentBreakdown(
            base_payment=config.base_payment,
            experience_multiplier=experience_multiplier,
            specialty_bonus=specialty_bonus,
            project_bonus=project_bonus,
            value_bonus=value_bonus,
            final_payment=final_payment,
            experience=experience,
            specialty=specialty,
            project_count=project_count,
            estimated_value=estimated_value,
            experience_recognized=experience_recognized,
            specialty_recognized=specialty_recognized,
        )
