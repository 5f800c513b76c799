from enum import Enum

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import CamelModel


class Pacing(str, Enum):
    """Cut rhythm applied to the timeline."""

    EMOTIONAL = "emotional"
    FAST_RHYTHMIC = "fast_rhythmic"
    PROFESSIONAL_STEADY = "professional_steady"
    CLEAR_EXPLANATORY = "clear_explanatory"
    FAST = "fast"
    MEDIUM = "medium"
    SLOW = "slow"


class Transition(str, Enum):
    CUT = "cut"
    CROSS_DISSOLVE = "cross_dissolve"
    SIMPLE_DISSOLVE = "simple_dissolve"
    FADE_TO_BLACK = "fade_to_black"
    FLASH = "flash"


class ColorGrading(str, Enum):
    WARM_CINEMATIC = "warm_cinematic"
    VIBRANT_DYNAMIC = "vibrant_dynamic"
    CLEAN_NEUTRAL = "clean_neutral"
    NATURAL_CLEAR = "natural_clear"
    WARM = "warm"
    COOL = "cool"
    NEUTRAL = "neutral"
    CINEMATIC = "cinematic"


class AudioMixing(str, Enum):
    ROMANTIC_MUSIC_HEAVY = "romantic_music_heavy"
    MUSIC_SYNCED = "music_synced"
    VOICE_CLEAR = "voice_clear"
    VOICE_PRIMARY = "voice_primary"
    BALANCED = "balanced"
    MUSIC_HEAVY = "music_heavy"
    VOICE_HEAVY = "voice_heavy"


class StyleSettings(CamelModel):
    """Editing parameters handed to the automation bridge."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    pacing: Pacing
    transitions: tuple[Transition, ...] = Field(min_length=1)  # Applied in order
    color_grading: ColorGrading
    audio_mixing: AudioMixing
    effects: tuple[str, ...] = ()
    timeline_structure: str | None = None


class StyleDefinition(CamelModel):
    """A named editing style."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(pattern=r"^[a-z0-9][a-z0-9_-]*$")
    display_name: str
    description: str = ""
    settings: StyleSettings
