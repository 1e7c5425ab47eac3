"""Runtime configuration helpers for brailspin."""
from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .frames import BRAILLE_COUNT, BRAILLE_START, build_frames

CONFIG_PATH_ENV = "BRAILSPIN_CONFIG_PATH"
INTERVAL_ENV = "BRAILSPIN_INTERVAL"

MAX_CODEPOINT = 0x10FFFF

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def default_config_files() -> List[Path]:
    return [
        Path.cwd() / ".brailspin.toml",
        Path.home() / ".config" / "brailspin" / "config.toml",
    ]


class SpinnerSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    interval: float = Field(default=0.5, gt=0, description="Seconds between frames")
    codepoint_start: int = Field(default=BRAILLE_START, ge=0, description="First glyph code point")
    frame_count: int = Field(default=BRAILLE_COUNT, ge=1, description="Glyphs in one cycle")
    message: str = Field(default="Working... ", description="Printed before the spinner cell")
    done_message: str = Field(default="Done!", description="Printed after the spinner stops")
    use_color: bool = Field(default=False, description="Use rich colors for status output")
    log_level: LogLevel = Field(default="WARNING", description="Logging level for the CLI")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_glyph_range(self) -> "SpinnerSettings":
        last = self.codepoint_start + self.frame_count - 1
        if last > MAX_CODEPOINT:
            raise ValueError(f"glyph range ends at U+{last:X}, past U+{MAX_CODEPOINT:X}")
        return self

    def frames(self) -> Tuple[bytes, ...]:
        return build_frames(self.codepoint_start, self.frame_count)


@dataclass
class ConfigLoadResult:
    settings: SpinnerSettings
    source: Optional[Path]
    searched: List[Path]


def _load_toml(path: Path) -> Dict[str, Any]:
    with path.open("rb") as fh:
        return tomllib.load(fh)


def load_config(explicit_path: Optional[Path] = None) -> ConfigLoadResult:
    """Load configuration from the first available location.

    ``BRAILSPIN_INTERVAL`` overrides whatever interval the file sets.
    """
    candidates: List[Path] = []
    if explicit_path is not None:
        candidates.append(explicit_path.expanduser())
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.extend(default_config_files())

    config_data: Dict[str, Any] = {}
    loaded_from: Optional[Path] = None
    for candidate in candidates:
        if candidate.is_file():
            config_data = _load_toml(candidate)
            loaded_from = candidate
            break

    interval = os.environ.get(INTERVAL_ENV)
    if interval:
        config_data["interval"] = interval

    return ConfigLoadResult(settings=SpinnerSettings(**config_data), source=loaded_from, searched=candidates)


__all__ = ["ConfigLoadResult", "SpinnerSettings", "load_config"]
