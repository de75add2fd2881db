# src/tatorscout/config.py
"""Configuration management for tatorscout."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import tomllib

from .errors import ConfigError
from .grid import (
    FIELD_HEIGHT,
    FIELD_WIDTH,
    GRID_SIZE,
    MAX_GRID_SIZE,
    SAMPLE_RATE,
    SECTION_NAMES,
    SECTION_SECONDS,
    FixedPointGrid,
    sections_from_seconds,
)


@dataclass
class GridConfig:
    size: int = GRID_SIZE
    sample_rate: int = SAMPLE_RATE
    field_width: float = FIELD_WIDTH
    field_height: float = FIELD_HEIGHT


@dataclass
class SectionsConfig:
    # seconds from match start, [start, end)
    auto: tuple[float, float] = SECTION_SECONDS["auto"]
    teleop: tuple[float, float] = SECTION_SECONDS["teleop"]
    endgame: tuple[float, float] = SECTION_SECONDS["endgame"]

    def as_dict(self) -> dict[str, tuple[float, float]]:
        return {name: tuple(getattr(self, name)) for name in SECTION_NAMES}


@dataclass
class AnalysisConfig:
    stationary_threshold: float = 0.1
    histogram_bins: int = 10


@dataclass
class SeasonConfig:
    year: int = 2025


@dataclass
class TatorScoutConfig:
    grid: GridConfig = field(default_factory=GridConfig)
    sections: SectionsConfig = field(default_factory=SectionsConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    season: SeasonConfig = field(default_factory=SeasonConfig)

    def validate(self) -> None:
        """Validate configuration, raising ConfigError if invalid."""
        _require_int("grid.size", self.grid.size)
        _require_int("grid.sample_rate", self.grid.sample_rate)
        _require_number("grid.field_width", self.grid.field_width)
        _require_number("grid.field_height", self.grid.field_height)
        _require_number(
            "analysis.stationary_threshold", self.analysis.stationary_threshold
        )
        _require_int("analysis.histogram_bins", self.analysis.histogram_bins)
        _require_int("season.year", self.season.year)

        if not 1 <= self.grid.size <= MAX_GRID_SIZE:
            raise ConfigError(
                f"Invalid grid size {self.grid.size}. "
                f"Must be between 1 and {MAX_GRID_SIZE}"
            )

        if self.grid.sample_rate <= 0:
            raise ConfigError(
                f"Invalid sample_rate {self.grid.sample_rate}. Must be positive"
            )

        if self.grid.field_width <= 0 or self.grid.field_height <= 0:
            raise ConfigError("Field dimensions in [grid] must be positive")

        duration = self.grid.size / self.grid.sample_rate
        for name in SECTION_NAMES:
            bounds = _section_bounds(name, getattr(self.sections, name))
            start, end = bounds
            _require_number(f"sections.{name} start", start)
            _require_number(f"sections.{name} end", end)
            if not 0 <= start < end:
                raise ConfigError(
                    f"Section '{name}' must satisfy 0 <= start < end, got {list(bounds)}"
                )
            if end > duration:
                raise ConfigError(
                    f"Section '{name}' ends at {end}s, after the grid's "
                    f"{duration:g}s duration"
                )

        if self.analysis.stationary_threshold < 0:
            raise ConfigError("stationary_threshold cannot be negative")

        if self.analysis.histogram_bins < 1:
            raise ConfigError(
                f"Invalid histogram_bins {self.analysis.histogram_bins}. Must be >= 1"
            )

    def build_grid(self) -> FixedPointGrid:
        """Build the time grid described by [grid] and [sections]."""
        return FixedPointGrid(
            size=self.grid.size,
            sample_rate=self.grid.sample_rate,
            field_width=self.grid.field_width,
            field_height=self.grid.field_height,
            sections=sections_from_seconds(
                self.sections.as_dict(), self.grid.sample_rate
            ),
        )


def _require_int(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def _require_number(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number, got {value!r}")


def _table(data: dict, name: str) -> dict:
    table = data.get(name, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[{name}] must be a table, got {table!r}")
    return table


def _section_bounds(name: str, value) -> tuple:
    """Read a [start, end] pair from the [sections] table."""
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(
            f"Section '{name}' must be [start, end] in seconds, got {value!r}"
        )
    return tuple(value)


def default_config() -> TatorScoutConfig:
    return TatorScoutConfig()


def load_config(config_path: Path) -> TatorScoutConfig:
    """Load configuration from TOML file."""
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    defaults = TatorScoutConfig()

    grid_data = _table(data, "grid")
    grid = GridConfig(
        size=grid_data.get("size", defaults.grid.size),
        sample_rate=grid_data.get("sample_rate", defaults.grid.sample_rate),
        field_width=grid_data.get("field_width", defaults.grid.field_width),
        field_height=grid_data.get("field_height", defaults.grid.field_height),
    )

    sections_data = _table(data, "sections")
    sections = SectionsConfig(
        **{
            name: _section_bounds(
                name, sections_data.get(name, getattr(defaults.sections, name))
            )
            for name in SECTION_NAMES
        }
    )

    analysis_data = _table(data, "analysis")
    analysis = AnalysisConfig(
        stationary_threshold=analysis_data.get(
            "stationary_threshold", defaults.analysis.stationary_threshold
        ),
        histogram_bins=analysis_data.get(
            "histogram_bins", defaults.analysis.histogram_bins
        ),
    )

    season_data = _table(data, "season")
    season = SeasonConfig(year=season_data.get("year", defaults.season.year))

    return TatorScoutConfig(
        grid=grid,
        sections=sections,
        analysis=analysis,
        season=season,
    )


def get_default_config_path() -> Path:
    """Get the default config file path."""
    return Path.home() / ".tatorscout" / "config.toml"
