"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".caladjust"


def default_config_path() -> Path:
    """Return the default config.yaml location."""
    return _default_config_dir() / "config.yaml"


def _cast_threshold(name: str, default: float, value: object) -> float:
    """Cast a configured threshold to the type of its default.

    Integer thresholds accept whole floats such as 250.0 but not 250.7.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"thresholds.{name} must be a number, got {value!r}")
    if isinstance(default, int) and not float(value).is_integer():
        raise ValueError(f"thresholds.{name} must be a whole number, got {value!r}")
    return type(default)(value)


@dataclass
class ThresholdsConfig:
    """Decision thresholds for velocity alerts and recalculation triggers.

    Weights are in kg, rates in kg/week, calorie amounts in kcal/day.
    """

    fast_loss_rate: float = -1.0
    fast_gain_rate: float = 0.5
    slow_progress_rate: float = -0.2
    recalc_weight_drift: float = 2.0
    plateau_window_days: int = 28
    plateau_tolerance: float = 0.5
    plateau_min_entries: int = 4
    fast_loss_bump: int = 250
    maintenance_week_bump: int = 300
    plateau_extra_cut: int = 100
    plateau_deficit_ratio: float = 0.2


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table", "json"


@dataclass
class Settings:
    """Main application settings."""

    thresholds: ThresholdsConfig = field(default_factory=ThresholdsConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.caladjust/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"{config_path} is not valid YAML: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"{config_path} must contain a mapping")

        settings = cls()

        # Parse thresholds, casting to the type of each default
        if "thresholds" in data:
            th_data = data["thresholds"] or {}
            if not isinstance(th_data, dict):
                raise ValueError("thresholds must be a mapping")
            for item in fields(ThresholdsConfig):
                if item.name in th_data:
                    default = getattr(settings.thresholds, item.name)
                    setattr(
                        settings.thresholds,
                        item.name,
                        _cast_threshold(item.name, default, th_data[item.name]),
                    )

        # Parse defaults
        if "defaults" in data:
            def_data = data["defaults"] or {}
            if not isinstance(def_data, dict):
                raise ValueError("defaults must be a mapping")
            if "output_format" in def_data:
                settings.defaults.output_format = def_data["output_format"]

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.caladjust/config.yaml
        """
        if config_path is None:
            config_path = default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict:
        """Convert settings to a plain dict in config file layout."""
        return {
            "thresholds": asdict(self.thresholds),
            "defaults": asdict(self.defaults),
        }


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load()
    return _settings
