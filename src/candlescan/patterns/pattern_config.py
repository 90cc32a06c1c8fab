"""
Pattern Detection Configuration

This module defines the tunable thresholds for the multi-day pattern
detectors. The hammer test has no entry here: its factor is fixed because
DayRecord caches the result when it is constructed.
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)


@dataclass
class ThreeWhiteSoldiersConfig:
    """Configuration for Three White Soldiers detection."""
    min_body_range_ratio: Decimal = Decimal('0.5')    # body >= 50% of range
    max_upper_shadow_ratio: Decimal = Decimal('0.2')  # upper shadow <= 20% of body


@dataclass
class EveningStarConfig:
    """Configuration for Evening Star detection."""
    min_first_body_ratio: Decimal = Decimal('0.008')  # 0.8% of the first close
    max_star_ratio: Decimal = Decimal('0.3')          # star body <= 30% of first body


@dataclass
class PatternDetectionConfig:
    """Master configuration for all pattern detection parameters."""

    three_white_soldiers: ThreeWhiteSoldiersConfig = field(default_factory=ThreeWhiteSoldiersConfig)
    evening_star: EveningStarConfig = field(default_factory=EveningStarConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for JSON serialization."""
        def convert_decimal(obj):
            if isinstance(obj, Decimal):
                return str(obj)
            elif isinstance(obj, dict):
                return {k: convert_decimal(v) for k, v in obj.items()}
            return obj

        return convert_decimal(asdict(self))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PatternDetectionConfig':
        """
        Create configuration from dictionary (JSON deserialization).

        Missing sections and keys keep their defaults. Unknown keys raise
        ValueError so that typos in a config file are not silently ignored.
        """
        config_classes = {
            'three_white_soldiers': ThreeWhiteSoldiersConfig,
            'evening_star': EveningStarConfig,
        }

        if not isinstance(data, dict):
            raise ValueError(f"Pattern configuration must be an object, got {type(data).__name__}")

        sections = {}
        for key, value in data.items():
            if key not in config_classes:
                raise ValueError(f"Unknown pattern configuration section: {key}")
            if not isinstance(value, dict):
                raise ValueError(f"Section {key} must be an object")

            section_cls = config_classes[key]
            known = {f.name for f in fields(section_cls)}
            kwargs = {}
            for name, raw in value.items():
                if name not in known:
                    raise ValueError(f"Unknown setting {key}.{name}")
                kwargs[name] = _to_decimal(raw, f"{key}.{name}")
            sections[key] = section_cls(**kwargs)

        return cls(**sections)

    def save_to_file(self, filepath: Path):
        """Save configuration to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: Path) -> 'PatternDetectionConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)


def _to_decimal(raw: Any, setting: str) -> Decimal:
    if isinstance(raw, bool):
        raise ValueError(f"Setting {setting} must be a number, got {raw!r}")
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        raise ValueError(f"Setting {setting} must be a number, got {raw!r}")
    if not value.is_finite() or value < 0:
        raise ValueError(f"Setting {setting} must be a finite non-negative number, got {raw!r}")
    return value


# Global configuration instance
_config: Optional[PatternDetectionConfig] = None


def get_pattern_config() -> PatternDetectionConfig:
    """Get the global pattern detection configuration."""
    global _config
    if _config is None:
        _config = PatternDetectionConfig()
    return _config


def set_pattern_config(config: PatternDetectionConfig):
    """Set the global pattern detection configuration."""
    global _config
    _config = config


def load_pattern_config(filepath: Path) -> PatternDetectionConfig:
    """Load pattern configuration from file and set it as global."""
    config = PatternDetectionConfig.load_from_file(filepath)
    set_pattern_config(config)
    logger.info(f"Loaded pattern configuration from {filepath}")
    return config


def save_pattern_config(filepath: Path):
    """Save current global configuration to file."""
    config = get_pattern_config()
    config.save_to_file(filepath)


def reset_pattern_config():
    """Reset to default configuration."""
    global _config
    _config = None
