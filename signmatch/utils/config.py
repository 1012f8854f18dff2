"""
Comparison configuration.
Loads YAML overrides and provides a typed, explicitly passed config object.

Several constant sets exist across revisions of the comparison engine
(threshold 0.8 vs 0.92, 40 vs 60 target frames, 140 vs 156 features,
face- vs wrist-anchored normalization). The defaults below reproduce the
revision currently shipped; every alternative is reachable through config.
"""

import os
import logging
from dataclasses import dataclass, asdict
from typing import Optional

import yaml

from ..core.errors import ConfigError

logger = logging.getLogger(__name__)

_BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
_CONFIG_DIR = os.path.join(_BASE_DIR, "config")
DEFAULT_CONFIG_PATH = os.path.join(_CONFIG_DIR, "comparison.yaml")

ANCHORS = ("face", "wrist")

# Schema: known sections and their expected field types
_CONFIG_SCHEMA = {
    "comparison": {
        "similarity_threshold": float,
        "target_frames": int,
        "min_quality_frames": int,
        "feature_length": int,
        "dtw_weight": float,
        "cosine_weight": float,
        "max_expected_distance": float,
        "sharpening_exponent": float,
        "key_landmark_weight": float,
        "anchor": str,
        "max_workers": int,
    },
    "logging": {
        "level": str,
        "file": str,
        "max_size_mb": int,
        "backup_count": int,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base dict."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass
class ComparisonConfig:
    """Every tunable constant of the comparison engine."""
    similarity_threshold: float = 0.8     # isMatch cut-off, shared by all signs
    target_frames: int = 40               # Resample length
    min_quality_frames: int = 20          # Below this, sequences are not resampled
    feature_length: int = 140             # Per-frame feature vector length
    dtw_weight: float = 0.6
    cosine_weight: float = 0.4
    max_expected_distance: float = 10.0   # DTW cost mapped to similarity 0
    sharpening_exponent: float = 1.0      # final ** p, 1.0 disables
    key_landmark_weight: float = 1.0      # Multiplier for wrist + fingertips
    anchor: str = "face"                  # "face" or "wrist"
    max_workers: int = 1                  # >1 scores library entries in threads

    @classmethod
    def from_dict(cls, config: dict) -> "ComparisonConfig":
        """Create config from dictionary."""
        defaults = cls()
        return cls(
            similarity_threshold=float(config.get("similarity_threshold", defaults.similarity_threshold)),
            target_frames=int(config.get("target_frames", defaults.target_frames)),
            min_quality_frames=int(config.get("min_quality_frames", defaults.min_quality_frames)),
            feature_length=int(config.get("feature_length", defaults.feature_length)),
            dtw_weight=float(config.get("dtw_weight", defaults.dtw_weight)),
            cosine_weight=float(config.get("cosine_weight", defaults.cosine_weight)),
            max_expected_distance=float(config.get("max_expected_distance", defaults.max_expected_distance)),
            sharpening_exponent=float(config.get("sharpening_exponent", defaults.sharpening_exponent)),
            key_landmark_weight=float(config.get("key_landmark_weight", defaults.key_landmark_weight)),
            anchor=str(config.get("anchor", defaults.anchor)).lower(),
            max_workers=int(config.get("max_workers", defaults.max_workers)),
        )

    def to_dict(self) -> dict:
        return asdict(self)

    def validate(self) -> "ComparisonConfig":
        """Raise ConfigError on impossible combinations; returns self."""
        errors = []
        if not 0.0 <= self.similarity_threshold <= 1.0:
            errors.append("similarity_threshold must be within [0, 1]")
        if self.target_frames < 1:
            errors.append("target_frames must be >= 1")
        if self.min_quality_frames < 0:
            errors.append("min_quality_frames must be >= 0")
        if self.feature_length < 1:
            errors.append("feature_length must be >= 1")
        if self.dtw_weight < 0 or self.cosine_weight < 0:
            errors.append("weights must be non-negative")
        if abs(self.dtw_weight + self.cosine_weight - 1.0) > 1e-6:
            errors.append("dtw_weight + cosine_weight must equal 1 (got %.3f)"
                          % (self.dtw_weight + self.cosine_weight))
        if self.max_expected_distance <= 0:
            errors.append("max_expected_distance must be > 0")
        if self.sharpening_exponent <= 0:
            errors.append("sharpening_exponent must be > 0")
        if self.anchor not in ANCHORS:
            errors.append("anchor must be one of %s, got %r" % (ANCHORS, self.anchor))
        if self.max_workers < 1:
            errors.append("max_workers must be >= 1")

        if errors:
            raise ConfigError("; ".join(errors))
        return self


def _validate_schema(data: dict) -> list:
    """Check field types against the schema; returns warning strings."""
    warnings = []
    for section_name, fields in _CONFIG_SCHEMA.items():
        section = data.get(section_name)
        if section is None:
            continue
        if not isinstance(section, dict):
            warnings.append(f"Section '{section_name}' should be a dict, got {type(section).__name__}")
            continue
        for field_name, expected_type in fields.items():
            if field_name in section:
                value = section[field_name]
                # Allow int where float is expected
                if expected_type is float and isinstance(value, (int, float)) and not isinstance(value, bool):
                    continue
                if not isinstance(value, expected_type) or isinstance(value, bool):
                    warnings.append(
                        f"{section_name}.{field_name}: expected {expected_type.__name__}, "
                        f"got {type(value).__name__} ({value!r})"
                    )
        unknown = set(section) - set(fields)
        for name in sorted(unknown):
            warnings.append(f"Unknown key '{section_name}.{name}' ignored")
    return warnings


def load_raw_config(config_path: Optional[str] = None) -> dict:
    """Read the YAML config file into a dict; empty when the file is missing."""
    config_path = config_path or DEFAULT_CONFIG_PATH
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded config from %s", config_path)
    except FileNotFoundError:
        logger.warning("Config file not found: %s, using defaults", config_path)
        return {}
    except yaml.YAMLError as e:
        raise ConfigError("Invalid YAML in %s: %s" % (config_path, e)) from e

    if not isinstance(data, dict):
        raise ConfigError("Config root in %s must be a mapping" % config_path)

    warnings = _validate_schema(data)
    if warnings:
        for w in warnings:
            logger.warning("Config validation: %s", w)
    else:
        logger.debug("Config validation passed")
    return data


def load_config(config_path: Optional[str] = None, overrides: Optional[dict] = None) -> ComparisonConfig:
    """Build a validated ComparisonConfig from YAML plus optional overrides.

    Args:
        config_path: YAML file; defaults to ``config/comparison.yaml``
        overrides: Dict merged over the file's ``comparison`` section

    Returns:
        Validated ComparisonConfig
    """
    return config_from_data(load_raw_config(config_path), overrides)


def config_from_data(data: dict, overrides: Optional[dict] = None) -> ComparisonConfig:
    """Build a validated ComparisonConfig from an already loaded config dict."""
    section = data.get("comparison") or {}
    if not isinstance(section, dict):
        raise ConfigError("'comparison' section must be a mapping")
    if overrides:
        section = _deep_merge(section, overrides)
    try:
        config = ComparisonConfig.from_dict(section)
    except (TypeError, ValueError) as e:
        raise ConfigError("Invalid comparison config: %s" % e) from e
    return config.validate()
