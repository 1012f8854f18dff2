"""Utility modules: configuration and logging."""
from .config import ComparisonConfig, load_config
from .logger import setup_logging, RecognitionLogger, log_timing

__all__ = [
    "ComparisonConfig",
    "load_config",
    "setup_logging",
    "RecognitionLogger",
    "log_timing",
]
