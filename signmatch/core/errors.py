"""
Error types raised at the edges of the engine (config and file loading).

The comparison core itself never raises: bad input degrades to empty
results or a similarity of 0.
"""


class SignMatchError(Exception):
    """Base class for all signmatch errors."""


class ConfigError(SignMatchError):
    """Invalid comparison configuration."""


class LibraryFormatError(SignMatchError):
    """A sign library or keyframe file could not be parsed."""
