"""Recorded-sign library loading."""
from .library import load_library, load_sequence, save_library

__all__ = ["load_library", "load_sequence", "save_library"]
