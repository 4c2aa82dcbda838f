"""
Core Utilities

- normalize_keys(): first-letter key normalization for untrusted JSON
"""

from .normalize import normalize_keys

__all__ = [
    "normalize_keys",
]
