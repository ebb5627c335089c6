"""
Utility helpers.

Small, reusable helpers shared by the I/O and pipeline layers.
"""

from pg_neptune.utils.paths import ensure_dir

__all__ = [
    "ensure_dir",
]
