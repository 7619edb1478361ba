"""Platform helpers (filesystem)."""

from .files import atomic_write_text, collect_files

__all__ = ["atomic_write_text", "collect_files"]
