"""Process and filesystem adapters."""

from .files import atomic_write_json, atomic_write_text, list_dir_names
from .process import ProcessError, run_silent

__all__ = [
    "ProcessError",
    "atomic_write_json",
    "atomic_write_text",
    "list_dir_names",
    "run_silent",
]
