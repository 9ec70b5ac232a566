"""Utility helpers for IO and directory management."""

from .io import ensure_dirs, raw_dataset_path, save_table

__all__ = ["ensure_dirs", "raw_dataset_path", "save_table"]
