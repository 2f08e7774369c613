"""Service module exports."""

from . import charts, export_csv, habits, store

__all__ = [
    "charts",
    "export_csv",
    "habits",
    "store",
]
