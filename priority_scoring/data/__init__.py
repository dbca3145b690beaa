"""Backup, export, local storage and sample data."""

from .backup import dump_json, load_json, parse_containers, export_csv, scored_frame
from .storage import LocalStorage, create_storage
from .samples import sample_containers

__all__ = [
    "dump_json",
    "load_json",
    "parse_containers",
    "export_csv",
    "scored_frame",
    "LocalStorage",
    "create_storage",
    "sample_containers",
]
