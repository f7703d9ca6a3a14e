"""SQLAlchemy adapter package for the reference catalog."""

from __future__ import annotations

from .loader import load_candidate_indexes
from .tables import catalog_table, create_catalog_tables, insert_candidates, metadata

__all__ = [
    "catalog_table",
    "create_catalog_tables",
    "insert_candidates",
    "load_candidate_indexes",
    "metadata",
]
