"""SQLAlchemy Core table for the reference catalog."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import Column, Index, MetaData, String, Table, func

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import Connection, Engine

    from productrecon.domain.model import CandidateRecord

log = logging.getLogger(__name__)

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

catalog_table = Table(
    "catalog_product",
    metadata,
    Column("id", String, primary_key=True),
    Column("code", String, nullable=False, default=""),
    Column("normalized_code", String, nullable=True, index=True),
    Column("name", String, nullable=True),
    Column("brand", String, nullable=True),
    Column("categories", String, nullable=True),
    Column("allergens", String, nullable=True),
    Column("quantity", String, nullable=True),
    Index("ix_catalog_product_code", "code"),
)
Index("ix_catalog_product_name_lower", func.lower(catalog_table.c.name))


def create_catalog_tables(engine: Engine) -> None:
    """Create the catalog tables if they do not exist yet."""

    log.info("Creating catalog tables")
    metadata.create_all(engine)


def insert_candidates(connection: Connection, candidates: Iterable[CandidateRecord]) -> int:
    rows = [
        {
            "id": candidate.candidate_id,
            "code": candidate.code,
            "normalized_code": candidate.normalized_code,
            "name": candidate.name,
            "brand": candidate.brand,
            "categories": candidate.categories,
            "allergens": candidate.allergens,
            "quantity": candidate.quantity,
        }
        for candidate in candidates
    ]
    if not rows:
        return 0
    connection.execute(catalog_table.insert(), rows)
    log.debug("Inserted %s catalog rows", len(rows))
    return len(rows)
