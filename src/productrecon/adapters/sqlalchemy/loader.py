"""Preload candidate indexes for a batch with a bounded number of queries."""

from __future__ import annotations

import logging
from itertools import batched
from typing import TYPE_CHECKING

from sqlalchemy import func, or_, select

from productrecon.config.matching import DEFAULT_MATCHING_POLICY
from productrecon.domain.batch import collect_lookup_keys
from productrecon.domain.matching.indexes import build_candidate_indexes
from productrecon.domain.model import CandidateRecord

from .tables import catalog_table

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import ColumnElement, Connection, Row

    from productrecon.config.matching import MatchingPolicy
    from productrecon.domain.matching.indexes import CandidateIndexes
    from productrecon.domain.model import ImportedRecord

log = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 500


def load_candidate_indexes(
    connection: Connection,
    records: Iterable[ImportedRecord],
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    policy: MatchingPolicy = DEFAULT_MATCHING_POLICY,
) -> CandidateIndexes:
    """Fetch every catalog row a batch could match and index it in memory.

    Codes are looked up against both ``normalized_code`` and the raw ``code``
    column; names against ``lower(name)``; brands by containment in
    ``lower(brand)`` so the fallback strategies see every same-brand product.
    Each key set is queried in chunks of ``chunk_size`` to stay under driver
    parameter limits.
    """

    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")

    keys = collect_lookup_keys(records, policy=policy)
    found: dict[str, CandidateRecord] = {}

    for chunk in batched(sorted(keys.codes), chunk_size):
        condition = or_(
            catalog_table.c.normalized_code.in_(chunk),
            catalog_table.c.code.in_(chunk),
        )
        _collect(connection, condition, found)

    for chunk in batched(sorted(keys.names), chunk_size):
        _collect(connection, func.lower(catalog_table.c.name).in_(chunk), found)

    brand = func.lower(catalog_table.c.brand)
    for chunk in batched(sorted(keys.brands), chunk_size):
        _collect(connection, or_(*(brand.contains(key, autoescape=True) for key in chunk)), found)

    log.info(
        "Loaded %s catalog candidates for %s codes, %s names and %s brands",
        len(found),
        len(keys.codes),
        len(keys.names),
        len(keys.brands),
    )
    ordered = sorted(found.values(), key=lambda candidate: candidate.candidate_id)
    return build_candidate_indexes(ordered)


def _collect(
    connection: Connection,
    condition: ColumnElement[bool],
    found: dict[str, CandidateRecord],
) -> None:
    stmt = select(catalog_table).where(condition)
    for row in connection.execute(stmt):
        candidate = _row_to_candidate(row)
        found[candidate.candidate_id] = candidate


def _row_to_candidate(row: Row[tuple[object, ...]]) -> CandidateRecord:
    mapping = row._mapping  # noqa: SLF001
    return CandidateRecord(
        candidate_id=mapping["id"],
        code=mapping["code"] or "",
        normalized_code=mapping["normalized_code"],
        name=mapping["name"],
        brand=mapping["brand"],
        categories=mapping["categories"],
        allergens=mapping["allergens"],
        quantity=mapping["quantity"],
    )
