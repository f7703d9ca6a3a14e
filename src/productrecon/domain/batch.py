"""Compare a batch of imported records against pre-built candidate indexes."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from productrecon.config.matching import DEFAULT_MATCHING_POLICY
from productrecon.domain.matching.cascade import legacy_code
from productrecon.domain.matching.engine import ComparisonEngine
from productrecon.domain.matching.identifiers import normalize_code
from productrecon.domain.matching.indexes import name_key
from productrecon.domain.model import MatchStatus

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from productrecon.config.matching import MatchingPolicy
    from productrecon.domain.matching.indexes import CandidateIndexes
    from productrecon.domain.model import ImportedRecord, MatchResult
    from productrecon.domain.ports import ProgressReporter

log = logging.getLogger(__name__)


@dataclass(slots=True)
class BatchComparison:
    results: list[MatchResult] = field(default_factory=list)
    counts: Counter[MatchStatus] = field(default_factory=Counter)

    def count(self, status: MatchStatus) -> int:
        return self.counts[status]

    @property
    def total(self) -> int:
        return len(self.results)


@dataclass(frozen=True, slots=True)
class LookupKeys:
    """Keys a storage loader must fetch so the indexes cover a batch.

    ``brands`` widen the candidate pool for the brand-driven fallback strategies.
    """

    codes: frozenset[str]
    names: frozenset[str]
    brands: frozenset[str] = frozenset()


def collect_lookup_keys(
    records: Iterable[ImportedRecord],
    *,
    policy: MatchingPolicy = DEFAULT_MATCHING_POLICY,
) -> LookupKeys:
    codes: set[str] = set()
    names: set[str] = set()
    brands: set[str] = set()
    for record in records:
        normalized = normalize_code(record.code)
        if normalized:
            codes.add(normalized)
            legacy = legacy_code(normalized, policy)
            if legacy is not None:
                codes.add(legacy)
        raw = record.code.strip() if record.code else ""
        if raw and raw != normalized:
            codes.add(raw)
        key = name_key(record.name)
        if key is not None:
            names.add(key)
        brand = name_key(record.brand)
        if brand is not None:
            brands.add(brand)
    return LookupKeys(
        codes=frozenset(codes),
        names=frozenset(names),
        brands=frozenset(brands),
    )


def compare_batch(
    records: Sequence[ImportedRecord],
    indexes: CandidateIndexes,
    *,
    engine: ComparisonEngine | None = None,
    progress: ProgressReporter | None = None,
    report_every: int = 100,
) -> BatchComparison:
    """Compare every record independently; one failing record never aborts the batch.

    Results keep the input order. ``progress`` receives ``(processed, total)``
    every ``report_every`` records and once at the end.
    """

    engine = engine or ComparisonEngine()
    total = len(records)
    every = max(report_every, 1)
    batch = BatchComparison()
    log.info("Comparing %s records against %s index entries", total, len(indexes))

    for processed, record in enumerate(records, start=1):
        result = engine.compare(record, indexes.by_code, indexes.by_name)
        batch.results.append(result)
        batch.counts[result.status] += 1
        if progress is not None and (processed % every == 0 or processed == total):
            progress.report(processed, total)

    log.info(
        "Batch done: matched=%s discrepancy=%s unmatched=%s error=%s",
        batch.count(MatchStatus.MATCHED),
        batch.count(MatchStatus.DISCREPANCY),
        batch.count(MatchStatus.UNMATCHED),
        batch.count(MatchStatus.ERROR),
    )
    return batch
