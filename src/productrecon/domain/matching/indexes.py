"""Read-only candidate indexes built once per batch.

The engine only reads from these mappings. Building them up front lets a batch
of imported records resolve against a large catalog without touching storage
per record.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from productrecon.domain.model import CandidateRecord

from .identifiers import normalize_code

type CodeIndex = Mapping[str, CandidateRecord]
type NameIndex = Mapping[str, CandidateRecord]

log = logging.getLogger(__name__)


def name_key(name: str | None) -> str | None:
    """Key used by the exact-name index: trimmed and lower-cased."""

    if name is None:
        return None
    key = name.strip().lower()
    return key or None


def candidate_code(candidate: CandidateRecord) -> str:
    return candidate.normalized_code or normalize_code(candidate.code)


@dataclass(frozen=True, slots=True)
class CandidateIndexes:
    """Pair of lookup tables consumed by the matching engine."""

    by_code: CodeIndex = field(default_factory=lambda: MappingProxyType({}))
    by_name: NameIndex = field(default_factory=lambda: MappingProxyType({}))

    def __len__(self) -> int:
        return len(self.by_code) + len(self.by_name)


def build_candidate_indexes(candidates: Iterable[CandidateRecord]) -> CandidateIndexes:
    """Index candidates by normalized code and by exact (lower-cased) name.

    Duplicate keys resolve last-write-wins. A candidate's raw catalog code is
    added as an extra code key when it differs from the normalized one and no
    other candidate owns that key.
    """

    by_code: dict[str, CandidateRecord] = {}
    raw_keys: dict[str, CandidateRecord] = {}
    by_name: dict[str, CandidateRecord] = {}
    for candidate in candidates:
        code = candidate_code(candidate)
        if code:
            by_code[code] = candidate
        raw = candidate.code.strip() if candidate.code else ""
        if raw and raw != code:
            raw_keys[raw] = candidate
        key = name_key(candidate.name)
        if key is not None:
            by_name[key] = candidate

    for raw, candidate in raw_keys.items():
        by_code.setdefault(raw, candidate)

    log.debug("Indexed %s codes and %s names", len(by_code), len(by_name))
    return CandidateIndexes(
        by_code=MappingProxyType(by_code),
        by_name=MappingProxyType(by_name),
    )
