"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import create_engine

from productrecon.adapters.sqlalchemy import (
    create_catalog_tables,
    insert_candidates,
    load_candidate_indexes,
)
from productrecon.adapters.text_normalizer import ChatCompletionNameNormalizer
from productrecon.config import (
    DEFAULT_MATCHING_POLICY,
    MissingConfigurationError,
    configure_logging,
    get_database_config,
    get_text_normalizer_config,
)
from productrecon.domain.batch import BatchComparison, compare_batch
from productrecon.domain.matching import ComparisonEngine, basic_name_normalizer

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy import Engine

    from productrecon.config import MatchingPolicy
    from productrecon.domain.model import CandidateRecord, ImportedRecord
    from productrecon.domain.ports import NormalizeProductName, ProgressReporter


log = getLogger(__name__)


def create_catalog_engine(database_uri: str | None = None) -> Engine:
    if database_uri is not None:
        engine = create_engine(database_uri)
    else:
        config = get_database_config()
        engine = create_engine(config.uri, echo=config.echo)
    create_catalog_tables(engine)
    return engine


def build_name_normalizer() -> NormalizeProductName:
    """Chat-completion normalizer when configured, the local one otherwise."""

    try:
        config = get_text_normalizer_config()
    except MissingConfigurationError:
        log.info("Text normalizer not configured; using local name normalization")
        return basic_name_normalizer
    log.info("Using chat-completion name normalization with model %s", config.model)
    return ChatCompletionNameNormalizer(config)


def import_catalog(
    candidates: Iterable[CandidateRecord],
    *,
    engine: Engine | None = None,
    log_level: int | str | None = None,
) -> int:
    """Store reference-catalog rows so later batches can be compared against them."""

    if log_level is not None:
        configure_logging(level=log_level)
    effective_engine = engine or create_catalog_engine()
    with effective_engine.begin() as connection:
        stored = insert_candidates(connection, candidates)
    log.info("Imported %s catalog rows", stored)
    return stored


def compare_records(
    records: Sequence[ImportedRecord],
    *,
    engine: Engine | None = None,
    normalize_name: NormalizeProductName | None = None,
    policy: MatchingPolicy = DEFAULT_MATCHING_POLICY,
    progress: ProgressReporter | None = None,
    chunk_size: int = 500,
    log_level: int | str | None = None,
) -> BatchComparison:
    """Compare imported records against the stored catalog using the configured adapters.

    Passing ``log_level`` configures root logging for the run; leave it unset
    when the host application already does.
    """

    if log_level is not None:
        configure_logging(level=log_level)
    effective_engine = engine or create_catalog_engine()
    effective_normalizer = normalize_name or build_name_normalizer()
    log.info("Starting comparison of %s records", len(records))

    with effective_engine.connect() as connection:
        indexes = load_candidate_indexes(
            connection, records, chunk_size=chunk_size, policy=policy
        )

    comparison_engine = ComparisonEngine(policy=policy, normalize_name=effective_normalizer)
    try:
        result = compare_batch(records, indexes, engine=comparison_engine, progress=progress)
    finally:
        if normalize_name is None and isinstance(
            effective_normalizer, ChatCompletionNameNormalizer
        ):
            effective_normalizer.close()

    log.info(
        "Finished comparison: total=%s counts=%s",
        result.total,
        dict(result.counts),
    )
    return result
