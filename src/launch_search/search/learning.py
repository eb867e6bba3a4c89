"""Persisted query/result usage table.

The table maps a normalized query to the results chosen for it and an
accumulated weight. Each selection also credits the shorter prefixes of the
query, so later partial typing benefits from an earlier full selection.
"""

import json
import logging
import math

from pydantic import NonNegativeFloat, TypeAdapter, ValidationError

from launch_search.exceptions import PersistenceCorruptedError, PersistenceError
from launch_search.storage.base import BlobStore
from launch_search.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)

LEARNING_KEY = "learning"

MIN_QUERY_LENGTH = 2
SELECTION_WEIGHT = 1.0
PREFIX_WEIGHT = 0.5
MAX_LEARNED_SCORE = 50.0
LEARNED_SCORE_SCALE = 15.0

LearningTable = dict[str, dict[str, float]]

_TABLE = TypeAdapter(dict[str, dict[str, NonNegativeFloat]])


def normalize_query(query: str) -> str:
    return query.lower().strip()


def learned_score(count: float) -> float:
    """Boost for a usage weight: ``min(50, log2(count + 1) * 15)``."""
    if count <= 0:
        return 0.0
    return min(MAX_LEARNED_SCORE, math.log2(count + 1) * LEARNED_SCORE_SCALE)


def decode_table(raw: str) -> LearningTable:
    """Decode a serialized learning table.

    Raises:
        PersistenceCorruptedError: If the blob is not a valid table.
    """
    try:
        return _TABLE.validate_python(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        raise PersistenceCorruptedError(f"Invalid learning table: {e}") from e


class LearningStore:
    """Usage-frequency table backed by a :class:`BlobStore`.

    The table is loaded once and kept in memory; every recorded selection
    is written back immediately. Load and write failures are logged and
    never propagate.
    """

    def __init__(self, store: BlobStore, key: str = LEARNING_KEY) -> None:
        self._store = store
        self._key = key
        self._table: LearningTable = {}

    @property
    def table(self) -> LearningTable:
        return self._table

    def load(self) -> None:
        """Load the persisted table, falling back to an empty one."""
        try:
            raw = self._store.get(self._key)
        except PersistenceError as e:
            logger.warning("Cannot read learning data, starting empty: %s", e)
            self._table = {}
            return

        if not raw:
            self._table = {}
            return

        try:
            self._table = decode_table(raw)
        except PersistenceCorruptedError as e:
            logger.warning("Discarding corrupted learning data: %s", e)
            self._table = {}
            return

        logger.debug("Loaded learning data for %d queries", len(self._table))

    def save(self) -> None:
        try:
            self._store.set(self._key, json.dumps(self._table, sort_keys=True))
        except PersistenceError as e:
            logger.warning("Failed to save learning data: %s", e)

    def record(self, query: str, result_id: str | None) -> None:
        """Credit ``result_id`` as the choice made for ``query``.

        The full normalized query gains 1 and each prefix shorter than it,
        of at least two characters, gains 0.5. Queries shorter than two
        characters after normalizing and missing ids are ignored.
        """
        normalized = normalize_query(query or "")
        if len(normalized) < MIN_QUERY_LENGTH or not result_id:
            return

        self._add(normalized, result_id, SELECTION_WEIGHT)
        for end in range(MIN_QUERY_LENGTH, len(normalized)):
            self._add(normalized[:end], result_id, PREFIX_WEIGHT)

        log_with_context(
            logger, logging.DEBUG, "Recorded selection", query=normalized, result_id=result_id
        )
        self.save()

    def _add(self, query: str, result_id: str, weight: float) -> None:
        results = self._table.setdefault(query, {})
        results[result_id] = results.get(result_id, 0.0) + weight

    def count(self, query: str, result_id: str) -> float:
        return self._table.get(normalize_query(query), {}).get(result_id, 0.0)

    def score(self, query: str, result_id: str) -> float:
        """Learned boost for ``result_id`` under ``query``, in [0, 50]."""
        return learned_score(self.count(query, result_id))

    def entries(self, query: str | None = None) -> list[tuple[str, str, float]]:
        """List ``(query, result_id, weight)`` rows, heaviest first per query.

        Args:
            query: Restrict to one normalized query.
        """
        if query is not None:
            normalized = normalize_query(query)
            items = [(normalized, self._table.get(normalized, {}))]
        else:
            items = sorted(self._table.items())

        rows: list[tuple[str, str, float]] = []
        for q, results in items:
            for result_id, weight in sorted(results.items(), key=lambda kv: (-kv[1], kv[0])):
                rows.append((q, result_id, weight))
        return rows

    def clear(self) -> None:
        """Forget all recorded selections."""
        self._table = {}
        try:
            self._store.delete(self._key)
        except PersistenceError as e:
            logger.warning("Failed to clear learning data: %s", e)
