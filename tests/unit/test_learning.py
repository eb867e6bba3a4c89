"""Tests for the selection learning table."""

import json

import pytest

from launch_search.exceptions import PersistenceCorruptedError, PersistenceError
from launch_search.search.learning import (
    LEARNING_KEY,
    LearningStore,
    decode_table,
    learned_score,
    normalize_query,
)
from launch_search.storage import MemoryBlobStore

FIREFOX = "org.mozilla.firefox.desktop"


class FailingStore(MemoryBlobStore):
    """Blob store whose every operation fails."""

    def get(self, key: str) -> str | None:
        raise PersistenceError("read failed")

    def set(self, key: str, value: str) -> None:
        raise PersistenceError("write failed")

    def delete(self, key: str) -> bool:
        raise PersistenceError("delete failed")


@pytest.fixture
def store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def learning(store: MemoryBlobStore) -> LearningStore:
    return LearningStore(store)


class TestLearnedScore:
    """Tests for learned_score."""

    @pytest.mark.parametrize(
        "count,expected",
        [(0, 0.0), (-1, 0.0), (1, 15.0), (3, 30.0), (7, 45.0), (100, 50.0)],
    )
    def test_values(self, count: float, expected: float) -> None:
        assert learned_score(count) == pytest.approx(expected)

    def test_fractional_count(self) -> None:
        """Test prefix credit alone yields a small boost."""
        assert 0 < learned_score(0.5) < learned_score(1)


class TestNormalizeQuery:
    """Tests for normalize_query."""

    def test_lowercases_and_trims(self) -> None:
        assert normalize_query("  FireFox ") == "firefox"


class TestDecodeTable:
    """Tests for decode_table."""

    def test_valid(self) -> None:
        assert decode_table('{"fire": {"a": 1.5}}') == {"fire": {"a": 1.5}}

    def test_invalid_json(self) -> None:
        with pytest.raises(PersistenceCorruptedError):
            decode_table("{not json")

    def test_wrong_shape(self) -> None:
        with pytest.raises(PersistenceCorruptedError):
            decode_table('["fire"]')

    def test_negative_weight(self) -> None:
        with pytest.raises(PersistenceCorruptedError):
            decode_table('{"fire": {"a": -1}}')


class TestLearningRecord:
    """Tests for recording selections."""

    def test_credits_full_query_and_prefixes(self, learning: LearningStore) -> None:
        """Test the full query gains 1 and shorter prefixes gain 0.5."""
        learning.record("fire", FIREFOX)

        assert learning.count("fire", FIREFOX) == 1.0
        assert learning.count("fir", FIREFOX) == 0.5
        assert learning.count("fi", FIREFOX) == 0.5
        assert learning.count("f", FIREFOX) == 0.0

    def test_query_is_normalized(self, learning: LearningStore) -> None:
        learning.record("FIRE", FIREFOX)
        assert learning.count("fire", FIREFOX) == 1.0
        assert learning.count(" Fire ", FIREFOX) == 1.0

    def test_repeated_selection_accumulates(self, learning: LearningStore) -> None:
        for _ in range(3):
            learning.record("fire", FIREFOX)

        assert learning.count("fire", FIREFOX) == 3.0
        assert learning.score("fire", FIREFOX) == pytest.approx(30.0)

    @pytest.mark.parametrize("query", ["f", " a ", "  ", ""])
    def test_short_query_ignored(
        self, learning: LearningStore, store: MemoryBlobStore, query: str
    ) -> None:
        """Test the length limit applies to the normalized query."""
        learning.record(query, FIREFOX)
        assert learning.table == {}
        assert store.get(LEARNING_KEY) is None

    @pytest.mark.parametrize("result_id", [None, ""])
    def test_missing_id_ignored(self, learning: LearningStore, result_id: str | None) -> None:
        learning.record("fire", result_id)
        assert learning.table == {}

    def test_persists_each_selection(self, learning: LearningStore, store: MemoryBlobStore) -> None:
        learning.record("fire", FIREFOX)

        saved = json.loads(store.get(LEARNING_KEY) or "{}")
        assert saved["fire"][FIREFOX] == 1.0

    def test_write_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a failed save keeps the in-memory update."""
        learning = LearningStore(FailingStore())
        learning.record("fire", FIREFOX)

        assert learning.count("fire", FIREFOX) == 1.0
        assert "Failed to save learning data" in caplog.text


class TestLearningLoad:
    """Tests for loading persisted learning data."""

    def test_round_trip(self, store: MemoryBlobStore) -> None:
        LearningStore(store).record("term", "org.gnome.Terminal.desktop")

        reloaded = LearningStore(store)
        reloaded.load()
        assert reloaded.count("term", "org.gnome.Terminal.desktop") == 1.0

    def test_missing_blob(self, learning: LearningStore) -> None:
        learning.load()
        assert learning.table == {}

    def test_corrupted_blob(self, store: MemoryBlobStore, caplog: pytest.LogCaptureFixture) -> None:
        store.set(LEARNING_KEY, "garbage")
        learning = LearningStore(store)
        learning.load()

        assert learning.table == {}
        assert "corrupted" in caplog.text

    def test_negative_weight_discards_table(self, store: MemoryBlobStore) -> None:
        store.set(LEARNING_KEY, json.dumps({"fire": {FIREFOX: -2}}))
        learning = LearningStore(store)
        learning.load()
        assert learning.table == {}

    def test_read_failure(self) -> None:
        learning = LearningStore(FailingStore())
        learning.load()
        assert learning.table == {}


class TestLearningEntries:
    """Tests for listing and clearing learning data."""

    def test_entries_sorted_by_weight(self, learning: LearningStore) -> None:
        learning.record("te", "a.desktop")
        learning.record("te", "b.desktop")
        learning.record("te", "b.desktop")

        assert learning.entries("te") == [
            ("te", "b.desktop", 2.0),
            ("te", "a.desktop", 1.0),
        ]

    def test_entries_for_all_queries(self, learning: LearningStore) -> None:
        learning.record("fir", FIREFOX)

        assert learning.entries() == [
            ("fi", FIREFOX, 0.5),
            ("fir", FIREFOX, 1.0),
        ]

    def test_entries_unknown_query(self, learning: LearningStore) -> None:
        assert learning.entries("nothing") == []

    def test_clear(self, learning: LearningStore, store: MemoryBlobStore) -> None:
        learning.record("fire", FIREFOX)
        learning.clear()

        assert learning.table == {}
        assert store.get(LEARNING_KEY) is None
        assert learning.score("fire", FIREFOX) == 0.0

    def test_clear_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        learning = LearningStore(FailingStore())
        learning.clear()
        assert "Failed to clear" in caplog.text
