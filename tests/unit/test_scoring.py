"""Tests for tiered result scoring."""

import pytest

from launch_search.catalog import AppInfo
from launch_search.search.corpus import CorpusEntry
from launch_search.search.learning import LearningStore
from launch_search.search.scoring import (
    score_app,
    score_document_name,
    score_setting,
    word_starts_with,
)
from launch_search.search.settings_panels import SETTINGS_PANELS, SettingsEntry
from launch_search.search.synonyms import SynonymIndex
from launch_search.storage import MemoryBlobStore


@pytest.fixture
def entries(sample_apps: list[AppInfo]) -> dict[str, CorpusEntry]:
    """Corpus entries keyed by display name."""
    return {app.name: CorpusEntry.from_app(app) for app in sample_apps}


def _panel(name: str) -> SettingsEntry:
    return next(p for p in SETTINGS_PANELS if p.name == name)


class TestWordStartsWith:
    """Tests for word_starts_with."""

    def test_matches_later_word(self) -> None:
        assert word_starts_with("stu", ("visual", "studio", "code"))

    def test_no_match(self) -> None:
        assert not word_starts_with("dio", ("visual", "studio", "code"))


class TestScoreApp:
    """Tests for application scoring tiers."""

    def test_exact_name(self, entries: dict[str, CorpusEntry]) -> None:
        assert score_app("firefox", entries["Firefox"]) == 100

    def test_name_prefix(self, entries: dict[str, CorpusEntry]) -> None:
        assert score_app("fire", entries["Firefox"]) == 85

    def test_word_prefix(self, entries: dict[str, CorpusEntry]) -> None:
        assert score_app("stu", entries["Visual Studio Code"]) == 75

    def test_name_substring(self, entries: dict[str, CorpusEntry]) -> None:
        assert score_app("dio", entries["Visual Studio Code"]) == 65

    def test_synonym(self, entries: dict[str, CorpusEntry]) -> None:
        """Test a synonym term reaches the app it lists."""
        index = SynonymIndex()
        matches = index.matches("browser")
        assert score_app("browser", entries["Firefox"], matches) == 60

    def test_id_part_exact(self, entries: dict[str, CorpusEntry]) -> None:
        assert score_app("discordapp", entries["Discord"]) == 70

    def test_id_part_prefix(self, entries: dict[str, CorpusEntry]) -> None:
        assert score_app("gno", entries["Terminal"]) == 55

    def test_id_part_substring(self, entries: dict[str, CorpusEntry]) -> None:
        assert score_app("ozill", entries["Firefox"]) == 45

    def test_id_substring(self, entries: dict[str, CorpusEntry]) -> None:
        """Test a query spanning id parts matches the whole id."""
        assert score_app("mozilla.fire", entries["Firefox"]) == 50

    def test_fuzzy(self, entries: dict[str, CorpusEntry]) -> None:
        assert score_app("clcltr", entries["Calculator"]) == pytest.approx(12.4)

    def test_weak_fuzzy_is_ignored(self, entries: dict[str, CorpusEntry]) -> None:
        """Test fuzzy scores at or below the threshold do not count."""
        # 3/18 coverage with no run of two: about 8.5
        assert score_app("vse", entries["Visual Studio Code"]) == 0

    def test_description(self, entries: dict[str, CorpusEntry]) -> None:
        assert score_app("organize", entries["Files"]) == 25

    def test_reverse_synonym(self, entries: dict[str, CorpusEntry]) -> None:
        """Test a fragment of a term listing the app matches it."""
        index = SynonymIndex()
        assert score_app("hell", entries["Terminal"], synonyms=index) == 55

    def test_no_match(self, entries: dict[str, CorpusEntry]) -> None:
        assert score_app("zzz", entries["Firefox"], synonyms=SynonymIndex()) == 0

    def test_empty_query(self, entries: dict[str, CorpusEntry]) -> None:
        assert score_app("", entries["Firefox"]) == 0

    def test_learning_boost(self, entries: dict[str, CorpusEntry]) -> None:
        """Test learned usage is added on top of the tier score."""
        learning = LearningStore(MemoryBlobStore())
        learning.table["fire"] = {"org.mozilla.firefox.desktop": 3.0}
        # log2(4) * 15 = 30
        assert score_app("fire", entries["Firefox"], learning=learning) == pytest.approx(115)

    def test_learning_never_creates_match(self, entries: dict[str, CorpusEntry]) -> None:
        learning = LearningStore(MemoryBlobStore())
        learning.table["zzz"] = {"org.mozilla.firefox.desktop": 10.0}
        assert score_app("zzz", entries["Firefox"], learning=learning) == 0

    def test_exact_outranks_prefix_of_other_app(self) -> None:
        """Test tier order between two apps sharing a prefix."""
        files = CorpusEntry.from_app(AppInfo("files.desktop", "Files"))
        filezilla = CorpusEntry.from_app(AppInfo("filezilla.desktop", "FileZilla"))
        assert score_app("files", files) > score_app("file", filezilla) > 0


class TestScoreSetting:
    """Tests for settings panel scoring."""

    def test_exact(self) -> None:
        assert score_setting("sound", _panel("Sound")) == 95

    def test_prefix(self) -> None:
        assert score_setting("sou", _panel("Sound")) == 75

    def test_substring(self) -> None:
        assert score_setting("etoo", _panel("Bluetooth")) == 55

    def test_keyword_prefix(self) -> None:
        assert score_setting("wallp", _panel("Background")) == 45

    def test_keyword_substring(self) -> None:
        assert score_setting("paper", _panel("Background")) == 25

    def test_no_match(self) -> None:
        assert score_setting("firefox", _panel("Sound")) == 0


class TestScoreDocumentName:
    """Tests for document name scoring."""

    @pytest.mark.parametrize(
        "query,name,expected",
        [
            ("report", "report.pdf", 90),
            ("rep", "report.pdf", 70),
            ("port", "report.pdf", 50),
            ("pdf", "report.pdf", 30),
            ("report", "Quarterly Report.docx", 50),
            ("budget", "notes.txt", 0),
        ],
    )
    def test_tiers(self, query: str, name: str, expected: float) -> None:
        assert score_document_name(query, name) == expected

    def test_only_last_extension_stripped(self) -> None:
        assert score_document_name("archive.tar", "archive.tar.csv") == 90

    def test_empty_query(self) -> None:
        assert score_document_name("", "report.pdf") == 0
