"""Search core: corpus, matching, scoring and result aggregation.

Usage:
    from launch_search.search import CorpusCache, SynonymIndex, score_app

    corpus = CorpusCache()
    corpus.rebuild(catalog)
    synonyms = SynonymIndex()
    matches = synonyms.matches("browser")
    scores = [score_app("browser", entry, matches, synonyms) for entry in corpus.entries]
"""

from launch_search.search.aggregator import ResultAggregator, collect, group_for_display
from launch_search.search.corpus import CorpusCache, CorpusEntry
from launch_search.search.documents import DocumentSearch, DocumentSearchCoordinator
from launch_search.search.filesystem import EntryInfo, FileSystem, LocalFileSystem
from launch_search.search.fuzzy import fuzzy_score
from launch_search.search.generation import Generation
from launch_search.search.learning import LearningStore
from launch_search.search.results import (
    AppResult,
    DocumentResult,
    ResultGroup,
    ResultKind,
    ResultsView,
    ScoredResult,
    SettingResult,
)
from launch_search.search.scoring import score_app, score_document_name, score_setting
from launch_search.search.settings_panels import QUICK_LINKS, SETTINGS_PANELS, SettingsEntry
from launch_search.search.synonyms import DEFAULT_SEARCH_SYNONYMS, SynonymIndex

__all__ = [
    "AppResult",
    "CorpusCache",
    "CorpusEntry",
    "DEFAULT_SEARCH_SYNONYMS",
    "DocumentResult",
    "DocumentSearch",
    "DocumentSearchCoordinator",
    "EntryInfo",
    "FileSystem",
    "Generation",
    "LearningStore",
    "LocalFileSystem",
    "QUICK_LINKS",
    "ResultAggregator",
    "ResultGroup",
    "ResultKind",
    "ResultsView",
    "SETTINGS_PANELS",
    "ScoredResult",
    "SettingResult",
    "SettingsEntry",
    "SynonymIndex",
    "collect",
    "fuzzy_score",
    "group_for_display",
    "score_app",
    "score_document_name",
    "score_setting",
]
