"""Tiered scoring of applications, settings panels and documents.

Every scorer is a pure function of the query and one candidate. Tiers are
tried in order and the first positive tier wins; 0 means no match.
Queries must already be normalized (trimmed, lowercase).
"""

from collections.abc import Iterable

from launch_search.search.corpus import CorpusEntry
from launch_search.search.fuzzy import fuzzy_score
from launch_search.search.learning import LearningStore
from launch_search.search.settings_panels import SettingsEntry
from launch_search.search.synonyms import SynonymIndex
from launch_search.utils.files import strip_extension

# Applications
APP_EXACT = 100.0
APP_PREFIX = 85.0
APP_WORD_PREFIX = 75.0
APP_SUBSTRING = 65.0
APP_SYNONYM = 60.0
APP_ID_PART_EXACT = 70.0
APP_ID_PART_PREFIX = 55.0
APP_ID_PART_SUBSTRING = 45.0
APP_ID_SUBSTRING = 50.0
APP_FUZZY_THRESHOLD = 10.0
APP_FUZZY_CAP = 45.0
APP_DESCRIPTION = 25.0
APP_REVERSE_SYNONYM = 55.0

# Settings panels
SETTING_EXACT = 95.0
SETTING_PREFIX = 75.0
SETTING_SUBSTRING = 55.0
SETTING_KEYWORD_PREFIX = 45.0
SETTING_KEYWORD_SUBSTRING = 25.0

# Documents
DOCUMENT_EXACT = 90.0
DOCUMENT_PREFIX = 70.0
DOCUMENT_STEM_SUBSTRING = 50.0
DOCUMENT_NAME_SUBSTRING = 30.0
DOCUMENT_CONTENT = 25.0


def word_starts_with(query: str, words: Iterable[str]) -> bool:
    """Check whether any word begins with ``query``."""
    return any(word.startswith(query) for word in words)


def _name_score(query: str, entry: CorpusEntry, synonym_matches: frozenset[str]) -> float:
    name = entry.name_lower
    if name == query:
        return APP_EXACT
    if name.startswith(query):
        return APP_PREFIX
    if word_starts_with(query, entry.words):
        return APP_WORD_PREFIX
    if query in name:
        return APP_SUBSTRING
    for synonym in synonym_matches:
        if synonym in name or synonym in entry.id_lower:
            return APP_SYNONYM
    return 0.0


def _id_part_score(query: str, entry: CorpusEntry) -> float:
    # Only the first part that matches at any tier counts.
    for part in entry.id_parts:
        if part == query:
            return APP_ID_PART_EXACT
        if part.startswith(query):
            return APP_ID_PART_PREFIX
        if query in part:
            return APP_ID_PART_SUBSTRING
    return 0.0


def score_app(
    query: str,
    entry: CorpusEntry,
    synonym_matches: frozenset[str] = frozenset(),
    synonyms: SynonymIndex | None = None,
    learning: LearningStore | None = None,
) -> float:
    """Score one application against a query.

    Args:
        query: Normalized query.
        entry: Corpus entry to score.
        synonym_matches: Application names related to the query through
            the synonym table (see :meth:`SynonymIndex.matches`).
        synonyms: Index used for the reverse-synonym tier.
        learning: Usage table providing the learned boost.

    Returns:
        Score, 0 if the application does not match.
    """
    if not query:
        return 0.0

    score = _name_score(query, entry, synonym_matches)

    if score == 0:
        score = _id_part_score(query, entry)

    if score == 0 and query in entry.id_lower:
        score = APP_ID_SUBSTRING

    if score == 0:
        fuzzy = fuzzy_score(query, entry.name_lower)
        if fuzzy > APP_FUZZY_THRESHOLD:
            score = min(APP_FUZZY_CAP, fuzzy)

    if score == 0 and query in entry.description_lower:
        score = APP_DESCRIPTION

    if score == 0 and synonyms is not None:
        for term in synonyms.terms_for(entry.name_lower):
            if query in term or term in query:
                score = APP_REVERSE_SYNONYM
                break

    if score > 0 and learning is not None:
        score += learning.score(query, entry.app_id)

    return score


def score_setting(query: str, setting: SettingsEntry) -> float:
    """Score one settings panel against a query. No learned boost applies."""
    if not query:
        return 0.0

    name = setting.name.lower()
    if name == query:
        return SETTING_EXACT
    if name.startswith(query):
        return SETTING_PREFIX
    if query in name:
        return SETTING_SUBSTRING
    if any(keyword.startswith(query) for keyword in setting.keywords):
        return SETTING_KEYWORD_PREFIX
    if any(query in keyword for keyword in setting.keywords):
        return SETTING_KEYWORD_SUBSTRING
    return 0.0


def score_document_name(query: str, file_name: str) -> float:
    """Score a document by its file name.

    Args:
        query: Normalized query.
        file_name: File name including extension.

    Returns:
        90 for an exact stem, 70 for a stem prefix, 50 for a stem
        substring, 30 for a match elsewhere in the name, otherwise 0.
    """
    if not query:
        return 0.0

    name = file_name.lower()
    stem = strip_extension(name)
    if stem == query:
        return DOCUMENT_EXACT
    if stem.startswith(query):
        return DOCUMENT_PREFIX
    if query in stem:
        return DOCUMENT_STEM_SUBSTRING
    if query in name:
        return DOCUMENT_NAME_SUBSTRING
    return 0.0
