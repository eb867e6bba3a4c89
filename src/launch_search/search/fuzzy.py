"""Fuzzy subsequence matching.

A query matches a text when every query character appears in the text in
order, not necessarily contiguously. Matches are rated by how much of the
text the query covers and by the longest contiguous run of matched
characters, so dense front-loaded matches outrank scattered ones.
"""

MAX_FUZZY_SCORE = 30.0

LENGTH_WEIGHT = 0.3
CONSECUTIVE_WEIGHT = 0.7


def fuzzy_score(query: str, text: str) -> float:
    """Score a greedy in-order subsequence match of ``query`` in ``text``.

    Both arguments are expected to be lowercase already.

    Args:
        query: Search text.
        text: Candidate text.

    Returns:
        0 if some query character is not found in order, otherwise a
        value in (0, 30].
    """
    if not query or not text:
        return 0.0

    query_index = 0
    run = 0
    longest_run = 0

    for char in text:
        if query_index == len(query):
            break
        if char == query[query_index]:
            query_index += 1
            run += 1
            longest_run = max(longest_run, run)
        else:
            run = 0

    if query_index < len(query):
        return 0.0

    length_ratio = len(query) / len(text)
    consecutive_ratio = longest_run / len(query)
    return (LENGTH_WEIGHT * length_ratio + CONSECUTIVE_WEIGHT * consecutive_ratio) * MAX_FUZZY_SCORE
