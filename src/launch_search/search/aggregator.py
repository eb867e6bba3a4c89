"""Merging, ranking and grouping of result streams."""

from collections.abc import Callable, Iterable

from launch_search.config.schema import Category
from launch_search.search.results import (
    GROUP_TITLES,
    ResultGroup,
    ResultKind,
    ResultsView,
    ScoredResult,
)

DisplaySink = Callable[[ResultsView], None]

_CATEGORY_KINDS: dict[Category, ResultKind] = {
    Category.APPS: ResultKind.APP,
    Category.SETTINGS: ResultKind.SETTING,
    Category.DOCUMENTS: ResultKind.DOCUMENT,
    Category.FOLDERS: ResultKind.DOCUMENT,
}


def rank_key(result: ScoredResult) -> tuple[float, str]:
    """Sort key: score descending, then name ascending (ordinal)."""
    return (-result.score, result.name)


def collect(
    app_results: Iterable[ScoredResult],
    settings_results: Iterable[ScoredResult],
    document_results: Iterable[ScoredResult],
    max_results: int,
    category: Category = Category.ALL,
) -> list[ScoredResult]:
    """Merge result streams into the ranked list to display.

    Args:
        app_results: Scored applications.
        settings_results: Scored settings panels.
        document_results: Scored documents found so far.
        max_results: Maximum number of results returned.
        category: Active category filter.

    Returns:
        Results with a positive score, sorted by rank, restricted to the
        category and truncated to ``max_results``.
    """
    merged = [
        r
        for r in (*app_results, *settings_results, *document_results)
        if r.score > 0
    ]
    merged.sort(key=rank_key)

    kind = _CATEGORY_KINDS.get(category)
    if kind is not None:
        merged = [r for r in merged if r.kind is kind]

    return merged[: max(max_results, 0)]


def group_for_display(
    results: list[ScoredResult], category: Category
) -> tuple[ScoredResult | None, tuple[ResultGroup, ...]]:
    """Split ranked results into a best match and per-kind groups.

    Only the "all" filter is grouped; other filters display a flat list.

    Returns:
        ``(best_match, groups)``; ``(None, ())`` for a flat list.
    """
    if category is not Category.ALL or not results:
        return None, ()

    best, rest = results[0], results[1:]
    groups = []
    for kind, title in GROUP_TITLES.items():
        members = tuple(r for r in rest if r.kind is kind)
        if members:
            groups.append(ResultGroup(title=title, kind=kind, results=members))
    return best, tuple(groups)


class ResultAggregator:
    """Builds display passes and hands them to a sink.

    Each pass is computed from scratch; nothing carries over from the
    previous pass.
    """

    def __init__(self, sink: DisplaySink) -> None:
        self._sink = sink
        self.last_view: ResultsView | None = None

    def collect_and_display(
        self,
        app_results: Iterable[ScoredResult],
        settings_results: Iterable[ScoredResult],
        document_results: Iterable[ScoredResult],
        max_results: int,
        *,
        query: str = "",
        category: Category = Category.ALL,
        loading_more: bool = False,
        generation: int = 0,
    ) -> ResultsView:
        results = collect(app_results, settings_results, document_results, max_results, category)
        best, groups = group_for_display(results, category)
        view = ResultsView(
            query=query,
            results=tuple(results),
            best_match=best,
            groups=groups,
            loading_more=loading_more,
            generation=generation,
            category=category,
        )
        self.last_view = view
        self._sink(view)
        return view
