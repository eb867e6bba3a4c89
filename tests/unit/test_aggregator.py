"""Tests for result merging, ranking and grouping."""

from pathlib import Path

import pytest

from launch_search.config.schema import Category
from launch_search.search.aggregator import ResultAggregator, collect, group_for_display
from launch_search.search.results import (
    AppResult,
    DocumentResult,
    ResultKind,
    ResultsView,
    ScoredResult,
    SettingResult,
)


def app(name: str, score: float) -> AppResult:
    return AppResult(name=name, score=score, app_id=f"{name.lower()}.desktop")


def setting(name: str, score: float) -> SettingResult:
    return SettingResult(name=name, score=score, panel=name.lower())


def document(name: str, score: float) -> DocumentResult:
    return DocumentResult(name=name, score=score, path=Path("/docs") / name)


class TestCollect:
    """Tests for collect."""

    def test_sorted_by_score_then_name(self) -> None:
        results = collect(
            [app("Beta", 85), app("Alpha", 85)],
            [setting("Sound", 95)],
            [document("notes.txt", 25)],
            max_results=10,
        )

        assert [r.name for r in results] == ["Sound", "Alpha", "Beta", "notes.txt"]

    def test_zero_scores_dropped(self) -> None:
        results = collect([app("Alpha", 0), app("Beta", 10)], [], [], max_results=10)
        assert [r.name for r in results] == ["Beta"]

    def test_truncated(self) -> None:
        apps = [app(f"App{i}", 50 + i) for i in range(15)]
        results = collect(apps, [], [], max_results=10)

        assert len(results) == 10
        assert results[0].name == "App14"

    def test_truncation_after_category_filter(self) -> None:
        """Test a filter does not lose results hidden by others."""
        apps = [app(f"App{i}", 90) for i in range(3)]
        docs = [document(f"doc{i}.txt", 30) for i in range(3)]

        results = collect(apps, [], docs, max_results=2, category=Category.DOCUMENTS)

        assert [r.name for r in results] == ["doc0.txt", "doc1.txt"]

    def test_category_apps(self) -> None:
        results = collect(
            [app("Alpha", 50)], [setting("Sound", 95)], [document("a.txt", 90)],
            max_results=10, category=Category.APPS,
        )
        assert [r.kind for r in results] == [ResultKind.APP]

    def test_category_settings(self) -> None:
        results = collect(
            [app("Alpha", 50)], [setting("Sound", 95)], [], max_results=10, category=Category.SETTINGS
        )
        assert [r.name for r in results] == ["Sound"]

    def test_category_folders_shows_documents(self) -> None:
        results = collect(
            [app("Alpha", 50)], [], [document("a.txt", 90)], max_results=10, category=Category.FOLDERS
        )
        assert [r.name for r in results] == ["a.txt"]

    def test_empty(self) -> None:
        assert collect([], [], [], max_results=10) == []


class TestGroupForDisplay:
    """Tests for group_for_display."""

    def test_groups_for_all(self) -> None:
        results = [
            setting("Sound", 95),
            app("Firefox", 85),
            document("report.pdf", 70),
            app("Files", 65),
        ]

        best, groups = group_for_display(results, Category.ALL)

        assert best is not None and best.name == "Sound"
        assert [g.title for g in groups] == ["Applications", "Documents"]
        assert [r.name for r in groups[0].results] == ["Firefox", "Files"]

    def test_group_order_fixed(self) -> None:
        results = [app("A", 99), document("d.txt", 90), setting("Sound", 80), app("B", 70)]

        _, groups = group_for_display(results, Category.ALL)

        assert [g.kind for g in groups] == [ResultKind.APP, ResultKind.SETTING, ResultKind.DOCUMENT]

    def test_flat_for_other_categories(self) -> None:
        assert group_for_display([app("A", 99)], Category.APPS) == (None, ())

    def test_empty(self) -> None:
        assert group_for_display([], Category.ALL) == (None, ())


class TestResultsView:
    """Tests for ResultsView."""

    def test_rows_in_display_order(self) -> None:
        results = [app("A", 99), document("d.txt", 90), setting("Sound", 80), app("B", 70)]
        best, groups = group_for_display(results, Category.ALL)
        view = ResultsView(query="q", results=tuple(results), best_match=best, groups=groups)

        assert [r.name for r in view.rows] == ["A", "B", "Sound", "d.txt"]

    def test_rows_flat(self) -> None:
        results = (app("A", 99), app("B", 70))
        view = ResultsView(query="q", results=results, category=Category.APPS)
        assert view.rows == results

    def test_result_ids(self) -> None:
        assert app("Firefox", 1).result_id == "firefox.desktop"
        assert setting("Sound", 1).result_id == "sound"
        assert document("a.txt", 1).result_id == str(Path("/docs/a.txt"))

    def test_base_result_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            ScoredResult(name="bare", score=1)


class TestResultAggregator:
    """Tests for ResultAggregator."""

    def test_displays_view(self) -> None:
        views: list[ResultsView] = []
        aggregator = ResultAggregator(views.append)

        view = aggregator.collect_and_display(
            [app("Firefox", 85)],
            [],
            [],
            10,
            query="fire",
            loading_more=True,
            generation=4,
        )

        assert views == [view]
        assert aggregator.last_view is view
        assert view.query == "fire"
        assert view.loading_more is True
        assert view.generation == 4
        assert view.best_match is not None and view.best_match.name == "Firefox"

    def test_each_pass_recomputed(self) -> None:
        """Test a later pass does not keep results from an earlier one."""
        aggregator = ResultAggregator(lambda view: None)
        aggregator.collect_and_display([app("Firefox", 85)], [], [], 10)

        view = aggregator.collect_and_display([], [], [document("fire.txt", 70)], 10)

        assert [r.name for r in view.results] == ["fire.txt"]
