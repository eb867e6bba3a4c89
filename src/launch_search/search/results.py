"""Scored result types and the displayed result view."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar

from launch_search.config.schema import Category


class ResultKind(str, Enum):
    """Kind tag of a scored result."""

    APP = "app"
    SETTING = "setting"
    DOCUMENT = "document"


@dataclass(frozen=True, kw_only=True)
class ScoredResult(ABC):
    """Common fields of every search result.

    A score of 0 means "not a match"; such results are never displayed.
    """

    kind: ClassVar[ResultKind]

    name: str
    description: str = ""
    icon: str | None = None
    score: float = 0.0

    @property
    @abstractmethod
    def result_id(self) -> str:
        """Identifier used for learning and activation."""


@dataclass(frozen=True, kw_only=True)
class AppResult(ScoredResult):
    kind: ClassVar[ResultKind] = ResultKind.APP

    app_id: str

    @property
    def result_id(self) -> str:
        return self.app_id


@dataclass(frozen=True, kw_only=True)
class SettingResult(ScoredResult):
    kind: ClassVar[ResultKind] = ResultKind.SETTING

    panel: str

    @property
    def result_id(self) -> str:
        return self.panel


@dataclass(frozen=True, kw_only=True)
class DocumentResult(ScoredResult):
    kind: ClassVar[ResultKind] = ResultKind.DOCUMENT

    path: Path
    folder: str = ""

    @property
    def result_id(self) -> str:
        return str(self.path)


GROUP_TITLES: dict[ResultKind, str] = {
    ResultKind.APP: "Applications",
    ResultKind.SETTING: "Settings",
    ResultKind.DOCUMENT: "Documents",
}


@dataclass(frozen=True)
class ResultGroup:
    """Results of one kind shown under a common header."""

    title: str
    kind: ResultKind
    results: tuple[ScoredResult, ...]


@dataclass(frozen=True)
class ResultsView:
    """One display pass of ranked results.

    Attributes:
        query: Normalized query the results belong to.
        results: Ranked, filtered and truncated results.
        best_match: Highest-ranked result when grouping applies.
        groups: Remaining results grouped by kind, or empty for a flat list.
        loading_more: True while document search is still running.
        generation: Generation token of the query.
        category: Active category filter.
    """

    query: str
    results: tuple[ScoredResult, ...] = ()
    best_match: ScoredResult | None = None
    groups: tuple[ResultGroup, ...] = field(default_factory=tuple)
    loading_more: bool = False
    generation: int = 0
    category: Category = Category.ALL

    @property
    def rows(self) -> tuple[ScoredResult, ...]:
        """Results in on-screen order, as addressed by a selection index."""
        if self.best_match is None:
            return self.results

        rows: list[ScoredResult] = [self.best_match]
        for group in self.groups:
            rows.extend(group.results)
        return tuple(rows)

    @property
    def is_empty(self) -> bool:
        return not self.results
