"""Query controller: debouncing, generations and result display.

The controller is the single entry point used by a launcher UI. It owns
the dialog state (overview or searching), the per-query generation token
and both deferred icon queues. All work runs on one asyncio event loop;
asynchronous continuations check the generation token before touching
shared state, so results of a superseded query are never displayed.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from itertools import count
from typing import Any

from launch_search.catalog.base import AppInfo
from launch_search.config.schema import Category
from launch_search.engine.context import SearchContext
from launch_search.engine.deferred import DeferredResourceLoader
from launch_search.exceptions import ActivationError, CatalogError, InvalidArgumentError
from launch_search.search.aggregator import ResultAggregator
from launch_search.search.documents import DocumentSearch, DocumentSearchCoordinator
from launch_search.search.results import (
    AppResult,
    DocumentResult,
    ResultsView,
    ScoredResult,
    SettingResult,
)
from launch_search.search.scoring import score_app, score_setting
from launch_search.search.settings_panels import SETTINGS_PANELS, QuickLink, resolve_quick_links
from launch_search.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)

ResultsListener = Callable[[ResultsView], None]

_DOCUMENT_CATEGORIES = frozenset({Category.ALL, Category.DOCUMENTS, Category.FOLDERS})


class ViewState(str, Enum):
    """User-visible dialog state."""

    OVERVIEW = "overview"
    SEARCHING = "searching"


class DisplayRow:
    """A displayed row whose icon is filled in by a deferred loader."""

    def __init__(self, item: Any) -> None:
        self.item = item
        self.icon: str | None = None

    def __repr__(self) -> str:
        return f"DisplayRow({self.item!r}, icon={self.icon!r})"


@dataclass(frozen=True)
class OverviewModel:
    """Content shown while no query is active."""

    top_apps: tuple[AppInfo, ...] = ()
    quick_links: tuple[QuickLink, ...] = ()


def _assign_icon(row: DisplayRow, icon: str) -> None:
    row.icon = icon


class QueryController:
    """Turns keystrokes into ranked, incrementally updated results.

    Example:
        controller = QueryController(context)
        controller.subscribe(render)
        controller.open()
        controller.set_query("fire")
        await controller.wait_idle()
    """

    def __init__(self, context: SearchContext) -> None:
        self.context = context
        config = context.config

        self.state = ViewState.OVERVIEW
        self.category = Category.ALL
        self.query = ""
        self.visible = False
        self.view: ResultsView | None = None
        self.result_rows: list[DisplayRow] = []
        self.overview_rows: list[DisplayRow] = []

        self.results_loader = DeferredResourceLoader(
            _assign_icon, config.search.result_icon_batch, name="results"
        )
        self.overview_loader = DeferredResourceLoader(
            _assign_icon, config.search.overview_icon_batch, name="overview"
        )
        self.overview_loader.pause()

        self._aggregator = ResultAggregator(self._on_display)
        self._listeners: dict[int, ResultsListener] = {}
        self._listener_ids = count(1)

        self._debounce_task: asyncio.Task | None = None
        self._search_token = 0
        self._search_query = ""
        self._app_results: list[ScoredResult] = []
        self._settings_results: list[ScoredResult] = []
        self._document_search: DocumentSearch | None = None

        self._overview = OverviewModel()
        self._overview_dirty = True
        self._catalog_handler = context.catalog.connect_changed(self._on_catalog_changed)

    # Listeners

    def subscribe(self, listener: ResultsListener) -> int:
        """Register a callback for every display pass.

        Returns:
            Listener id for :meth:`unsubscribe`.
        """
        listener_id = next(self._listener_ids)
        self._listeners[listener_id] = listener
        return listener_id

    def unsubscribe(self, listener_id: int) -> None:
        self._listeners.pop(listener_id, None)

    def _notify(self, view: ResultsView) -> None:
        for listener in list(self._listeners.values()):
            try:
                listener(view)
            except Exception:
                logger.warning("Results listener failed", exc_info=True)

    # Query handling

    def set_query(self, text: str) -> None:
        """Handle a change of the search text.

        Switches to the searching state immediately and schedules the
        scoring pass after the debounce delay. Must be called from a
        running event loop when ``text`` is non-empty.
        """
        text = text.strip()
        self.query = text
        self._cancel_debounce()
        token = self.context.generation.advance()
        self.results_loader.cancel()

        if not text:
            self._show_overview()
            return

        if self.state is not ViewState.SEARCHING:
            self.state = ViewState.SEARCHING
            self.overview_loader.pause()

        self._debounce_task = asyncio.get_running_loop().create_task(
            self._debounced_search(text.lower(), token)
        )

    async def _debounced_search(self, query: str, token: int) -> None:
        await asyncio.sleep(self.context.config.search.debounce_ms / 1000)
        self._debounce_task = None
        if not self.context.generation.is_current(token):
            return
        self.perform_search(query, token)

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None:
            self._debounce_task.cancel()
            self._debounce_task = None

    def perform_search(self, query: str, token: int | None = None) -> ResultsView:
        """Run a scoring pass now, then start document search if applicable.

        Args:
            query: Normalized query.
            token: Generation token of the query; defaults to the current one.

        Returns:
            The first display pass (applications and settings).
        """
        context = self.context
        config = context.config
        token = context.generation.current if token is None else token
        started = time.monotonic()

        if context.corpus.is_empty():
            context.corpus.rebuild(context.catalog)

        apps: list[ScoredResult] = []
        if config.categories.apps:
            synonym_matches = context.synonyms.matches(query)
            for entry in context.corpus.entries:
                try:
                    score = score_app(query, entry, synonym_matches, context.synonyms, context.learning)
                except Exception:
                    logger.debug("Skipping corpus entry %r", entry.app_id, exc_info=True)
                    continue
                if score > 0:
                    apps.append(
                        AppResult(
                            name=entry.name,
                            description=entry.description,
                            icon=entry.icon,
                            score=score,
                            app_id=entry.app_id,
                        )
                    )

        settings: list[ScoredResult] = []
        if config.search.settings_panels:
            for panel in SETTINGS_PANELS:
                score = score_setting(query, panel)
                if score > 0:
                    settings.append(
                        SettingResult(
                            name=panel.name,
                            description="System Settings",
                            icon=panel.icon,
                            score=score,
                            panel=panel.panel,
                        )
                    )

        self._search_token = token
        self._search_query = query
        self._app_results = apps
        self._settings_results = settings
        self._document_search = None

        documents = (
            config.documents.enabled
            and self.category in _DOCUMENT_CATEGORIES
            and len(query) >= config.documents.min_query_length
        )
        view = self._redisplay(loading_more=documents)

        log_with_context(
            logger,
            logging.DEBUG,
            "Scoring pass complete",
            query=query,
            generation=token,
            apps=len(apps),
            settings=len(settings),
            elapsed_ms=round((time.monotonic() - started) * 1000, 2),
        )

        if documents:
            self._document_search = self._make_coordinator().start(
                query,
                token,
                self._on_documents_updated,
                self._on_documents_finished,
                on_settled=self._on_documents_settled,
            )
        return view

    def _make_coordinator(self) -> DocumentSearchCoordinator:
        docs = self.context.config.documents
        return DocumentSearchCoordinator(
            self.context.filesystem,
            self.context.generation,
            docs.folders,
            content_search=docs.content_search,
            max_content_bytes=docs.max_content_bytes,
            per_directory_cap=docs.per_directory_cap,
            batch_size=docs.batch_size,
            min_query_length=docs.min_query_length,
        )

    def _is_live(self, search: DocumentSearch) -> bool:
        return search is self._document_search and self.context.generation.is_current(search.token)

    def _on_documents_updated(self, search: DocumentSearch) -> None:
        if not self._is_live(search):
            return
        self._redisplay(loading_more=search.in_flight)

    def _on_documents_finished(self, search: DocumentSearch) -> None:
        if not self._is_live(search):
            return
        self._redisplay(loading_more=search.in_flight)

    def _on_documents_settled(self, search: DocumentSearch) -> None:
        if not self._is_live(search):
            return
        self._redisplay(loading_more=False)

    def _redisplay(self, loading_more: bool) -> ResultsView:
        documents = self._document_search.results if self._document_search else []
        return self._aggregator.collect_and_display(
            self._app_results,
            self._settings_results,
            list(documents),
            self.context.config.search.max_results,
            query=self._search_query,
            category=self.category,
            loading_more=loading_more,
            generation=self._search_token,
        )

    def _on_display(self, view: ResultsView) -> None:
        self.view = view
        self.result_rows = [DisplayRow(result) for result in view.rows]
        self.results_loader.replace(
            (row, row.item.icon) for row in self.result_rows if row.item.icon
        )
        self._notify(view)

    # Category

    def set_category(self, category: Category | str) -> None:
        """Change the category filter and re-run an active query.

        Disabled categories are ignored.

        Raises:
            InvalidArgumentError: If ``category`` is not a known filter.
        """
        try:
            category = Category(category)
        except ValueError as e:
            raise InvalidArgumentError(
                f"Unknown category: {category}",
                user_message=f"Unknown category '{category}'",
            ) from e

        if not self.context.config.category_enabled(category):
            logger.info("Ignoring disabled category %s", category.value)
            return

        self.category = category
        if self.state is ViewState.SEARCHING and self.query:
            self._cancel_debounce()
            token = self.context.generation.advance()
            self.results_loader.cancel()
            self.perform_search(self.query.lower(), token)

    # Activation

    def activate_selected(self, index: int) -> ScoredResult | None:
        """Activate the result at ``index`` in display order and close.

        Returns:
            The activated result, or None if the index is out of range.
        """
        rows = self.view.rows if self.view is not None else ()
        if not 0 <= index < len(rows):
            return None

        result = rows[index]
        self.activate(result)
        return result

    def activate(self, result: ScoredResult) -> None:
        """Activate one result; application launches are learned."""
        sink = self.context.activation
        try:
            match result:
                case AppResult(app_id=app_id):
                    sink.activate_app(app_id)
                    self.context.learning.record(self.query, result.result_id)
                case SettingResult(panel=panel):
                    sink.open_settings_panel(panel)
                case DocumentResult(path=path):
                    sink.open_file(path)
        except ActivationError as e:
            logger.warning("Activation of %r failed: %s", result.name, e)
        self.close()

    def activate_top_app(self, index: int) -> AppInfo | None:
        """Activate an overview top app."""
        apps = self.overview.top_apps
        if not 0 <= index < len(apps):
            return None
        app = apps[index]
        try:
            self.context.activation.activate_app(app.app_id)
        except ActivationError as e:
            logger.warning("Activation of %r failed: %s", app.name, e)
        self.close()
        return app

    def open_quick_link(self, index: int) -> QuickLink | None:
        """Open an overview quick link."""
        links = self.overview.quick_links
        if not 0 <= index < len(links):
            return None
        link = links[index]
        try:
            self.context.activation.open_settings_panel(link.panel)
        except ActivationError as e:
            logger.warning("Opening settings panel %s failed: %s", link.panel, e)
        self.close()
        return link

    # Overview

    @property
    def overview(self) -> OverviewModel:
        """Current overview content, rebuilt if the catalog changed."""
        if self._overview_dirty:
            self._rebuild_overview()
        return self._overview

    def _rebuild_overview(self) -> None:
        config = self.context.config.overview
        catalog = self.context.catalog

        top_apps: list[AppInfo] = []
        if config.show_top_apps and config.top_apps_count > 0:
            limit = config.top_apps_count
            try:
                top_apps = [app for app in catalog.most_used() if app.name][:limit]
                for app_id in config.favorite_apps:
                    if len(top_apps) >= limit:
                        break
                    app = catalog.lookup(app_id)
                    if app is not None and app not in top_apps:
                        top_apps.append(app)
            except CatalogError as e:
                logger.warning("Cannot build top apps: %s", e)

        links = resolve_quick_links(config.quick_links) if config.show_quick_links else []

        self._overview = OverviewModel(top_apps=tuple(top_apps), quick_links=tuple(links))
        self._overview_dirty = False

        self.overview_rows = [DisplayRow(app) for app in self._overview.top_apps]
        self.overview_loader.replace(
            (row, row.item.icon) for row in self.overview_rows if row.item.icon
        )

    def _show_overview(self) -> None:
        self.state = ViewState.OVERVIEW
        self.view = None
        self.result_rows = []
        self._app_results = []
        self._settings_results = []
        self._document_search = None

        if self._overview_dirty:
            self._rebuild_overview()
        if self.visible:
            self.overview_loader.resume()

    def _on_catalog_changed(self) -> None:
        self.context.corpus.rebuild(self.context.catalog)
        self._overview_dirty = True
        logger.info("Installed applications changed; corpus holds %d apps", len(self.context.corpus))

    # Visibility

    def open(self) -> None:
        """Show the dialog in the overview state with the "all" filter."""
        if self.visible:
            return
        self.visible = True
        self.category = Category.ALL
        self.set_query("")

    def close(self) -> None:
        """Hide the dialog and abandon all in-flight work."""
        if not self.visible:
            return
        self.visible = False
        self._cancel_debounce()
        self.context.generation.advance()
        self.results_loader.cancel()
        self.overview_loader.pause()

    def shutdown(self) -> None:
        """Close and detach from the catalog."""
        self.close()
        self.context.catalog.disconnect(self._catalog_handler)

    async def wait_idle(self) -> None:
        """Wait for the pending debounce, document search and icon loads."""
        while True:
            if self._debounce_task is not None:
                try:
                    await self._debounce_task
                except asyncio.CancelledError:
                    if asyncio.current_task().cancelling():
                        raise
                continue
            if self._document_search is not None and self._document_search.in_flight:
                await self._document_search.wait()
                continue
            break
        await self.results_loader.wait_idle()
        await self.overview_loader.wait_idle()
