"""Cancellable document search over configured folders.

Each folder is listed non-recursively in batches, all folders concurrently.
Work belonging to a superseded query generation is not aborted; its
results are discarded at every continuation by a generation check.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from contextlib import aclosing
from pathlib import Path

from launch_search.exceptions import ContentReadError, SearchError
from launch_search.search.filesystem import EntryInfo, FileSystem
from launch_search.search.generation import Generation
from launch_search.search.results import DocumentResult
from launch_search.search.scoring import DOCUMENT_CONTENT, score_document_name
from launch_search.utils.files import (
    DEFAULT_DOCUMENT_ICON,
    DOCUMENT_EXTENSIONS,
    TEXT_EXTENSIONS,
    display_folder,
    expand_folder,
    has_extension,
    is_hidden,
)
from launch_search.utils.logging import QueryLogger, get_logger

logger = get_logger(__name__)

SearchCallback = Callable[["DocumentSearch"], None]


class DocumentSearch:
    """State of one document search run.

    Attributes:
        query: Normalized query.
        token: Generation token the search was started under.
        results: Document results found so far, in arrival order.
        finished: True once every folder has been scanned.

    Content reads may still be pending after ``finished`` is set; the
    search is settled once both are done.
    """

    def __init__(self, query: str, token: int, generation: Generation) -> None:
        self.query = query
        self.token = token
        self.results: list[DocumentResult] = []
        self.finished = False
        self._generation = generation
        self._task: asyncio.Task | None = None
        self._content_tasks: set[asyncio.Task] = set()
        self._on_settled: SearchCallback | None = None
        self.log = QueryLogger(logger, query, token)

    def is_current(self) -> bool:
        return self._generation.is_current(self.token)

    @property
    def pending_reads(self) -> int:
        return len(self._content_tasks)

    @property
    def in_flight(self) -> bool:
        """True while folders are being listed or content reads are pending."""
        return not self.finished or bool(self._content_tasks)

    def _track(self, task: asyncio.Task) -> None:
        self._content_tasks.add(task)
        task.add_done_callback(self._read_done)

    def _read_done(self, task: asyncio.Task) -> None:
        self._content_tasks.discard(task)
        if self._content_tasks or not self.finished:
            return
        if self._on_settled is not None and self.is_current():
            _emit(self._on_settled, self)

    async def wait(self) -> None:
        """Wait for the scan and every content read it scheduled."""
        if self._task is not None:
            await self._task
        while self._content_tasks:
            await asyncio.gather(*list(self._content_tasks))


def _emit(callback: SearchCallback, search: DocumentSearch) -> None:
    try:
        callback(search)
    except Exception:
        search.log.warning("Document search callback failed", exc_info=True)


class DocumentSearchCoordinator:
    """Drives document searches for the query controller."""

    def __init__(
        self,
        filesystem: FileSystem,
        generation: Generation,
        folders: list[str],
        *,
        content_search: bool = False,
        max_content_bytes: int = 1024 * 1024,
        per_directory_cap: int = 5,
        batch_size: int = 50,
        min_query_length: int = 2,
        home: Path | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            filesystem: File access implementation.
            generation: Shared query generation counter.
            folders: Folders to search; a leading "~" means the home dir.
            content_search: Also match plain-text file contents.
            max_content_bytes: Larger files are never read.
            per_directory_cap: Name matches kept per folder.
            batch_size: Entries requested per listing batch.
            min_query_length: Shorter queries finish immediately.
            home: Home directory override.
        """
        self.filesystem = filesystem
        self.generation = generation
        self.folders = list(folders)
        self.content_search = content_search
        self.max_content_bytes = max_content_bytes
        self.per_directory_cap = per_directory_cap
        self.batch_size = batch_size
        self.min_query_length = min_query_length
        self.home = home

    def start(
        self,
        query: str,
        token: int,
        on_update: SearchCallback,
        on_finished: SearchCallback,
        on_settled: SearchCallback | None = None,
    ) -> DocumentSearch:
        """Begin searching for ``query`` under generation ``token``.

        Must be called from a running event loop.

        Args:
            query: Normalized query.
            token: Generation token current at call time.
            on_update: Called after each batch that added results and after
                each content match, while ``token`` is current.
            on_finished: Called once, after all folders finished, if
                ``token`` is still current.
            on_settled: Called when the last pending content read completes
                after all folders finished, if ``token`` is still current.

        Returns:
            Handle exposing the accumulating results.
        """
        search = DocumentSearch(query, token, self.generation)
        search._on_settled = on_settled
        search._task = asyncio.get_running_loop().create_task(
            self._run(search, on_update, on_finished)
        )
        return search

    async def _run(
        self,
        search: DocumentSearch,
        on_update: SearchCallback,
        on_finished: SearchCallback,
    ) -> None:
        started = time.monotonic()

        if len(search.query) >= self.min_query_length and self.folders:
            roots = [expand_folder(folder, self.home) for folder in self.folders]
            await asyncio.gather(
                *(self._scan_directory(search, root, on_update) for root in roots)
            )

        search.finished = True
        if not search.is_current():
            search.log.debug("Dropping finished document search for stale query")
            return

        search.log.log_context(
            logging.DEBUG,
            "Document search finished",
            results=len(search.results),
            pending_reads=search.pending_reads,
            elapsed_ms=round((time.monotonic() - started) * 1000, 1),
        )
        _emit(on_finished, search)

    async def _scan_directory(
        self,
        search: DocumentSearch,
        root: Path,
        on_update: SearchCallback,
    ) -> None:
        folder = display_folder(root, self.home)
        count = 0

        try:
            async with aclosing(self.filesystem.enumerate_children(root, self.batch_size)) as batches:
                async for batch in batches:
                    if not search.is_current():
                        return

                    added = False
                    for info in batch:
                        if count >= self.per_directory_cap:
                            break
                        try:
                            result = self._consider(search, root, folder, info, on_update)
                        except Exception:
                            search.log.debug("Skipping %s in %s", info.name, root, exc_info=True)
                            continue
                        if result is not None:
                            search.results.append(result)
                            count += 1
                            added = True

                    if added and search.is_current():
                        _emit(on_update, search)
                    if count >= self.per_directory_cap:
                        return
        except SearchError as e:
            search.log.debug("Skipping folder %s: %s", root, e)

    def _consider(
        self,
        search: DocumentSearch,
        root: Path,
        folder: str,
        info: EntryInfo,
        on_update: SearchCallback,
    ) -> DocumentResult | None:
        name = info.name
        if not name or is_hidden(name) or info.is_dir:
            return None
        if not has_extension(name, DOCUMENT_EXTENSIONS):
            return None

        score = score_document_name(search.query, name)
        if score > 0:
            return self._result(root / name, folder, info, score)

        if self.content_search and has_extension(name, TEXT_EXTENSIONS):
            task = asyncio.get_running_loop().create_task(
                self._content_match(search, root / name, folder, info, on_update)
            )
            search._track(task)
        return None

    @staticmethod
    def _result(path: Path, folder: str, info: EntryInfo, score: float) -> DocumentResult:
        return DocumentResult(
            name=path.name,
            description=folder,
            icon=info.icon or DEFAULT_DOCUMENT_ICON,
            score=score,
            path=path,
            folder=folder,
        )

    async def _content_match(
        self,
        search: DocumentSearch,
        path: Path,
        folder: str,
        info: EntryInfo,
        on_update: SearchCallback,
    ) -> None:
        if not await self.file_contains(path, search.query):
            return
        if not search.is_current():
            return

        search.results.append(self._result(path, folder, info, DOCUMENT_CONTENT))
        _emit(on_update, search)

    async def file_contains(self, path: Path, query: str) -> bool:
        """Check whether a file's text contains ``query``.

        Files above the size limit and unreadable files never match.
        """
        try:
            size = await self.filesystem.file_size(path)
            if size > self.max_content_bytes:
                return False
            data = await self.filesystem.read_bytes(path)
        except ContentReadError as e:
            logger.debug("Content search skipped %s: %s", path, e)
            return False

        return query in data.decode("utf-8", errors="replace").lower()
