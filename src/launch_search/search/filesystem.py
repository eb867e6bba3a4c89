"""Asynchronous directory enumeration and bounded file reads."""

import asyncio
import os
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass
from itertools import islice
from pathlib import Path

from launch_search.exceptions import ContentReadError, DirectoryScanError
from launch_search.utils.files import guess_content_type, icon_for_content_type


@dataclass(frozen=True)
class EntryInfo:
    """Metadata of one directory child.

    Attributes:
        name: File name.
        is_dir: Whether the entry is a directory.
        content_type: Guessed MIME type, if known.
        icon: Theme icon name derived from the content type.
    """

    name: str
    is_dir: bool = False
    content_type: str | None = None
    icon: str | None = None

    @classmethod
    def for_file(cls, name: str) -> "EntryInfo":
        content_type = guess_content_type(name)
        return cls(
            name=name,
            is_dir=False,
            content_type=content_type,
            icon=icon_for_content_type(content_type),
        )


class FileSystem(ABC):
    """Abstract base class for the file access used by document search.

    Enumeration is non-recursive and yields children in batches so the
    caller can stop early; abandoning the iterator cancels the listing.
    """

    @abstractmethod
    def enumerate_children(self, path: Path, batch_size: int) -> AsyncIterator[list[EntryInfo]]:
        """Yield the immediate children of ``path`` in batches.

        Raises:
            DirectoryScanError: If the directory cannot be listed.
        """
        pass

    @abstractmethod
    async def file_size(self, path: Path) -> int:
        """Size of a file in bytes.

        Raises:
            ContentReadError: If the file cannot be inspected.
        """
        pass

    @abstractmethod
    async def read_bytes(self, path: Path) -> bytes:
        """Read a whole file.

        Raises:
            ContentReadError: If the file cannot be read.
        """
        pass


def _entry_info(entry: os.DirEntry) -> EntryInfo:
    try:
        is_dir = entry.is_dir()
    except OSError:
        is_dir = False
    if is_dir:
        return EntryInfo(name=entry.name, is_dir=True, content_type="inode/directory", icon="folder")
    return EntryInfo.for_file(entry.name)


def _next_batch(iterator, batch_size: int) -> list[EntryInfo]:
    return [_entry_info(entry) for entry in islice(iterator, batch_size)]


class LocalFileSystem(FileSystem):
    """Local disk access; blocking calls run in worker threads."""

    async def enumerate_children(
        self, path: Path, batch_size: int
    ) -> AsyncIterator[list[EntryInfo]]:
        try:
            iterator = await asyncio.to_thread(os.scandir, path)
        except OSError as e:
            raise DirectoryScanError(f"Cannot list {path}: {e}") from e

        try:
            while True:
                try:
                    batch = await asyncio.to_thread(_next_batch, iterator, batch_size)
                except OSError as e:
                    raise DirectoryScanError(f"Error listing {path}: {e}") from e
                if not batch:
                    return
                yield batch
        finally:
            iterator.close()

    async def file_size(self, path: Path) -> int:
        try:
            stat = await asyncio.to_thread(os.stat, path)
        except OSError as e:
            raise ContentReadError(f"Cannot stat {path}: {e}") from e
        return stat.st_size

    async def read_bytes(self, path: Path) -> bytes:
        try:
            return await asyncio.to_thread(Path(path).read_bytes)
        except OSError as e:
            raise ContentReadError(f"Cannot read {path}: {e}") from e
