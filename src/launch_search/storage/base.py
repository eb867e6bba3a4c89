"""Blob store protocol and in-memory implementation."""

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Abstract base class for opaque string-blob persistence.

    Values are stored and returned verbatim; callers own serialization.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Retrieve a stored blob.

        Args:
            key: The key to look up.

        Returns:
            The stored value, or None if the key is absent.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a blob, replacing any previous value.

        Args:
            key: The key to store under.
            value: The serialized value.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a blob.

        Returns:
            True if the key existed.
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys in sorted order."""
        pass

    def close(self) -> None:
        """Release any underlying resources."""
        return None


class MemoryBlobStore(BlobStore):
    """Dict-backed store used when persistence is disabled."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return sorted(self._data)
