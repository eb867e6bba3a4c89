"""Exception hierarchy for launch-search."""


class LaunchSearchError(Exception):
    """Base exception for all launch-search errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Catalog Errors
class CatalogError(LaunchSearchError):
    """Application catalog errors."""

    exit_code = 2
    user_message = "Application catalog error"


class CatalogUnavailableError(CatalogError):
    """Catalog provider cannot be queried."""

    exit_code = 3
    user_message = "Application catalog is not available"


# Persistence Errors
class PersistenceError(LaunchSearchError):
    """Persistence-related errors."""

    exit_code = 10
    user_message = "Persistence error"


class PersistenceConnectionError(PersistenceError):
    """Cannot open the state database."""

    exit_code = 11
    user_message = "Cannot open state database"


class PersistenceCorruptedError(PersistenceError):
    """Persisted data could not be decoded."""

    exit_code = 12
    user_message = "Stored data is corrupted. Try 'launch-search learning clear'"


# Config Errors
class ConfigError(LaunchSearchError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigNotFoundError(ConfigError):
    """Configuration file or key not found."""

    exit_code = 21
    user_message = "Configuration not found"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"


# Search Errors
class SearchError(LaunchSearchError):
    """Search-related errors."""

    exit_code = 30
    user_message = "Search error"


class DirectoryScanError(SearchError):
    """A searched folder could not be enumerated."""

    exit_code = 31
    user_message = "Could not read search folder"


class ContentReadError(SearchError):
    """A file's content could not be read."""

    exit_code = 32
    user_message = "Could not read file content"


# Activation Errors
class ActivationError(LaunchSearchError):
    """Launching a result failed."""

    exit_code = 40
    user_message = "Could not open the selected result"


class InvalidArgumentError(LaunchSearchError):
    """Invalid argument provided."""

    exit_code = 42
    user_message = "Invalid argument"
