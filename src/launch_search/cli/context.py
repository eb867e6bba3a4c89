"""Factories wiring configuration into a search context."""

from pathlib import Path

from launch_search.catalog import CatalogProvider, DesktopEntryCatalog, StaticCatalog
from launch_search.cli.options import FormatChoice, get_output_format
from launch_search.config import LaunchSearchConfig, OutputFormat, SettingsStore, get_config
from launch_search.config.defaults import get_state_db_path
from launch_search.engine.context import SearchContext
from launch_search.output import OutputFormatter, get_formatter
from launch_search.search.learning import LearningStore
from launch_search.search.synonyms import SynonymIndex
from launch_search.storage import BlobStore, DuckDBBlobStore, MemoryBlobStore


def create_store(config: LaunchSearchConfig | None = None) -> BlobStore:
    """Create the blob store for persisted state.

    Returns:
        DuckDBBlobStore, or MemoryBlobStore when learning is disabled.

    Raises:
        PersistenceConnectionError: If the database cannot be opened.
    """
    if config is None:
        config = get_config()

    if not config.learning.enabled:
        return MemoryBlobStore()
    return DuckDBBlobStore(get_state_db_path(config.learning.db_path))


def create_catalog(apps_file: Path | None = None) -> CatalogProvider:
    """Create the application catalog.

    Args:
        apps_file: JSON application list; installed desktop entries if None.
    """
    if apps_file is not None:
        return StaticCatalog.from_json(apps_file)
    return DesktopEntryCatalog()


def create_formatter(
    format_choice: FormatChoice | None = None,
    verbose: bool = False,
    config: LaunchSearchConfig | None = None,
) -> OutputFormatter:
    """Create an output formatter from configuration."""
    if config is None:
        config = get_config()

    output_format = get_output_format(format_choice, config.output.default_format)
    if output_format is OutputFormat.RICH:
        return get_formatter(output_format, verbose=verbose, color=config.output.color)
    return get_formatter(output_format, verbose=verbose)


def create_search_context(
    *,
    config: LaunchSearchConfig | None = None,
    catalog: CatalogProvider | None = None,
    store: BlobStore | None = None,
) -> SearchContext:
    """Create a fully-configured search context.

    Args:
        config: Configuration to use. If None, uses global config.
        catalog: Application catalog. If None, uses installed desktop entries.
        store: State store. If None, created from configuration.

    Returns:
        SearchContext with loaded learning data and synonyms bound to
        the settings store.
    """
    if config is None:
        config = get_config()

    settings = SettingsStore(config)

    synonyms = SynonymIndex()
    synonyms.bind(settings)

    learning = LearningStore(store if store is not None else create_store(config))
    learning.load()

    return SearchContext(
        settings=settings,
        catalog=catalog if catalog is not None else DesktopEntryCatalog(),
        synonyms=synonyms,
        learning=learning,
    )
