"""Pydantic models for launch-search configuration."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    """Result category filter."""

    ALL = "all"
    APPS = "apps"
    DOCUMENTS = "documents"
    SETTINGS = "settings"
    FOLDERS = "folders"


class OutputFormat(str, Enum):
    """Supported output formats."""

    RICH = "rich"
    PLAIN = "plain"
    JSON = "json"


class _Section(BaseModel):
    """Base for config sections; assignments are validated."""

    model_config = ConfigDict(validate_assignment=True)


class CategoriesConfig(_Section):
    """Which category filters are offered."""

    all: bool = True
    apps: bool = True
    documents: bool = True
    settings: bool = True
    folders: bool = True


class SearchConfig(_Section):
    """Search behaviour."""

    max_results: int = Field(default=10, ge=1)
    debounce_ms: int = Field(default=150, ge=0)
    settings_panels: bool = True
    result_icon_batch: int = Field(default=3, ge=1)
    overview_icon_batch: int = Field(default=2, ge=1)


class DocumentSearchConfig(_Section):
    """Document (file-system) search."""

    enabled: bool = True
    folders: list[str] = Field(
        default_factory=lambda: ["~/Documents", "~/Desktop", "~/Downloads"]
    )
    content_search: bool = False
    max_content_bytes: int = Field(default=1024 * 1024, ge=0)  # 1 MiB
    per_directory_cap: int = Field(default=5, ge=1)
    batch_size: int = Field(default=50, ge=1)
    min_query_length: int = Field(default=2, ge=1)


class SynonymsConfig(_Section):
    """Search synonyms.

    ``table`` holds a serialized JSON object mapping a term to a list of
    application names. An empty string selects the built-in table.
    """

    table: str = ""


class LearningConfig(_Section):
    """Selection learning."""

    enabled: bool = True
    db_path: Path | None = None  # Default: ~/.cache/launch-search/state.duckdb


class OverviewConfig(_Section):
    """Overview shown while no query is active."""

    show_top_apps: bool = True
    top_apps_count: int = Field(default=6, ge=0)
    favorite_apps: list[str] = Field(default_factory=list)
    show_quick_links: bool = True
    quick_links: list[str] = Field(
        default_factory=lambda: ["sound", "network", "bluetooth", "display"]
    )


class OutputConfig(_Section):
    """Output configuration."""

    default_format: OutputFormat = OutputFormat.RICH
    color: bool = True


class LoggingConfig(_Section):
    """Logging configuration."""

    level: str = "WARNING"
    file: Path | None = None
    json_format: bool = False


class LaunchSearchConfig(_Section):
    """Root configuration for launch-search."""

    categories: CategoriesConfig = Field(default_factory=CategoriesConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    documents: DocumentSearchConfig = Field(default_factory=DocumentSearchConfig)
    synonyms: SynonymsConfig = Field(default_factory=SynonymsConfig)
    learning: LearningConfig = Field(default_factory=LearningConfig)
    overview: OverviewConfig = Field(default_factory=OverviewConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def category_enabled(self, category: Category) -> bool:
        """Whether a category filter is enabled."""
        return bool(getattr(self.categories, category.value))
