"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "launch-search"
DEFAULT_STATE_DIR: Final[Path] = Path.home() / ".cache" / "launch-search"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_STATE_DB: Final[Path] = DEFAULT_STATE_DIR / "state.duckdb"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "LAUNCH_SEARCH_CONFIG"
ENV_STATE_DB: Final[str] = "LAUNCH_SEARCH_STATE_DB"
ENV_LOG_LEVEL: Final[str] = "LAUNCH_SEARCH_LOG_LEVEL"
ENV_MAX_RESULTS: Final[str] = "LAUNCH_SEARCH_MAX_RESULTS"
ENV_NO_DOCUMENTS: Final[str] = "LAUNCH_SEARCH_NO_DOCUMENTS"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# launch-search configuration

[categories]
all = true
apps = true
documents = true
settings = true
folders = true

[search]
max_results = 10
debounce_ms = 150
settings_panels = true
result_icon_batch = 3
overview_icon_batch = 2

[documents]
enabled = true
folders = ["~/Documents", "~/Desktop", "~/Downloads"]
content_search = false
max_content_bytes = 1048576  # 1 MiB
per_directory_cap = 5

[synonyms]
# JSON object mapping a search term to application names.
# Leave empty to use the built-in table.
table = ""

[learning]
enabled = true
# db_path = "~/.cache/launch-search/state.duckdb"

[overview]
show_top_apps = true
top_apps_count = 6
favorite_apps = []
show_quick_links = true
quick_links = ["sound", "network", "bluetooth", "display"]

[output]
default_format = "rich"
color = true

[logging]
level = "WARNING"
json_format = false
"""


def ensure_directories() -> None:
    """Ensure all default directories exist."""
    DEFAULT_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    DEFAULT_STATE_DIR.mkdir(parents=True, exist_ok=True)


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE


def get_state_db_path(configured: Path | None = None) -> Path:
    """Get the state database path.

    Args:
        configured: Path from the ``[learning]`` section, if any.

    Returns:
        The environment override, the configured path, or the default.
    """
    env_path = os.environ.get(ENV_STATE_DB)
    if env_path:
        return Path(env_path)
    if configured is not None:
        return configured.expanduser()
    return DEFAULT_STATE_DB
