"""Pytest fixtures for launch-search tests."""

import logging
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from launch_search.catalog import AppInfo, StaticCatalog
from launch_search.config import SettingsStore, reset_config
from launch_search.config.schema import LaunchSearchConfig
from launch_search.engine.activation import ActivationSink
from launch_search.engine.context import SearchContext
from launch_search.search.learning import LearningStore
from launch_search.storage import MemoryBlobStore


class RecordingActivationSink(ActivationSink):
    """Activation sink that records calls instead of spawning processes."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def activate_app(self, app_id: str) -> None:
        self.calls.append(("app", app_id))

    def open_settings_panel(self, panel: str) -> None:
        self.calls.append(("settings", panel))

    def open_file(self, path: Path) -> None:
        self.calls.append(("file", str(path)))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_documents(temp_dir: Path) -> Path:
    """Create a folder with documents, text files and noise."""
    docs = temp_dir / "Documents"
    docs.mkdir()
    (docs / "report.pdf").write_bytes(b"%PDF-1.4")
    (docs / "Quarterly Report.docx").write_bytes(b"PK")
    (docs / "notes.txt").write_text("Remember the firefox bookmarks\n")
    (docs / "budget.csv").write_text("item,amount\nrent,1000\n")
    (docs / ".hidden-report.txt").write_text("report")
    (docs / "report-image.png").write_bytes(b"\x89PNG")
    (docs / "reports").mkdir()
    return docs


@pytest.fixture
def sample_apps() -> list[AppInfo]:
    """A small application list."""
    return [
        AppInfo("org.mozilla.firefox.desktop", "Firefox", "Browse the web", "firefox"),
        AppInfo("org.gnome.Terminal.desktop", "Terminal", "Use the command line", "utilities-terminal"),
        AppInfo("org.gnome.Nautilus.desktop", "Files", "Access and organize files", "org.gnome.Nautilus"),
        AppInfo("com.discordapp.Discord.desktop", "Discord", "Chat and voice", "discord"),
        AppInfo("code.desktop", "Visual Studio Code", "Code editing. Redefined.", "vscode"),
        AppInfo("org.gnome.Calculator.desktop", "Calculator", "Perform calculations", "accessories-calculator"),
    ]


@pytest.fixture
def static_catalog(sample_apps: list[AppInfo]) -> StaticCatalog:
    return StaticCatalog(sample_apps, most_used=["org.mozilla.firefox.desktop"])


@pytest.fixture
def default_config() -> LaunchSearchConfig:
    """Get default configuration."""
    return LaunchSearchConfig()


@pytest.fixture
def activation_sink() -> RecordingActivationSink:
    return RecordingActivationSink()


@pytest.fixture
def search_context(
    static_catalog: StaticCatalog,
    temp_dir: Path,
    activation_sink: RecordingActivationSink,
) -> SearchContext:
    """Context with a static catalog, no debounce and no document folders."""
    config = LaunchSearchConfig()
    config.search.debounce_ms = 0
    config.documents.folders = []
    return SearchContext(
        settings=SettingsStore(config),
        catalog=static_catalog,
        learning=LearningStore(MemoryBlobStore()),
        activation=activation_sink,
    )


@pytest.fixture(autouse=True)
def reset_config_fixture() -> Generator[None, None, None]:
    """Reset config singleton between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def reset_logging_fixture() -> Generator[None, None, None]:
    """Undo CLI logging setup so caplog sees package records."""
    yield
    package_logger = logging.getLogger("launch_search")
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Create a test config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""
[search]
max_results = 5
debounce_ms = 100

[documents]
folders = ["~/Papers"]
content_search = true

[overview]
favorite_apps = ["org.gnome.Terminal.desktop"]

[output]
default_format = "plain"
""")
    return config_path
