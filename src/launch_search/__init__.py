"""launch-search: incremental app, settings and document search for launchers."""

__version__ = "0.1.0"
