"""Application catalog providers."""

from launch_search.catalog.base import AppInfo, CatalogProvider
from launch_search.catalog.desktop import DesktopEntryCatalog, parse_desktop_file
from launch_search.catalog.static import StaticCatalog

__all__ = [
    "AppInfo",
    "CatalogProvider",
    "DesktopEntryCatalog",
    "StaticCatalog",
    "parse_desktop_file",
]
