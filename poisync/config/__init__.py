"""
Configuration package for the POI sync service.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    PoiSettings,
    OsmSettings,
    SearchIndexSettings,
    settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "PoiSettings",
    "OsmSettings",
    "SearchIndexSettings",
    "settings",
    "get_settings",
    "reload_settings",
]
