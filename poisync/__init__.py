"""Write-through POI synchronization between OSM and the local search index."""

__version__ = "1.0.0"
