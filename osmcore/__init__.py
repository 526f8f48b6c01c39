"""OpenStreetMap identifiers, bounds, changes, changesets and history datasources."""

__version__ = "0.1.0"