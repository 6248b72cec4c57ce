"""Candidate source implementations."""

from .catalog import JsonCatalogSource, load_catalog
from .memory import InMemorySource

__all__ = [
    "InMemorySource",
    "JsonCatalogSource",
    "load_catalog",
]
