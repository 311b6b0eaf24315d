"""Sunbeam catalog enrichment and browsing."""

__version__ = "0.1.0"
