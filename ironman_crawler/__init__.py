"""Cached, batch-paginated crawler for categorized series listings."""

from .version import __version__

__all__ = ["__version__"]
