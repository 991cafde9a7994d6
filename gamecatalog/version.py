"""
Central version management for Game Catalog.
"""

from __future__ import annotations

__all__ = ["__app_name__", "__version__", "__release_date__", "__author__", "__license__"]

__app_name__ = "Game Catalog"
__version__ = "1.0.0"
__release_date__ = "2026-10-19"
__author__ = "Game Catalog Contributors"
__license__ = "MIT"
