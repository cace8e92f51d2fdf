"""Data sources that supply raw listen events and song records."""

from __future__ import annotations

from .json_source import JsonDataSource

__all__ = ["JsonDataSource"]
