"""Data models used by rowgallery."""

from .types import ImageRecord, LayoutConfiguration, LayoutItem, Row

__all__ = ["ImageRecord", "LayoutConfiguration", "LayoutItem", "Row"]
