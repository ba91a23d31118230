"""Justified row layout engine for image galleries."""

from __future__ import annotations

from .core.row_packer import pack_rows
from .errors import InvalidConfigurationError, InvalidDimensionsError, RowGalleryError
from .models.types import ImageRecord, LayoutConfiguration, LayoutItem, Row

__all__ = [
    "ImageRecord",
    "InvalidConfigurationError",
    "InvalidDimensionsError",
    "LayoutConfiguration",
    "LayoutItem",
    "Row",
    "RowGalleryError",
    "pack_rows",
]
