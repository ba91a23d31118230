"""Aspect-ratio validation and classification helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import TYPE_CHECKING

from ..config import MAX_IMAGE_DIMENSION
from ..errors import InvalidDimensionsError

if TYPE_CHECKING:  # pragma: no cover - only for type checking
    from ..models.types import ImageRecord

PANORAMIC = "panoramic"
LANDSCAPE = "landscape"
SQUARE = "square"
PORTRAIT = "portrait"


@dataclass(frozen=True)
class AspectInfo:
    """Classification of an aspect ratio with a suggested display height."""

    ratio: float
    category: str
    recommended_height: int


def _usable_dimension(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and 0 < value <= MAX_IMAGE_DIMENSION


def is_valid_dimensions(width: object, height: object) -> bool:
    """Return ``True`` when *width* and *height* describe a real image."""

    return _usable_dimension(width) and _usable_dimension(height)


def check_dimensions(record: "ImageRecord") -> float:
    """Return the aspect ratio of *record* or raise :class:`InvalidDimensionsError`."""

    if not is_valid_dimensions(record.width, record.height):
        raise InvalidDimensionsError(
            str(record.id),
            f"width={record.width!r} height={record.height!r} outside 1..{MAX_IMAGE_DIMENSION}",
        )
    ratio = record.aspect_ratio
    if isinstance(ratio, bool) or not isinstance(ratio, Real) or not math.isfinite(ratio) or ratio <= 0:
        raise InvalidDimensionsError(str(record.id), f"aspect ratio {ratio!r} is not a positive number")
    return float(ratio)


def classify_aspect_ratio(ratio: float) -> AspectInfo:
    """Bucket *ratio* into panoramic, landscape, square or portrait."""

    if ratio > 2.5:
        return AspectInfo(ratio, PANORAMIC, 250)
    if ratio > 1.3:
        return AspectInfo(ratio, LANDSCAPE, 300)
    if ratio >= 0.8:
        return AspectInfo(ratio, SQUARE, 350)
    return AspectInfo(ratio, PORTRAIT, 400)
