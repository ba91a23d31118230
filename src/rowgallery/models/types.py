"""Data models used by rowgallery."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator, Mapping, Optional

from ..config import (
    FINAL_ROW_HEIGHT_CAP,
    INTERIOR_ROW_HEIGHT_CAP,
    MAX_IMAGES_PER_ROW,
    MIN_IMAGES_PER_ROW,
    MIN_ROW_HEIGHT,
    ROW_GAP,
    TARGET_ROW_HEIGHT,
)
from ..errors import InvalidConfigurationError


@dataclass(frozen=True, slots=True)
class ImageRecord:
    """An already-fetched image description.

    ``aspect_ratio`` is derived from ``width / height`` exactly once when the
    caller does not supply it.  A zero height produces ``nan`` instead of an
    exception so that the packer can report the record by name.
    """

    id: str
    width: int
    height: int
    aspect_ratio: Optional[float] = None
    alt: Optional[str] = None
    url: Optional[str] = None
    public_id: Optional[str] = None
    created_at: Optional[datetime] = None
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if self.aspect_ratio is None:
            try:
                ratio = self.width / self.height
            except ZeroDivisionError:
                ratio = math.nan
            object.__setattr__(self, "aspect_ratio", ratio)

    @property
    def category(self) -> str:
        from ..core.aspect import classify_aspect_ratio

        return classify_aspect_ratio(self.aspect_ratio).category


@dataclass(frozen=True, slots=True)
class LayoutItem:
    """Placement of one :class:`ImageRecord` inside a row.

    Both ``calculated_width`` and ``calculated_height`` are rounded from the
    row's unrounded height, which keeps a justified row within half a pixel
    per item of the container width.  Re-deriving the width from the rounded
    height can therefore differ by up to ``0.5 * aspect_ratio + 0.5`` pixels,
    i.e. one pixel for ratios up to 1 and more for panoramas.
    """

    record: ImageRecord
    calculated_width: int
    calculated_height: int

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def width(self) -> int:
        return self.record.width

    @property
    def height(self) -> int:
        return self.record.height

    @property
    def aspect_ratio(self) -> float:
        return self.record.aspect_ratio

    @property
    def alt(self) -> Optional[str]:
        return self.record.alt

    @property
    def url(self) -> Optional[str]:
        return self.record.url


@dataclass(frozen=True, slots=True)
class Row:
    """A run of items sharing one height.

    ``is_justified`` is ``True`` when the row height was derived from the
    container width without hitting a cap or the minimum-height floor, which
    is exactly when the row spans the full container width.
    """

    items: tuple[LayoutItem, ...]
    row_height: int
    is_final: bool = False
    is_justified: bool = True

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[LayoutItem]:
        return iter(self.items)

    def content_width(self, gap: int) -> int:
        """Return the horizontal footprint of the row including gaps."""

        if not self.items:
            return 0
        return sum(item.calculated_width for item in self.items) + gap * (len(self.items) - 1)

    def ids(self) -> list[str]:
        return [item.id for item in self.items]


@dataclass(frozen=True, slots=True)
class LayoutConfiguration:
    """Tuning knobs for :func:`rowgallery.core.row_packer.pack_rows`."""

    target_row_height: float = TARGET_ROW_HEIGHT
    gap: int = ROW_GAP
    min_images_per_row: int = MIN_IMAGES_PER_ROW
    max_images_per_row: int = MAX_IMAGES_PER_ROW
    min_row_height: float = MIN_ROW_HEIGHT
    interior_height_cap: float = INTERIOR_ROW_HEIGHT_CAP
    final_height_cap: float = FINAL_ROW_HEIGHT_CAP

    def __post_init__(self) -> None:
        problems: list[str] = []
        if not _positive(self.target_row_height):
            problems.append("target_row_height must be positive")
        if not (math.isfinite(self.gap) and self.gap >= 0):
            problems.append("gap must be zero or positive")
        if self.min_images_per_row < 1:
            problems.append("min_images_per_row must be at least 1")
        if self.max_images_per_row < self.min_images_per_row:
            problems.append("max_images_per_row must not be below min_images_per_row")
        if not (math.isfinite(self.min_row_height) and self.min_row_height >= 0):
            problems.append("min_row_height must be zero or positive")
        if not _positive(self.interior_height_cap):
            problems.append("interior_height_cap must be positive")
        if not _positive(self.final_height_cap):
            problems.append("final_height_cap must be positive")
        if problems:
            raise InvalidConfigurationError("; ".join(problems))

    @property
    def interior_max_height(self) -> float:
        return self.target_row_height * self.interior_height_cap

    @property
    def final_max_height(self) -> float:
        return self.target_row_height * self.final_height_cap


def _positive(value: float) -> bool:
    return math.isfinite(value) and value > 0
