"""Greedy justified row packing."""

from __future__ import annotations

import math
from typing import Callable, Iterable, List, Optional, Sequence

from ..errors import InvalidDimensionsError
from ..models.types import ImageRecord, LayoutConfiguration, LayoutItem, Row
from ..utils.logging import get_logger
from .aspect import check_dimensions

LOGGER = get_logger(__name__)

RejectedCallback = Callable[[ImageRecord, InvalidDimensionsError], None]


def round_px(value: float) -> int:
    """Round half away from zero for positive pixel values."""

    return int(math.floor(value + 0.5))


def is_usable_width(container_width: object) -> bool:
    """Return ``True`` when *container_width* can be packed against."""

    if isinstance(container_width, bool) or not isinstance(container_width, (int, float)):
        return False
    return math.isfinite(container_width) and container_width > 0


def pack_rows(
    images: Iterable[ImageRecord],
    container_width: float,
    config: Optional[LayoutConfiguration] = None,
    *,
    skip_invalid: bool = False,
    on_rejected: Optional[RejectedCallback] = None,
) -> List[Row]:
    """Arrange *images* into rows that fill *container_width*.

    The pass is greedy and never backtracks.  Each image is measured at the
    target row height; the accumulated row is closed once the next image
    would overflow the container (provided the row already holds
    ``min_images_per_row`` images) or once it holds ``max_images_per_row``.
    Closed rows are then scaled to a shared height so their widths add up
    to the container width.

    A non-positive container width means the host has not measured its
    container yet; an empty list is returned instead of attempting a pack.

    Records with unusable dimensions raise :class:`InvalidDimensionsError`
    unless *skip_invalid* is set, in which case they are logged, reported to
    *on_rejected* and left out of the layout.
    """

    if config is None:
        config = LayoutConfiguration()
    if not is_usable_width(container_width):
        LOGGER.debug("Container width %r not ready; skipping pack", container_width)
        return []

    rows: List[Row] = []
    pending: List[tuple[ImageRecord, float]] = []
    running_width = 0.0

    for record in images:
        try:
            ratio = check_dimensions(record)
        except InvalidDimensionsError as exc:
            if not skip_invalid:
                raise
            LOGGER.warning("Skipping image %s: %s", exc.record_id, exc.reason)
            if on_rejected is not None:
                on_rejected(record, exc)
            continue

        provisional = config.target_row_height * ratio
        count = len(pending)
        would_exceed = running_width + provisional + config.gap * count > container_width
        if count and (
            (would_exceed and count >= config.min_images_per_row)
            or count >= config.max_images_per_row
        ):
            rows.append(_close_row(pending, container_width, config, final=False))
            pending = [(record, ratio)]
            running_width = provisional
        else:
            pending.append((record, ratio))
            running_width += provisional

    if pending:
        rows.append(_close_row(pending, container_width, config, final=True))
    return rows


def _close_row(
    members: Sequence[tuple[ImageRecord, float]],
    container_width: float,
    config: LayoutConfiguration,
    *,
    final: bool,
) -> Row:
    total_ratio = sum(ratio for _, ratio in members)
    available = container_width - config.gap * (len(members) - 1)
    fitted = available / total_ratio
    cap = config.final_max_height if final else config.interior_max_height

    row_height = min(fitted, cap)
    row_height = max(row_height, config.min_row_height)
    justified = row_height == fitted

    # Widths come from the unrounded height so a justified row fills the
    # container; see LayoutItem for the resulting aspect tolerance.
    height_px = max(1, round_px(row_height))
    items = tuple(
        LayoutItem(
            record=record,
            calculated_width=max(1, round_px(row_height * ratio)),
            calculated_height=height_px,
        )
        for record, ratio in members
    )
    return Row(items=items, row_height=height_px, is_final=final, is_justified=justified)
