"""Delivery URL helpers that preserve the source aspect ratio."""

from __future__ import annotations

import math

from ..config import (
    DELIVERY_FORMAT,
    DELIVERY_HOST,
    DELIVERY_MAX_HEIGHT_FACTOR,
    DELIVERY_MAX_WIDTH,
    DELIVERY_QUALITY,
)
from ..core.row_packer import round_px
from ..errors import DeliveryConfigError
from ..models.types import LayoutItem


def optimal_dimensions(width: float, height: float, max_width: int = DELIVERY_MAX_WIDTH) -> tuple[int, int]:
    """Scale an image to *max_width*, limiting very tall images."""

    if width <= 0 or height <= 0:
        raise DeliveryConfigError(f"Cannot size an image of {width}x{height}")
    aspect_ratio = width / height
    target_width = float(max_width)
    target_height = target_width / aspect_ratio
    max_height = max_width * DELIVERY_MAX_HEIGHT_FACTOR
    if target_height > max_height:
        target_height = max_height
        target_width = target_height * aspect_ratio
    return round_px(target_width), round_px(target_height)


def _clean_public_id(public_id: str) -> str:
    return public_id.strip().strip("/")


def _transformation_url(cloud_name: str, public_id: str, transformations: list[str]) -> str:
    if not cloud_name:
        raise DeliveryConfigError("A cloud name is required to build delivery URLs")
    cleaned = _clean_public_id(public_id or "")
    if not cleaned:
        raise DeliveryConfigError("A public id is required to build delivery URLs")
    return f"{DELIVERY_HOST}/{cloud_name}/image/upload/{','.join(transformations)}/{cleaned}"


def build_delivery_url(
    cloud_name: str,
    public_id: str,
    width: float,
    height: float,
    *,
    max_width: int = DELIVERY_MAX_WIDTH,
    quality: int = DELIVERY_QUALITY,
    fmt: str = DELIVERY_FORMAT,
) -> str:
    """Return a ``c_fit`` delivery URL sized by :func:`optimal_dimensions`."""

    target_width, target_height = optimal_dimensions(width, height, max_width)
    return _transformation_url(
        cloud_name,
        public_id,
        [f"w_{target_width}", f"h_{target_height}", "c_fit", f"q_{quality}", f"f_{fmt}"],
    )


def item_delivery_url(
    cloud_name: str,
    item: LayoutItem,
    *,
    pixel_ratio: float = 1.0,
    quality: int = DELIVERY_QUALITY,
    fmt: str = DELIVERY_FORMAT,
) -> str:
    """Return a delivery URL matching the on-screen footprint of *item*.

    *pixel_ratio* accounts for high-density displays; the requested size is
    rounded up so the image is never upscaled by the renderer.
    """

    if not math.isfinite(pixel_ratio) or pixel_ratio <= 0:
        raise DeliveryConfigError(f"Invalid pixel ratio: {pixel_ratio!r}")
    public_id = item.record.public_id or item.id
    target_width = math.ceil(item.calculated_width * pixel_ratio)
    target_height = math.ceil(item.calculated_height * pixel_ratio)
    return _transformation_url(
        cloud_name,
        public_id,
        [f"w_{target_width}", f"h_{target_height}", "c_fill", f"q_{quality}", f"f_{fmt}"],
    )
