"""Default configuration values for rowgallery."""

from __future__ import annotations

from pathlib import Path
from typing import Final

# ---------------------------------------------------------------------------
# Row packing
# ---------------------------------------------------------------------------

TARGET_ROW_HEIGHT: Final[int] = 380
ROW_GAP: Final[int] = 28
MIN_IMAGES_PER_ROW: Final[int] = 2
MAX_IMAGES_PER_ROW: Final[int] = 3
MIN_ROW_HEIGHT: Final[int] = 200

# Height caps are multipliers of ``TARGET_ROW_HEIGHT``.  Interior rows may grow
# a little past the target; the trailing row never does because it is often
# sparse and would otherwise be blown up to fill the container.
INTERIOR_ROW_HEIGHT_CAP: Final[float] = 1.3
FINAL_ROW_HEIGHT_CAP: Final[float] = 1.0

# Source images larger than this in either direction are treated as corrupt
# metadata rather than real photographs.
MAX_IMAGE_DIMENSION: Final[int] = 50000

# ---------------------------------------------------------------------------
# Pagination and host coordination
# ---------------------------------------------------------------------------

INITIAL_PAGE_SIZE: Final[int] = 18
PAGE_INCREMENT: Final[int] = 20
RESIZE_DEBOUNCE_MS: Final[int] = 120

# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------

DELIVERY_HOST: Final[str] = "https://res.cloudinary.com"
DELIVERY_MAX_WIDTH: Final[int] = 800
DELIVERY_QUALITY: Final[int] = 95
DELIVERY_FORMAT: Final[str] = "auto"
# Very tall images are limited to this multiple of the delivery width.
DELIVERY_MAX_HEIGHT_FACTOR: Final[float] = 1.5

SCHEMA_DIR: Final[Path] = Path(__file__).resolve().parent / "schemas"
LOG_LEVEL_ENV: Final[str] = "ROWGALLERY_LOG_LEVEL"
