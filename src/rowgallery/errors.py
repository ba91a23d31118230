"""Custom exception hierarchy for rowgallery."""

from __future__ import annotations


class RowGalleryError(Exception):
    """Base class for all custom errors raised by rowgallery."""


class InvalidDimensionsError(RowGalleryError):
    """Raised when an image record cannot be placed because of its dimensions."""

    def __init__(self, record_id: str, reason: str) -> None:
        super().__init__(f"Invalid dimensions for image {record_id!r}: {reason}")
        self.record_id = record_id
        self.reason = reason


class InvalidConfigurationError(RowGalleryError):
    """Raised when a layout configuration contains unusable values."""


class ListingInvalidError(RowGalleryError):
    """Raised when an image listing payload fails schema validation."""


class DeliveryConfigError(RowGalleryError):
    """Raised when a delivery URL cannot be built from the given settings."""
