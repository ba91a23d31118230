"""Schema validation for image listings.

Errors are reported with the location of the offending value, e.g.
``resources[3].height: 'tall' is not of type 'number'``, so a bad entry in
a long listing can be found without re-running the validator.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from jsonschema import Draft202012Validator, ValidationError

from ..config import SCHEMA_DIR
from ..errors import ListingInvalidError

LISTING_SCHEMA = "image_listing.schema.json"

_LISTING_VALIDATOR: Draft202012Validator | None = None


def _load_validator(name: str) -> Draft202012Validator:
    schema_path = SCHEMA_DIR / name
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    return Draft202012Validator(schema)


def _listing_validator() -> Draft202012Validator:
    global _LISTING_VALIDATOR
    if _LISTING_VALIDATOR is None:
        _LISTING_VALIDATOR = _load_validator(LISTING_SCHEMA)
    return _LISTING_VALIDATOR


def format_path(path: Iterable[Any]) -> str:
    """Render a jsonschema path as ``resources[0].width``."""

    rendered = ""
    for part in path:
        if isinstance(part, int):
            rendered += f"[{part}]"
        else:
            rendered += f".{part}" if rendered else str(part)
    return rendered or "<listing>"


def _path_key(error: ValidationError) -> list[tuple[int, Any]]:
    # Indices order numerically and never compare against key names.
    return [(0, part) if isinstance(part, int) else (1, str(part)) for part in error.absolute_path]


def validate_listing(document: Any) -> None:
    """Validate an image listing and raise :class:`ListingInvalidError` on failure."""

    errors = sorted(_listing_validator().iter_errors(document), key=_path_key)
    if errors:
        messages = "; ".join(f"{format_path(error.absolute_path)}: {error.message}" for error in errors)
        raise ListingInvalidError(messages)
