"""Pure state machine behind :class:`LayoutController`.

The controller never mutates state in place.  Every external stimulus is
expressed as an event and folded into a fresh :class:`LayoutState` by
:func:`transition`; rows are then derived from the resulting state.  Keeping
this free of Qt lets the pagination and load-tracking rules be exercised
without an event loop.

A *generation* identifies one version of the visible set.  It advances when
the image list is replaced or when pagination reveals more images, and load
events carry the generation they were issued for so late signals from a
superseded set are discarded.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple, Union

from ..config import INITIAL_PAGE_SIZE, PAGE_INCREMENT
from ..models.types import ImageRecord, LayoutConfiguration, Row
from ..utils.logging import get_logger
from .row_packer import RejectedCallback, is_usable_width, pack_rows

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class LayoutState:
    """Snapshot of everything the layout depends on."""

    images: Tuple[ImageRecord, ...] = ()
    container_width: float = 0
    visible_count: int = 0
    generation: int = 0
    loaded_ids: frozenset = field(default_factory=frozenset)
    # The pristine state has nothing to announce.
    notified: bool = True

    @property
    def total_count(self) -> int:
        return len(self.images)

    @property
    def visible_images(self) -> Tuple[ImageRecord, ...]:
        return self.images[: self.visible_count]

    @property
    def loaded_count(self) -> int:
        return len(self.loaded_ids)

    @property
    def has_more(self) -> bool:
        return self.visible_count < self.total_count

    @property
    def is_ready(self) -> bool:
        return is_usable_width(self.container_width)

    @property
    def is_settled(self) -> bool:
        # Ids are expected to be unique; counting distinct ids keeps a
        # duplicated record from blocking the notification forever.
        return self.loaded_count >= len({record.id for record in self.visible_images})

    def pending_ids(self) -> List[str]:
        """Return ids in the visible slice that have not reported yet."""

        return [record.id for record in self.visible_images if record.id not in self.loaded_ids]


@dataclass(frozen=True)
class WidthChanged:
    width: float


@dataclass(frozen=True)
class ImagesReplaced:
    images: Tuple[ImageRecord, ...]


@dataclass(frozen=True)
class MoreRequested:
    pass


@dataclass(frozen=True)
class ImageLoaded:
    """An image element finished loading (or failed to) for *generation*."""

    image_id: str
    generation: int


@dataclass(frozen=True)
class SettleAcknowledged:
    pass


LayoutEvent = Union[WidthChanged, ImagesReplaced, MoreRequested, ImageLoaded, SettleAcknowledged]


def _next_generation(state: LayoutState, **changes) -> LayoutState:
    generation = state.generation + 1
    LOGGER.debug("Layout generation %d -> %d", state.generation, generation)
    return replace(
        state,
        generation=generation,
        loaded_ids=frozenset(),
        notified=False,
        **changes,
    )


def transition(
    state: LayoutState,
    event: LayoutEvent,
    *,
    initial_page_size: int = INITIAL_PAGE_SIZE,
    page_increment: int = PAGE_INCREMENT,
) -> LayoutState:
    """Return the state that results from applying *event* to *state*.

    Unchanged inputs return *state* itself so callers can detect no-ops with
    an identity check.
    """

    if isinstance(event, WidthChanged):
        if event.width == state.container_width:
            return state
        # Resizing does not invalidate loads, but a new usable geometry must
        # be announced again once the visible set is complete.  A collapse to
        # an unusable width leaves no rows to announce.
        rearm = state.visible_count > 0 and is_usable_width(event.width)
        return replace(
            state,
            container_width=event.width,
            notified=state.notified and not rearm,
        )

    if isinstance(event, ImagesReplaced):
        images = tuple(event.images)
        return _next_generation(
            state,
            images=images,
            visible_count=min(max(0, initial_page_size), len(images)),
        )

    if isinstance(event, MoreRequested):
        visible = min(state.visible_count + max(0, page_increment), state.total_count)
        if visible == state.visible_count:
            return state
        return _next_generation(state, visible_count=visible)

    if isinstance(event, ImageLoaded):
        if event.generation != state.generation:
            LOGGER.debug(
                "Ignoring load of %s from stale generation %d (current %d)",
                event.image_id,
                event.generation,
                state.generation,
            )
            return state
        if event.image_id in state.loaded_ids:
            return state
        if all(record.id != event.image_id for record in state.visible_images):
            LOGGER.debug("Ignoring load of %s outside the visible slice", event.image_id)
            return state
        return replace(state, loaded_ids=state.loaded_ids | {event.image_id})

    if isinstance(event, SettleAcknowledged):
        if state.notified:
            return state
        return replace(state, notified=True)

    raise TypeError(f"Unsupported layout event: {event!r}")


def should_notify(state: LayoutState) -> bool:
    """Return ``True`` when the host has not yet heard about a settled set.

    Visible images are only announced once they have been laid out, so a
    state without a usable width waits even if every load has reported.
    """

    if state.visible_count and not state.is_ready:
        return False
    return state.is_settled and not state.notified


def derive_rows(
    state: LayoutState,
    config: Optional[LayoutConfiguration] = None,
    *,
    skip_invalid: bool = True,
    on_rejected: Optional[RejectedCallback] = None,
) -> List[Row]:
    """Pack the visible slice of *state* at its current width."""

    if not state.is_ready or not state.visible_count:
        return []
    return pack_rows(
        state.visible_images,
        state.container_width,
        config,
        skip_invalid=skip_invalid,
        on_rejected=on_rejected,
    )
