"""Qt controller that keeps a justified gallery layout in sync with its host."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from PySide6.QtCore import QObject, Signal, Slot

from ....config import INITIAL_PAGE_SIZE, PAGE_INCREMENT
from ....core.layout_state import (
    ImageLoaded,
    ImagesReplaced,
    LayoutEvent,
    LayoutState,
    MoreRequested,
    SettleAcknowledged,
    WidthChanged,
    derive_rows,
    should_notify,
    transition,
)
from ....errors import InvalidDimensionsError
from ....models.types import ImageRecord, LayoutConfiguration, Row
from ....utils.logging import get_logger

LOGGER = get_logger(__name__)


class LayoutController(QObject):
    """Re-pack the visible images whenever width, list or page changes.

    The controller owns a :class:`LayoutState` and replaces it through
    :func:`transition` on every operation.  Rows are recomputed in full and
    published through :attr:`rowsChanged` before the settled notification of
    the same state is delivered, so hosts that measure content height in the
    ``settled`` handler always see the final geometry.
    """

    rowsChanged = Signal(object)
    visibleCountChanged = Signal(int)
    generationChanged = Signal(int)
    settled = Signal()
    imageRejected = Signal(str, str)

    def __init__(
        self,
        config: Optional[LayoutConfiguration] = None,
        *,
        on_settled: Optional[Callable[[], None]] = None,
        initial_page_size: int = INITIAL_PAGE_SIZE,
        page_increment: int = PAGE_INCREMENT,
        skip_invalid: bool = True,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._config = config if config is not None else LayoutConfiguration()
        self._on_settled = on_settled
        self._initial_page_size = initial_page_size
        self._page_increment = page_increment
        self._skip_invalid = skip_invalid
        self._state = LayoutState()
        self._rows: List[Row] = []
        self._rejected: list[str] = []

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------
    def config(self) -> LayoutConfiguration:
        return self._config

    def state(self) -> LayoutState:
        return self._state

    def rows(self) -> List[Row]:
        return list(self._rows)

    def visible_count(self) -> int:
        return self._state.visible_count

    def generation(self) -> int:
        return self._state.generation

    def has_more(self) -> bool:
        return self._state.has_more

    def pending_ids(self) -> List[str]:
        return self._state.pending_ids()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    @Slot(int)
    def set_container_width(self, width: float) -> None:
        """Record the container width and re-pack the visible slice."""

        self._dispatch(WidthChanged(width))

    def set_image_list(self, images: Iterable[ImageRecord]) -> None:
        """Replace the full image list and restart pagination."""

        self._dispatch(ImagesReplaced(tuple(images)))

    @Slot()
    def load_more(self) -> None:
        """Reveal the next page of images, clamped to the list length."""

        self._dispatch(MoreRequested())

    def notify_image_loaded(self, image_id: str, generation: Optional[int] = None) -> None:
        """Count one image element as settled.

        Hosts report failed loads through the same call.  *generation* should
        be the value of :meth:`generation` at the time the element was
        rendered; events from earlier generations are ignored.
        """

        if generation is None:
            generation = self._state.generation
        self._dispatch(ImageLoaded(image_id, generation))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _dispatch(self, event: LayoutEvent) -> None:
        previous = self._state
        state = self._apply(event)
        if state is previous:
            return

        if self._layout_inputs_changed(previous, state):
            self._repack()
        if state.visible_count != previous.visible_count:
            self.visibleCountChanged.emit(state.visible_count)
        if state.generation != previous.generation:
            self.generationChanged.emit(state.generation)
        self._flush_settled()

    def _apply(self, event: LayoutEvent) -> LayoutState:
        self._state = transition(
            self._state,
            event,
            initial_page_size=self._initial_page_size,
            page_increment=self._page_increment,
        )
        return self._state

    @staticmethod
    def _layout_inputs_changed(previous: LayoutState, state: LayoutState) -> bool:
        return (
            previous.container_width != state.container_width
            or previous.visible_count != state.visible_count
            or previous.images is not state.images
        )

    def _repack(self) -> None:
        self._rejected = []
        self._rows = derive_rows(
            self._state,
            self._config,
            skip_invalid=self._skip_invalid,
            on_rejected=self._record_rejection,
        )
        self.rowsChanged.emit(list(self._rows))
        # Rejected images are never rendered, so they cannot report a load.
        generation = self._state.generation
        for image_id in self._rejected:
            self._apply(ImageLoaded(image_id, generation))

    def _record_rejection(self, record: ImageRecord, error: InvalidDimensionsError) -> None:
        self._rejected.append(record.id)
        self.imageRejected.emit(str(record.id), error.reason)

    def _flush_settled(self) -> None:
        if not should_notify(self._state):
            return
        self._apply(SettleAcknowledged())
        LOGGER.debug(
            "Layout generation %d settled with %d visible images",
            self._state.generation,
            self._state.visible_count,
        )
        self.settled.emit()
        if self._on_settled is not None:
            self._on_settled()
