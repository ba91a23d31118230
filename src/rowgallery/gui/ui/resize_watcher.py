"""Debounced container-width tracking for Qt widgets."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QEvent, QObject, QTimer, Signal
from PySide6.QtWidgets import QAbstractScrollArea, QWidget

from ...config import RESIZE_DEBOUNCE_MS

if TYPE_CHECKING:  # pragma: no cover - only for type checking
    from .controllers.layout_controller import LayoutController


class ResizeWatcher(QObject):
    """Emit :attr:`widthChanged` once a widget stops resizing.

    Window drags produce a burst of resize events; re-packing on each one is
    wasted work.  Every resize restarts a single-shot timer and only the width
    observed when it fires is reported.  Scroll areas report the width of
    their viewport so the scroll bar does not eat into the layout.
    """

    widthChanged = Signal(int)

    def __init__(
        self,
        widget: QWidget,
        *,
        debounce_ms: int = RESIZE_DEBOUNCE_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent if parent is not None else widget)
        self._widget = widget
        self._last_width: Optional[int] = None
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(0, debounce_ms))
        self._timer.timeout.connect(self.flush)
        widget.installEventFilter(self)

    def current_width(self) -> int:
        if isinstance(self._widget, QAbstractScrollArea):
            return self._widget.viewport().width()
        return self._widget.width()

    def is_pending(self) -> bool:
        """Return ``True`` while a resize burst is still being debounced."""

        return self._timer.isActive()

    def attach_controller(self, controller: "LayoutController") -> None:
        """Forward settled widths to *controller* and report the current one."""

        self.widthChanged.connect(controller.set_container_width)
        self.flush()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if watched is self._widget and event.type() == QEvent.Type.Resize:
            self._timer.start()
        return super().eventFilter(watched, event)

    def flush(self) -> None:
        """Report the current width immediately if it changed."""

        self._timer.stop()
        width = self.current_width()
        if width <= 0 or width == self._last_width:
            return
        self._last_width = width
        self.widthChanged.emit(width)
