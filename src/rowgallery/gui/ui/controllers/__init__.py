"""Controllers coordinating layout state with the host UI."""

from .layout_controller import LayoutController

__all__ = ["LayoutController"]
