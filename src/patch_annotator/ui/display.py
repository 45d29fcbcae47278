"""Display surfaces that show a canvas and deliver pointer events."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

from PyQt6.QtCore import QEventLoop, Qt, pyqtSignal
from PyQt6.QtGui import QCloseEvent, QImage, QKeyEvent, QKeySequence, QMouseEvent, QPixmap
from PyQt6.QtWidgets import (
    QHBoxLayout, QLabel, QScrollArea, QSlider, QVBoxLayout, QWidget
)

from ..core.models import PointerButton, PointerEvent, PointerEventKind

logger = logging.getLogger(__name__)

PointerHandler = Callable[[PointerEvent], None]
ToggleHandler = Callable[[int], None]


class DisplaySurface(ABC):
    """
    Window used by the interaction modes.

    Events are delivered synchronously, one at a time, to the handler
    registered last.
    """

    @abstractmethod
    def show(self, image: QImage) -> None:
        """Display an image, replacing the current one."""
        pass

    @abstractmethod
    def set_pointer_handler(self, handler: Optional[PointerHandler]) -> None:
        """Register the callback receiving pointer events."""
        pass

    @abstractmethod
    def add_toggle(self, name: str, maximum: int, on_change: ToggleHandler) -> None:
        """
        Register a discrete control with values 0..maximum.

        Registering a name again resets it to 0 and replaces its callback.
        """
        pass

    @abstractmethod
    def wait_until_closed(self) -> None:
        """Block until the operator signals that the image is done."""
        pass


class _ImageLabel(QLabel):
    """Label showing the canvas at 1:1 scale and emitting pointer events."""

    pointer_event = pyqtSignal(object)

    BUTTONS = {
        Qt.MouseButton.LeftButton: PointerButton.PRIMARY,
        Qt.MouseButton.RightButton: PointerButton.SECONDARY,
    }

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.PreventContextMenu)
        # Move events are needed between clicks for previews
        self.setMouseTracking(True)

    def _emit(self, kind: PointerEventKind, event: QMouseEvent) -> None:
        pos = event.position().toPoint()
        button = self.BUTTONS.get(event.button(), PointerButton.NONE)
        self.pointer_event.emit(PointerEvent(kind, pos.x(), pos.y(), button))

    def mousePressEvent(self, event: QMouseEvent) -> None:
        self._emit(PointerEventKind.PRESS, event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        self._emit(PointerEventKind.MOVE, event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        self._emit(PointerEventKind.RELEASE, event)


class _DisplayWidget(QWidget):
    """Top-level widget: toggle rows above a scrollable image."""

    key_pressed = pyqtSignal(QKeyEvent)
    closed = pyqtSignal()

    def __init__(self, title: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.toggle_bar = QVBoxLayout()
        layout.addLayout(self.toggle_bar)

        self.image_label = _ImageLabel()
        self.scroll_area = QScrollArea()
        self.scroll_area.setWidget(self.image_label)
        self.scroll_area.setWidgetResizable(False)
        layout.addWidget(self.scroll_area)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        self.key_pressed.emit(event)

    def closeEvent(self, event: QCloseEvent) -> None:
        self.closed.emit()
        super().closeEvent(event)


class DisplayWindow(DisplaySurface):
    """
    PyQt6 implementation of DisplaySurface.

    ``wait_until_closed`` runs a nested event loop, so it can be called
    from plain sequential code once a QApplication exists. The window
    stays open between images.
    """

    def __init__(self, title: str, finish_key: str = "Escape") -> None:
        """
        Initialize the window.

        Args:
            title: Window title
            finish_key: Key sequence that ends the current image (empty = any key)
        """
        self.title = title
        self.finish_key = finish_key

        self._pointer_handler: Optional[PointerHandler] = None
        self._toggles: Dict[str, QSlider] = {}
        self._toggle_handlers: Dict[str, ToggleHandler] = {}
        self._loop: Optional[QEventLoop] = None

        self.widget = _DisplayWidget(title)
        self.widget.image_label.pointer_event.connect(self.dispatch)
        self.widget.key_pressed.connect(self._on_key_pressed)
        self.widget.closed.connect(self.finish)

    # === DisplaySurface ===

    def show(self, image: QImage) -> None:
        label = self.widget.image_label
        label.setPixmap(QPixmap.fromImage(image))
        label.adjustSize()
        if not self.widget.isVisible():
            self.widget.show()
            self.widget.activateWindow()

    def set_pointer_handler(self, handler: Optional[PointerHandler]) -> None:
        self._pointer_handler = handler

    def add_toggle(self, name: str, maximum: int, on_change: ToggleHandler) -> None:
        slider = self._toggles.get(name)
        if slider is None:
            row = QHBoxLayout()
            row.addWidget(QLabel(name))
            slider = QSlider(Qt.Orientation.Horizontal)
            slider.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            slider.valueChanged.connect(lambda value, n=name: self._on_toggle(n, value))
            row.addWidget(slider)
            self.widget.toggle_bar.addLayout(row)
            self._toggles[name] = slider

        self._toggle_handlers[name] = on_change
        slider.blockSignals(True)
        slider.setRange(0, maximum)
        slider.setValue(0)
        slider.blockSignals(False)

    def wait_until_closed(self) -> None:
        if not self.widget.isVisible():
            self.widget.show()
        self.widget.setFocus()
        self._loop = QEventLoop()
        self._loop.exec()
        self._loop = None

    # === Event routing ===

    def dispatch(self, event: PointerEvent) -> None:
        """Forward a pointer event to the registered handler."""
        if self._pointer_handler is not None:
            self._pointer_handler(event)

    def toggle_value(self, name: str) -> int:
        """Current value of a toggle, or 0 if it does not exist."""
        slider = self._toggles.get(name)
        return slider.value() if slider is not None else 0

    def set_toggle_value(self, name: str, value: int) -> None:
        """Change a toggle as if the operator moved it."""
        slider = self._toggles.get(name)
        if slider is not None:
            slider.setValue(value)

    def finish(self) -> None:
        """End the current wait, if any."""
        if self._loop is not None:
            self._loop.quit()

    def close(self) -> None:
        self.widget.close()

    def _on_toggle(self, name: str, value: int) -> None:
        handler = self._toggle_handlers.get(name)
        if handler is not None:
            handler(value)

    def matches_finish_key(self, event: QKeyEvent) -> bool:
        """Check a key event against the configured finish key."""
        key = event.key()

        # Ignore pure modifier key presses
        if key in (Qt.Key.Key_Control, Qt.Key.Key_Shift, Qt.Key.Key_Alt, Qt.Key.Key_Meta):
            return False

        if not self.finish_key:
            return True

        combined = key
        modifiers = event.modifiers()
        if modifiers & Qt.KeyboardModifier.ControlModifier:
            combined |= Qt.KeyboardModifier.ControlModifier.value
        if modifiers & Qt.KeyboardModifier.ShiftModifier:
            combined |= Qt.KeyboardModifier.ShiftModifier.value
        if modifiers & Qt.KeyboardModifier.AltModifier:
            combined |= Qt.KeyboardModifier.AltModifier.value
        if modifiers & Qt.KeyboardModifier.MetaModifier:
            combined |= Qt.KeyboardModifier.MetaModifier.value

        return QKeySequence(combined) == QKeySequence(self.finish_key)

    def _on_key_pressed(self, event: QKeyEvent) -> None:
        if self.matches_finish_key(event):
            logger.debug("Finish key pressed")
            self.finish()
