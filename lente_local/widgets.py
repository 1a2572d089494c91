from __future__ import annotations

from PyQt6.QtCore import Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QMouseEvent
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from .i18n import tr
from .models import Theme
from .utils import elide_end, elide_middle, open_url


class BusySpinner(QWidget):
    def __init__(self, diameter=18, parent=None):
        super().__init__(parent)
        self._angle = 0
        self._timer = QTimer(self); self._timer.timeout.connect(self._tick)
        self.setFixedSize(diameter, diameter); self.hide()
    def start(self): self.show(); self._timer.start(16)
    def stop(self): self._timer.stop(); self.hide(); self.update()
    def _tick(self): self._angle = (self._angle + 10) % 360; self.update()
    def paintEvent(self, ev):
        if not self.isVisible(): return
        from PyQt6.QtGui import QPainter, QPen
        p = QPainter(self); p.setRenderHint(QPainter.RenderHint.Antialiasing)
        rect = self.rect().adjusted(2,2,-2,-2)
        base = QPen(self.palette().mid().color(), 3)
        hi = QPen(self.palette().highlight().color(), 3)
        p.setPen(base); p.drawArc(rect, 0, 16*360)
        p.setPen(hi); p.drawArc(rect, int(-16*self._angle), 16*110)


class ErrorAlert(QFrame):
    """Red banner with a bold "Erro:" prefix."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("errorAlert")
        lay = QHBoxLayout(self); lay.setContentsMargins(16, 12, 16, 12); lay.setSpacing(6)
        self._prefix = QLabel(); self._prefix.setStyleSheet("font-weight: 700;")
        self._message = QLabel(); self._message.setWordWrap(True)
        lay.addWidget(self._prefix, 0, Qt.AlignmentFlag.AlignTop)
        lay.addWidget(self._message, 1)
        self.setAccessibleName("alert")
        self.hide()

    def show_message(self, message: str):
        self._prefix.setText(tr("error_prefix"))
        self._message.setText(message)
        self.show()

    def clear(self):
        self._message.clear(); self.hide()


class ThemeSwitcher(QPushButton):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("themeSwitcher")
        self.setFixedSize(40, 40)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    def set_theme(self, theme: Theme):
        # Shows the icon of the mode it switches to.
        target = theme.toggled()
        self.setText("☾" if target is Theme.DARK else "☀")
        label = tr("theme.switch_to", mode=tr(f"theme.{target.value}"))
        self.setToolTip(label); self.setAccessibleName(label)


class SourceLink(QFrame):
    """Clickable card with a source title and its URI."""

    clicked = pyqtSignal(str)

    def __init__(self, title: str, uri: str, parent=None):
        super().__init__(parent)
        self.setObjectName("sourceLink")
        self.uri = uri
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setToolTip(uri)
        lay = QVBoxLayout(self); lay.setContentsMargins(12, 10, 12, 10); lay.setSpacing(2)
        t = QLabel(elide_end(title, 60)); t.setObjectName("sourceTitle")
        u = QLabel(elide_middle(uri, 60)); u.setObjectName("sourceUri")
        lay.addWidget(t); lay.addWidget(u)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit(self.uri)
            open_url(self.uri)
        super().mouseReleaseEvent(event)
