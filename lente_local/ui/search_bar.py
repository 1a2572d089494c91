from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QHBoxLayout, QLineEdit, QPushButton, QWidget

from ..i18n import tr
from ..models import LocationStatus

LOCATION_ICONS = {
    LocationStatus.IDLE: "⌖",
    LocationStatus.LOADING: "…",
    LocationStatus.SUCCESS: "✓",
    LocationStatus.ERROR: "✕",
}


class SearchBar(QWidget):
    """Query input with location, microphone and search buttons.

    Holds no state of its own beyond what the window pushes in.
    """

    query_edited = pyqtSignal(str)
    search_requested = pyqtSignal()
    location_requested = pyqtSignal()
    voice_toggled = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("searchContainer")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self._loading = False
        self._voice_supported = False
        self._location_status = LocationStatus.IDLE

        lay = QHBoxLayout(self)
        lay.setContentsMargins(12, 8, 8, 8)
        lay.setSpacing(4)

        self.input = QLineEdit()
        self.input.setObjectName("mainSearch")
        self.input.setPlaceholderText(tr("search.placeholder"))
        self.input.setMinimumHeight(36)
        self.input.textEdited.connect(self._on_text_edited)
        self.input.returnPressed.connect(self.search_requested.emit)

        self.location_btn = QPushButton()
        self.location_btn.setObjectName("iconButton")
        self.location_btn.setFixedSize(40, 40)
        self.location_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self.location_btn.setToolTip(tr("search.use_location"))
        self.location_btn.setAccessibleName(tr("search.use_location"))
        self.location_btn.clicked.connect(self.location_requested.emit)

        self.mic_btn = QPushButton("🎤")
        self.mic_btn.setObjectName("iconButton")
        self.mic_btn.setFixedSize(40, 40)
        self.mic_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self.mic_btn.setAccessibleName(tr("search.voice"))
        self.mic_btn.clicked.connect(self.voice_toggled.emit)

        self.search_btn = QPushButton("🔍")
        self.search_btn.setObjectName("searchButton")
        self.search_btn.setFixedSize(44, 40)
        self.search_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self.search_btn.setToolTip(tr("search.button"))
        self.search_btn.setAccessibleName(tr("search.button"))
        self.search_btn.clicked.connect(self.search_requested.emit)

        lay.addWidget(self.input, 1)
        lay.addWidget(self.location_btn, 0)
        lay.addWidget(self.mic_btn, 0)
        lay.addWidget(self.search_btn, 0)

        self.set_location_status(LocationStatus.IDLE)
        self.set_voice_supported(False)

    def _on_text_edited(self, text: str):
        self.query_edited.emit(text)
        self._refresh_enabled()

    def set_query(self, text: str):
        if self.input.text() != text:
            self.input.setText(text)
        self._refresh_enabled()

    def set_loading(self, loading: bool):
        self._loading = loading
        self._refresh_enabled()

    def set_location_status(self, status: LocationStatus):
        self._location_status = status
        self.location_btn.setText(LOCATION_ICONS.get(status, LOCATION_ICONS[LocationStatus.IDLE]))
        self._refresh_enabled()

    def set_voice_supported(self, supported: bool):
        self._voice_supported = supported
        self.mic_btn.setToolTip(tr("search.voice") if supported else tr("search.voice_unsupported"))
        self._refresh_enabled()

    def set_listening(self, listening: bool):
        self.mic_btn.setProperty("listening", "true" if listening else "false")
        # Re-polish so the [listening="true"] selector applies.
        self.mic_btn.style().unpolish(self.mic_btn)
        self.mic_btn.style().polish(self.mic_btn)

    def _refresh_enabled(self):
        self.input.setEnabled(not self._loading)
        self.location_btn.setEnabled(not self._loading and self._location_status is not LocationStatus.LOADING)
        self.mic_btn.setEnabled(not self._loading and self._voice_supported)
        self.search_btn.setEnabled(not self._loading and bool(self.input.text().strip()))
