from __future__ import annotations
import logging
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QApplication, QFrame, QHBoxLayout, QLabel, QScrollArea, QVBoxLayout, QWidget

from .context import AppContext
from .i18n import tr
from .models import Location, LocationStatus, Theme
from .theme import apply_theme
from .ui.result_view import ResultView
from .ui.search_bar import SearchBar
from .ui.workers import QtTaskRunner
from .utils import center_on_screen
from .viewmodel import LenteViewModel
from .voice import VoiceInputController
from .widgets import BusySpinner, ErrorAlert, ThemeSwitcher

logger = logging.getLogger(__name__)


class MainWindow(QWidget):
    def __init__(self, context: AppContext, runner: Optional[QtTaskRunner] = None):
        super().__init__()
        self.setObjectName("root")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setWindowTitle(tr("app_title"))
        self.resize(880, 820)
        self.ctx = context
        self.runner = runner or QtTaskRunner(self)
        self.vm = LenteViewModel(context.gateway, self.runner, self)
        self.voice = VoiceInputController(context.speech_recognizer, self.vm.run_search, parent=self)
        self.location = context.location_requester
        self._shown_revision = -1

        # Header row with the theme switcher pinned to the right
        top = QHBoxLayout(); top.setContentsMargins(0, 0, 0, 0)
        top.addStretch(1)
        self.theme_switcher = ThemeSwitcher()
        top.addWidget(self.theme_switcher)

        title = QLabel("📍 " + tr("app_title")); title.setObjectName("appTitle")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        subtitle = QLabel(tr("app_subtitle")); subtitle.setObjectName("appSubtitle")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter); subtitle.setWordWrap(True)

        self.search_bar = SearchBar()
        self.location_warning = QLabel(); self.location_warning.setObjectName("locationWarning")
        self.location_warning.setWordWrap(True); self.location_warning.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.location_warning.hide()

        self.spinner = BusySpinner(40)
        self.error_alert = ErrorAlert()
        self.result_view = ResultView(); self.result_view.hide()

        self.empty_state = QFrame(); self.empty_state.setObjectName("emptyState")
        es = QVBoxLayout(self.empty_state); es.setContentsMargins(24, 24, 24, 24)
        l1 = QLabel(tr("empty_state")); l1.setAlignment(Qt.AlignmentFlag.AlignCenter); l1.setWordWrap(True)
        l2 = QLabel(tr("empty_examples")); l2.setAlignment(Qt.AlignmentFlag.AlignCenter); l2.setWordWrap(True)
        l2.setStyleSheet("font-size: 12px;")
        es.addWidget(l1); es.addWidget(l2)

        footer = QLabel(tr("footer")); footer.setObjectName("footer"); footer.setAlignment(Qt.AlignmentFlag.AlignCenter)

        content = QWidget(); content.setMaximumWidth(760)
        col = QVBoxLayout(content); col.setContentsMargins(0, 0, 0, 0); col.setSpacing(12)
        col.addWidget(title); col.addWidget(subtitle); col.addSpacing(20)
        col.addWidget(self.search_bar)
        col.addWidget(self.location_warning)
        col.addSpacing(20)
        col.addWidget(self.spinner, 0, Qt.AlignmentFlag.AlignHCenter)
        col.addWidget(self.error_alert)
        col.addWidget(self.result_view)
        col.addWidget(self.empty_state)
        col.addStretch(1)
        col.addSpacing(32)
        col.addWidget(footer)

        scroller = QScrollArea(); scroller.setWidgetResizable(True); scroller.setFrameShape(QFrame.Shape.NoFrame)
        holder = QWidget(); h_lay = QHBoxLayout(holder); h_lay.setContentsMargins(24, 0, 24, 24)
        h_lay.addStretch(1); h_lay.addWidget(content, 100); h_lay.addStretch(1)
        scroller.setWidget(holder)

        root = QVBoxLayout(self); root.setContentsMargins(16, 16, 16, 0); root.setSpacing(0)
        root.addLayout(top)
        root.addWidget(scroller, 1)

        self._wire()
        self._on_theme_changed(self.ctx.theme_store.theme)
        self.search_bar.set_voice_supported(self.voice.is_supported)
        self._render()
        center_on_screen(self)
        self.show()

    def _wire(self):
        self.search_bar.query_edited.connect(self.vm.set_query)
        self.search_bar.search_requested.connect(self.vm.run_search)
        self.search_bar.location_requested.connect(self.location.request_location)
        self.search_bar.voice_toggled.connect(self.voice.toggle_listening)

        self.vm.changed.connect(self._render)
        self.vm.query_changed.connect(self.search_bar.set_query)

        self.voice.query_changed.connect(self.vm.set_query)
        self.voice.listening_changed.connect(self.search_bar.set_listening)

        self.location.status_changed.connect(self._on_location_status)
        self.location.location_changed.connect(self._on_location)
        self.location.error_changed.connect(self._on_location_error)

        self.result_view.details_requested.connect(self.vm.run_details)

        self.theme_switcher.clicked.connect(self.ctx.theme_store.toggle)
        self.ctx.theme_store.theme_changed.connect(self._on_theme_changed)

    # ---------------------------------------------------------------- render
    def _render(self):
        vm = self.vm
        self.voice.set_search_callback(vm.run_search)
        self.voice.set_loading(vm.is_loading)
        self.search_bar.set_loading(vm.is_loading)

        if vm.is_loading:
            self.spinner.start()
        else:
            self.spinner.stop()

        if vm.error:
            self.error_alert.show_message(vm.error)
        else:
            self.error_alert.clear()

        has_result = not vm.is_loading and not vm.error and bool(vm.result_text)
        if has_result:
            # Keystrokes also re-render; only rebuild the answer for a new result.
            if vm.result_revision != self._shown_revision:
                self._shown_revision = vm.result_revision
                self.result_view.show_result(vm.result_query, vm.result)
            self.result_view.show_details(vm.details_phase, vm.additional_details, vm.details_error)
        self.result_view.setVisible(has_result)
        self.empty_state.setVisible(not vm.is_loading and not vm.result_text and not vm.error)

    def _on_location_status(self, status: LocationStatus):
        self.search_bar.set_location_status(status)

    def _on_location(self, location: Optional[Location]):
        self.vm.set_location(location)

    def _on_location_error(self, message: Optional[str]):
        self.location_warning.setText(message or "")
        self.location_warning.setVisible(bool(message))

    def _on_theme_changed(self, theme: Theme):
        app = QApplication.instance()
        if app is not None:
            apply_theme(app, theme)
        self.theme_switcher.set_theme(theme)

    def closeEvent(self, event):
        self.voice.teardown()
        if self.ctx.speech_recognizer is not None:
            self.ctx.speech_recognizer.wait()
        self.runner.wait_all()
        super().closeEvent(event)
