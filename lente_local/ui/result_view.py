from __future__ import annotations
from typing import Hashable, List, Optional

from PyQt6.QtCore import Qt, QUrl, pyqtSignal
from PyQt6.QtWidgets import (
    QFrame, QGridLayout, QHBoxLayout, QLabel, QPushButton, QSizePolicy, QTabWidget,
    QTextBrowser, QVBoxLayout, QWidget,
)

from ..i18n import tr
from ..models import (
    MapsSource, ResultTab, SearchResult, WebSource, embed_map_url, initial_tab, map_url, valid_map_sources,
    web_sources,
)
from ..utils import open_url
from ..viewmodel import DetailsPhase
from ..widgets import BusySpinner, ErrorAlert, SourceLink

try:
    from PyQt6.QtWebEngineWidgets import QWebEngineView
    HAVE_WEBENGINE = True
except Exception:
    HAVE_WEBENGINE = False

_TAB_INDEX = {ResultTab.SUMMARY: 0, ResultTab.MAP: 1}


def _text_view() -> QTextBrowser:
    view = QTextBrowser()
    view.setOpenExternalLinks(True)
    view.setReadOnly(True)
    view.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
    view.setMinimumHeight(220)
    view.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
    return view


class MapPanel(QWidget):
    """Embedded Google Maps view of the primary map source.

    Without Qt WebEngine the panel falls back to a link out to Google Maps.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._title = ""
        lay = QVBoxLayout(self); lay.setContentsMargins(0, 12, 0, 0); lay.setSpacing(12)
        self.caption = QLabel(); self.caption.setObjectName("sectionHeading"); self.caption.setWordWrap(True)
        lay.addWidget(self.caption)
        self.web_view = None
        self.open_btn = None
        if HAVE_WEBENGINE:
            self.web_view = QWebEngineView()
            self.web_view.setMinimumHeight(320)
            self.web_view.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
            lay.addWidget(self.web_view, 1)
        else:
            self.open_btn = QPushButton(); self.open_btn.setObjectName("mapButton")
            self.open_btn.setCursor(Qt.CursorShape.PointingHandCursor)
            self.open_btn.clicked.connect(self._open)
            lay.addWidget(self.open_btn, 0, Qt.AlignmentFlag.AlignLeft)
            lay.addStretch(1)

    def set_place(self, title: str):
        if title == self._title:
            return
        self._title = title
        caption = tr("result.map_of", place=title)
        self.caption.setText(caption)
        if self.web_view is not None:
            self.web_view.setAccessibleName(caption)
            self.web_view.setUrl(QUrl(embed_map_url(title)))
        else:
            self.open_btn.setText(tr("result.open_map"))
            self.open_btn.setToolTip(map_url(title))

    def _open(self):
        if self._title:
            open_url(map_url(self._title))


class ResultView(QFrame):
    details_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("resultCard")
        self._result_key: Optional[Hashable] = None
        self._query = ""

        outer = QVBoxLayout(self); outer.setContentsMargins(0, 0, 0, 0); outer.setSpacing(0)
        body = QWidget(); body_lay = QVBoxLayout(body); body_lay.setContentsMargins(28, 24, 28, 24); body_lay.setSpacing(12)

        # Summary / map tabs; the tab bar is only shown when there is a map.
        self.tabs = QTabWidget()
        summary = QWidget(); s_lay = QVBoxLayout(summary); s_lay.setContentsMargins(0, 12, 0, 0); s_lay.setSpacing(12)
        self.heading = QLabel(); self.heading.setObjectName("resultHeading"); self.heading.setWordWrap(True)
        self.text_view = _text_view()
        s_lay.addWidget(self.heading); s_lay.addWidget(self.text_view, 1)
        self.map_panel = MapPanel()
        self.tabs.addTab(summary, tr("result.tab_summary"))
        self.tabs.addTab(self.map_panel, tr("result.tab_map"))
        body_lay.addWidget(self.tabs, 1)

        # "Tell me more" section
        details = QWidget(); d_lay = QVBoxLayout(details); d_lay.setContentsMargins(0, 16, 0, 0); d_lay.setSpacing(10)
        self.details_btn = QPushButton(); self.details_btn.setObjectName("detailsButton")
        self.details_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self.details_btn.clicked.connect(self.details_requested.emit)
        fetching = QWidget(); f_lay = QHBoxLayout(fetching); f_lay.setContentsMargins(0, 0, 0, 0); f_lay.setSpacing(8)
        self.details_spinner = BusySpinner(18)
        self.fetching_label = QLabel(tr("result.fetching_details"))
        f_lay.addWidget(self.details_spinner); f_lay.addWidget(self.fetching_label); f_lay.addStretch(1)
        self.fetching_row = fetching
        self.details_error = ErrorAlert()
        self.details_heading = QLabel(tr("result.more_details")); self.details_heading.setObjectName("sectionHeading")
        self.details_view = _text_view()
        d_lay.addWidget(self.details_btn, 0, Qt.AlignmentFlag.AlignLeft)
        d_lay.addWidget(self.fetching_row)
        d_lay.addWidget(self.details_error)
        d_lay.addWidget(self.details_heading)
        d_lay.addWidget(self.details_view)
        body_lay.addWidget(details)
        outer.addWidget(body, 1)

        # Sources
        self.sources_panel = QFrame(); self.sources_panel.setObjectName("sourcesPanel")
        self._sources_lay = QVBoxLayout(self.sources_panel); self._sources_lay.setContentsMargins(28, 20, 28, 20); self._sources_lay.setSpacing(10)
        self.maps_heading = QLabel(tr("result.maps_sources")); self.maps_heading.setObjectName("sectionHeading")
        self.maps_grid = QGridLayout(); self.maps_grid.setSpacing(12)
        self.web_heading = QLabel(tr("result.web_sources")); self.web_heading.setObjectName("sectionHeading")
        self.web_grid = QGridLayout(); self.web_grid.setSpacing(12)
        self._sources_lay.addWidget(self.maps_heading); self._sources_lay.addLayout(self.maps_grid)
        self._sources_lay.addWidget(self.web_heading); self._sources_lay.addLayout(self.web_grid)
        outer.addWidget(self.sources_panel)

        self.show_details(DetailsPhase.IDLE, "", None)

    # ------------------------------------------------------------------ result
    def show_result(self, query: str, result: SearchResult):
        self._query = query
        self.heading.setText(tr("result.heading", query=query))
        self.text_view.setMarkdown(result.text)

        title = result.primary_map_title
        has_map = title is not None
        if has_map:
            self.map_panel.set_place(title)
        self.tabs.setTabVisible(_TAB_INDEX[ResultTab.MAP], has_map)
        self.tabs.tabBar().setVisible(has_map)

        key = (query, result.text)
        if key != self._result_key:
            self._result_key = key
            self.tabs.setCurrentIndex(_TAB_INDEX[initial_tab(key)])

        self._fill_sources(valid_map_sources(result.citations), web_sources(result.citations))
        self.details_btn.setText(tr("result.tell_me_more", query=query))

    def _fill_sources(self, maps: List[MapsSource], web: List[WebSource]):
        for grid in (self.maps_grid, self.web_grid):
            while grid.count():
                item = grid.takeAt(0)
                if item.widget():
                    item.widget().deleteLater()
        for i, s in enumerate(maps):
            self.maps_grid.addWidget(SourceLink(s.title, s.uri), i // 2, i % 2)
        for i, s in enumerate(web):
            self.web_grid.addWidget(SourceLink(s.title or s.uri, s.uri), i // 2, i % 2)
        self.maps_heading.setVisible(bool(maps))
        self.web_heading.setVisible(bool(web))
        self.sources_panel.setVisible(bool(maps or web))

    # ----------------------------------------------------------------- details
    def show_details(self, phase: DetailsPhase, text: str, error: Optional[str]):
        fetching = phase is DetailsPhase.FETCHING
        self.details_btn.setVisible(not text and not fetching and not error)
        self.details_btn.setEnabled(not fetching)
        self.fetching_row.setVisible(fetching)
        if fetching:
            self.details_spinner.start()
        else:
            self.details_spinner.stop()
        if error:
            self.details_error.show_message(error)
        else:
            self.details_error.clear()
        self.details_heading.setVisible(bool(text))
        self.details_view.setVisible(bool(text))
        if text:
            self.details_view.setMarkdown(text)
