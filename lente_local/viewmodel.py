from __future__ import annotations
import logging
from enum import Enum
from functools import partial
from typing import Any, Callable, List, Optional, Protocol

from PyQt6.QtCore import QObject, pyqtSignal

from .i18n import tr
from .models import Citation, Location, SearchResult

logger = logging.getLogger(__name__)


class TaskRunner(Protocol):
    def submit(
        self,
        job: Callable[[], Any],
        on_success: Callable[[Any], None],
        on_failure: Callable[[Exception], None],
    ) -> None: ...


class SearchPhase(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class DetailsPhase(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class LenteViewModel(QObject):
    """Root state of the window and the sequencing of gateway calls.

    Search and elaboration each have their own in-flight guard and may
    overlap each other. Every request gets a sequence number; a completion
    is committed only if no newer request of the same kind was issued (or
    invalidated) in the meantime.
    """

    changed = pyqtSignal()
    query_changed = pyqtSignal(str)

    def __init__(self, gateway: Any, runner: TaskRunner, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._gateway = gateway
        self._runner = runner

        self._query = ""
        self._location: Optional[Location] = None

        self._search_phase = SearchPhase.IDLE
        self._result: Optional[SearchResult] = None
        self._result_query = ""
        self._result_revision = 0
        self._error: Optional[str] = None
        self._search_seq = 0

        self._details_phase = DetailsPhase.IDLE
        self._details = ""
        self._details_error: Optional[str] = None
        self._details_seq = 0

    # ---------------------------------------------------------------- state
    @property
    def query(self) -> str:
        return self._query

    @property
    def location(self) -> Optional[Location]:
        return self._location

    @property
    def search_phase(self) -> SearchPhase:
        return self._search_phase

    @property
    def is_loading(self) -> bool:
        return self._search_phase is SearchPhase.SEARCHING

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def result(self) -> Optional[SearchResult]:
        return self._result

    @property
    def result_query(self) -> str:
        """The query the current result answers."""
        return self._result_query

    @property
    def result_revision(self) -> int:
        """Bumped whenever the result is replaced or cleared; typing leaves it alone."""
        return self._result_revision

    @property
    def result_text(self) -> str:
        return self._result.text if self._result else ""

    @property
    def citations(self) -> List[Citation]:
        return list(self._result.citations) if self._result else []

    @property
    def primary_map_title(self) -> Optional[str]:
        return self._result.primary_map_title if self._result else None

    @property
    def details_phase(self) -> DetailsPhase:
        return self._details_phase

    @property
    def is_fetching_details(self) -> bool:
        return self._details_phase is DetailsPhase.FETCHING

    @property
    def additional_details(self) -> str:
        return self._details

    @property
    def details_error(self) -> Optional[str]:
        return self._details_error

    # --------------------------------------------------------------- inputs
    def set_query(self, text: str) -> None:
        if text == self._query:
            return
        self._query = text
        self.query_changed.emit(text)
        self.changed.emit()

    def set_location(self, location: Optional[Location]) -> None:
        self._location = location
        self.changed.emit()

    # --------------------------------------------------------------- search
    def run_search(self) -> None:
        if not self._query.strip() or self.is_loading:
            return

        self._search_seq += 1
        seq = self._search_seq
        self._search_phase = SearchPhase.SEARCHING
        self._error = None
        self._result = None
        self._result_query = self._query
        self._result_revision += 1
        self._reset_details()
        self.changed.emit()

        query, location = self._query, self._location
        self._runner.submit(
            lambda: self._gateway.search_with_maps(query, location),
            partial(self._search_succeeded, seq),
            partial(self._search_failed, seq),
        )

    def _search_succeeded(self, seq: int, result: SearchResult) -> None:
        if seq != self._search_seq:
            logger.debug("Discarding stale search result #%d", seq)
            return
        self._result = result
        self._result_revision += 1
        self._search_phase = SearchPhase.SUCCEEDED
        self.changed.emit()

    def _search_failed(self, seq: int, exc: Exception) -> None:
        if seq != self._search_seq:
            logger.debug("Discarding stale search failure #%d", seq)
            return
        logger.error("Search failed: %s", exc)
        self._error = tr("errors.search")
        self._search_phase = SearchPhase.FAILED
        self.changed.emit()

    # -------------------------------------------------------------- details
    def run_details(self) -> None:
        # Elaborates on the query the shown result answers, not on the input
        # box, which may have been edited since.
        if not self._result_query or self.is_fetching_details:
            return

        self._details_seq += 1
        seq = self._details_seq
        self._details_phase = DetailsPhase.FETCHING
        self._details_error = None
        self._details = ""
        self.changed.emit()

        topic = self._result_query
        self._runner.submit(
            lambda: self._gateway.get_additional_details(topic),
            partial(self._details_succeeded, seq),
            partial(self._details_failed, seq),
        )

    def _details_succeeded(self, seq: int, text: str) -> None:
        if seq != self._details_seq:
            logger.debug("Discarding stale details #%d", seq)
            return
        self._details = text
        self._details_phase = DetailsPhase.SUCCEEDED
        self.changed.emit()

    def _details_failed(self, seq: int, exc: Exception) -> None:
        if seq != self._details_seq:
            logger.debug("Discarding stale details failure #%d", seq)
            return
        logger.error("Fetching details failed: %s", exc)
        self._details_error = tr("errors.details")
        self._details_phase = DetailsPhase.FAILED
        self.changed.emit()

    def _reset_details(self) -> None:
        # Also releases the details guard: an elaboration still in flight
        # belongs to the previous result and will be discarded.
        self._details_seq += 1
        self._details_phase = DetailsPhase.IDLE
        self._details = ""
        self._details_error = None
