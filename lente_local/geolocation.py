from __future__ import annotations
import logging
from enum import IntEnum
from typing import Any, Callable, Optional

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtPositioning import QGeoPositionInfoSource

from .config import GEOLOCATION_TIMEOUT_MS
from .i18n import tr
from .models import Location, LocationStatus

logger = logging.getLogger(__name__)


class LocationErrorCode(IntEnum):
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


_MESSAGE_KEYS = {
    LocationErrorCode.PERMISSION_DENIED: "location.permission_denied",
    LocationErrorCode.POSITION_UNAVAILABLE: "location.unavailable",
    LocationErrorCode.TIMEOUT: "location.timeout",
}

_QT_ERRORS = {
    QGeoPositionInfoSource.Error.AccessError: LocationErrorCode.PERMISSION_DENIED,
    QGeoPositionInfoSource.Error.ClosedError: LocationErrorCode.POSITION_UNAVAILABLE,
    QGeoPositionInfoSource.Error.UpdateTimeoutError: LocationErrorCode.TIMEOUT,
}


def location_error_message(code: Any) -> str:
    """User message for a location error code; unknown codes get the generic one."""
    try:
        key = _MESSAGE_KEYS.get(LocationErrorCode(code))
    except (TypeError, ValueError):
        key = None
    return tr(key or "location.generic")


def _default_source_factory(parent: QObject) -> Optional[QGeoPositionInfoSource]:
    source = QGeoPositionInfoSource.createDefaultSource(parent)
    if source is not None:
        source.setPreferredPositioningMethods(
            QGeoPositionInfoSource.PositioningMethod.SatellitePositioningMethods
        )
    return source


class LocationRequester(QObject):
    """One-shot position requests mapped onto a four-state status.

    Must live on the UI thread; position sources deliver their signals
    there.
    """

    status_changed = pyqtSignal(object)  # LocationStatus
    location_changed = pyqtSignal(object)  # Optional[Location]
    error_changed = pyqtSignal(object)  # Optional[str]

    def __init__(self, source_factory: Optional[Callable[[QObject], Any]] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._source_factory = source_factory or _default_source_factory
        self._source: Any = None
        self._status = LocationStatus.IDLE
        self._location: Optional[Location] = None
        self._error: Optional[str] = None

    @property
    def status(self) -> LocationStatus:
        return self._status

    @property
    def location(self) -> Optional[Location]:
        return self._location

    @property
    def error(self) -> Optional[str]:
        return self._error

    def request_location(self) -> None:
        if self._status is LocationStatus.LOADING:
            return
        self._set_error(None)
        self._set_status(LocationStatus.LOADING)

        source = self._ensure_source()
        if source is None:
            self._fail(LocationErrorCode.POSITION_UNAVAILABLE, "no positioning source available")
            return
        source.requestUpdate(GEOLOCATION_TIMEOUT_MS)

    def _ensure_source(self) -> Any:
        if self._source is None:
            self._source = self._source_factory(self)
            if self._source is not None:
                self._source.positionUpdated.connect(self._on_position)
                self._source.errorOccurred.connect(self._on_error)
        return self._source

    def _on_position(self, info: Any) -> None:
        if self._status is not LocationStatus.LOADING:
            return
        coordinate = info.coordinate()
        if not coordinate.isValid():
            self._fail(LocationErrorCode.POSITION_UNAVAILABLE, "invalid coordinate")
            return
        self._location = Location(latitude=coordinate.latitude(), longitude=coordinate.longitude())
        self.location_changed.emit(self._location)
        self._set_status(LocationStatus.SUCCESS)

    def _on_error(self, error: Any) -> None:
        if self._status is not LocationStatus.LOADING:
            return
        code = _QT_ERRORS.get(error)
        self._fail(code, getattr(error, "name", str(error)))

    def _fail(self, code: Any, detail: str) -> None:
        logger.error("Geolocation error (%s): %s", getattr(code, "name", code), detail)
        self._set_error(location_error_message(code))
        self._set_status(LocationStatus.ERROR)
        if self._location is not None:
            self._location = None
            self.location_changed.emit(None)

    def _set_status(self, status: LocationStatus) -> None:
        self._status = status
        self.status_changed.emit(status)

    def _set_error(self, message: Optional[str]) -> None:
        self._error = message
        self.error_changed.emit(message)
