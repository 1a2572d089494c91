from __future__ import annotations
import logging
from typing import Any, Callable, Iterable, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from .config import get_speech_language
from .models import TranscriptSegment

logger = logging.getLogger(__name__)

# Raised when the user stops talking, stops capture or denies the microphone.
BENIGN_ERRORS = frozenset({"aborted", "no-speech", "audio-capture"})


def compose_transcript(segments: Iterable[TranscriptSegment]) -> Tuple[str, str]:
    """Build (display text, final text) from a cumulative list of segments.

    Final segments are each followed by one space, interim ones are appended
    as they are; both results are trimmed.
    """
    final = ""
    interim = ""
    for s in segments:
        if s.is_final:
            final += s.transcript + " "
        else:
            interim += s.transcript
    return (final + interim).strip(), final.strip()


class VoiceInputController(QObject):
    """Turns speech-recognition events into query updates and searches.

    `recognizer` is the optional capability handle (see `speech`); when it
    is None every command is a no-op and `is_supported` is False.
    """

    query_changed = pyqtSignal(str)
    listening_changed = pyqtSignal(bool)

    def __init__(
        self,
        recognizer: Any,
        on_search: Callable[[], None],
        lang: Optional[str] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._recognizer = recognizer
        # Read at end of capture, never captured by the handlers.
        self._search_callback = on_search
        self._is_loading = False
        self._is_listening = False
        self._pending_final: Optional[str] = None

        if recognizer is not None:
            recognizer.continuous = False
            recognizer.interim_results = True
            recognizer.lang = lang or get_speech_language()
            recognizer.on_start = self._handle_start
            recognizer.on_result = self._handle_result
            recognizer.on_end = self._handle_end
            recognizer.on_error = self._handle_error

    @property
    def is_supported(self) -> bool:
        return self._recognizer is not None

    @property
    def is_listening(self) -> bool:
        return self._is_listening

    @property
    def pending_final_transcript(self) -> Optional[str]:
        return self._pending_final

    def set_search_callback(self, callback: Callable[[], None]) -> None:
        self._search_callback = callback

    def set_loading(self, loading: bool) -> None:
        self._is_loading = loading

    def toggle_listening(self) -> None:
        if self._recognizer is None or self._is_loading:
            return

        if self._is_listening:
            self._recognizer.stop()
            return

        self.query_changed.emit("")
        self._pending_final = None
        try:
            self._recognizer.start()
        except Exception as e:
            logger.error("Error starting speech recognition: %s", e)

    def teardown(self) -> None:
        """Detach from the recognizer and abort any capture in progress."""
        recognizer, self._recognizer = self._recognizer, None
        if recognizer is None:
            return
        recognizer.on_start = None
        recognizer.on_result = None
        recognizer.on_end = None
        recognizer.on_error = None
        recognizer.abort()
        self._pending_final = None
        self._set_listening(False)

    def _handle_start(self) -> None:
        self._set_listening(True)

    def _handle_result(self, segments: Iterable[TranscriptSegment]) -> None:
        segments = list(segments)
        display, final = compose_transcript(segments)
        self.query_changed.emit(display)
        if any(s.is_final for s in segments):
            self._pending_final = final

    def _handle_end(self) -> None:
        self._set_listening(False)
        if self._pending_final is not None:
            self._pending_final = None
            self._search_callback()

    def _handle_error(self, code: str) -> None:
        if code in BENIGN_ERRORS:
            logger.info("Speech recognition event: %s", code)
        else:
            logger.error("Speech recognition error: %s", code)
        self._set_listening(False)
        self._pending_final = None

    def _set_listening(self, listening: bool) -> None:
        if listening != self._is_listening:
            self._is_listening = listening
            self.listening_changed.emit(listening)
