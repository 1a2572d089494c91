from __future__ import annotations
import logging
from typing import Callable, List, Optional

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from .config import get_speech_language
from .models import TranscriptSegment

try:
    import speech_recognition as sr
    HAVE_SPEECH = True
except Exception:
    HAVE_SPEECH = False

logger = logging.getLogger(__name__)

# Seconds to wait for speech to begin, and the longest single utterance.
LISTEN_TIMEOUT = 6
PHRASE_TIME_LIMIT = 12
# Silence is waited for in short steps so a stop request is noticed quickly.
WAIT_STEP = 1


class CaptureWorker(QThread):
    """Captures one utterance from the microphone and transcribes it.

    `request_stop()` ends capture early and still transcribes what was
    heard; `request_abort()` ends it and discards the audio.
    """

    capture_started = pyqtSignal()
    transcribed = pyqtSignal(str)
    failed = pyqtSignal(str)  # Web Speech style error code

    def __init__(self, lang: str):
        super().__init__()
        self.lang = lang
        self._stop_requested = False
        self._abort_requested = False

    def request_stop(self) -> None:
        self._stop_requested = True

    def request_abort(self) -> None:
        self._abort_requested = True
        self._stop_requested = True

    def run(self):
        recognizer = sr.Recognizer()
        try:
            with sr.Microphone() as source:
                recognizer.adjust_for_ambient_noise(source, duration=0.3)
                self.capture_started.emit()
                frames = self._capture(recognizer, source)
                sample_rate, sample_width = source.SAMPLE_RATE, source.SAMPLE_WIDTH
        except (OSError, AttributeError) as e:
            logger.debug("Microphone capture failed: %s", e)
            self.failed.emit("audio-capture")
            return

        if self._abort_requested:
            self.failed.emit("aborted")
            return
        if frames is None:
            self.failed.emit("no-speech")
            return
        if not frames:
            # stopped before anything was said
            return

        try:
            text = recognizer.recognize_google(
                sr.AudioData(frames, sample_rate, sample_width), language=self.lang
            )
        except sr.UnknownValueError:
            self.failed.emit("no-speech")
        except sr.RequestError as e:
            logger.debug("Speech service request failed: %s", e)
            self.failed.emit("network")
        else:
            if self._abort_requested:
                self.failed.emit("aborted")
            else:
                self.transcribed.emit(text)

    def _capture(self, recognizer, source) -> Optional[bytes]:
        """Raw frames of one phrase.

        Returns None when nobody spoke within LISTEN_TIMEOUT and b"" when
        stopped before speech began.
        """
        waited = 0
        while not self._stop_requested:
            frames = []
            try:
                for chunk in recognizer.listen(
                    source, timeout=WAIT_STEP, phrase_time_limit=PHRASE_TIME_LIMIT, stream=True
                ):
                    frames.append(chunk.frame_data)
                    if self._stop_requested:
                        break
            except sr.WaitTimeoutError:
                waited += WAIT_STEP
                if waited >= LISTEN_TIMEOUT:
                    return None
                continue
            return b"".join(frames)
        return b""


class MicrophoneRecognizer(QObject):
    """Speech-recognition capability handle backed by the microphone.

    Exposes the same surface as the browser's recognition object: the
    `continuous`, `interim_results` and `lang` settings, the `on_start`,
    `on_result`, `on_end` and `on_error` handler slots, and `start()`, `stop()`
    and `abort()`. Handlers are always called on the UI thread.
    """

    def __init__(self, lang: Optional[str] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.continuous = False
        self.interim_results = True
        self.lang = lang or get_speech_language()
        self.on_start: Optional[Callable[[], None]] = None
        self.on_result: Optional[Callable[[List[TranscriptSegment]], None]] = None
        self.on_end: Optional[Callable[[], None]] = None
        self.on_error: Optional[Callable[[str], None]] = None
        self._worker: Optional[CaptureWorker] = None

    def start(self) -> None:
        if self._worker is not None and self._worker.isRunning():
            raise RuntimeError("speech recognition has already started")
        worker = CaptureWorker(self.lang)
        worker.capture_started.connect(self._on_capture_started)
        worker.transcribed.connect(self._on_transcribed)
        worker.failed.connect(self._on_failed)
        worker.finished.connect(self._on_finished)
        self._worker = worker
        worker.start()

    def stop(self) -> None:
        """End capture; whatever was already said is still transcribed."""
        if self._worker is not None and self._worker.isRunning():
            self._worker.request_stop()

    def abort(self) -> None:
        """End capture and drop the audio; reported as "aborted"."""
        if self._worker is not None and self._worker.isRunning():
            self._worker.request_abort()

    def wait(self, msecs: Optional[int] = None) -> bool:
        """Block until the capture thread has finished."""
        worker = self._worker
        if worker is None:
            return True
        return worker.wait() if msecs is None else worker.wait(msecs)

    def _on_capture_started(self) -> None:
        if self.on_start:
            self.on_start()

    def _on_transcribed(self, text: str) -> None:
        # The recognizer only yields complete utterances, never interim ones.
        if self.on_result:
            self.on_result([TranscriptSegment(text, True)])

    def _on_failed(self, code: str) -> None:
        if self.on_error:
            self.on_error(code)

    def _on_finished(self) -> None:
        worker = self.sender()
        if worker is self._worker:
            self._worker = None
        if worker is not None:
            worker.deleteLater()
        if self.on_end:
            self.on_end()


def create_speech_recognizer(lang: Optional[str] = None) -> Optional[MicrophoneRecognizer]:
    """Return a recognizer handle, or None when speech input is unavailable."""
    if not HAVE_SPEECH:
        logger.warning("Speech recognition not supported: SpeechRecognition is not installed.")
        return None
    try:
        microphones = sr.Microphone.list_microphone_names()
    except (AttributeError, OSError) as e:
        logger.warning("Speech recognition not supported: %s", e)
        return None
    if not microphones:
        logger.warning("Speech recognition not supported: no microphone found.")
        return None
    return MicrophoneRecognizer(lang)
