from __future__ import annotations

import lente_local.speech as speech
from lente_local.models import TranscriptSegment
from lente_local.voice import VoiceInputController


def test_no_library_means_no_recognizer(monkeypatch, caplog):
    monkeypatch.setattr(speech, "HAVE_SPEECH", False)
    assert speech.create_speech_recognizer("pt-BR") is None
    assert "not supported" in caplog.text


def test_microphone_recognizer_reports_final_utterances():
    rec = speech.MicrophoneRecognizer("en")
    searches = []
    ctrl = VoiceInputController(rec, lambda: searches.append("search"), lang="pt-BR")
    assert rec.lang == "pt-BR"
    results = []
    rec.on_result = lambda segments: results.append(segments)
    rec._on_transcribed("mercado municipal")
    assert results == [[TranscriptSegment("mercado municipal", True)]]
    ctrl.teardown()


class FakeSR:
    """Stands in for the speech_recognition module."""

    class WaitTimeoutError(Exception):
        pass

    class UnknownValueError(Exception):
        pass

    class RequestError(Exception):
        pass

    class AudioData:
        def __init__(self, frame_data, sample_rate, sample_width):
            self.frame_data = frame_data
            self.sample_rate = sample_rate
            self.sample_width = sample_width

    class Microphone:
        SAMPLE_RATE = 16000
        SAMPLE_WIDTH = 2

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

    def __init__(self, chunks=(), silent_waits=0, on_chunk=None, on_wait=None, text="praia do forte"):
        self.chunks = list(chunks)
        self.silent_waits = silent_waits
        self.on_chunk = on_chunk
        self.on_wait = on_wait
        self.text = text
        self.listen_calls = 0
        self.recognized = []
        fake = self

        class Recognizer:
            def adjust_for_ambient_noise(self, source, duration=1):
                pass

            def listen(self, source, timeout=None, phrase_time_limit=None, stream=False):
                assert stream
                fake.listen_calls += 1
                if fake.listen_calls <= fake.silent_waits or not fake.chunks:
                    if fake.on_wait:
                        fake.on_wait(fake.listen_calls)
                    raise FakeSR.WaitTimeoutError()
                for i, data in enumerate(fake.chunks):
                    if fake.on_chunk:
                        fake.on_chunk(i)
                    yield FakeSR.AudioData(data, 16000, 2)

            def recognize_google(self, audio, language=None):
                fake.recognized.append((audio.frame_data, language))
                return fake.text

        self.Recognizer = Recognizer


def run_capture(monkeypatch, fake):
    monkeypatch.setattr(speech, "sr", fake, raising=False)
    worker = speech.CaptureWorker("pt-BR")
    events = []
    worker.capture_started.connect(lambda: events.append("start"))
    worker.transcribed.connect(lambda text: events.append(("text", text)))
    worker.failed.connect(lambda code: events.append(("error", code)))
    return worker, events


def test_stop_mid_phrase_still_transcribes_and_searches(monkeypatch):
    holder = {}
    fake = FakeSR(chunks=[b"ab", b"cd", b"ef"], on_chunk=lambda i: i == 1 and holder["worker"].request_stop())
    worker, events = run_capture(monkeypatch, fake)
    holder["worker"] = worker

    rec = speech.MicrophoneRecognizer("pt-BR")
    searches = []
    ctrl = VoiceInputController(rec, lambda: searches.append("search"), lang="pt-BR")
    queries = []
    ctrl.query_changed.connect(queries.append)
    worker.transcribed.connect(rec._on_transcribed)
    worker.failed.connect(rec._on_failed)

    rec.on_start()
    worker.run()
    rec.on_end()

    assert events == ["start", ("text", "praia do forte")]
    assert fake.recognized == [(b"abcd", "pt-BR")]
    assert queries == ["praia do forte"]
    assert searches == ["search"]


def test_abort_discards_the_audio(monkeypatch):
    holder = {}
    fake = FakeSR(chunks=[b"ab", b"cd"], on_chunk=lambda i: holder["worker"].request_abort())
    worker, events = run_capture(monkeypatch, fake)
    holder["worker"] = worker
    worker.run()
    assert events == ["start", ("error", "aborted")]
    assert fake.recognized == []


def test_silence_reports_no_speech(monkeypatch):
    fake = FakeSR(chunks=[])
    worker, events = run_capture(monkeypatch, fake)
    worker.run()
    assert events == ["start", ("error", "no-speech")]
    assert fake.listen_calls == speech.LISTEN_TIMEOUT // speech.WAIT_STEP


def test_stop_while_silent_ends_quietly(monkeypatch):
    holder = {}
    fake = FakeSR(chunks=[b"ab"], silent_waits=10, on_wait=lambda n: holder["worker"].request_stop())
    worker, events = run_capture(monkeypatch, fake)
    holder["worker"] = worker
    worker.run()
    assert events == ["start"]
    assert fake.listen_calls == 1
    assert fake.recognized == []


def test_speech_after_a_silent_step_is_captured(monkeypatch):
    fake = FakeSR(chunks=[b"xy"], silent_waits=2)
    worker, events = run_capture(monkeypatch, fake)
    worker.run()
    assert events == ["start", ("text", "praia do forte")]
    assert fake.recognized == [(b"xy", "pt-BR")]


class FakeThread:
    def __init__(self):
        self.calls = []

    def isRunning(self):
        return True

    def request_stop(self):
        self.calls.append("stop")

    def request_abort(self):
        self.calls.append("abort")

    def wait(self, *args):
        self.calls.append(("wait",) + args)
        return True


def test_recognizer_stop_abort_and_wait_reach_the_worker():
    rec = speech.MicrophoneRecognizer("pt-BR")
    assert rec.wait()
    rec._worker = FakeThread()
    rec.stop()
    rec.abort()
    assert rec.wait()
    assert rec.wait(500)
    assert rec._worker.calls == ["stop", "abort", ("wait",), ("wait", 500)]
