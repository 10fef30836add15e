try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from sme_vision.clients import SpeechRelay
from sme_vision.schemas import SummaryLanguage
from sme_vision.services.narration import NarrationEngine, locale_for


class RecordingSpeechEngine:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def speak(self, text: str, locale: str, rate: float = 1.0) -> None:
        self.calls.append(("speak", text, locale, rate))

    def cancel_all(self) -> None:
        self.calls.append(("cancel",))


@pytest.mark.parametrize(
    "language, locale",
    [
        ("tamil", "ta-IN"),
        ("hindi", "hi-IN"),
        ("english", "en-US"),
        (SummaryLanguage.TAMIL, "ta-IN"),
        ("klingon", "en-US"),
        (None, "en-US"),
    ],
)
def test_locale_mapping(language, locale):
    assert locale_for(language) == locale


def test_speak_cancels_before_enqueueing_once():
    engine = RecordingSpeechEngine()

    request = NarrationEngine(engine).speak("Namaste", "hindi")

    assert engine.calls == [("cancel",), ("speak", "Namaste", "hi-IN", 1.0)]
    assert request.locale == "hi-IN"
    assert request.text == "Namaste"


def test_rapid_requests_leave_only_the_latest_active():
    relay = SpeechRelay()
    narration = NarrationEngine(relay)

    narration.speak("first", "english")
    narration.speak("second", "tamil")

    assert len(relay.pending) == 1
    current = relay.current()
    assert current.text == "second"
    assert current.locale == "ta-IN"
    assert [u.text for u in relay.history] == ["first", "second"]


def test_relay_ids_increase_and_cancel_clears():
    relay = SpeechRelay()

    relay.speak("a", "en-US")
    first_id = relay.current().utterance_id
    relay.cancel_all()
    assert relay.current() is None

    relay.speak("b", "en-US", rate=0.95)
    assert relay.current().utterance_id > first_id
    assert relay.current().rate == 0.95


def test_finish_retires_only_the_active_utterance():
    relay = SpeechRelay()
    narration = NarrationEngine(relay)
    narration.speak("old")
    stale_id = relay.current().utterance_id
    narration.speak("new")
    active_id = relay.current().utterance_id

    assert relay.finish(stale_id) is False
    assert relay.current().utterance_id == active_id

    assert relay.finish(active_id) is True
    assert relay.current() is None
    assert relay.finish(active_id) is False
