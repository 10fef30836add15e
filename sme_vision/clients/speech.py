"""Speech synthesis capability and the relay used to reach the browser."""

from __future__ import annotations

import itertools
import logging
from collections import deque
from typing import Deque, Protocol

from sme_vision.schemas import Utterance

logger = logging.getLogger(__name__)


class SpeechEngine(Protocol):
    """Minimal surface of a speech synthesiser."""

    def speak(self, text: str, locale: str, rate: float = 1.0) -> None:
        ...

    def cancel_all(self) -> None:
        ...


class SpeechRelay:
    """Hold the utterance one dashboard's browser should currently be playing.

    The browser polls ``current()`` and hands the text to its own speech
    synthesiser. At most one utterance is active; ``cancel_all`` drops it and
    ``speak`` queues the replacement. ``current()`` keeps returning the same
    utterance until the browser reports it played through ``finish``, so a
    poll that races playback sees the same ``utterance_id`` again.
    """

    def __init__(self, history_size: int = 50) -> None:
        self._ids = itertools.count(1)
        self._queue: Deque[Utterance] = deque()
        self._history: Deque[Utterance] = deque(maxlen=history_size)

    def speak(self, text: str, locale: str, rate: float = 1.0) -> None:
        utterance = Utterance(
            utterance_id=next(self._ids), text=text, locale=locale, rate=rate
        )
        self._queue.append(utterance)
        self._history.append(utterance)
        logger.info(
            "Queued utterance %d (%s, %d chars)",
            utterance.utterance_id,
            locale,
            len(text),
        )

    def cancel_all(self) -> None:
        if self._queue:
            logger.debug("Cancelling %d pending utterance(s)", len(self._queue))
        self._queue.clear()

    def current(self) -> Utterance | None:
        return self._queue[0] if self._queue else None

    def finish(self, utterance_id: int) -> bool:
        """Retire the active utterance once played.

        Returns ``False`` when ``utterance_id`` is no longer the active one,
        for example because newer narration already replaced it.
        """
        if not self._queue or self._queue[0].utterance_id != utterance_id:
            return False
        self._queue.popleft()
        logger.debug("Utterance %d finished", utterance_id)
        return True

    @property
    def pending(self) -> tuple[Utterance, ...]:
        return tuple(self._queue)

    @property
    def history(self) -> tuple[Utterance, ...]:
        return tuple(self._history)


__all__ = ["SpeechEngine", "SpeechRelay"]
