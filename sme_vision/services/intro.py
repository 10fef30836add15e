"""Two-phase splash sequence shown when the dashboard mounts."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional

from sme_vision.schemas import UiPhase

from .narration import NarrationEngine

logger = logging.getLogger(__name__)

PhaseListener = Callable[[UiPhase], None]


class IntroSequencer:
    """Drive ``UiPhase`` from intro to main on two one-shot timers.

    Both delays are measured from ``start()``. The first expands the title and
    speaks the welcome line; the second unmounts the intro for good.
    ``teardown()`` cancels whatever has not fired yet.
    """

    def __init__(
        self,
        narration: NarrationEngine,
        *,
        expand_delay: float = 1.8,
        main_delay: float = 4.2,
        welcome_text: str = "Welcome to SME Vision",
        welcome_rate: float = 0.95,
    ) -> None:
        self._narration = narration
        self._expand_delay = expand_delay
        self._main_delay = main_delay
        self._welcome_text = welcome_text
        self._welcome_rate = welcome_rate
        self._phase = UiPhase.INTRO
        self._handles: List[asyncio.TimerHandle] = []
        self._listeners: List[PhaseListener] = []
        self._started = False
        self._torn_down = False

    @property
    def phase(self) -> UiPhase:
        return self._phase

    @property
    def intro_visible(self) -> bool:
        return self._phase is not UiPhase.MAIN

    def subscribe(self, listener: PhaseListener) -> None:
        self._listeners.append(listener)

    def start(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        if self._started or self._torn_down:
            return
        loop = loop or asyncio.get_running_loop()
        self._started = True
        self._handles = [
            loop.call_later(self._expand_delay, self._expand),
            loop.call_later(self._main_delay, self._finish),
        ]
        logger.info(
            "Intro scheduled (expand in %.2fs, main in %.2fs)",
            self._expand_delay,
            self._main_delay,
        )

    def teardown(self) -> None:
        self._torn_down = True
        for handle in self._handles:
            handle.cancel()
        self._handles = []

    def _expand(self) -> None:
        if self._advance(UiPhase.EXPANDED):
            self._narration.speak(self._welcome_text, rate=self._welcome_rate)

    def _finish(self) -> None:
        self._advance(UiPhase.MAIN)
        self._handles = []

    def _advance(self, phase: UiPhase) -> bool:
        if self._torn_down or phase.rank <= self._phase.rank:
            return False
        self._phase = phase
        logger.info("UI phase -> %s", phase.value)
        for listener in list(self._listeners):
            listener(phase)
        return True


__all__ = ["IntroSequencer"]
