from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from services.storefront.app.ui.dom import Element

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class GuardState(str, Enum):
    IDLE = "IDLE"
    SUBMITTING = "SUBMITTING"
    COOLING = "COOLING"
    SUBMITTING_WHILE_COOLING = "SUBMITTING_WHILE_COOLING"


class SubmissionGuard:
    """Two independent gates in front of the confirm control.

    `in_flight` is held from an accepted click until the submission finishes;
    `cooldown_remaining` counts down once per tick after the submission starts. A click
    is accepted only when both are clear. Neither gate clears the other.

    Both flags flip synchronously, before the caller's first await, so on a single event
    loop no second click can slip in while the first request is pending.
    """

    def __init__(
        self,
        control: Element | None,
        *,
        cooldown_seconds: int = 10,
        tick_s: float = 1.0,
        sleep: Sleep = asyncio.sleep,
        on_cooldown_finished: Callable[[], None] | None = None,
    ) -> None:
        self._control = control
        self._cooldown_seconds = cooldown_seconds
        self._tick_s = tick_s
        self._sleep = sleep
        self._on_cooldown_finished = on_cooldown_finished

        self._in_flight = False
        self._remaining = 0
        self._original_label: str | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def cooldown_remaining(self) -> int:
        return self._remaining

    @property
    def state(self) -> GuardState:
        if self._in_flight and self._remaining:
            return GuardState.SUBMITTING_WHILE_COOLING
        if self._in_flight:
            return GuardState.SUBMITTING
        if self._remaining:
            return GuardState.COOLING
        return GuardState.IDLE

    def accepts(self) -> bool:
        return not self._in_flight and self._remaining == 0

    def try_acquire(self) -> bool:
        if not self.accepts():
            logger.debug("Confirm ignored in state %s", self.state.value)
            return False
        self._in_flight = True
        return True

    def release(self) -> None:
        # The cooldown keeps its own schedule.
        self._in_flight = False

    def start_cooldown(self) -> None:
        """Disable the control and start counting down. Must run inside the event loop."""

        if self._task is not None and not self._task.done():
            self._task.cancel()

        if self._control is not None and self._original_label is None:
            self._original_label = self._control.text

        self._remaining = self._cooldown_seconds
        self._render()
        self._task = asyncio.get_running_loop().create_task(self._run_cooldown())

    def tick(self) -> None:
        if self._remaining <= 0:
            return

        self._remaining -= 1
        self._render()
        if self._remaining == 0:
            logger.debug("Confirm cooldown finished")
            if self._on_cooldown_finished is not None:
                self._on_cooldown_finished()

    async def aclose(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run_cooldown(self) -> None:
        while self._remaining > 0:
            await self._sleep(self._tick_s)
            self.tick()

    def _render(self) -> None:
        if self._control is None or self._original_label is None:
            return
        if self._remaining > 0:
            self._control.disabled = True
            self._control.text = f"{self._original_label} ({self._remaining})"
        else:
            self._control.disabled = False
            self._control.text = self._original_label
