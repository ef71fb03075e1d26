"""Periodic tick schedulers.

A scheduler fires a callback every `interval` seconds until the callback
returns False or its registration is cancelled. Two hosts are provided:

- EventLoopScheduler: re-arms itself on a GrADyS-SIM NG EventLoop, the
  same way the mobility handlers re-schedule their update event.
- ManualTickScheduler: ticks only when the host calls `advance()`. Used for
  headless runs and tests.

Author: rendezvous_mobility contributors
Date: October 19, 2026
"""

import logging
from typing import Callable, List, Optional

from gradysim.simulator.event import EventLoop

logger = logging.getLogger(__name__)

TickCallback = Callable[[], Optional[bool]]


class TickRegistration:
    """Handle to one periodic callback."""

    def __init__(self, interval: float, callback: TickCallback, label: str = ""):
        self.interval = interval
        self.label = label
        self.fired = 0
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if self._active:
            logger.debug("Cancelled registration %r after %d ticks", self.label, self.fired)
        self._active = False

    def fire(self) -> bool:
        """Run the callback once. Returns True if another tick is wanted."""
        if not self._active:
            return False
        keep_going = self._callback()
        self.fired += 1
        if keep_going is False:
            self._active = False
        return self._active


class EventLoopScheduler:
    """Periodic scheduler on top of a GrADyS-SIM NG EventLoop.

    The loop has no way to withdraw a queued event, so a cancelled
    registration still has its pending event popped once; that event finds
    the registration inactive and neither calls back nor re-arms.
    """

    def __init__(self, event_loop: EventLoop):
        self._loop = event_loop

    def schedule_periodic(
        self, interval: float, callback: TickCallback, label: str = "rendezvous tick"
    ) -> TickRegistration:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        registration = TickRegistration(interval, callback, label)
        self._schedule_next(registration)
        return registration

    def _schedule_next(self, registration: TickRegistration):
        def fire():
            if registration.fire():
                self._schedule_next(registration)

        self._loop.schedule_event(
            self._loop.current_time + registration.interval,
            fire,
            registration.label,
        )


class ManualTickScheduler:
    """Host-stepped scheduler: nothing happens until `advance()` is called.

    Every `advance()` step fires each active registration once, in the order
    they were registered.
    """

    def __init__(self):
        self._registrations: List[TickRegistration] = []

    def schedule_periodic(
        self, interval: float, callback: TickCallback, label: str = "rendezvous tick"
    ) -> TickRegistration:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        registration = TickRegistration(interval, callback, label)
        self._registrations.append(registration)
        return registration

    @property
    def active_registrations(self) -> List[TickRegistration]:
        return [r for r in self._registrations if r.active]

    def advance(self, ticks: int = 1) -> int:
        """Fire `ticks` rounds. Returns the number of callbacks invoked."""
        calls = 0
        for _ in range(ticks):
            active = self.active_registrations
            if not active:
                break
            for registration in active:
                if registration.active:
                    registration.fire()
                    calls += 1
        self._registrations = self.active_registrations
        return calls

    def run_until_idle(self, max_ticks: int = 100_000) -> int:
        """Advance until no registration is active. Returns rounds run."""
        rounds = 0
        while self.active_registrations and rounds < max_ticks:
            self.advance(1)
            rounds += 1
        return rounds
