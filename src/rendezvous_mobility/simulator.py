"""Phase-based rendezvous simulator.

The simulator owns every mutable position of one rendezvous run and
advances it one tick at a time:

    APPROACHING -> MERGED -> ARRIVED

- APPROACHING: each agent moves on a straight line (per axis) from its
  start position to the meeting point.
- MERGED: the agents travel as a single entity from the meeting point to
  the destination.
- ARRIVED: terminal; further ticks change nothing.

The simulator never schedules anything itself. A host calls `tick()` and
receives an immutable SimulationState snapshot.

Author: rendezvous_mobility contributors
Date: October 19, 2026
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

from .geo import GeoPoint, interpolate
from .median import EmptyInputError

logger = logging.getLogger(__name__)

# Absorbs float error in ticks * increment (e.g. 50 * 0.02).
_PROGRESS_TOLERANCE: float = 1e-9


class Phase(Enum):
    """Simulation phase."""

    APPROACHING = "approaching"
    MERGED = "merged"
    ARRIVED = "arrived"


_NEXT_PHASE = {
    Phase.APPROACHING: Phase.MERGED,
    Phase.MERGED: Phase.ARRIVED,
}


@dataclass
class Agent:
    """One moving agent. Mutated only by PhaseSimulator."""
    id: int
    start_position: GeoPoint
    current_position: GeoPoint


@dataclass(frozen=True)
class SimulationState:
    """Read-only snapshot of a simulation after a tick.

    `agent_positions` is meaningful while approaching; `merged_position`
    is meaningful once merged. Use `active_positions` to get whichever
    applies.
    """
    phase: Phase
    approach_progress: float
    home_progress: float
    meeting_point: GeoPoint
    merged_position: GeoPoint
    agent_positions: Tuple[GeoPoint, ...]
    start_positions: Tuple[GeoPoint, ...]
    destination: GeoPoint
    tick_count: int = 0

    @property
    def is_merged(self) -> bool:
        return self.phase is not Phase.APPROACHING

    @property
    def active_positions(self) -> Tuple[GeoPoint, ...]:
        if self.is_merged:
            return (self.merged_position,)
        return self.agent_positions


class PhaseSimulator:
    """Tick-driven state machine for one rendezvous run.

    A simulator is built once per agent set. When the agents change, build
    a new simulator (with a new meeting point) instead of mutating this one.
    """

    def __init__(
        self,
        agents: Sequence[GeoPoint],
        meeting_point: GeoPoint,
        destination: GeoPoint,
        phase_increment: float,
    ):
        if not agents:
            raise EmptyInputError("No agents provided")
        if not (0.0 < phase_increment <= 1.0):
            raise ValueError("phase_increment must be in (0, 1]")

        self._agents: List[Agent] = [
            Agent(id=index, start_position=position, current_position=position)
            for index, position in enumerate(agents)
        ]
        self._meeting_point = meeting_point
        self._destination = destination
        self._phase_increment = phase_increment

        self._phase = Phase.APPROACHING
        self._approach_ticks = 0
        self._home_ticks = 0
        self._approach_progress = 0.0
        self._home_progress = 0.0
        self._merged_position = meeting_point
        self._tick_count = 0

        self._snapshot = self._make_snapshot()

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def agents(self) -> Tuple[Agent, ...]:
        return tuple(self._agents)

    @property
    def meeting_point(self) -> GeoPoint:
        return self._meeting_point

    @property
    def destination(self) -> GeoPoint:
        return self._destination

    @property
    def finished(self) -> bool:
        """True once ARRIVED; no further ticks are needed."""
        return self._phase is Phase.ARRIVED

    @property
    def state(self) -> SimulationState:
        return self._snapshot

    def tick(self) -> SimulationState:
        """Advance one step and return the new snapshot."""
        if self._phase is Phase.ARRIVED:
            return self._snapshot

        if self._phase is Phase.APPROACHING:
            self._tick_approaching()
        else:
            self._tick_merged()

        self._tick_count += 1
        self._snapshot = self._make_snapshot()
        logger.debug(
            "tick=%d phase=%s approach=%.3f home=%.3f",
            self._tick_count,
            self._phase.value,
            self._approach_progress,
            self._home_progress,
        )
        return self._snapshot

    def _tick_approaching(self):
        for agent in self._agents:
            agent.current_position = interpolate(
                agent.start_position, self._meeting_point, self._approach_progress
            )

        self._approach_ticks += 1
        self._approach_progress = self._progress_after(self._approach_ticks)

        if self._approach_progress >= 1.0:
            for agent in self._agents:
                agent.current_position = self._meeting_point
            self._home_ticks = 0
            self._home_progress = 0.0
            self._merged_position = self._meeting_point
            self._advance_phase()

    def _tick_merged(self):
        self._merged_position = interpolate(
            self._meeting_point, self._destination, self._home_progress
        )

        self._home_ticks += 1
        self._home_progress = self._progress_after(self._home_ticks)

        if self._home_progress >= 1.0:
            self._merged_position = self._destination
            self._advance_phase()

    def _progress_after(self, ticks: int) -> float:
        progress = ticks * self._phase_increment
        if progress >= 1.0 - _PROGRESS_TOLERANCE:
            return 1.0
        return progress

    def _advance_phase(self):
        previous = self._phase
        self._phase = _NEXT_PHASE[previous]
        logger.info(
            "Phase %s -> %s after %d ticks",
            previous.value,
            self._phase.value,
            self._tick_count + 1,
        )

    def _make_snapshot(self) -> SimulationState:
        return SimulationState(
            phase=self._phase,
            approach_progress=self._approach_progress,
            home_progress=self._home_progress,
            meeting_point=self._meeting_point,
            merged_position=self._merged_position,
            agent_positions=tuple(agent.current_position for agent in self._agents),
            start_positions=tuple(agent.start_position for agent in self._agents),
            destination=self._destination,
            tick_count=self._tick_count,
        )
