"""Lifecycle controller for rendezvous simulations.

The controller is the only entry point a host needs:

    controller = SimulationController(scheduler, renderer=draw)
    controller.start(config)      # solve median, build simulator, register ticks
    controller.restart(new_config)
    controller.cancel()

The scheduler is any object with
`schedule_periodic(interval, callback, label) -> registration`, where the
registration exposes `cancel()` and `active` (see scheduler.py).

Author: rendezvous_mobility contributors
Date: October 19, 2026
"""

import logging
from typing import Callable, List, Optional

from .config import SimulationConfig
from .median import EmptyInputError, MedianResult, solve_geometric_median
from .simulator import PhaseSimulator, SimulationState

logger = logging.getLogger(__name__)

Renderer = Callable[[SimulationState], None]


class SimulationController:
    """Owns the active simulator and its scheduler registration."""

    def __init__(self, scheduler, renderer: Optional[Renderer] = None):
        self._scheduler = scheduler
        self._renderers: List[Renderer] = []
        if renderer is not None:
            self._renderers.append(renderer)

        self._config: Optional[SimulationConfig] = None
        self._median: Optional[MedianResult] = None
        self._simulator: Optional[PhaseSimulator] = None
        self._registration = None

    def add_renderer(self, renderer: Renderer) -> None:
        self._renderers.append(renderer)

    @property
    def config(self) -> Optional[SimulationConfig]:
        return self._config

    @property
    def median(self) -> Optional[MedianResult]:
        return self._median

    @property
    def simulator(self) -> Optional[PhaseSimulator]:
        return self._simulator

    @property
    def state(self) -> Optional[SimulationState]:
        return self._simulator.state if self._simulator is not None else None

    @property
    def running(self) -> bool:
        return self._registration is not None and self._registration.active

    def start(self, config: SimulationConfig) -> SimulationState:
        """Start a simulation, replacing any simulation already running.

        Raises:
            EmptyInputError: If `config.agents` is empty. In that case no
                scheduler registration is touched.
        """
        if not config.agents:
            raise EmptyInputError("Cannot start a simulation without agents")

        median = solve_geometric_median(
            config.agents, config.max_iterations, config.convergence_epsilon
        )
        simulator = PhaseSimulator(
            config.agents, median.point, config.destination, config.phase_increment
        )

        # Old ticks must stop before the new stream exists.
        self._cancel_registration()

        self._config = config
        self._median = median
        self._simulator = simulator
        logger.info(
            "Starting rendezvous: %d agents, meeting point (%.6f, %.6f), converged=%s after %d iterations",
            len(config.agents),
            median.point.latitude,
            median.point.longitude,
            median.converged,
            median.iterations,
        )

        self._publish(simulator.state)
        self._registration = self._scheduler.schedule_periodic(
            config.tick_interval, self._on_tick, "rendezvous tick"
        )
        return simulator.state

    def restart(self, config: SimulationConfig) -> SimulationState:
        """Discard the current run and start over from `config`.

        The meeting point is recomputed from the new agents only. If the
        new config is rejected, the current run is left untouched.
        """
        logger.info("Restarting rendezvous with %d agents", len(config.agents))
        return self.start(config)

    def cancel(self) -> None:
        """Stop ticking and discard the simulation state."""
        self._cancel_registration()
        if self._simulator is not None:
            logger.info("Rendezvous cancelled in phase %s", self._simulator.phase.value)
        self._simulator = None
        self._median = None
        self._config = None

    def _cancel_registration(self):
        if self._registration is not None:
            self._registration.cancel()
            self._registration = None

    def _on_tick(self) -> bool:
        simulator = self._simulator
        if simulator is None:
            return False
        state = simulator.tick()
        self._publish(state)
        if simulator.finished:
            logger.info("Rendezvous arrived after %d ticks", state.tick_count)
            return False
        return True

    def _publish(self, state: SimulationState):
        for renderer in self._renderers:
            renderer(state)
