"""
Configuration dataclass for a rendezvous simulation.

Author: rendezvous_mobility contributors
Date: October 19, 2026
"""

from dataclasses import dataclass
from typing import Tuple

from .geo import GeoPoint

DEFAULT_TICK_INTERVAL_MS: int = 100
DEFAULT_PHASE_INCREMENT: float = 0.02
DEFAULT_CONVERGENCE_EPSILON: float = 1e-10
DEFAULT_MAX_ITERATIONS: int = 100


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable inputs of one rendezvous simulation.

    Attributes:
        agents: Starting positions, one per agent. Order defines agent ids.
        destination: Final destination of the merged entity.
        tick_interval_ms: Period between ticks requested from the host scheduler.
            Typical: 100 ms.
        phase_increment: Progress added per tick, in (0, 1].
            0.02 gives 50 ticks per phase (about 5 s at 100 ms).
        convergence_epsilon: Coordinate-change threshold (degrees) that ends
            the median iteration.
        max_iterations: Upper bound on median iterations.

    Ranges are the caller's responsibility; only the agent count is
    checked, when the simulation starts.
    """
    agents: Tuple[GeoPoint, ...]
    destination: GeoPoint
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    phase_increment: float = DEFAULT_PHASE_INCREMENT
    convergence_epsilon: float = DEFAULT_CONVERGENCE_EPSILON
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self):
        # Accept any sequence but store a tuple so the config stays hashable.
        object.__setattr__(self, "agents", tuple(self.agents))

    @property
    def tick_interval(self) -> float:
        """Tick period in seconds."""
        return self.tick_interval_ms / 1000.0
