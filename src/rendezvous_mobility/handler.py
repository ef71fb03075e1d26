"""Rendezvous mobility handler for GrADyS-SIM NG.

Drives the registered nodes through a rendezvous: every node travels to the
geometric median of the nodes' starting positions, the nodes merge there,
and the merged group travels to a fixed destination.

Node positions are local (x, y, z) meters. They are mapped to latitude and
longitude with a flat-earth projection around `config.origin`; z is left
untouched.

Author: rendezvous_mobility contributors
Date: October 19, 2026
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from gradysim.simulator.event import EventLoop
from gradysim.simulator.node import Node
from gradysim.simulator.handler.interface import INodeHandler
from gradysim.protocol.messages.telemetry import Telemetry

from .config import (
    DEFAULT_CONVERGENCE_EPSILON,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_PHASE_INCREMENT,
    DEFAULT_TICK_INTERVAL_MS,
    SimulationConfig,
)
from .controller import SimulationController
from .geo import GeoPoint, project_to_local, unproject_from_local
from .median import MedianResult
from .scheduler import EventLoopScheduler
from .simulator import SimulationState


@dataclass
class RendezvousMobilityConfiguration:
    """
    Configuration parameters for the RendezvousMobilityHandler.

    Attributes:
        origin: Geographic point mapped to local (0, 0).
        destination: Where the merged group ends up.
        tick_interval_ms: Time between position updates (simulation time).
        phase_increment: Progress per update; 0.02 means 50 updates per phase.
        convergence_epsilon: Median stopping threshold (degrees).
        max_iterations: Median iteration bound.
        send_telemetry: If True, emit Telemetry messages after position updates.
        telemetry_decimation: Emit telemetry every N updates (default: 1).
    """
    origin: GeoPoint
    destination: GeoPoint
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    phase_increment: float = DEFAULT_PHASE_INCREMENT
    convergence_epsilon: float = DEFAULT_CONVERGENCE_EPSILON
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    send_telemetry: bool = True
    telemetry_decimation: int = 1


class RendezvousMobilityHandler(INodeHandler):
    """Rendezvous mobility handler for GrADyS-SIM NG."""

    def __init__(self, config: RendezvousMobilityConfiguration):
        self._config = config
        self._loop: EventLoop = None
        self._nodes: Dict[int, Node] = {}
        self._node_order: List[int] = []

        self._controller: Optional[SimulationController] = None
        self._renderers: List[Callable[[SimulationState], None]] = []

        # Last run, kept after finalize() so callers can still report on it.
        self._final_state: Optional[SimulationState] = None
        self._final_median: Optional[MedianResult] = None

    def get_label(self) -> str:
        return "RendezvousMobilityHandler"

    def register_node(self, node: Node):
        self._nodes[node.id] = node

    def inject(self, event_loop: EventLoop):
        self._loop = event_loop
        self._controller = SimulationController(
            EventLoopScheduler(event_loop), renderer=self._apply_state
        )
        for renderer in self._renderers:
            self._controller.add_renderer(renderer)

    def initialize(self):
        if self._nodes:
            self._controller.start(self._build_config())

    def handle_timer(self, timer: str):
        pass

    def handle_packet(self, message: str):
        pass

    def finish(self):
        pass

    def finalize(self):
        if self._controller is not None:
            self._final_state = self._controller.state
            self._final_median = self._controller.median
            self._controller.cancel()

    def after_simulation_step(self, iteration: int, time: float):
        pass

    def add_renderer(self, renderer: Callable[[SimulationState], None]) -> None:
        """Receive every snapshot after node positions have been updated."""
        self._renderers.append(renderer)
        if self._controller is not None:
            self._controller.add_renderer(renderer)

    def restart_from_nodes(self) -> SimulationState:
        """Restart the rendezvous from the nodes' current positions.

        Raises:
            RuntimeError: if called before `inject`.
        """
        if self._controller is None:
            raise RuntimeError("handler not injected")
        return self._controller.restart(self._build_config())

    @property
    def controller(self) -> Optional[SimulationController]:
        return self._controller

    def get_state(self) -> Optional[SimulationState]:
        if self._controller is None or self._controller.state is None:
            return self._final_state
        return self._controller.state

    def get_median(self) -> Optional[MedianResult]:
        if self._controller is None or self._controller.median is None:
            return self._final_median
        return self._controller.median

    def get_node_position(self, node_id: int) -> Tuple[float, float, float] | None:
        node = self._nodes.get(node_id)
        return node.position if node is not None else None

    def to_local(self, point: GeoPoint) -> Tuple[float, float]:
        return project_to_local(point, self._config.origin)

    def _build_config(self) -> SimulationConfig:
        self._node_order = sorted(self._nodes)
        agents = [
            unproject_from_local(self._nodes[node_id].position, self._config.origin)
            for node_id in self._node_order
        ]
        return SimulationConfig(
            agents=tuple(agents),
            destination=self._config.destination,
            tick_interval_ms=self._config.tick_interval_ms,
            phase_increment=self._config.phase_increment,
            convergence_epsilon=self._config.convergence_epsilon,
            max_iterations=self._config.max_iterations,
        )

    def _apply_state(self, state: SimulationState):
        for index, node_id in enumerate(self._node_order):
            node = self._nodes[node_id]
            if state.is_merged:
                geo = state.merged_position
            else:
                geo = state.agent_positions[index]
            x, y = self.to_local(geo)
            node.position = (x, y, node.position[2])

            if self._should_emit_telemetry(state):
                self._emit_telemetry(node)

    def _should_emit_telemetry(self, state: SimulationState) -> bool:
        if not self._config.send_telemetry:
            return False
        return (state.tick_count % self._config.telemetry_decimation) == 0

    def _emit_telemetry(self, node: Node):
        telemetry = Telemetry(current_position=node.position)

        def send_telemetry():
            node.protocol_encapsulator.handle_telemetry(telemetry)

        self._loop.schedule_event(
            self._loop.current_time,
            send_telemetry,
            f"Node {node.id} handle_telemetry",
        )
