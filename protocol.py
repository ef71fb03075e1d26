"""
Protocol observing a rendezvous driven by RendezvousMobilityHandler.

The handler moves the node; this protocol only records where it went and
prints a summary when the simulation ends.
"""

import logging

from gradysim.protocol.interface import IProtocol
from gradysim.protocol.messages.telemetry import Telemetry

import pandas as pd


class RendezvousProtocol(IProtocol):
    """Protocol that logs node positions during a rendezvous."""

    def __init__(self):
        super().__init__()
        self._logger = logging.getLogger(__name__)
        self.node_id = None
        self.initial_position = None
        self.rendezvous_handler = None
        self.df = None

    def initialize(self):
        self.node_id = self.provider.get_id()

        handlers = getattr(self.provider, "handlers", {}) or {}
        self.rendezvous_handler = handlers.get("RendezvousMobilityHandler")
        if not self.rendezvous_handler:
            self._logger.warning("Node %s: RendezvousMobilityHandler not found", self.node_id)
            return

        self.initial_position = self.rendezvous_handler.get_node_position(self.node_id)
        self.df = pd.DataFrame(columns=["t", "x", "y", "z", "phase"])
        self._record(self.initial_position)
        self._logger.info("Node %s initialized at %s", self.node_id, self.initial_position)

    def handle_timer(self, timer: str):
        pass

    def handle_packet(self, message: str):
        pass

    def handle_telemetry(self, telemetry: Telemetry) -> None:
        if self.df is None:
            return
        self._record(telemetry.current_position)

    def _record(self, position):
        if position is None:
            return
        state = self.rendezvous_handler.get_state()
        phase = state.phase.value if state is not None else ""
        t = self.provider.current_time()
        self.df.loc[len(self.df)] = [t, position[0], position[1], position[2], phase]

    def finish(self):
        if not self.rendezvous_handler or self.initial_position is None:
            return

        final_position = self.rendezvous_handler.get_node_position(self.node_id)
        if final_position is None:
            return

        dx = final_position[0] - self.initial_position[0]
        dy = final_position[1] - self.initial_position[1]
        net_displacement = (dx**2 + dy**2)**0.5

        state = self.rendezvous_handler.get_state()
        phase = state.phase.value if state is not None else "cancelled"

        print()
        print("=" * 60)
        print(f"Node {self.node_id}")
        print(f"  Initial position: ({self.initial_position[0]:.1f}, {self.initial_position[1]:.1f})")
        print(f"  Final position:   ({final_position[0]:.1f}, {final_position[1]:.1f})")
        print(f"  Net displacement: {net_displacement:.1f} m")
        print(f"  Final phase:      {phase}")
        if self.df is not None:
            print(f"  Samples:          {len(self.df)}")
        print("=" * 60)
