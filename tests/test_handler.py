"""
Tests for the GrADyS-SIM integration.

The event loop and nodes are replaced by small fakes with the attributes the
handler and the EventLoopScheduler use, so no simulation is built.
"""

import heapq
import itertools

import pytest
from rendezvous_mobility.geo import GeoPoint, project_to_local, unproject_from_local
from rendezvous_mobility.handler import (
    RendezvousMobilityConfiguration,
    RendezvousMobilityHandler,
)
from rendezvous_mobility.scheduler import EventLoopScheduler
from rendezvous_mobility.simulator import Phase

DRIVERS = (
    GeoPoint(23.0375, 72.4949),
    GeoPoint(23.0475, 72.5049),
    GeoPoint(23.0275, 72.4849),
)
HOME = GeoPoint(23.129318, 72.544884)
ORIGIN = DRIVERS[0]


class FakeEventLoop:
    """Minimal time-ordered event queue."""

    def __init__(self):
        self.current_time = 0.0
        self._heap = []
        self._seq = itertools.count()

    def schedule_event(self, timestamp, callback, context=""):
        heapq.heappush(self._heap, (timestamp, next(self._seq), callback, context))

    def __len__(self):
        return len(self._heap)

    def step(self):
        timestamp, _, callback, _ = heapq.heappop(self._heap)
        self.current_time = timestamp
        callback()

    def run(self, max_events=100_000):
        events = 0
        while self._heap and events < max_events:
            self.step()
            events += 1
        return events


class FakeEncapsulator:
    def __init__(self):
        self.telemetry = []

    def handle_telemetry(self, telemetry):
        self.telemetry.append(telemetry)


class FakeNode:
    def __init__(self, node_id, position):
        self.id = node_id
        self.position = position
        self.protocol_encapsulator = FakeEncapsulator()


def build_handler(send_telemetry=False, decimation=1):
    config = RendezvousMobilityConfiguration(
        origin=ORIGIN,
        destination=HOME,
        tick_interval_ms=100,
        phase_increment=0.02,
        send_telemetry=send_telemetry,
        telemetry_decimation=decimation,
    )
    handler = RendezvousMobilityHandler(config)
    loop = FakeEventLoop()
    nodes = []
    for node_id, location in enumerate(DRIVERS):
        x, y = project_to_local(location, ORIGIN)
        node = FakeNode(node_id, (x, y, 7.0))
        nodes.append(node)
        handler.register_node(node)
    handler.inject(loop)
    return handler, loop, nodes


class TestEventLoopScheduler:
    """Test periodic re-arming on an event loop."""

    def test_fires_at_interval_until_false(self):
        loop = FakeEventLoop()
        times = []

        def callback():
            times.append(loop.current_time)
            return len(times) < 4

        EventLoopScheduler(loop).schedule_periodic(0.5, callback)
        loop.run()
        assert times == pytest.approx([0.5, 1.0, 1.5, 2.0])
        assert len(loop) == 0

    def test_cancelled_registration_never_fires(self):
        """A queued event of a cancelled registration is ignored."""
        loop = FakeEventLoop()
        calls = []
        registration = EventLoopScheduler(loop).schedule_periodic(0.1, lambda: calls.append(1))
        loop.step()
        registration.cancel()
        loop.run()
        assert calls == [1]
        assert not registration.active

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            EventLoopScheduler(FakeEventLoop()).schedule_periodic(0.0, lambda: True)


class TestRendezvousMobilityHandler:
    """Test driving nodes through a full rendezvous."""

    def test_label(self):
        handler, _, _ = build_handler()
        assert handler.get_label() == "RendezvousMobilityHandler"

    def test_nodes_end_at_destination(self):
        """After the run every node sits on the projected home location."""
        handler, loop, nodes = build_handler()
        handler.initialize()
        loop.run()

        assert handler.get_state().phase is Phase.ARRIVED
        home_xy = project_to_local(HOME, ORIGIN)
        for node in nodes:
            assert node.position[:2] == pytest.approx(home_xy)
            assert node.position[2] == 7.0
        assert loop.current_time == pytest.approx(10.0)

    def test_nodes_share_position_once_merged(self):
        handler, loop, nodes = build_handler()
        handler.initialize()
        for _ in range(60):
            loop.step()
        assert handler.get_state().phase is Phase.MERGED
        assert nodes[0].position == nodes[1].position == nodes[2].position

    def test_meeting_point_from_node_positions(self):
        """The median is computed from the unprojected node positions."""
        handler, _, _ = build_handler()
        handler.initialize()
        meeting = handler.get_median().point
        assert meeting.as_tuple() == pytest.approx((23.0375, 72.4949), abs=1e-6)

    def test_telemetry_decimation(self):
        """Telemetry goes to each node every N ticks, including tick 0."""
        handler, loop, nodes = build_handler(send_telemetry=True, decimation=10)
        handler.initialize()
        loop.run()
        for node in nodes:
            assert len(node.protocol_encapsulator.telemetry) == 11

    def test_restart_from_nodes(self):
        """Restarting uses where the nodes are now."""
        handler, loop, nodes = build_handler()
        handler.initialize()
        for _ in range(30):
            loop.step()
        current = [unproject_from_local(n.position, ORIGIN) for n in nodes]

        state = handler.restart_from_nodes()
        assert state.phase is Phase.APPROACHING
        assert state.tick_count == 0
        for got, expected in zip(state.start_positions, current):
            assert got.as_tuple() == pytest.approx(expected.as_tuple())

        loop.run()
        assert handler.get_state().phase is Phase.ARRIVED
        assert handler.get_state().tick_count == 100

    def test_finalize_keeps_last_state(self):
        handler, loop, _ = build_handler()
        handler.initialize()
        for _ in range(20):
            loop.step()
        handler.finalize()
        assert handler.controller.state is None
        assert handler.get_state().tick_count == 20
        assert handler.get_median() is not None
        assert loop.run() <= 1

    def test_extra_renderer_receives_snapshots(self):
        handler, loop, _ = build_handler()
        seen = []
        handler.add_renderer(seen.append)
        handler.initialize()
        loop.run()
        assert len(seen) == 101

    def test_no_nodes_no_simulation(self):
        handler = RendezvousMobilityHandler(
            RendezvousMobilityConfiguration(origin=ORIGIN, destination=HOME)
        )
        loop = FakeEventLoop()
        handler.inject(loop)
        handler.initialize()
        assert handler.get_state() is None
        assert len(loop) == 0

    def test_restart_before_inject_raises(self):
        """Restarting an uninjected handler fails with a clear error."""
        handler = RendezvousMobilityHandler(
            RendezvousMobilityConfiguration(origin=ORIGIN, destination=HOME)
        )
        with pytest.raises(RuntimeError, match="handler not injected"):
            handler.restart_from_nodes()
