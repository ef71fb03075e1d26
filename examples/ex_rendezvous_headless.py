"""Core-only example (no GrADyS-SIM simulation is built).

This script demonstrates the rendezvous core on its own:

- geometric-median meeting point for three drivers
- the APPROACHING -> MERGED -> ARRIVED phase simulation
- a manual tick scheduler standing in for a host timer

For the full integration example (handler + protocol + visualization), use
`main.py` and `protocol.py` at the repository root.

Usage:
    python examples/ex_rendezvous_headless.py
"""

from rendezvous_mobility import (
    GeoPoint,
    ManualTickScheduler,
    SimulationConfig,
    SimulationController,
    TelemetryRecorder,
    travel_summary,
)


def simulate_rendezvous():
    """Drive a rendezvous tick by tick and print its progress."""
    print("Core-only demo: geometric median + phase simulation")

    config = SimulationConfig(
        agents=(
            GeoPoint(23.0375, 72.4949),
            GeoPoint(23.0475, 72.5049),
            GeoPoint(23.0275, 72.4849),
        ),
        destination=GeoPoint(23.129318, 72.544884),
        tick_interval_ms=100,
        phase_increment=0.02,
    )

    scheduler = ManualTickScheduler()
    recorder = TelemetryRecorder()
    last_phase = {"phase": None}

    def print_transitions(state):
        if state.phase is not last_phase["phase"]:
            last_phase["phase"] = state.phase
            lat, lon = state.active_positions[0].as_tuple()
            print(f"{state.tick_count:>5} | {state.phase.value:<12} | ({lat:.6f}, {lon:.6f})")

    controller = SimulationController(scheduler, renderer=print_transitions)
    controller.add_renderer(recorder)

    print("-" * 60)
    print(f"{'tick':>5} | {'phase':<12} | position")
    print("-" * 60)
    controller.start(config)
    rounds = scheduler.run_until_idle()
    print("-" * 60)

    median = controller.median
    summary = travel_summary(config.agents, median.point, config.destination)
    print(f"Meeting point: ({median.point.latitude:.6f}, {median.point.longitude:.6f})"
          f" after {median.iterations} iterations (converged={median.converged})")
    print(f"Ticks run: {rounds} ({rounds * config.tick_interval:.1f} s of host time)")
    print(f"Approach distance (sum): {summary.total_approach_km:.3f} km")
    print(f"Home distance:           {summary.home_km:.3f} km")
    print(f"Telemetry rows: {len(recorder)}")


if __name__ == "__main__":
    simulate_rendezvous()
