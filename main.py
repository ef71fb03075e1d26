"""Rendezvous simulation with visualization.

This script builds a GrADyS-SIM simulation with one node per driver start
location, moved by RendezvousMobilityHandler. The drivers converge on the
geometric median of their start positions, merge, and travel together to
the home location.

Node start positions are the projected START_LOCATIONS from config_param.
"""

import logging
import os

# Suppress websockets handshake warnings
logging.getLogger('websockets').setLevel(logging.CRITICAL)

from gradysim.simulator.handler.timer import TimerHandler
from gradysim.simulator.handler.visualization import VisualizationHandler, VisualizationConfiguration
from gradysim.simulator.simulation import SimulationBuilder, SimulationConfiguration

from config_param import (
    CONVERGENCE_EPSILON,
    HOME_LOCATION,
    LOCAL_ORIGIN,
    MAX_ITERATIONS,
    NODE_ALTITUDE,
    PHASE_INCREMENT,
    SEND_TELEMETRY,
    SIM_DEBUG,
    SIM_DURATION,
    SIM_REAL_TIME,
    START_LOCATIONS,
    TELEMETRY_CSV_NAME,
    TELEMETRY_DECIMATION,
    TICK_INTERVAL_MS,
    VIS_OPEN_BROWSER,
    VIS_UPDATE_RATE,
)
from protocol import RendezvousProtocol
from rendezvous_mobility import (
    RendezvousMobilityConfiguration,
    RendezvousMobilityHandler,
    TelemetryRecorder,
    project_to_local,
    travel_summary,
)


# ============================================================
# Rendezvous presets (choose by editing ONE variable)
#
# Profiles: Standard, Quick, Smooth, Custom
# - Standard matches the delivery screen: 100 ms ticks, 50 ticks per phase.
# - Custom uses the values from config_param.
# ============================================================

RENDEZVOUS_PROFILE: str = "Standard"  # Choose rendezvous profile here


CUSTOM_RENDEZVOUS_CONFIG = RendezvousMobilityConfiguration(
    origin=LOCAL_ORIGIN,
    destination=HOME_LOCATION,
    tick_interval_ms=TICK_INTERVAL_MS,
    phase_increment=PHASE_INCREMENT,
    convergence_epsilon=CONVERGENCE_EPSILON,
    max_iterations=MAX_ITERATIONS,
    send_telemetry=SEND_TELEMETRY,
    telemetry_decimation=TELEMETRY_DECIMATION,
)


RENDEZVOUS_PRESETS: dict[str, RendezvousMobilityConfiguration] = {
    "Standard": RendezvousMobilityConfiguration(
        origin=LOCAL_ORIGIN,
        destination=HOME_LOCATION,
        tick_interval_ms=100,
        phase_increment=0.02,
    ),
    "Quick": RendezvousMobilityConfiguration(
        origin=LOCAL_ORIGIN,
        destination=HOME_LOCATION,
        tick_interval_ms=50,
        phase_increment=0.05,
    ),
    "Smooth": RendezvousMobilityConfiguration(
        origin=LOCAL_ORIGIN,
        destination=HOME_LOCATION,
        tick_interval_ms=20,
        phase_increment=0.004,
        telemetry_decimation=5,
    ),
    "Custom": CUSTOM_RENDEZVOUS_CONFIG,
}


def main():
    """Execute the rendezvous simulation."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    profile = (RENDEZVOUS_PROFILE or "").strip()
    rendezvous_config = RENDEZVOUS_PRESETS.get(profile)
    if rendezvous_config is None:
        valid = ", ".join(sorted(RENDEZVOUS_PRESETS.keys()))
        raise ValueError(f"Unknown RENDEZVOUS_PROFILE={RENDEZVOUS_PROFILE!r}. Valid options: {valid}")

    print(
        "Rendezvous preset: "
        f"{profile} "
        f"(tick_interval_ms={rendezvous_config.tick_interval_ms}, "
        f"phase_increment={rendezvous_config.phase_increment})"
    )

    builder = SimulationBuilder(
        SimulationConfiguration(
            duration=SIM_DURATION,
            debug=SIM_DEBUG,
            real_time=SIM_REAL_TIME,
        )
    )
    builder.add_handler(TimerHandler())

    rendezvous_handler = RendezvousMobilityHandler(rendezvous_config)
    recorder = TelemetryRecorder()
    rendezvous_handler.add_renderer(recorder)
    builder.add_handler(rendezvous_handler)

    vis_config = VisualizationConfiguration(
        open_browser=VIS_OPEN_BROWSER,
        update_rate=VIS_UPDATE_RATE,
    )
    builder.add_handler(VisualizationHandler(vis_config))

    for location in START_LOCATIONS:
        x, y = project_to_local(location, rendezvous_config.origin)
        builder.add_node(RendezvousProtocol, (x, y, NODE_ALTITUDE))

    simulation = builder.build()
    print("=" * 60)
    print(f"Starting rendezvous simulation with {len(START_LOCATIONS)} drivers")
    print(f"Home location: ({HOME_LOCATION.latitude:.6f}, {HOME_LOCATION.longitude:.6f})")
    print("=" * 60)
    try:
        simulation.start_simulation()
    except (BrokenPipeError, EOFError) as e:
        logging.getLogger(__name__).debug(f"Ignored visualization shutdown error: {e}")
    finally:
        median = rendezvous_handler.get_median()
        if median is not None:
            summary = travel_summary(START_LOCATIONS, median.point, HOME_LOCATION)
            print("=" * 60)
            print(f"Meeting point: ({median.point.latitude:.6f}, {median.point.longitude:.6f})"
                  f" converged={median.converged} iterations={median.iterations}")
            print(f"Approach distance (sum): {summary.total_approach_km:.3f} km")
            print(f"Home distance:           {summary.home_km:.3f} km")
            print(f"Total distance:          {summary.total_km:.3f} km")

        csv_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), TELEMETRY_CSV_NAME)
        if recorder.write_csv(csv_path):
            print(f"Telemetry written to {csv_path}")
        print("=" * 60)
        print("Simulation completed!")
        print("=" * 60)


if __name__ == "__main__":
    main()
