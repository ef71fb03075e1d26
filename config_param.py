"""Centralized parameter/config constants for the project.

This module is intended to be the single source of truth for the demo
scenario and simulation defaults used by the entry points.
"""

from rendezvous_mobility import GeoPoint

# --------------------------------------------------------------------------------------
# 1) Scenario (geographic)
# --------------------------------------------------------------------------------------

# Starting locations of the drivers (degrees).
START_LOCATIONS: tuple = (
    GeoPoint(23.0375, 72.4949),
    GeoPoint(23.0475, 72.5049),
    GeoPoint(23.0275, 72.4849),
)

# Final destination of the merged delivery.
HOME_LOCATION: GeoPoint = GeoPoint(23.129318, 72.544884)

# Local frame origin for the simulator. Node (0, 0) maps here.
LOCAL_ORIGIN: GeoPoint = START_LOCATIONS[0]

# Altitude (meters) given to every node; rendezvous motion is planar.
NODE_ALTITUDE: float = 0.0

# --------------------------------------------------------------------------------------
# 2) Rendezvous timing + median solver
# --------------------------------------------------------------------------------------

TICK_INTERVAL_MS: int = 100            # Host tick period (ms)
PHASE_INCREMENT: float = 0.02          # Progress per tick (50 ticks per phase)
CONVERGENCE_EPSILON: float = 1e-10     # Median stop threshold (degrees)
MAX_ITERATIONS: int = 100              # Median iteration bound

# --------------------------------------------------------------------------------------
# 3) Simulation framework + visualization
# --------------------------------------------------------------------------------------

SIM_DURATION: float = 15            # Simulation duration (seconds)
SIM_REAL_TIME: bool = True          # Run in real time
SIM_DEBUG: bool = False             # Enable simulator debug mode

VIS_OPEN_BROWSER: bool = True       # Open the visualization in a browser
VIS_UPDATE_RATE: float = 0.1        # Visualization update period (seconds)

# --------------------------------------------------------------------------------------
# 4) Telemetry
# --------------------------------------------------------------------------------------

SEND_TELEMETRY: bool = True         # Emit Telemetry to node protocols
TELEMETRY_DECIMATION: int = 1       # Every N ticks
TELEMETRY_CSV_NAME: str = "rendezvous_telemetry.csv"
