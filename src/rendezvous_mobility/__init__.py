"""Rendezvous mobility building blocks.

This package computes a meeting point for a group of agents (geometric
median of their start positions) and animates the group toward it, merges
it, and carries the merged group to a destination. It contains the pure
math core, the phase simulator, a lifecycle controller, and a GrADyS-SIM NG
node handler. It is intended to be imported by a larger project.

Author: rendezvous_mobility contributors
Date: October 19, 2026
"""

from .config import SimulationConfig
from .controller import SimulationController
from .geo import (
    GeoPoint,
    haversine_distance,
    interpolate,
    project_to_local,
    unproject_from_local,
)
from .handler import RendezvousMobilityConfiguration, RendezvousMobilityHandler
from .median import (
    EmptyInputError,
    MedianResult,
    solve_geometric_median,
    sum_of_distances,
)
from .routes import agent_routes, final_route, travel_summary, visible_markers
from .scheduler import EventLoopScheduler, ManualTickScheduler
from .simulator import Agent, Phase, PhaseSimulator, SimulationState
from .telemetry import TelemetryRecorder

__version__ = "0.1.0"

__all__ = [
    "Agent",
    "EmptyInputError",
    "EventLoopScheduler",
    "GeoPoint",
    "ManualTickScheduler",
    "MedianResult",
    "Phase",
    "PhaseSimulator",
    "RendezvousMobilityConfiguration",
    "RendezvousMobilityHandler",
    "SimulationConfig",
    "SimulationController",
    "SimulationState",
    "TelemetryRecorder",
    "agent_routes",
    "final_route",
    "haversine_distance",
    "interpolate",
    "project_to_local",
    "solve_geometric_median",
    "sum_of_distances",
    "travel_summary",
    "unproject_from_local",
    "visible_markers",
]
