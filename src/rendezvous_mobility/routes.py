"""Map overlays derived from a simulation snapshot.

Renderers draw markers and polylines; this module decides *what* to draw
for a given phase, so every renderer shows the same picture:

- before the merge: start markers, the meeting point, each agent, and one
  route per agent (start -> meeting point -> current position);
- after the merge: a single merged marker;
- always: the destination and the final route (meeting point -> destination).

Author: rendezvous_mobility contributors
Date: October 19, 2026
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .geo import GeoPoint, haversine_distance
from .simulator import SimulationState

MARKER_START = "start"
MARKER_MEETING = "meeting"
MARKER_AGENT = "agent"
MARKER_MERGED = "merged"
MARKER_DESTINATION = "destination"


@dataclass(frozen=True)
class Marker:
    kind: str
    position: GeoPoint
    index: int = 0


@dataclass(frozen=True)
class TravelSummary:
    """Distances (km) implied by a meeting point."""
    approach_km: Tuple[float, ...]
    home_km: float

    @property
    def total_approach_km(self) -> float:
        return sum(self.approach_km)

    @property
    def total_km(self) -> float:
        return self.total_approach_km + self.home_km


def agent_routes(state: SimulationState) -> List[Tuple[GeoPoint, ...]]:
    """Per-agent polylines; empty once the agents have merged."""
    if state.is_merged:
        return []
    return [
        (start, state.meeting_point, current)
        for start, current in zip(state.start_positions, state.agent_positions)
    ]


def final_route(state: SimulationState) -> Tuple[GeoPoint, GeoPoint]:
    return (state.meeting_point, state.destination)


def visible_markers(state: SimulationState) -> List[Marker]:
    markers: List[Marker] = []
    if not state.is_merged:
        markers.extend(
            Marker(MARKER_START, position, index)
            for index, position in enumerate(state.start_positions)
        )
        markers.append(Marker(MARKER_MEETING, state.meeting_point))
        markers.extend(
            Marker(MARKER_AGENT, position, index)
            for index, position in enumerate(state.agent_positions)
        )
    else:
        markers.append(Marker(MARKER_MERGED, state.merged_position))
    markers.append(Marker(MARKER_DESTINATION, state.destination))
    return markers


def travel_summary(
    starts: Sequence[GeoPoint], meeting_point: GeoPoint, destination: GeoPoint
) -> TravelSummary:
    return TravelSummary(
        approach_km=tuple(haversine_distance(s, meeting_point) for s in starts),
        home_km=haversine_distance(meeting_point, destination),
    )

