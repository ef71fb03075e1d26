"""Snapshot telemetry recorder.

TelemetryRecorder is a renderer: register it on a SimulationController and
it keeps one row per visible entity per snapshot. Before the merge each
agent gets its own row; afterwards the merged entity is reported with
`entity = "merged"`. Every snapshot with tick 0 after the first one opens a
new run, so restarts stay separable in the `run` column.

Author: rendezvous_mobility contributors
Date: October 19, 2026
"""

import logging
import os
from typing import List, Optional

import pandas as pd

from .simulator import Phase, SimulationState

logger = logging.getLogger(__name__)

TELEMETRY_COLUMNS = [
    "run",
    "tick",
    "phase",
    "entity",
    "latitude",
    "longitude",
    "approach_progress",
    "home_progress",
]

MERGED_ENTITY = "merged"


class TelemetryRecorder:
    """Collects SimulationState snapshots as flat rows."""

    def __init__(self, decimation: int = 1):
        if decimation < 1:
            raise ValueError("decimation must be >= 1")
        self._decimation = decimation
        self._rows: List[list] = []
        self._last_state: Optional[SimulationState] = None
        self._run = 0

    def __call__(self, state: SimulationState) -> None:
        # The final ARRIVED snapshot is always kept so the trace ends at the destination.
        if state.tick_count % self._decimation != 0 and state.phase is not Phase.ARRIVED:
            return
        if state is self._last_state:
            return
        if state.tick_count == 0 and self._last_state is not None:
            self._run += 1
        self._last_state = state

        if state.is_merged:
            entities = [(MERGED_ENTITY, state.merged_position)]
        else:
            entities = [(str(i), p) for i, p in enumerate(state.agent_positions)]

        for entity, position in entities:
            self._rows.append(
                [
                    self._run,
                    state.tick_count,
                    state.phase.value,
                    entity,
                    position.latitude,
                    position.longitude,
                    state.approach_progress,
                    state.home_progress,
                ]
            )

    def __len__(self) -> int:
        return len(self._rows)

    def clear(self) -> None:
        self._rows = []
        self._last_state = None
        self._run = 0

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self._rows, columns=TELEMETRY_COLUMNS)

    def write_csv(self, path: str, append: bool = False) -> bool:
        """Write the collected rows. Returns False if the write failed."""
        if not self._rows:
            return False
        try:
            df = self.to_dataframe()
            file_exists = os.path.exists(path)
            mode = "a" if append else "w"
            df.to_csv(path, mode=mode, header=not (append and file_exists), index=False)
        except Exception as exc:
            logger.warning("Failed to write telemetry CSV (%s): %r", exc, path)
            return False
        return True
