"""Plot rendezvous telemetry from rendezvous_telemetry.csv.

Creates one figure with:
- latitude/longitude trajectories per entity (agents and the merged group)
- approach and home progress vs tick

Rows from different runs (restarts) are plotted as separate traces.

Run:
    python plot_telemetry.py

By default, reads ./rendezvous_telemetry.csv (same directory as this script).
"""

from __future__ import annotations

import os

import pandas as pd
import matplotlib.pyplot as plt

from config_param import HOME_LOCATION, TELEMETRY_CSV_NAME


def main() -> int:
    script_dir = os.path.dirname(os.path.abspath(__file__))
    csv_path = os.path.join(script_dir, TELEMETRY_CSV_NAME)

    if not os.path.exists(csv_path):
        print(f"CSV not found: {csv_path}")
        return 1

    df = pd.read_csv(csv_path)

    required_cols = {"tick", "phase", "entity", "latitude", "longitude", "approach_progress", "home_progress"}
    missing = required_cols - set(df.columns)
    if missing:
        print(f"Missing columns in CSV: {sorted(missing)}")
        return 1

    if df.empty:
        print("CSV is empty.")
        return 0

    df = df.copy()
    for col in ("tick", "latitude", "longitude", "approach_progress", "home_progress"):
        df[col] = pd.to_numeric(df[col], errors="coerce")
    df["entity"] = df["entity"].astype(str)
    # Older CSVs have no run column: treat them as a single run.
    if "run" in df.columns:
        df["run"] = pd.to_numeric(df["run"], errors="coerce").fillna(0).astype(int)
    else:
        df["run"] = 0
    df = df.dropna(subset=["tick", "latitude", "longitude"]).sort_values(["run", "tick"])
    multi_run = df["run"].nunique() > 1

    fig, (ax_map, ax_progress) = plt.subplots(1, 2, figsize=(13, 6))
    fig.suptitle("Rendezvous telemetry")

    for (run, entity), df_entity in df.groupby(["run", "entity"], sort=True):
        label = "merged" if entity == "merged" else f"agent {entity}"
        if multi_run:
            label = f"run {run}: {label}"
        linewidth = 2.0 if entity == "merged" else 1.2
        ax_map.plot(df_entity["longitude"], df_entity["latitude"], linewidth=linewidth, label=label)
        ax_map.scatter(df_entity["longitude"].iloc[0], df_entity["latitude"].iloc[0], s=20)

    ax_map.scatter(HOME_LOCATION.longitude, HOME_LOCATION.latitude, marker="*", s=150, color="green", label="home")
    ax_map.set_xlabel("longitude (deg)")
    ax_map.set_ylabel("latitude (deg)")
    ax_map.grid(True, alpha=0.3)
    ax_map.legend(loc="best")

    for run, df_run in df.groupby("run", sort=True):
        per_tick = df_run.drop_duplicates(subset=["tick"])
        suffix = f" (run {run})" if multi_run else ""
        ax_progress.plot(per_tick["tick"], per_tick["approach_progress"], linewidth=1.2, label=f"approach{suffix}")
        ax_progress.plot(per_tick["tick"], per_tick["home_progress"], linewidth=1.2, label=f"home{suffix}")
    ax_progress.set_xlabel("tick")
    ax_progress.set_ylabel("progress")
    ax_progress.set_ylim(-0.05, 1.05)
    ax_progress.grid(True, alpha=0.3)
    ax_progress.legend(loc="best")

    fig.tight_layout()
    plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
