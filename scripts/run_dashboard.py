# ====================================================================================================
# Dashboard runner
#
# Builds the port operations dashboard from a config profile, runs the update scheduler and the camera
# driver for a fixed number of ticks and writes what the panels ended up showing.
#
# What it takes in:
# - A config profile (`default` or `fast`) or a JSON config file, plus optional JSON overrides
# - A fixed `seed` (telemetry feed, trend pre-fill and carbon history all draw from it)
# - An output directory
#
# What it produces:
# - `ticks.csv` (one row per scheduler tick: KPI, carbon and step outcomes)
# - `trend.csv` (final contents of the throughput trend buffer)
# - `ships.csv` (final berthing table)
# - `plots/*.png` (trend chart, digital-twin viewport, equipment, emission charts)
# - `run.log` and `metadata.json`
#
# Batch runs use a virtual simpy clock and finish immediately. `--realtime` paces both drivers against
# the wall clock instead.
# ====================================================================================================

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from subprocess import CalledProcessError, check_output

import matplotlib

matplotlib.use("Agg")
import pandas as pd


ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.dashboard import apply_overrides, build_dashboard, config_from_dict, config_to_dict, get_config
from src.dashboard.scheduler import STEP_NAMES, TickReport


PLOT_PANELS = {
    "throughput-chart": "throughput_trend.png",
    "twin-viewport": "digital_twin.png",
    "equipment-chart": "equipment_status.png",
    "carbon-source-chart": "carbon_sources.png",
    "carbon-trend-chart": "carbon_history.png",
}
BATCH_FPS = 1.0


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the port operations dashboard for a fixed number of ticks.")
    parser.add_argument("--profile", choices=["default", "fast"], default="default")
    parser.add_argument("--seed", type=int, required=True)
    parser.add_argument("--ticks", type=int, default=5, help="Number of scheduler ticks to run.")
    parser.add_argument("--out", required=True, help="Output directory path.")
    parser.add_argument("--config", help="Optional JSON base config path.")
    parser.add_argument("--override", help="Optional JSON overrides path.")
    parser.add_argument("--realtime", action="store_true", help="Pace the drivers against the wall clock.")
    parser.add_argument(
        "--fps",
        type=float,
        help="Camera frames per second. Defaults to the profile rate with --realtime, 1 fps otherwise.",
    )
    return parser.parse_args()


# ----------------------------------------------------------------------------------------------------
# get_git_commit
# Best-effort provenance for metadata.json; None when git is unavailable.
# ----------------------------------------------------------------------------------------------------
def get_git_commit(root: Path) -> str | None:
    try:
        return check_output(["git", "rev-parse", "HEAD"], cwd=root).decode().strip()
    except (CalledProcessError, FileNotFoundError):
        return None


def _load_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


# ----------------------------------------------------------------------------------------------------
# _build_config_dict
# Base config from a JSON file or a named profile, then validated overrides on top.
# ----------------------------------------------------------------------------------------------------
def _build_config_dict(args: argparse.Namespace) -> dict:
    if args.config:
        base_config = _load_json(Path(args.config))
    else:
        base_config = config_to_dict(get_config(args.profile))

    overrides = _load_json(Path(args.override)) if args.override else {}
    fps = args.fps
    if fps is None and not args.realtime:
        # Every virtual frame is a full matplotlib redraw; keep batch runs quick.
        fps = BATCH_FPS
    if fps is not None:
        if fps <= 0:
            raise ValueError("--fps must be > 0.")
        overrides = {**overrides, "frame_interval_ms": 1000.0 / fps}
    if overrides:
        base_config = apply_overrides(base_config, overrides)

    return base_config


def tick_row(report: TickReport) -> dict:
    row = {"tick": report.index, "sim_time_ms": report.sim_time}
    kpis = report.snapshots.get("kpis")
    if kpis is not None:
        row.update(
            {
                "active_ship_count": kpis.active_ship_count,
                "throughput_teu": kpis.throughput_teu,
                "equipment_online_pct": kpis.equipment_online_pct,
                "efficiency_pct": kpis.efficiency_pct,
            }
        )
    carbon = report.snapshots.get("carbon")
    if carbon is not None:
        row.update(
            {
                "total_emissions": carbon.total_emissions,
                "remaining_budget": carbon.remaining_budget,
                "progress_pct": round(carbon.progress_pct, 2),
            }
        )
    row["ship_rows"] = len(report.snapshots.get("ships", ()))
    row["alert_count"] = len(report.snapshots.get("alerts", ()))
    row["throughput_sample"] = report.snapshots.get("throughput")
    for name in STEP_NAMES:
        row[f"step_{name}"] = report.outcomes.get(name)
    return row


def run_dashboard(config_dict: dict, seed: int, ticks: int, out_dir: Path, realtime: bool = False) -> dict:
    config = config_from_dict(config_dict)
    if ticks < 1:
        raise ValueError("ticks must be >= 1.")

    plots_dir = out_dir / "plots"
    out_dir.mkdir(parents=True, exist_ok=True)
    plots_dir.mkdir(parents=True, exist_ok=True)

    # Handlers go on the `src` package logger so scheduler/camera/context messages land in run.log too.
    log_path = out_dir / "run.log"
    logger = logging.getLogger("src")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(file_handler)
    logger.addHandler(logging.StreamHandler(sys.stdout))

    logger.info("Starting dashboard run: profile=%s seed=%s ticks=%s realtime=%s", config.name, seed, ticks, realtime)
    logger.info("Profile description: %s", config.description)

    ctx = build_dashboard(config, seed=seed, realtime=realtime)
    rows = []
    ctx.scheduler.listeners.append(lambda report: rows.append(tick_row(report)))
    try:
        ctx.run_ticks(ticks)
        logger.info(
            "Completed %s ticks (%s dropped), %s camera frames.",
            ctx.scheduler.tick_count,
            ctx.scheduler.skipped_ticks,
            ctx.camera.frames_rendered,
        )

        ticks_path = out_dir / "ticks.csv"
        pd.DataFrame(rows).to_csv(ticks_path, index=False)
        logger.info("Wrote tick history to %s", ticks_path)

        trend_path = out_dir / "trend.csv"
        ctx.buffer.to_frame(ctx.trend_labels).to_csv(trend_path, index=False)
        logger.info("Wrote trend buffer to %s", trend_path)

        ships_path = out_dir / "ships.csv"
        table = ctx.registry.get("ships-table")
        if table is not None:
            table.frame.to_csv(ships_path, index=False)
            logger.info("Wrote ship table to %s", ships_path)

        for panel_id, filename in PLOT_PANELS.items():
            surface = ctx.registry.get(panel_id)
            if surface is None:
                logger.warning("Skipped %s plot (panel not mounted).", panel_id)
                continue
            saved = surface.save(plots_dir / filename)
            logger.info("Saved plot %s", saved)

        failures = {name: count for name, count in ctx.scheduler.step_failures.items() if count}
        metadata = {
            "profile": config.name,
            "profile_description": config.description,
            "seed": seed,
            "realtime": realtime,
            "timestamp_utc": datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
            "git_commit": get_git_commit(ROOT),
            "tick_count": ctx.scheduler.tick_count,
            "dropped_ticks": ctx.scheduler.skipped_ticks,
            "camera_frames": ctx.camera.frames_rendered,
            "scene_nodes": len(ctx.scene),
            "step_failures": failures,
            "outputs": {
                "ticks_csv": str(ticks_path.as_posix()),
                "trend_csv": str(trend_path.as_posix()),
                "plots_dir": str(plots_dir.as_posix()),
                "run_log": str(log_path.as_posix()),
            },
            "config_used": config_to_dict(config),
        }
    finally:
        ctx.teardown()

    metadata_path = out_dir / "metadata.json"
    metadata_path.write_text(json.dumps(metadata, indent=2), encoding="utf-8")
    logger.info("Wrote metadata to %s", metadata_path)
    logger.info("Dashboard run complete.")
    logger.removeHandler(file_handler)
    file_handler.close()
    return metadata


def main() -> int:
    args = parse_args()
    config_dict = _build_config_dict(args)
    run_dashboard(config_dict, seed=args.seed, ticks=args.ticks, out_dir=Path(args.out), realtime=args.realtime)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
