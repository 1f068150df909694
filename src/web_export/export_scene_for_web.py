import json
import random
import sys
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path


ROOT = Path(__file__).resolve().parents[2]
OUTPUT_DIR = ROOT / "outputs" / "web"
DEFAULT_SEED = 123

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.dashboard.config import config_to_dict, get_config  # noqa: E402
from src.scene.model import build_environment, build_scene, count_by_kind  # noqa: E402
from src.telemetry import generators as gen  # noqa: E402
from src.telemetry.feed import SyntheticFeed  # noqa: E402


def _jsonable(value):
    """Dataclass snapshots -> plain JSON types (datetimes as ISO strings)."""
    if isinstance(value, datetime):
        return value.isoformat(timespec="minutes")
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if hasattr(value, "__dataclass_fields__"):
        return _jsonable(asdict(value))
    return value


def build_scene_payload(config, run_timestamp):
    """Scene graph for a browser renderer: node list, environment and camera defaults."""
    nodes = build_scene(config.scene_layout(), seed=config.scene_seed)
    return {
        "exported_at": run_timestamp,
        "scene_seed": config.scene_seed,
        "node_count": len(nodes),
        "counts_by_kind": count_by_kind(nodes),
        "nodes": _jsonable(nodes),
        "environment": _jsonable(build_environment()),
        "camera": {
            "default_position": list(config.camera_default_position),
            "orbit_radius": config.camera_orbit_radius,
            "orbit_rate_rad_per_ms": config.camera_orbit_rate,
            "orbit_height": config.camera_height,
        },
    }


def build_snapshot_payload(config, seed, now, run_timestamp):
    """One tick's worth of every panel, plus the static panels."""
    feed = SyntheticFeed(seed=seed, carbon_target=config.carbon_target)
    rng = random.Random(seed + 1)
    trend = gen.generate_throughput_history(rng, config.trend_capacity)
    return {
        "exported_at": run_timestamp,
        "seed": seed,
        "kpis": _jsonable(feed.kpis(now)),
        "ships": _jsonable(feed.ships(now)),
        "carbon": _jsonable(feed.carbon(now)),
        "alerts": _jsonable(feed.alerts(now)),
        "throughput_trend": {
            "labels": list(gen.hourly_labels(config.trend_capacity)),
            "values": list(trend),
        },
        "equipment_fleet": _jsonable(gen.equipment_fleet()),
        "equipment_units": _jsonable(gen.equipment_units()),
        "carbon_sources": _jsonable(gen.carbon_source_mix()),
        "carbon_history": _jsonable(gen.generate_carbon_history(rng, now)),
    }


def export(out_dir=OUTPUT_DIR, seed=DEFAULT_SEED, profile="default", now=None):
    config = get_config(profile)
    now = now or datetime.now()
    run_timestamp = datetime.now(timezone.utc).replace(microsecond=0).isoformat()

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    scene_payload = build_scene_payload(config, run_timestamp)
    snapshot_payload = build_snapshot_payload(config, seed, now, run_timestamp)
    snapshot_payload["config"] = _jsonable(config_to_dict(config))

    scene_path = out_dir / "scene.json"
    snapshot_path = out_dir / "snapshot.json"
    scene_path.write_text(json.dumps(scene_payload, indent=2, ensure_ascii=False), encoding="utf-8")
    snapshot_path.write_text(json.dumps(snapshot_payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return scene_path, snapshot_path


def main():
    scene_path, snapshot_path = export()
    print(f"Wrote outputs to {OUTPUT_DIR}")
    print(f"Scene: {scene_path.name}")
    print(f"Snapshot: {snapshot_path.name}")


if __name__ == "__main__":
    main()
