import json
import sys
from datetime import datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.web_export.export_scene_for_web import export


def test_export_writes_scene_and_snapshot(tmp_path):
    scene_path, snapshot_path = export(out_dir=tmp_path, seed=123, profile="fast", now=datetime(2026, 10, 19, 12, 0))

    scene = json.loads(scene_path.read_text(encoding="utf-8"))
    assert scene["node_count"] == len(scene["nodes"])
    assert scene["nodes"][0]["kind"] == "ground"
    assert scene["counts_by_kind"]["crane-base"] == 5
    assert scene["camera"]["orbit_radius"] == 40.0

    snapshot = json.loads(snapshot_path.read_text(encoding="utf-8"))
    carbon = snapshot["carbon"]
    assert carbon["remaining_budget"] == max(0, carbon["target"] - carbon["total_emissions"])
    assert len(snapshot["throughput_trend"]["values"]) == 24
    assert snapshot["ships"][0]["arrival_time"].startswith("2026-10-")
    assert snapshot["config"]["name"] == "fast"


def test_export_is_deterministic_for_a_seed(tmp_path):
    now = datetime(2026, 10, 19, 12, 0)
    _, first = export(out_dir=tmp_path / "a", seed=9, now=now)
    _, second = export(out_dir=tmp_path / "b", seed=9, now=now)
    a = json.loads(first.read_text(encoding="utf-8"))
    b = json.loads(second.read_text(encoding="utf-8"))
    a.pop("exported_at")
    b.pop("exported_at")
    assert a == b
