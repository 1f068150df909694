import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.telemetry import generators as gen
from src.telemetry.snapshots import BERTHS, SHIP_STATUSES, SHIP_TYPES, CarbonSnapshot

TRIALS = 10_000
NOW = datetime(2026, 10, 19, 12, 0)


def test_kpi_bounds_over_seeded_trials():
    rng = random.Random(2024)
    for _ in range(TRIALS):
        kpis = gen.generate_kpis(rng, NOW)
        assert 6 <= kpis.active_ship_count <= 8
        assert 18000 <= kpis.throughput_teu < 20000
        assert 93 <= kpis.equipment_online_pct < 98
        assert 28 <= kpis.efficiency_pct < 38


def test_carbon_bounds_and_derived_fields_are_exact():
    rng = random.Random(7)
    for _ in range(TRIALS):
        carbon = gen.generate_carbon(rng, NOW)
        total = carbon.total_emissions
        assert 7500 <= total < 8000
        assert 1200 <= carbon.cumulative_reduction < 1300
        assert 42 <= carbon.neutralized_units < 47
        assert carbon.target == 8500
        assert carbon.remaining_budget == max(0, 8500 - total)
        assert carbon.progress_pct == min(100, total / 8500 * 100)


def test_carbon_derivation_clamps_at_source():
    over = CarbonSnapshot.derive(total_emissions=9000, target=8500, cumulative_reduction=0, neutralized_units=0)
    assert over.remaining_budget == 0
    assert over.progress_pct == 100.0

    with pytest.raises(ValueError):
        CarbonSnapshot.derive(total_emissions=10, target=0, cumulative_reduction=0, neutralized_units=0)


def test_ship_bounds_over_seeded_trials():
    rng = random.Random(99)
    for _ in range(TRIALS):
        ships = gen.generate_ships(rng, NOW)
        assert 6 <= len(ships) <= 8
        for idx, ship in enumerate(ships):
            assert ship.ship_type in SHIP_TYPES
            assert ship.status in SHIP_STATUSES
            assert ship.berth == BERTHS[idx % len(BERTHS)]
            assert NOW - timedelta(hours=48) <= ship.arrival_time <= NOW
            assert NOW + timedelta(hours=2) <= ship.departure_time <= NOW + timedelta(hours=26)


def test_ship_names_follow_row_order():
    ships = gen.generate_ships(random.Random(1), NOW)
    assert ships[0].name == "Vessel A"
    assert ships[1].name == "Vessel B"


def test_alerts_are_catalog_prefixes():
    rng = random.Random(5)
    lengths = set()
    for _ in range(TRIALS):
        alerts = gen.generate_alerts(rng, NOW)
        assert 2 <= len(alerts) <= 3
        assert alerts == gen.ALERT_CATALOG[: len(alerts)]
        lengths.add(len(alerts))
    assert lengths == {2, 3}


def test_throughput_sample_bounds():
    rng = random.Random(11)
    for _ in range(TRIALS):
        assert 700 <= gen.generate_throughput_sample(rng, NOW) < 1200


def test_generators_replay_with_same_seed():
    first = random.Random(42)
    second = random.Random(42)
    assert gen.generate_ships(first, NOW) == gen.generate_ships(second, NOW)
    assert gen.generate_kpis(first, NOW) == gen.generate_kpis(second, NOW)
    assert gen.generate_carbon(first, NOW) == gen.generate_carbon(second, NOW)


def test_hourly_labels_run_oldest_first():
    labels = gen.hourly_labels(24)
    assert len(labels) == 24
    assert labels[0] == "23:00"
    assert labels[-1] == "0:00"


def test_carbon_history_spans_year_boundary():
    history = gen.generate_carbon_history(random.Random(3), datetime(2026, 3, 1))
    assert len(history.labels) == 12
    assert history.labels[0] == "2025-04"
    assert history.labels[-1] == "2026-03"
    assert all(7000 <= value < 8000 for value in history.totals)


def test_static_panels_match_reference_counts():
    fleet = gen.equipment_fleet()
    assert len(fleet.classes) == 6
    assert fleet.total_units == sum(gen.EQUIPMENT_RUNNING) + sum(gen.EQUIPMENT_IDLE) + sum(gen.EQUIPMENT_MAINTENANCE)
    units = gen.equipment_units()
    assert len(units) == 8
    assert [unit.name for unit in units if not unit.online] == ["Quay crane 3"]
    assert sum(gen.carbon_source_mix().shares_pct) == 100.0


def test_formatting_helpers():
    assert gen.format_number(19234) == "19,234"
    assert gen.format_clock(datetime(2026, 1, 5, 7, 3)) == "01/05 07:03"
