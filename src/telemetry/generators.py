from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import List, Tuple

from .snapshots import (
    BERTHS,
    SHIP_STATUSES,
    SHIP_TYPES,
    AlertRecord,
    CarbonHistory,
    CarbonSnapshot,
    CarbonSourceMix,
    EquipmentFleet,
    EquipmentUnit,
    KpiSnapshot,
    ShipRecord,
)


DEFAULT_CARBON_TARGET = 8500

# Inclusive lower / exclusive upper bounds of every randomized value.
SHIP_COUNT_RANGE = (6, 9)
ARRIVAL_HOURS_AGO_RANGE = (0, 48)
DEPARTURE_HOURS_AHEAD_RANGE = (2, 26)
THROUGHPUT_TEU_RANGE = (18000, 20000)
EQUIPMENT_ONLINE_RANGE = (93, 98)
EFFICIENCY_RANGE = (28, 38)
CARBON_TOTAL_RANGE = (7500, 8000)
CARBON_REDUCTION_RANGE = (1200, 1300)
CARBON_NEUTRAL_RANGE = (42, 47)
ALERT_COUNT_RANGE = (2, 4)
TREND_SAMPLE_RANGE = (700, 1200)
CARBON_HISTORY_RANGE = (7000, 8000)

ALERT_CATALOG: Tuple[AlertRecord, ...] = (
    AlertRecord(
        severity="low",
        icon="ℹ️",
        title="Equipment maintenance",
        description="Crane 3 in zone A is due for scheduled service",
        relative_timestamp="5 min ago",
    ),
    AlertRecord(
        severity="medium",
        icon="⚠️",
        title="Weather warning",
        description="Strong winds possible in the next 6 hours, reinforce lashings",
        relative_timestamp="15 min ago",
    ),
    AlertRecord(
        severity="low",
        icon="ℹ️",
        title="Crew dispatch",
        description="Zone B stevedores need reinforcement",
        relative_timestamp="32 min ago",
    ),
)

EQUIPMENT_CLASSES = ("Gantry crane", "Tractor", "Stacker", "RTG", "Quay crane", "Yard crane")
EQUIPMENT_RUNNING = (18, 25, 12, 8, 6, 10)
EQUIPMENT_IDLE = (4, 8, 3, 2, 2, 4)
EQUIPMENT_MAINTENANCE = (2, 2, 1, 0, 0, 1)

EQUIPMENT_UNITS = (
    ("Gantry crane 1", True),
    ("Gantry crane 2", True),
    ("Gantry crane 3", True),
    ("Quay crane 1", True),
    ("Quay crane 2", True),
    ("Quay crane 3", False),
    ("Yard crane 1", True),
    ("Yard crane 2", True),
)

CARBON_SOURCES = ("Handling equipment", "Transport vehicles", "Lighting", "Offices", "Other")
CARBON_SOURCE_SHARES = (35.0, 28.0, 18.0, 12.0, 7.0)


def _randint(rng: random.Random, bounds: Tuple[int, int]) -> int:
    low, high = bounds
    return rng.randrange(low, high)


def generate_ships(rng: random.Random, now: datetime) -> Tuple[ShipRecord, ...]:
    count = _randint(rng, SHIP_COUNT_RANGE)
    ships: List[ShipRecord] = []
    for i in range(count):
        hours_ago = _randint(rng, ARRIVAL_HOURS_AGO_RANGE)
        hours_ahead = _randint(rng, DEPARTURE_HOURS_AHEAD_RANGE)
        ships.append(
            ShipRecord(
                name=f"Vessel {chr(ord('A') + i)}",
                ship_type=rng.choice(SHIP_TYPES),
                berth=BERTHS[i % len(BERTHS)],
                status=rng.choice(SHIP_STATUSES),
                arrival_time=now - timedelta(hours=hours_ago),
                departure_time=now + timedelta(hours=hours_ahead),
            )
        )
    return tuple(ships)


def generate_kpis(rng: random.Random, now: datetime | None = None) -> KpiSnapshot:
    return KpiSnapshot(
        active_ship_count=_randint(rng, SHIP_COUNT_RANGE),
        throughput_teu=_randint(rng, THROUGHPUT_TEU_RANGE),
        equipment_online_pct=_randint(rng, EQUIPMENT_ONLINE_RANGE),
        efficiency_pct=_randint(rng, EFFICIENCY_RANGE),
    )


def generate_carbon(
    rng: random.Random,
    now: datetime | None = None,
    target: int = DEFAULT_CARBON_TARGET,
) -> CarbonSnapshot:
    total = _randint(rng, CARBON_TOTAL_RANGE)
    return CarbonSnapshot.derive(
        total_emissions=total,
        target=target,
        cumulative_reduction=_randint(rng, CARBON_REDUCTION_RANGE),
        neutralized_units=_randint(rng, CARBON_NEUTRAL_RANGE),
    )


def generate_alerts(rng: random.Random, now: datetime | None = None) -> Tuple[AlertRecord, ...]:
    count = _randint(rng, ALERT_COUNT_RANGE)
    return ALERT_CATALOG[:count]


def generate_throughput_sample(rng: random.Random, now: datetime | None = None) -> int:
    return _randint(rng, TREND_SAMPLE_RANGE)


def hourly_labels(count: int) -> Tuple[str, ...]:
    """Labels for the trend chart, oldest first: '23:00' ... '0:00' for 24 slots."""
    return tuple(f"{hour}:00" for hour in range(count - 1, -1, -1))


def generate_throughput_history(rng: random.Random, count: int) -> Tuple[int, ...]:
    """Seed values used to pre-fill the trend chart before the first tick."""
    return tuple(generate_throughput_sample(rng) for _ in range(count))


def generate_carbon_history(rng: random.Random, now: datetime, months: int = 12) -> CarbonHistory:
    labels = []
    totals = []
    for back in range(months - 1, -1, -1):
        year = now.year
        month = now.month - back
        while month <= 0:
            month += 12
            year -= 1
        labels.append(f"{year}-{month:02d}")
        totals.append(_randint(rng, CARBON_HISTORY_RANGE))
    return CarbonHistory(labels=tuple(labels), totals=tuple(totals))


def equipment_fleet() -> EquipmentFleet:
    return EquipmentFleet(
        classes=EQUIPMENT_CLASSES,
        running=EQUIPMENT_RUNNING,
        idle=EQUIPMENT_IDLE,
        maintenance=EQUIPMENT_MAINTENANCE,
    )


def equipment_units() -> Tuple[EquipmentUnit, ...]:
    return tuple(EquipmentUnit(name=name, online=online) for name, online in EQUIPMENT_UNITS)


def carbon_source_mix() -> CarbonSourceMix:
    return CarbonSourceMix(sources=CARBON_SOURCES, shares_pct=CARBON_SOURCE_SHARES)


def format_number(value: int | float) -> str:
    return f"{int(value):,}"


def format_clock(value: datetime) -> str:
    return value.strftime("%m/%d %H:%M")
