"""
Typed snapshot values handed from the telemetry feed to the view adapters.

Every snapshot is a frozen dataclass and every sequence inside one is a tuple,
so an adapter can hold on to what it receives without worrying about the
scheduler changing it underneath.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Tuple


SHIP_TYPES = ("container", "bulk", "tanker", "general-cargo")
SHIP_STATUSES = ("loading", "unloading", "waiting")
BERTHS = ("A1", "A2", "B1", "B2", "C1", "C2", "D1", "D2")
ALERT_SEVERITIES = ("low", "medium", "high")


@dataclass(frozen=True)
class ShipRecord:
    """
    One row of the berthing table. There is no stable ship id: the whole
    table is regenerated on every tick.
    """

    name: str
    ship_type: str
    berth: str
    status: str
    arrival_time: datetime
    departure_time: datetime


@dataclass(frozen=True)
class KpiSnapshot:
    active_ship_count: int
    throughput_teu: int
    equipment_online_pct: int
    efficiency_pct: int


@dataclass(frozen=True)
class CarbonSnapshot:
    """
    Carbon panel values. `remaining_budget` and `progress_pct` are derived
    from `total_emissions` and `target`; use `CarbonSnapshot.derive(...)`.
    """

    total_emissions: int
    target: int
    remaining_budget: int
    progress_pct: float
    cumulative_reduction: int
    neutralized_units: int

    @classmethod
    def derive(
        cls,
        total_emissions: int,
        target: int,
        cumulative_reduction: int,
        neutralized_units: int,
    ) -> "CarbonSnapshot":
        if target <= 0:
            raise ValueError("Carbon target must be > 0.")
        progress = (total_emissions / target) * 100
        return cls(
            total_emissions=total_emissions,
            target=target,
            remaining_budget=max(0, target - total_emissions),
            progress_pct=min(100.0, max(0.0, progress)),
            cumulative_reduction=cumulative_reduction,
            neutralized_units=neutralized_units,
        )


@dataclass(frozen=True)
class AlertRecord:
    severity: str
    icon: str
    title: str
    description: str
    relative_timestamp: str


@dataclass(frozen=True)
class EquipmentFleet:
    """Running / idle / maintenance counts per equipment class."""

    classes: Tuple[str, ...]
    running: Tuple[int, ...]
    idle: Tuple[int, ...]
    maintenance: Tuple[int, ...]

    @property
    def total_units(self) -> int:
        return sum(self.running) + sum(self.idle) + sum(self.maintenance)


@dataclass(frozen=True)
class EquipmentUnit:
    name: str
    online: bool


@dataclass(frozen=True)
class CarbonSourceMix:
    sources: Tuple[str, ...]
    shares_pct: Tuple[float, ...]


@dataclass(frozen=True)
class CarbonHistory:
    labels: Tuple[str, ...]
    totals: Tuple[int, ...]


@dataclass(frozen=True)
class TrendSeries:
    """What the trend chart adapter receives: fixed labels plus the buffer contents."""

    labels: Tuple[str, ...]
    values: Tuple[float, ...]
