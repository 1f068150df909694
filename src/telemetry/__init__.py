from .buffer import TimeSeriesBuffer
from .feed import SyntheticFeed, TelemetryFeed
from .snapshots import (
    AlertRecord,
    CarbonHistory,
    CarbonSnapshot,
    CarbonSourceMix,
    EquipmentFleet,
    EquipmentUnit,
    KpiSnapshot,
    ShipRecord,
    TrendSeries,
)

__all__ = [
    "AlertRecord",
    "CarbonHistory",
    "CarbonSnapshot",
    "CarbonSourceMix",
    "EquipmentFleet",
    "EquipmentUnit",
    "KpiSnapshot",
    "ShipRecord",
    "SyntheticFeed",
    "TelemetryFeed",
    "TimeSeriesBuffer",
    "TrendSeries",
]
