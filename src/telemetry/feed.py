"""
Feed abstraction between the update scheduler and whatever produces telemetry.

The scheduler only ever talks to a `TelemetryFeed`. `SyntheticFeed` is the
local generator-backed implementation; a real sensor feed would subclass the
same base without touching the scheduler or the adapters.
"""

from __future__ import annotations

import random
from datetime import datetime
from typing import Optional, Tuple

from . import generators as gen
from .snapshots import AlertRecord, CarbonSnapshot, KpiSnapshot, ShipRecord


class TelemetryFeed:
    """Interface: one method per per-tick snapshot the scheduler pushes."""

    def kpis(self, now: datetime) -> KpiSnapshot:
        raise NotImplementedError

    def ships(self, now: datetime) -> Tuple[ShipRecord, ...]:
        raise NotImplementedError

    def throughput_sample(self, now: datetime) -> float:
        raise NotImplementedError

    def carbon(self, now: datetime) -> CarbonSnapshot:
        raise NotImplementedError

    def alerts(self, now: datetime) -> Tuple[AlertRecord, ...]:
        raise NotImplementedError


class SyntheticFeed(TelemetryFeed):
    """
    Randomized-but-plausible telemetry. All randomness comes from one
    `random.Random`, so a seeded feed replays exactly.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        carbon_target: int = gen.DEFAULT_CARBON_TARGET,
    ) -> None:
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both.")
        self.rng = rng if rng is not None else random.Random(seed)
        self.carbon_target = carbon_target

    def kpis(self, now: datetime) -> KpiSnapshot:
        return gen.generate_kpis(self.rng, now)

    def ships(self, now: datetime) -> Tuple[ShipRecord, ...]:
        return gen.generate_ships(self.rng, now)

    def throughput_sample(self, now: datetime) -> float:
        return gen.generate_throughput_sample(self.rng, now)

    def carbon(self, now: datetime) -> CarbonSnapshot:
        return gen.generate_carbon(self.rng, now, target=self.carbon_target)

    def alerts(self, now: datetime) -> Tuple[AlertRecord, ...]:
        return gen.generate_alerts(self.rng, now)
