import random
import sys
from datetime import datetime
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.telemetry import SyntheticFeed, TelemetryFeed, TimeSeriesBuffer
from src.telemetry import generators as gen

NOW = datetime(2026, 10, 19, 12, 0)


def test_buffer_keeps_last_capacity_values_in_order():
    buffer = TimeSeriesBuffer(5)
    values = list(range(1, 13))
    for value in values:
        buffer.append(value)
    assert len(buffer) == 5
    assert buffer.values() == tuple(float(v) for v in values[-5:])
    assert buffer.evicted == 7
    assert buffer.appended == 12
    assert buffer.latest() == 12.0


def test_buffer_below_capacity_does_not_evict():
    buffer = TimeSeriesBuffer(4, initial=[1, 2])
    buffer.append(3)
    assert buffer.values() == (1.0, 2.0, 3.0)
    assert not buffer.is_full
    assert buffer.evicted == 0


def test_buffer_values_are_a_read_only_copy():
    buffer = TimeSeriesBuffer(3, initial=[1, 2, 3])
    view = buffer.values()
    buffer.append(4)
    assert view == (1.0, 2.0, 3.0)
    assert isinstance(view, tuple)


@pytest.mark.parametrize("capacity", [0, -1, 2.5, True])
def test_buffer_rejects_bad_capacity(capacity):
    with pytest.raises(ValueError):
        TimeSeriesBuffer(capacity)


def test_buffer_to_frame_aligns_labels_to_newest():
    buffer = TimeSeriesBuffer(4, initial=[10, 20])
    df = buffer.to_frame(gen.hourly_labels(4))
    assert list(df.columns) == ["label", "value"]
    assert list(df["label"]) == ["1:00", "0:00"]
    assert list(df["value"]) == [10.0, 20.0]


def test_empty_buffer_to_frame():
    df = TimeSeriesBuffer(3).to_frame(gen.hourly_labels(3))
    assert df.empty


def test_synthetic_feed_replays_with_same_seed():
    first = SyntheticFeed(seed=8)
    second = SyntheticFeed(seed=8)
    assert first.kpis(NOW) == second.kpis(NOW)
    assert first.ships(NOW) == second.ships(NOW)
    assert first.throughput_sample(NOW) == second.throughput_sample(NOW)
    assert first.carbon(NOW) == second.carbon(NOW)
    assert first.alerts(NOW) == second.alerts(NOW)


def test_synthetic_feed_uses_configured_carbon_target():
    feed = SyntheticFeed(rng=random.Random(1), carbon_target=7000)
    carbon = feed.carbon(NOW)
    assert carbon.target == 7000
    assert carbon.remaining_budget == max(0, 7000 - carbon.total_emissions)


def test_synthetic_feed_rejects_rng_and_seed_together():
    with pytest.raises(ValueError):
        SyntheticFeed(rng=random.Random(1), seed=1)


def test_base_feed_is_abstract():
    with pytest.raises(NotImplementedError):
        TelemetryFeed().kpis(NOW)
