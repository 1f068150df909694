from __future__ import annotations

from collections import deque
from typing import Iterable, Tuple

import pandas as pd


class TimeSeriesBuffer:
    """
    Fixed-capacity FIFO of numeric samples backing a trend chart.

    Only the update scheduler appends; everyone else reads through `values()`,
    which hands out an immutable copy.
    """

    def __init__(self, capacity: int, initial: Iterable[float] = ()) -> None:
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity < 1:
            raise ValueError("Buffer capacity must be an int >= 1.")
        self.capacity = capacity
        self._samples: deque = deque(maxlen=capacity)
        self.appended = 0
        self.evicted = 0
        for value in initial:
            self.append(value)

    def append(self, value: float) -> None:
        if len(self._samples) == self.capacity:
            self.evicted += 1
        self._samples.append(float(value))
        self.appended += 1

    def values(self) -> Tuple[float, ...]:
        return tuple(self._samples)

    def latest(self) -> float | None:
        if not self._samples:
            return None
        return self._samples[-1]

    @property
    def is_full(self) -> bool:
        return len(self._samples) == self.capacity

    def __len__(self) -> int:
        return len(self._samples)

    def to_frame(self, labels: Tuple[str, ...] | None = None) -> pd.DataFrame:
        df = pd.DataFrame({"value": list(self._samples)})
        if labels is not None:
            df.insert(0, "label", list(labels[-len(df):]) if len(df) else [])
        return df
