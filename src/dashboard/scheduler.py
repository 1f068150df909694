"""
Update scheduler: the single periodic driver behind the live panels.

The scheduler is a simpy process. `start()` arms it (cancelling any earlier
process first) and `stop()` cancels it. Every tick runs five steps in a fixed
order: KPIs, ship table, throughput trend, carbon, alerts. Each step is
isolated, so one failing or unmounted panel never stops the others.

Ticks are never queued. If the host clock has run ahead of simpy time, for
example after the process was suspended, the missed ticks are dropped and
the next tick goes to the next interval boundary.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

import simpy
import simpy.rt

from src.telemetry.buffer import TimeSeriesBuffer
from src.telemetry.feed import TelemetryFeed
from src.telemetry.generators import hourly_labels
from src.telemetry.snapshots import TrendSeries


logger = logging.getLogger(__name__)

STEP_NAMES = ("kpis", "ships", "throughput", "carbon", "alerts")
IDLE = "idle"
RUNNING = "running"


@dataclass
class TickAdapters:
    kpis: object
    ships: object
    trend: object
    carbon: object
    alerts: object


@dataclass(frozen=True)
class TickReport:
    index: int
    sim_time: float
    outcomes: Dict[str, str]
    snapshots: Dict[str, object] = field(default_factory=dict)

    @property
    def failed_steps(self) -> List[str]:
        return [name for name in STEP_NAMES if self.outcomes.get(name) == "failed"]


def default_host_time(env: simpy.Environment) -> Callable[[], float]:
    """
    Host clock in simpy time units. For a real-time environment this is the
    simpy time the wall clock says we should be at; otherwise simpy time itself.
    """
    if isinstance(env, simpy.rt.RealtimeEnvironment):
        return lambda: env.env_start + (time.monotonic() - env.real_start) / env.factor
    return lambda: env.now


class UpdateScheduler:
    def __init__(
        self,
        env: simpy.Environment,
        feed: TelemetryFeed,
        adapters: TickAdapters,
        buffer: TimeSeriesBuffer,
        interval_ms: float = 3000.0,
        trend_labels: Optional[Tuple[str, ...]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        host_time: Optional[Callable[[], float]] = None,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be > 0.")
        self.env = env
        self.feed = feed
        self.adapters = adapters
        self.buffer = buffer
        self.interval_ms = float(interval_ms)
        self.trend_labels = trend_labels or hourly_labels(buffer.capacity)
        self.clock = clock or datetime.now
        self.host_time = host_time or default_host_time(env)
        self.tick_count = 0
        self.skipped_ticks = 0
        self.step_failures: Dict[str, int] = {name: 0 for name in STEP_NAMES}
        self.last_report: Optional[TickReport] = None
        self.listeners: List[Callable[[TickReport], None]] = []
        self._process: Optional[simpy.Process] = None
        self._generation = 0

    @property
    def state(self) -> str:
        if self._process is not None and self._process.is_alive:
            return RUNNING
        return IDLE

    def start(self) -> None:
        self._cancel("restart")
        self._generation += 1
        self._process = self.env.process(self._run(self._generation))
        logger.info("Update scheduler started: interval=%sms", self.interval_ms)

    def stop(self) -> None:
        if self.state == IDLE:
            return
        self._cancel("stop")
        self._process = None
        logger.info("Update scheduler stopped after %s ticks", self.tick_count)

    def _cancel(self, cause: str) -> None:
        # Bumping the generation also retires a process that cannot be
        # interrupted because it is the one currently running (start() from
        # inside a tick listener).
        self._generation += 1
        process = self._process
        if process is not None and process.is_alive and process is not self.env.active_process:
            process.interrupt(cause)

    def _run(self, generation: int):
        try:
            delay = self.interval_ms
            while True:
                yield self.env.timeout(delay)
                if generation != self._generation:
                    return
                self.tick()
                if generation != self._generation:
                    return
                delay = self._next_delay()
        except simpy.Interrupt:
            return

    def _next_delay(self) -> float:
        behind = self.host_time() - self.env.now
        if behind < self.interval_ms:
            return self.interval_ms
        skipped = int(behind // self.interval_ms)
        self.skipped_ticks += skipped
        logger.warning(
            "Host clock is %.0fms ahead of the scheduler; dropping %s tick(s)", behind, skipped
        )
        return self.interval_ms * (skipped + 1)

    def _step(self, name: str, action: Callable[[], bool]) -> str:
        try:
            rendered = action()
        except Exception:
            self.step_failures[name] += 1
            logger.exception("Tick %s: step '%s' failed", self.tick_count, name)
            return "failed"
        if rendered is False:
            logger.debug("Tick %s: step '%s' has no mounted panel", self.tick_count, name)
            return "skipped"
        return "ok"

    def tick(self) -> TickReport:
        self.tick_count += 1
        now = self.clock()
        snapshots: Dict[str, object] = {}

        def kpis() -> bool:
            snapshots["kpis"] = self.feed.kpis(now)
            return self.adapters.kpis.render(snapshots["kpis"])

        def ships() -> bool:
            snapshots["ships"] = self.feed.ships(now)
            return self.adapters.ships.render(snapshots["ships"])

        def throughput() -> bool:
            sample = self.feed.throughput_sample(now)
            self.buffer.append(sample)
            snapshots["throughput"] = sample
            series = TrendSeries(labels=self.trend_labels, values=self.buffer.values())
            return self.adapters.trend.render(series)

        def carbon() -> bool:
            snapshots["carbon"] = self.feed.carbon(now)
            return self.adapters.carbon.render(snapshots["carbon"])

        def alerts() -> bool:
            snapshots["alerts"] = self.feed.alerts(now)
            return self.adapters.alerts.render(snapshots["alerts"])

        outcomes = {}
        for name, action in zip(STEP_NAMES, (kpis, ships, throughput, carbon, alerts)):
            outcomes[name] = self._step(name, action)

        report = TickReport(
            index=self.tick_count,
            sim_time=self.env.now,
            outcomes=outcomes,
            snapshots=snapshots,
        )
        self.last_report = report
        logger.debug("Tick %s at t=%s: %s", report.index, report.sim_time, outcomes)
        for listener in list(self.listeners):
            try:
                listener(report)
            except Exception:
                logger.exception("Tick %s: listener failed", report.index)
        return report
