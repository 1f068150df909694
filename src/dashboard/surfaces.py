"""
Presentation surfaces the view adapters write to.

Cards, tables and lists are plain in-memory panels (tables hold a pandas
DataFrame). Charts and the 3D viewport are matplotlib figures. Charts update
their artists in place, so a tick never rebuilds a figure. Panels are looked up
through a `PanelRegistry`. A panel that is not mounted is simply absent.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import pandas as pd
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  (registers the 3d projection)

PANEL_IDS = (
    "kpi-cards",
    "ships-table",
    "throughput-chart",
    "carbon-cards",
    "alert-list",
    "twin-viewport",
    "equipment-chart",
    "equipment-list",
    "carbon-source-chart",
    "carbon-trend-chart",
)

CHART_FACE = "#1a1f3a"
CHART_TEXT = "#a0aec0"
CHART_GRID = "#2d3352"


class PanelRegistry:
    def __init__(self) -> None:
        self._panels: Dict[str, object] = {}

    def mount(self, panel_id: str, surface) -> None:
        self._panels[panel_id] = surface

    def unmount(self, panel_id: str):
        return self._panels.pop(panel_id, None)

    def get(self, panel_id: str):
        return self._panels.get(panel_id)

    def __contains__(self, panel_id: str) -> bool:
        return panel_id in self._panels

    def items(self):
        return list(self._panels.items())

    def close(self) -> None:
        for surface in self._panels.values():
            close = getattr(surface, "close", None)
            if close is not None:
                close()
        self._panels.clear()


class CardPanel:
    """A row of KPI cards: field id -> display text, plus an optional progress bar."""

    def __init__(self, fields: Iterable[str]) -> None:
        self.values: Dict[str, str] = {field: "0" for field in fields}
        self.progress_pct: Optional[float] = None
        self.updates = 0

    def set(self, field: str, text: str) -> None:
        self.values[field] = text

    def set_progress(self, pct: float) -> None:
        self.progress_pct = max(0.0, min(100.0, float(pct)))

    def commit(self) -> None:
        self.updates += 1


class TablePanel:
    def __init__(self, columns: Sequence[str]) -> None:
        self.columns = list(columns)
        self.frame = pd.DataFrame(columns=self.columns)
        self.replace_count = 0

    def replace(self, frame: pd.DataFrame) -> None:
        missing = [col for col in self.columns if col not in frame.columns]
        if missing:
            raise ValueError(f"Table rows missing columns: {', '.join(missing)}")
        self.frame = frame[self.columns].reset_index(drop=True)
        self.replace_count += 1


class ListPanel:
    def __init__(self) -> None:
        self.items: Tuple[dict, ...] = ()
        self.replace_count = 0

    def replace(self, items: Iterable[dict]) -> None:
        self.items = tuple(items)
        self.replace_count += 1


def _style_axes(ax, title: str) -> None:
    ax.set_facecolor(CHART_FACE)
    ax.set_title(title, color="#ffffff")
    ax.tick_params(colors=CHART_TEXT)
    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.grid(color=CHART_GRID, linewidth=0.5)


class _FigurePanel:
    def __init__(self, title: str, figsize=(8, 4)) -> None:
        self.title = title
        self.fig, self.ax = plt.subplots(figsize=figsize)
        self.fig.patch.set_facecolor(CHART_FACE)
        _style_axes(self.ax, title)
        self.updates = 0

    def save(self, path: Path, dpi: int = 120) -> Path:
        self.fig.tight_layout()
        self.fig.savefig(path, dpi=dpi, facecolor=self.fig.get_facecolor())
        return path

    def close(self) -> None:
        plt.close(self.fig)


class LineChartPanel(_FigurePanel):
    """
    Line chart whose data is replaced in place: the Line2D is created once and
    later updates only call `set_data`.
    """

    def __init__(self, title: str, ylabel: str = "", color: str = "#667eea", max_ticks: int = 12) -> None:
        super().__init__(title)
        self.ax.set_ylabel(ylabel, color=CHART_TEXT)
        self.color = color
        self.max_ticks = max_ticks
        self.line = None
        self.init_count = 0
        self.labels: Tuple[str, ...] = ()
        self.values: Tuple[float, ...] = ()

    def set_series(self, labels: Sequence[str], values: Sequence[float]) -> None:
        if len(labels) != len(values):
            raise ValueError("labels and values must have the same length.")
        xs = list(range(len(values)))
        if self.line is None:
            (self.line,) = self.ax.plot(xs, list(values), color=self.color, linewidth=2)
            self.init_count += 1
        else:
            self.line.set_data(xs, list(values))
        step = max(1, math.ceil(len(labels) / self.max_ticks))
        self.ax.set_xticks(xs[::step])
        self.ax.set_xticklabels(list(labels)[::step])
        self.ax.relim()
        self.ax.autoscale_view()
        self.labels = tuple(labels)
        self.values = tuple(values)
        self.updates += 1


class StackedBarPanel(_FigurePanel):
    def __init__(self, title: str, colors: Sequence[str]) -> None:
        super().__init__(title)
        self.colors = list(colors)

    def set_series(self, labels: Sequence[str], series: Dict[str, Sequence[float]]) -> None:
        self.ax.clear()
        _style_axes(self.ax, self.title)
        bottom = [0.0] * len(labels)
        for idx, (name, values) in enumerate(series.items()):
            color = self.colors[idx % len(self.colors)]
            self.ax.bar(list(labels), list(values), bottom=bottom, label=name, color=color)
            bottom = [b + v for b, v in zip(bottom, values)]
        self.ax.legend(loc="lower center", bbox_to_anchor=(0.5, -0.3), ncol=len(series), frameon=False,
                       labelcolor=CHART_TEXT)
        self.updates += 1


class DoughnutPanel(_FigurePanel):
    def __init__(self, title: str, colors: Sequence[str]) -> None:
        super().__init__(title, figsize=(5, 5))
        self.colors = list(colors)

    def set_series(self, labels: Sequence[str], values: Sequence[float]) -> None:
        self.ax.clear()
        self.ax.set_title(self.title, color="#ffffff")
        self.ax.pie(
            list(values),
            labels=[f"{label}: {value:g}%" for label, value in zip(labels, values)],
            colors=self.colors[: len(values)],
            wedgeprops={"width": 0.4},
            textprops={"color": CHART_TEXT},
        )
        self.updates += 1


class SceneViewport:
    """
    matplotlib 3D axes standing in for the render surface. Scene y (up) is
    drawn on the matplotlib z axis.
    """

    def __init__(self, width: int = 960, height: int = 540, dpi: int = 100, background: str = "#0a0e27") -> None:
        self.dpi = dpi
        self.fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        self.fig.patch.set_facecolor(background)
        self.ax = self.fig.add_subplot(111, projection="3d")
        self.ax.set_facecolor(background)
        self.ax.set_axis_off()
        self.pixel_size = (width, height)
        self.scene_nodes: Tuple = ()
        self.load_count = 0
        self.frames = 0
        self.view: Tuple[float, float] = (0.0, 0.0)

    def load_scene(self, nodes) -> None:
        self.ax.cla()
        self.ax.set_axis_off()
        for node in nodes:
            (cx, cy, cz), (w, h, d) = node.position, node.size
            self.ax.bar3d(
                cx - w / 2,
                cz - d / 2,
                cy - h / 2,
                w,
                d,
                max(h, 0.01),
                color=node.color,
                shade=node.cast_shadow,
            )
        self.scene_nodes = nodes
        self.load_count += 1

    def apply_camera(self, pose) -> None:
        px, py, pz = pose.position
        tx, ty, tz = pose.target
        dx, dy, dz = px - tx, py - ty, pz - tz
        azim = math.degrees(math.atan2(dz, dx))
        elev = math.degrees(math.atan2(dy, math.hypot(dx, dz)))
        self.ax.view_init(elev=elev, azim=azim)
        self.view = (elev, azim)

    def resize(self, width: int, height: int) -> None:
        self.fig.set_size_inches(width / self.dpi, height / self.dpi)
        self.pixel_size = (width, height)

    def draw(self) -> None:
        self.fig.canvas.draw()
        self.frames += 1

    def save(self, path: Path) -> Path:
        self.fig.savefig(path, dpi=self.dpi, facecolor=self.fig.get_facecolor())
        return path

    def close(self) -> None:
        plt.close(self.fig)


def default_panels(viewport_size: Tuple[int, int] = (960, 540), background: str = "#0a0e27") -> Dict[str, object]:
    width, height = viewport_size
    return {
        "kpi-cards": CardPanel(["ships-count", "throughput-value", "equipment-online", "efficiency-value"]),
        "ships-table": TablePanel(["Name", "Type", "Berth", "Status", "Arrival", "Departure"]),
        "throughput-chart": LineChartPanel("Throughput trend", ylabel="TEU"),
        "carbon-cards": CardPanel(["total-carbon", "carbon-remaining", "carbon-reduction", "carbon-neutral"]),
        "alert-list": ListPanel(),
        "twin-viewport": SceneViewport(width, height, background=background),
        "equipment-chart": StackedBarPanel("Equipment status", ["#43e97b", "#4facfe", "#faca57"]),
        "equipment-list": ListPanel(),
        "carbon-source-chart": DoughnutPanel(
            "Emission sources", ["#667eea", "#f5576c", "#4facfe", "#43e97b", "#faca57"]
        ),
        "carbon-trend-chart": LineChartPanel("Monthly emissions", ylabel="t CO2", color="#43e97b"),
    }


def mount_all(registry: PanelRegistry, panels: Dict[str, object], skip: Optional[List[str]] = None) -> None:
    skip = set(skip or [])
    for panel_id, surface in panels.items():
        if panel_id in skip:
            close = getattr(surface, "close", None)
            if close is not None:
                close()
            continue
        registry.mount(panel_id, surface)
