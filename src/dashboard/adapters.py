from __future__ import annotations

from typing import Tuple

import pandas as pd

from src.scene.camera import SceneFrame
from src.telemetry.generators import format_clock, format_number
from src.telemetry.snapshots import (
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


SHIP_TYPE_LABELS = {
    "container": "Container ship",
    "bulk": "Bulk carrier",
    "tanker": "Tanker",
    "general-cargo": "General cargo",
}
SHIP_STATUS_LABELS = {
    "loading": "Loading",
    "unloading": "Unloading",
    "waiting": "Waiting",
}


class ViewAdapter:
    """
    Translates one snapshot type into a mutation of one panel.

    The target panel is looked up on every render. If it is not mounted, the
    adapter does nothing and returns False. Adapters never modify the
    snapshot they are given.
    """

    panel_id = ""

    def __init__(self, registry, panel_id: str | None = None) -> None:
        self.registry = registry
        if panel_id is not None:
            self.panel_id = panel_id
        self.render_count = 0

    def render(self, snapshot) -> bool:
        surface = self.registry.get(self.panel_id)
        if surface is None:
            return False
        self._draw(surface, snapshot)
        self.render_count += 1
        return True

    def _draw(self, surface, snapshot) -> None:
        raise NotImplementedError


class KpiCardsAdapter(ViewAdapter):
    panel_id = "kpi-cards"

    def _draw(self, surface, snapshot: KpiSnapshot) -> None:
        surface.set("ships-count", str(snapshot.active_ship_count))
        surface.set("throughput-value", format_number(snapshot.throughput_teu))
        surface.set("equipment-online", f"{snapshot.equipment_online_pct}%")
        surface.set("efficiency-value", f"{snapshot.efficiency_pct}%")
        surface.commit()


def ships_to_dataframe(ships: Tuple[ShipRecord, ...]) -> pd.DataFrame:
    rows = [
        {
            "Name": ship.name,
            "Type": SHIP_TYPE_LABELS.get(ship.ship_type, ship.ship_type),
            "Berth": ship.berth,
            "Status": SHIP_STATUS_LABELS.get(ship.status, ship.status),
            "Arrival": format_clock(ship.arrival_time),
            "Departure": format_clock(ship.departure_time),
        }
        for ship in ships
    ]
    return pd.DataFrame(rows, columns=["Name", "Type", "Berth", "Status", "Arrival", "Departure"])


class ShipTableAdapter(ViewAdapter):
    panel_id = "ships-table"

    def _draw(self, surface, snapshot: Tuple[ShipRecord, ...]) -> None:
        surface.replace(ships_to_dataframe(snapshot))


class TrendChartAdapter(ViewAdapter):
    panel_id = "throughput-chart"

    def _draw(self, surface, snapshot: TrendSeries) -> None:
        labels = snapshot.labels[-len(snapshot.values):] if snapshot.values else ()
        surface.set_series(labels, snapshot.values)


class CarbonPanelAdapter(ViewAdapter):
    panel_id = "carbon-cards"

    def _draw(self, surface, snapshot: CarbonSnapshot) -> None:
        surface.set("total-carbon", format_number(snapshot.total_emissions))
        surface.set("carbon-remaining", format_number(snapshot.remaining_budget))
        surface.set("carbon-reduction", format_number(snapshot.cumulative_reduction))
        surface.set("carbon-neutral", str(snapshot.neutralized_units))
        surface.set_progress(snapshot.progress_pct)
        surface.commit()


def alert_item(alert: AlertRecord) -> dict:
    return {
        "severity": alert.severity,
        "icon": alert.icon,
        "title": alert.title,
        "description": alert.description,
        "time": alert.relative_timestamp,
    }


class AlertListAdapter(ViewAdapter):
    panel_id = "alert-list"

    def _draw(self, surface, snapshot: Tuple[AlertRecord, ...]) -> None:
        surface.replace(alert_item(alert) for alert in snapshot)


class SceneViewportAdapter(ViewAdapter):
    panel_id = "twin-viewport"

    def _draw(self, surface, snapshot: SceneFrame) -> None:
        if surface.scene_nodes is not snapshot.nodes:
            surface.load_scene(snapshot.nodes)
        surface.apply_camera(snapshot.camera)
        surface.draw()

    def resize(self, width: int, height: int) -> bool:
        surface = self.registry.get(self.panel_id)
        if surface is None:
            return False
        surface.resize(width, height)
        return True


class EquipmentChartAdapter(ViewAdapter):
    panel_id = "equipment-chart"

    def _draw(self, surface, snapshot: EquipmentFleet) -> None:
        surface.set_series(
            snapshot.classes,
            {
                "Running": snapshot.running,
                "Idle": snapshot.idle,
                "Maintenance": snapshot.maintenance,
            },
        )


class EquipmentListAdapter(ViewAdapter):
    panel_id = "equipment-list"

    def _draw(self, surface, snapshot: Tuple[EquipmentUnit, ...]) -> None:
        surface.replace(
            {"name": unit.name, "status": "online" if unit.online else "offline"} for unit in snapshot
        )


class CarbonSourceAdapter(ViewAdapter):
    panel_id = "carbon-source-chart"

    def _draw(self, surface, snapshot: CarbonSourceMix) -> None:
        surface.set_series(snapshot.sources, snapshot.shares_pct)


class CarbonTrendAdapter(ViewAdapter):
    panel_id = "carbon-trend-chart"

    def _draw(self, surface, snapshot: CarbonHistory) -> None:
        surface.set_series(snapshot.labels, snapshot.totals)
