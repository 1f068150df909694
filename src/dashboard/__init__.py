from .config import CONFIG_KEYS, DashboardConfig, config_from_dict, config_to_dict, get_config
from .context import DashboardContext, build_dashboard
from .overrides import apply_overrides
from .scheduler import STEP_NAMES, TickAdapters, TickReport, UpdateScheduler

__all__ = [
    "CONFIG_KEYS",
    "STEP_NAMES",
    "DashboardConfig",
    "DashboardContext",
    "TickAdapters",
    "TickReport",
    "UpdateScheduler",
    "apply_overrides",
    "build_dashboard",
    "config_from_dict",
    "config_to_dict",
    "get_config",
]
