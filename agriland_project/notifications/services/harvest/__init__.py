"""
Harvest notification engine.

- policy: days until harvest → notification type / priority / work trigger
- ledger: notification persistence (check-before-create)
- orchestrator: the scheduled run over all lands
"""

from .config import HarvestCheckConfig
from .policy import HarvestDecision, decide, escalates
from .orchestrator import (
    HarvestNotificationRunner,
    RunSummary,
    run_harvest_check,
)

__all__ = [
    "HarvestCheckConfig",
    "HarvestDecision",
    "decide",
    "escalates",
    "HarvestNotificationRunner",
    "RunSummary",
    "run_harvest_check",
]
