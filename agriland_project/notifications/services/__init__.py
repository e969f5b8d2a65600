"""
Notification service layer.

- harvest: the scheduled harvest check (policy, ledger, orchestrator)
- housekeeping: cleanup and statistics

Visibility and per-user filtering are handled in the views.
"""

# =====================================================
# HARVEST
# =====================================================
from .harvest import (
    HarvestCheckConfig,
    HarvestNotificationRunner,
    RunSummary,
    run_harvest_check,
)

# =====================================================
# HOUSEKEEPING
# =====================================================
from .housekeeping import (
    cleanup_old_notifications,
    notification_stats,
)

# =====================================================
# PUBLIC EXPORTS
# =====================================================
__all__ = [
    # Harvest
    "HarvestCheckConfig",
    "HarvestNotificationRunner",
    "RunSummary",
    "run_harvest_check",

    # Housekeeping
    "cleanup_old_notifications",
    "notification_stats",
]
