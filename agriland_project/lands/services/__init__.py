"""
Land service layer.

- harvest_calendar: pure date arithmetic for harvest cycles
- candidates: typed rows of lands eligible for the harvest check
"""

from .harvest_calendar import (
    calculate_next_harvest_date,
    days_until_harvest,
    effective_cycle_days,
    is_schedulable,
    to_calendar_date,
)
from .candidates import (
    HarvestCandidate,
    get_lands_for_harvest_check,
    store_next_harvest_date,
)

__all__ = [
    "calculate_next_harvest_date",
    "days_until_harvest",
    "effective_cycle_days",
    "is_schedulable",
    "to_calendar_date",
    "HarvestCandidate",
    "get_lands_for_harvest_check",
    "store_next_harvest_date",
]
