"""Authoritative per-AP state held by the planner."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class AccessPointRecord:
    """Current configuration of one managed access point.

    last_change_time_minutes is the minute timestamp of the most recent accepted
    change that actually mutated channel or power. None means the AP has never
    been changed, which never counts against the change budget.
    """
    id: str
    channel: int
    power_db: int
    last_change_time_minutes: Optional[int] = None

    def minutes_since_last_change(self, now_minutes: int) -> Optional[int]:
        if self.last_change_time_minutes is None:
            return None
        return now_minutes - self.last_change_time_minutes
