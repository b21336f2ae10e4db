"""Change requests and the decisions returned for them.

A ChangeRequest is a one-shot proposal: it is evaluated atomically by the
planner and never stored. A Decision is either an accept (carrying the
resulting AP state) or a reject tagged with the single policy that blocked it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .access_point import AccessPointRecord


class RejectReason(str, Enum):
    PEAK_HOUR_BLOCKED = "PeakHourBlocked"
    BUDGET_EXCEEDED = "BudgetExceeded"
    HYSTERESIS_BLOCKED = "HysteresisBlocked"


@dataclass(frozen=True)
class ChangeRequest:
    """Proposed channel and/or power update.

    None means "not requested"; 0 is a real value (e.g. 0 dB) and is applied as such.
    """
    new_channel: Optional[int] = None
    new_power_db: Optional[int] = None
    is_emergency: bool = False

    @property
    def is_empty(self) -> bool:
        return self.new_channel is None and self.new_power_db is None


@dataclass(frozen=True)
class Decision:
    accepted: bool
    record: AccessPointRecord  # snapshot after evaluation
    reason: Optional[RejectReason] = None
    detail: str = ""
    changed_fields: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def accept(cls, record: AccessPointRecord, changed_fields: Tuple[str, ...] = (), detail: str = "") -> "Decision":
        return cls(accepted=True, record=record, reason=None, detail=detail, changed_fields=tuple(changed_fields))

    @classmethod
    def reject(cls, record: AccessPointRecord, reason: RejectReason, detail: str = "") -> "Decision":
        return cls(accepted=False, record=record, reason=reason, detail=detail)

    @property
    def is_no_op(self) -> bool:
        """Accepted, but nothing differed from the current state."""
        return self.accepted and not self.changed_fields
