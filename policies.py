"""Guardrail policies evaluated against a change request.

Each policy is an independent pass/fail gate returning None on pass or a
PolicyVerdict naming why it blocked. Policies run in a fixed order and the
first failure wins, so every rejection is attributable to exactly one cause:

1) Time window: no non-emergency changes during peak hours.
2) Change budget: minimum elapsed time since the last accepted mutating change.
   Emergency requests do not bypass this gate.
3) Hysteresis: minimum power step, only for an explicitly requested power value.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .access_point import AccessPointRecord
from .change_request import ChangeRequest, RejectReason
from .guardrail_params import GuardrailParameters


@dataclass(frozen=True)
class PolicyVerdict:
    reason: RejectReason
    detail: str = ""


Policy = Callable[[AccessPointRecord, ChangeRequest, int, bool, GuardrailParameters], Optional[PolicyVerdict]]


def time_window_policy(
    record: AccessPointRecord,
    request: ChangeRequest,
    current_time_minutes: int,
    is_peak_hour: bool,
    params: GuardrailParameters,
) -> Optional[PolicyVerdict]:
    if is_peak_hour and not request.is_emergency:
        return PolicyVerdict(RejectReason.PEAK_HOUR_BLOCKED, "peak hour, request is not an emergency")
    return None


def change_budget_policy(
    record: AccessPointRecord,
    request: ChangeRequest,
    current_time_minutes: int,
    is_peak_hour: bool,
    params: GuardrailParameters,
) -> Optional[PolicyVerdict]:
    elapsed = record.minutes_since_last_change(current_time_minutes)
    if elapsed is None:
        return None
    if elapsed < params.change_budget_minutes:
        return PolicyVerdict(
            RejectReason.BUDGET_EXCEEDED,
            f"last change {elapsed} min ago, budget {params.change_budget_minutes} min",
        )
    return None


def hysteresis_policy(
    record: AccessPointRecord,
    request: ChangeRequest,
    current_time_minutes: int,
    is_peak_hour: bool,
    params: GuardrailParameters,
) -> Optional[PolicyVerdict]:
    # Channel-only requests are not subject to hysteresis.
    if request.new_power_db is None:
        return None
    delta = abs(request.new_power_db - record.power_db)
    if delta < params.hysteresis_threshold_db:
        return PolicyVerdict(
            RejectReason.HYSTERESIS_BLOCKED,
            f"power delta {delta} dB below threshold {params.hysteresis_threshold_db} dB",
        )
    return None


DEFAULT_POLICIES: Sequence[Policy] = (
    time_window_policy,
    change_budget_policy,
    hysteresis_policy,
)


def first_violation(
    record: AccessPointRecord,
    request: ChangeRequest,
    current_time_minutes: int,
    is_peak_hour: bool,
    params: GuardrailParameters,
    policies: Sequence[Policy] = DEFAULT_POLICIES,
) -> Optional[PolicyVerdict]:
    """Run policies in order and return the first failing verdict, or None if all pass."""
    for policy in policies:
        verdict = policy(record, request, current_time_minutes, is_peak_hour, params)
        if verdict is not None:
            return verdict
    return None
