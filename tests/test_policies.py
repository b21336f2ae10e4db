from ap_guardrails.access_point import AccessPointRecord
from ap_guardrails.change_request import ChangeRequest, RejectReason
from ap_guardrails.guardrail_params import GuardrailParameters
from ap_guardrails.policies import (
    time_window_policy,
    change_budget_policy,
    hysteresis_policy,
    first_violation,
)


PARAMS = GuardrailParameters()


def test_time_window_policy():
    ap = AccessPointRecord("AP-1", 6, 20, 0)
    assert time_window_policy(ap, ChangeRequest(new_channel=1), 0, True, PARAMS).reason == RejectReason.PEAK_HOUR_BLOCKED
    assert time_window_policy(ap, ChangeRequest(new_channel=1, is_emergency=True), 0, True, PARAMS) is None
    assert time_window_policy(ap, ChangeRequest(new_channel=1), 0, False, PARAMS) is None


def test_change_budget_policy():
    ap = AccessPointRecord("AP-1", 6, 20, 1000)
    v = change_budget_policy(ap, ChangeRequest(new_channel=1), 1239, False, PARAMS)
    assert v.reason == RejectReason.BUDGET_EXCEEDED
    assert "239 min" in v.detail
    assert change_budget_policy(ap, ChangeRequest(new_channel=1), 1240, False, PARAMS) is None
    assert change_budget_policy(AccessPointRecord("AP-2", 6, 20), ChangeRequest(new_channel=1), 0, False, PARAMS) is None


def test_hysteresis_policy():
    ap = AccessPointRecord("AP-1", 6, 20, 0)
    assert hysteresis_policy(ap, ChangeRequest(new_power_db=21), 0, False, PARAMS).reason == RejectReason.HYSTERESIS_BLOCKED
    assert hysteresis_policy(ap, ChangeRequest(new_power_db=19), 0, False, PARAMS).reason == RejectReason.HYSTERESIS_BLOCKED
    assert hysteresis_policy(ap, ChangeRequest(new_power_db=20), 0, False, PARAMS) is not None
    assert hysteresis_policy(ap, ChangeRequest(new_power_db=18), 0, False, PARAMS) is None
    assert hysteresis_policy(ap, ChangeRequest(new_channel=7), 0, False, PARAMS) is None


def test_first_violation_order():
    ap = AccessPointRecord("AP-1", 6, 20, 0)
    req = ChangeRequest(new_power_db=21)
    assert first_violation(ap, req, 10, True, PARAMS).reason == RejectReason.PEAK_HOUR_BLOCKED
    assert first_violation(ap, req, 10, False, PARAMS).reason == RejectReason.BUDGET_EXCEEDED
    assert first_violation(ap, req, 500, False, PARAMS).reason == RejectReason.HYSTERESIS_BLOCKED
    assert first_violation(ap, ChangeRequest(new_power_db=25), 500, False, PARAMS) is None


def test_first_violation_with_custom_stack():
    ap = AccessPointRecord("AP-1", 6, 20, 0)
    v = first_violation(ap, ChangeRequest(new_power_db=21), 10, True, PARAMS, policies=(hysteresis_policy,))
    assert v.reason == RejectReason.HYSTERESIS_BLOCKED
