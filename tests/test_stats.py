from ap_guardrails.access_point import AccessPointRecord
from ap_guardrails.change_request import ChangeRequest
from ap_guardrails.planner import SafeChangePlanner
from ap_guardrails.stats import decision_stats, rejection_rate


def test_decision_stats_and_rate():
    planner = SafeChangePlanner()
    planner.register(AccessPointRecord("AP-001", 6, 20, 0))
    decisions = [
        planner.evaluate("AP-001", ChangeRequest(new_channel=11), 100, False),
        planner.evaluate("AP-001", ChangeRequest(new_channel=6), 300, False),
        planner.evaluate("AP-001", ChangeRequest(new_channel=11), 300, True),
        planner.evaluate("AP-001", ChangeRequest(new_channel=11), 300, False),
    ]
    s = decision_stats(decisions)
    assert s["total"] == 4
    assert s["accepted"] == 2
    assert s["rejected"] == 2
    assert s["no_op"] == 1
    assert s["by_reason"] == {"PeakHourBlocked": 1, "BudgetExceeded": 1, "HysteresisBlocked": 0}
    assert rejection_rate(decisions) == 0.5


def test_empty_batch():
    assert decision_stats([])["total"] == 0
    assert rejection_rate([]) == 0.0
