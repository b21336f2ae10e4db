from typing import Iterable

from .change_request import Decision, RejectReason


def decision_stats(decisions: Iterable[Decision]) -> dict:
    """Compute simple counts over a batch of decisions.

    Returns a dict with total/accepted/rejected/no_op counts and a per-reason
    breakdown of rejections (every RejectReason value is present, possibly 0).
    """
    total = 0
    accepted = 0
    no_op = 0
    by_reason = {r.value: 0 for r in RejectReason}
    for d in decisions:
        total += 1
        if d.accepted:
            accepted += 1
            if d.is_no_op:
                no_op += 1
        elif d.reason is not None:
            by_reason[d.reason.value] += 1
    return {
        "total": total,
        "accepted": accepted,
        "rejected": total - accepted,
        "no_op": no_op,
        "by_reason": by_reason,
    }


def rejection_rate(decisions: Iterable[Decision]) -> float:
    """Fraction of decisions that were rejected, in [0, 1]."""
    items = list(decisions)
    if not items:
        return 0.0
    return sum(1 for d in items if not d.accepted) / len(items)
