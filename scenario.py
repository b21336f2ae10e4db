"""Scenario runner for scripted change-request sequences.

A scenario is a set of APs plus an ordered list of timed change requests.
Running it registers every AP with a planner and evaluates each step in
order, collecting one result row per step. This is handy for replaying an
operator's change plan against the guardrails before rolling it out, and for
checking guardrail tuning (budget/hysteresis) on a known sequence.

Steps must be given in non-decreasing time order per AP, since the planner
assumes an advancing clock supplied by the caller.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .access_point import AccessPointRecord
from .change_request import ChangeRequest
from .guardrail_params import GuardrailParameters
from .planner import SafeChangePlanner


@dataclass
class ScenarioStep:
	"""One timed request against one AP."""
	device_id: str
	request: ChangeRequest
	time_minutes: int
	is_peak_hour: bool = False


@dataclass
class Scenario:
	"""APs to register up front and the steps to evaluate, in order."""
	devices: List[AccessPointRecord] = field(default_factory=list)
	steps: List[ScenarioStep] = field(default_factory=list)


@dataclass
class ResultRow:
	"""Outcome of a single step and the AP state right after it."""
	step: int
	device_id: str
	time_minutes: int
	is_peak_hour: bool
	is_emergency: bool
	new_channel: Optional[int]
	new_power_db: Optional[int]
	decision: str  # "accept" or "reject"
	reason: Optional[str]
	channel: int
	power_db: int
	last_change_time_minutes: Optional[int]


def run_scenario(
	scenario: Scenario,
	params: Optional[GuardrailParameters] = None,
	planner: Optional[SafeChangePlanner] = None,
) -> List[ResultRow]:
	"""Register the scenario APs and evaluate every step in order.

	A caller-supplied planner is reused as is (its own parameters apply); otherwise
	a fresh planner is built from `params`. Steps naming an unregistered AP raise
	DeviceNotFoundError.
	"""
	if planner is None:
		planner = SafeChangePlanner(params)
	for ap in scenario.devices:
		planner.register(ap)

	rows: List[ResultRow] = []
	for i, st in enumerate(scenario.steps):
		d = planner.evaluate(st.device_id, st.request, st.time_minutes, st.is_peak_hour)
		rows.append(ResultRow(
			step=i,
			device_id=st.device_id,
			time_minutes=st.time_minutes,
			is_peak_hour=st.is_peak_hour,
			is_emergency=st.request.is_emergency,
			new_channel=st.request.new_channel,
			new_power_db=st.request.new_power_db,
			decision=("accept" if d.accepted else "reject"),
			reason=(d.reason.value if d.reason is not None else None),
			channel=d.record.channel,
			power_db=d.record.power_db,
			last_change_time_minutes=d.record.last_change_time_minutes,
		))
	return rows


def _cell(value) -> str:
	return "" if value is None else str(value)


def rows_to_table(rows: Iterable[ResultRow]) -> List[List[str]]:
	"""Convert results to a simple table (strings) for CSV export."""
	table = [[
		"step", "device_id", "time_min", "peak", "emergency",
		"req_channel", "req_power_db", "decision", "reason",
		"channel", "power_db", "last_change_min",
	]]
	for r in rows:
		table.append([
			str(r.step),
			r.device_id,
			str(r.time_minutes),
			"yes" if r.is_peak_hour else "no",
			"yes" if r.is_emergency else "no",
			_cell(r.new_channel),
			_cell(r.new_power_db),
			r.decision,
			_cell(r.reason),
			str(r.channel),
			str(r.power_db),
			_cell(r.last_change_time_minutes),
		])
	return table
