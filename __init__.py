from .guardrail_params import (
	GuardrailParameters,
	GuardrailSettings,
	DEFAULT_CHANGE_BUDGET_MINUTES,
	DEFAULT_HYSTERESIS_THRESHOLD_DB,
	load_params_from_env,
	parse_guardrail_text_to_params,
	load_params_from_text_file,
)
from .access_point import AccessPointRecord
from .change_request import ChangeRequest, Decision, RejectReason
from .policies import (
	PolicyVerdict,
	time_window_policy,
	change_budget_policy,
	hysteresis_policy,
	DEFAULT_POLICIES,
	first_violation,
)
from .planner import SafeChangePlanner, DeviceNotFoundError
from .scenario import (
	Scenario,
	ScenarioStep,
	ResultRow,
	run_scenario,
	rows_to_table,
)
from .loaders import (
	normalize_access_point_record,
	normalize_step_record,
	load_access_points_from_json,
	load_scenario_from_json,
)
from .stats import decision_stats, rejection_rate

__all__ = [
	"GuardrailParameters",
	"GuardrailSettings",
	"DEFAULT_CHANGE_BUDGET_MINUTES",
	"DEFAULT_HYSTERESIS_THRESHOLD_DB",
	"load_params_from_env",
	"parse_guardrail_text_to_params",
	"load_params_from_text_file",
	"AccessPointRecord",
	"ChangeRequest",
	"Decision",
	"RejectReason",
	"PolicyVerdict",
	"time_window_policy",
	"change_budget_policy",
	"hysteresis_policy",
	"DEFAULT_POLICIES",
	"first_violation",
	"SafeChangePlanner",
	"DeviceNotFoundError",
	"Scenario",
	"ScenarioStep",
	"ResultRow",
	"run_scenario",
	"rows_to_table",
	"normalize_access_point_record",
	"normalize_step_record",
	"load_access_points_from_json",
	"load_scenario_from_json",
	"decision_stats",
	"rejection_rate",
]
