"""Loaders for AP inventories and scenario files.

This module centralizes reading AP records and scripted change sequences
from JSON so notebooks, tests and controllers share one normalization path.
Records are normalized for common field aliases and then validated with
pydantic in strict mode for integers (a JSON true is not 1 dB); malformed
records raise pydantic.ValidationError, a missing "devices" list ValueError.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, StrictInt

from .access_point import AccessPointRecord
from .change_request import ChangeRequest
from .scenario import Scenario, ScenarioStep


class AccessPointPayload(BaseModel):
    id: str
    channel: StrictInt
    power_db: StrictInt
    last_change_time_minutes: Optional[StrictInt] = None

    def to_record(self) -> AccessPointRecord:
        return AccessPointRecord(**self.model_dump())


class ChangeRequestPayload(BaseModel):
    new_channel: Optional[StrictInt] = None
    new_power_db: Optional[StrictInt] = None
    is_emergency: bool = False

    def to_request(self) -> ChangeRequest:
        return ChangeRequest(**self.model_dump())


class ScenarioStepPayload(BaseModel):
    device_id: str
    time_minutes: StrictInt
    is_peak_hour: bool = False
    request: ChangeRequestPayload = Field(default_factory=ChangeRequestPayload)

    def to_step(self) -> ScenarioStep:
        return ScenarioStep(
            device_id=self.device_id,
            request=self.request.to_request(),
            time_minutes=self.time_minutes,
            is_peak_hour=self.is_peak_hour,
        )


def _rename(out: Dict[str, Any], aliases: Dict[str, str]) -> None:
    for alias, key in aliases.items():
        if alias in out and key not in out:
            out[key] = out.pop(alias)


def normalize_access_point_record(rec: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize a raw AP record into the fields AccessPointRecord expects."""
    out = dict(rec)
    _rename(out, {
        "ap_id": "id",
        "name": "id",
        "ch": "channel",
        "power": "power_db",
        "tx_power_db": "power_db",
        "txpower": "power_db",
        "last_change": "last_change_time_minutes",
        "last_change_time": "last_change_time_minutes",
    })
    return out


def normalize_step_record(rec: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize a raw step; request fields may be nested under "request" or flat."""
    out = dict(rec)
    _rename(out, {
        "ap_id": "device_id",
        "id": "device_id",
        "t": "time_minutes",
        "time": "time_minutes",
        "peak": "is_peak_hour",
    })
    req = dict(out.pop("request", None) or {})
    for key in ("new_channel", "new_power_db", "is_emergency", "channel", "power_db", "emergency"):
        if key in out:
            req.setdefault(key, out.pop(key))
    _rename(req, {"channel": "new_channel", "power_db": "new_power_db", "emergency": "is_emergency"})
    out["request"] = req
    return out


def _read_json(path: str | Path) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _list_under(data: Dict[str, Any], key: str) -> List[Any]:
    items = data.get(key)
    if not isinstance(items, list):
        raise ValueError(f'expected a "{key}" list, got keys {sorted(data)}')
    return items


def access_points_from_data(data: Any) -> List[AccessPointRecord]:
    items = _list_under(data, "devices") if isinstance(data, dict) else data
    return [AccessPointPayload(**normalize_access_point_record(d)).to_record() for d in items]


def load_access_points_from_json(path: str | Path) -> List[AccessPointRecord]:
    """Read a JSON list of APs (or {"devices": [...]}) into AccessPointRecords."""
    return access_points_from_data(_read_json(path))


def scenario_from_data(data: Dict[str, Any]) -> Scenario:
    devices = access_points_from_data(_list_under(data, "devices"))
    steps = [ScenarioStepPayload(**normalize_step_record(s)).to_step() for s in data.get("steps", [])]
    return Scenario(devices=devices, steps=steps)


def load_scenario_from_json(path: str | Path) -> Scenario:
    """Read {"devices": [...], "steps": [...]} into a Scenario."""
    return scenario_from_data(_read_json(path))
