"""Guardrail configuration and defaults.

This module provides:
- A frozen data class holding the two tunables of the policy stack.
- Environment/.env driven settings (pydantic-settings) for per-deployment tuning.
- A tolerant regex-based parser for free-form operator notes.

Defaults:
- Change budget: 240 minutes (4 hours) between two accepted mutating changes.
- Hysteresis threshold: 2 dB minimum transmit power step.
"""
import re
from dataclasses import dataclass
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CHANGE_BUDGET_MINUTES = 4 * 60
DEFAULT_HYSTERESIS_THRESHOLD_DB = 2


@dataclass(frozen=True)
class GuardrailParameters:
    change_budget_minutes: int = DEFAULT_CHANGE_BUDGET_MINUTES
    hysteresis_threshold_db: int = DEFAULT_HYSTERESIS_THRESHOLD_DB

    def __post_init__(self):
        if self.change_budget_minutes < 0:
            raise ValueError("change_budget_minutes must not be negative")
        if self.hysteresis_threshold_db < 0:
            raise ValueError("hysteresis_threshold_db must not be negative")


class GuardrailSettings(BaseSettings):

    CHANGE_BUDGET_MINUTES: int = Field(DEFAULT_CHANGE_BUDGET_MINUTES, ge=0)
    HYSTERESIS_THRESHOLD_DB: int = Field(DEFAULT_HYSTERESIS_THRESHOLD_DB, ge=0)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    def to_params(self) -> GuardrailParameters:
        return GuardrailParameters(
            change_budget_minutes=self.CHANGE_BUDGET_MINUTES,
            hysteresis_threshold_db=self.HYSTERESIS_THRESHOLD_DB,
        )


def load_params_from_env() -> GuardrailParameters:
    """Build parameters from CHANGE_BUDGET_MINUTES / HYSTERESIS_THRESHOLD_DB (env or .env)."""
    return GuardrailSettings().to_params()


_MINUTES_PER_UNIT = {
    "m": 1, "min": 1, "mins": 1, "minute": 1, "minutes": 1,
    "h": 60, "hr": 60, "hrs": 60, "hour": 60, "hours": 60,
}


def _parse_duration_minutes(value: str) -> Optional[int]:
    # A bare number is read as minutes.
    m = re.search(r"([0-9]+(?:\.[0-9]+)?)\s*(minutes?|mins?|m|hours?|hrs?|hr|h)?\b", value, re.IGNORECASE)
    if not m:
        return None
    unit = (m.group(2) or "minutes").lower()
    return int(round(float(m.group(1)) * _MINUTES_PER_UNIT[unit]))


def parse_guardrail_text_to_params(text: str, defaults: Optional[GuardrailParameters] = None) -> GuardrailParameters:
    """Extract the change budget and hysteresis threshold from free-form text.

    Recognized lines (case-insensitive), e.g.:
        Change budget: 4 h
        Change budget: 240          (no unit means minutes)
        Min change interval = 180 minutes
        Hysteresis threshold: 3 dB
    Missing fields keep the value from `defaults`. A fractional hysteresis
    threshold (e.g. 2.5 dB) raises ValueError, since power is set in whole dB.
    """
    if defaults is None:
        defaults = GuardrailParameters()

    budget = defaults.change_budget_minutes
    threshold = defaults.hysteresis_threshold_db

    m = re.search(r"(change\s*budget|min(imum)?\s*change\s*interval)\s*[:=]\s*([^\n]+)", text, re.IGNORECASE)
    if m:
        parsed = _parse_duration_minutes(m.group(3))
        if parsed is not None:
            budget = parsed

    m = re.search(r"hysteresis(\s*threshold)?\s*[:=]\s*([0-9]+(?:\.[0-9]+)?)\s*(dB)?", text, re.IGNORECASE)
    if m:
        value = float(m.group(2))
        if not value.is_integer():
            raise ValueError(f"hysteresis threshold must be a whole number of dB, got {m.group(2)}")
        threshold = int(value)

    return GuardrailParameters(change_budget_minutes=budget, hysteresis_threshold_db=threshold)


def load_params_from_text_file(path: str, defaults: Optional[GuardrailParameters] = None) -> GuardrailParameters:
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        txt = f.read()
    return parse_guardrail_text_to_params(txt, defaults)
