"""Safe-change planner: the single owner and mutator of AP state.

The planner keeps the authoritative AccessPointRecord for every registered AP
and decides, through the ordered policy stack, whether a ChangeRequest may be
applied now. Callers only ever receive copies of stored records; all mutation
goes through evaluate().

Evaluation for one AP (read state, run policies, apply) is serialized by a
per-AP lock, so two concurrent requests cannot both be accepted from the same
pre-change state. Requests for different APs do not contend.
"""

import logging
import threading
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from .access_point import AccessPointRecord
from .change_request import ChangeRequest, Decision
from .guardrail_params import GuardrailParameters
from .policies import DEFAULT_POLICIES, Policy, first_violation

logger = logging.getLogger(__name__)


class DeviceNotFoundError(KeyError):

    def __init__(self, device_id: str):
        super().__init__(device_id)
        self.device_id = device_id

    def __str__(self) -> str:
        return f"AP '{self.device_id}' not found in network state"


class SafeChangePlanner:

    def __init__(self, params: Optional[GuardrailParameters] = None, policies: Sequence[Policy] = DEFAULT_POLICIES):
        self._params = params if params is not None else GuardrailParameters()
        self._policies = tuple(policies)
        self._records: Dict[str, AccessPointRecord] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._store_lock = threading.Lock()

    @property
    def parameters(self) -> GuardrailParameters:
        return self._params

    def __len__(self) -> int:
        with self._store_lock:
            return len(self._records)

    def __contains__(self, device_id: object) -> bool:
        with self._store_lock:
            return device_id in self._records

    def device_ids(self) -> List[str]:
        with self._store_lock:
            return list(self._records)

    def _device_lock(self, device_id: str) -> threading.Lock:
        with self._store_lock:
            if device_id not in self._records:
                logger.warning(f"Planner: AP '{device_id}' not found in network state")
                raise DeviceNotFoundError(device_id)
            return self._locks[device_id]

    def register(self, record: AccessPointRecord) -> None:
        """Insert or fully replace the record stored under record.id (change history included)."""
        with self._store_lock:
            lock = self._locks.setdefault(record.id, threading.Lock())
        with lock:
            with self._store_lock:
                self._records[record.id] = replace(record)

        logger.info(
            f"Planner: registered AP {record.id} "
            f"(ch={record.channel}, pwr={record.power_db}dB, "
            f"last_change={record.last_change_time_minutes})"
        )

    def get(self, device_id: str) -> AccessPointRecord:
        """Return a copy of the current record; raises DeviceNotFoundError when missing."""
        with self._device_lock(device_id):
            return replace(self._records[device_id])

    def evaluate(
        self,
        device_id: str,
        request: ChangeRequest,
        current_time_minutes: int,
        is_peak_hour: bool,
    ) -> Decision:
        """Run the policy stack for one request and apply it when every policy passes.

        Rejections are returned as Decisions, not raised; the stored record is left
        untouched. The only error is DeviceNotFoundError for an unregistered AP.
        """
        with self._device_lock(device_id):
            current = self._records[device_id]

            verdict = first_violation(
                current,
                request,
                current_time_minutes,
                is_peak_hour,
                self._params,
                self._policies,
            )
            if verdict is not None:
                logger.info(
                    f"Planner: REJECT {device_id} at T={current_time_minutes} "
                    f"reason={verdict.reason.value} ({verdict.detail})"
                )
                return Decision.reject(replace(current), verdict.reason, verdict.detail)

            updated = replace(current)
            changed = []
            if request.new_channel is not None and updated.channel != request.new_channel:
                updated.channel = request.new_channel
                changed.append("channel")
            if request.new_power_db is not None and updated.power_db != request.new_power_db:
                updated.power_db = request.new_power_db
                changed.append("power_db")

            if not changed:
                logger.info(
                    f"Planner: ACCEPT {device_id} at T={current_time_minutes}, "
                    f"no state change occurred"
                )
                detail = "empty request" if request.is_empty else "no state change"
                return Decision.accept(replace(current), (), detail)

            updated.last_change_time_minutes = current_time_minutes
            with self._store_lock:
                self._records[device_id] = updated

            logger.info(
                f"Planner: ACCEPT {device_id} at T={current_time_minutes}, "
                f"applied {', '.join(changed)} -> ch={updated.channel}, pwr={updated.power_db}dB"
            )
            return Decision.accept(replace(updated), tuple(changed), "applied " + ", ".join(changed))
