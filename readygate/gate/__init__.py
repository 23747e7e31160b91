"""Readiness gate: hand off a resource once it is bound and initialized."""

from readygate.gate.binding import ResourceBinding
from readygate.gate.observer import LifecycleObserver
from readygate.gate.readiness_gate import DEFAULT_TIMEOUT, GateState, ReadinessGate
from readygate.gate.timeout_race import TimeoutRace, build_timeout_error
from readygate.gate.waiters import WaiterQueue, WaitMode, WaitRequest

__all__ = [
    "ReadinessGate",
    "GateState",
    "DEFAULT_TIMEOUT",
    "WaitMode",
    "WaitRequest",
    "WaiterQueue",
    "TimeoutRace",
    "build_timeout_error",
    "ResourceBinding",
    "LifecycleObserver",
]
