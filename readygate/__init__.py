"""Asyncio hand-off of a resource that becomes usable after its initialization lifecycle."""

from readygate.exceptions import (
    GateError,
    GateLifecycleError,
    GateMisuseError,
    GateTimeoutError,
)
from readygate.gate import GateState, ReadinessGate, WaitMode
from readygate.services.lifecycle import LifecycleResource, ManagedService

__version__ = "0.1.0"

__all__ = [
    "ReadinessGate",
    "GateState",
    "WaitMode",
    "LifecycleResource",
    "ManagedService",
    "GateError",
    "GateMisuseError",
    "GateTimeoutError",
    "GateLifecycleError",
]
