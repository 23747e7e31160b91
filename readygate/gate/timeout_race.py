"""Race a waiter's fulfillment against its deadline."""

import asyncio
import logging
import time
from typing import Any, Callable, Optional

from readygate.exceptions import GateTimeoutError
from readygate.gate.waiters import WaitMode, WaitRequest

logger = logging.getLogger(__name__)

MISSING_ACTIONS = {
    WaitMode.FULL_INIT: "resource.initialize() or gate.bind(resource)",
    WaitMode.BINDING_ONLY: "gate.bind(resource)",
}


def is_timeout_disabled(timeout_ms: Any) -> bool:
    """None, False and 0 all mean "never time out"."""
    return timeout_ms is None or timeout_ms is False or timeout_ms == 0


def format_duration_ms(timeout_ms: float) -> str:
    if isinstance(timeout_ms, float) and timeout_ms.is_integer():
        timeout_ms = int(timeout_ms)
    return f"{timeout_ms}ms"


def build_timeout_error(name: str, timeout_ms: float, mode: WaitMode) -> GateTimeoutError:
    message = (
        f"{name} timed-out after {format_duration_ms(timeout_ms)}.  "
        f"Did you forget to call {MISSING_ACTIONS[mode]}?"
    )
    return GateTimeoutError(message, timeout_ms=timeout_ms, mode=mode)


class TimeoutRace:
    """Settles each request exactly once, by fulfillment or by timeout.

    Whichever path runs first marks the request settled; the other one then
    does nothing. Timers are cancelled as soon as a request is fulfilled.
    """

    def __init__(self, name: str):
        self._name = name

    def arm(self, request: WaitRequest, on_expire: Callable[[WaitRequest], None]) -> None:
        """Start the deadline timer for a request that is still pending.

        Args:
            request: Request to guard; nothing is armed if it has no deadline
            on_expire: Called after the request was settled with a timeout error
        """
        if request.settled or is_timeout_disabled(request.timeout_ms):
            return

        loop = asyncio.get_running_loop()
        request.timer = loop.call_later(
            request.timeout_ms / 1000, self._expire, request, on_expire
        )

    def settle(
        self, request: WaitRequest, error: Optional[BaseException], resource: Any = None
    ) -> bool:
        """Deliver an outcome unless the request already settled.

        Returns:
            True if this call delivered the outcome
        """
        if request.settled:
            return False

        request.settled = True
        if request.timer is not None:
            request.timer.cancel()
            request.timer = None

        try:
            request.deliver(error, resource)
        except Exception as e:
            logger.error(f"Delivery for request {request.id} failed: {e}", exc_info=True)

        return True

    def _expire(self, request: WaitRequest, on_expire: Callable[[WaitRequest], None]) -> None:
        request.timer = None
        if request.settled:
            return

        error = build_timeout_error(self._name, request.timeout_ms, request.mode)
        waited_ms = (time.monotonic() - request.created_at) * 1000
        logger.warning(
            f"{error} (request {request.id} waited {waited_ms:.0f}ms)",
            extra={"request_id": request.id, "mode": request.mode.value, "waited_ms": waited_ms},
        )
        self.settle(request, error)
        on_expire(request)
