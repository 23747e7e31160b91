"""Pending ready() requests and the FIFO queue that holds them."""

import asyncio
import itertools
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Deliver = Callable[[Optional[BaseException], Any], None]
Outcome = tuple[Optional[BaseException], Any]

_request_ids = itertools.count(1)


class WaitMode(str, Enum):
    """What a waiter needs before it can be handed the resource."""

    FULL_INIT = "full-init"  # Bound and initialized
    BINDING_ONLY = "binding-only"  # Bound, initialized or not


@dataclass
class WaitRequest:
    """A single pending ready() call."""

    mode: WaitMode
    deliver: Deliver
    timeout_ms: Optional[float] = None  # None means wait indefinitely
    id: int = field(default_factory=lambda: next(_request_ids))
    settled: bool = False
    timer: Optional[asyncio.TimerHandle] = None
    created_at: float = field(default_factory=time.monotonic)


class WaiterQueue:
    """Ordered collection of pending requests.

    Requests leave the queue in arrival order. A drain that is already
    running picks up requests appended by delivery callbacks, so a callback
    calling ready() again cannot jump ahead of requests queued before it.
    A drain requested from inside a delivery (e.g. the resource finishing
    initialization in a callback) makes the running drain rescan from the
    front, so requests it already passed are not left behind.
    """

    def __init__(self) -> None:
        self._requests: list[WaitRequest] = []
        self._draining = False
        self._rescan = False

    def __len__(self) -> int:
        return sum(1 for request in self._requests if not request.settled)

    def enqueue(self, request: WaitRequest) -> int:
        """Append a request.

        Returns:
            Position in queue (1-based)
        """
        self._requests.append(request)
        position = len(self)
        logger.debug(f"Request {request.id} ({request.mode.value}) queued at position {position}")
        return position

    def discard(self, request: WaitRequest) -> None:
        """Remove a request without settling it (timed-out or withdrawn)."""
        if self._draining:
            # The running drain drops settled requests as it reaches them
            return
        try:
            self._requests.remove(request)
        except ValueError:
            pass

    def drain(
        self,
        outcome_for: Callable[[WaitRequest], Optional[Outcome]],
        settle: Callable[[WaitRequest, Outcome], Any],
    ) -> int:
        """Settle every request whose outcome is available, in arrival order.

        Args:
            outcome_for: Returns (error, resource) for a request that can be
                settled now, or None if it must keep waiting
            settle: Called with each eligible request and its outcome

        Returns:
            Number of requests settled by this call
        """
        if self._draining:
            self._rescan = True
            return 0

        self._draining = True
        self._rescan = False
        settled = 0
        try:
            index = 0
            while index < len(self._requests):
                request = self._requests[index]
                if request.settled:
                    del self._requests[index]
                    continue

                outcome = outcome_for(request)
                if outcome is None:
                    index += 1
                    continue

                del self._requests[index]
                settle(request, outcome)
                settled += 1

                if self._rescan:
                    self._rescan = False
                    index = 0
        finally:
            self._draining = False
            self._rescan = False

        return settled
