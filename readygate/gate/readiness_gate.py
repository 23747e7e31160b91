"""Hand off a resource to waiters once it is bound and initialized."""

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Optional, Union

from readygate.config import get_settings
from readygate.exceptions import GateLifecycleError
from readygate.gate.binding import ResourceBinding
from readygate.gate.observer import LifecycleObserver
from readygate.gate.timeout_race import TimeoutRace, is_timeout_disabled
from readygate.gate.waiters import Deliver, Outcome, WaiterQueue, WaitMode, WaitRequest

logger = logging.getLogger(__name__)

ReadyCallback = Callable[[Optional[BaseException], Any], None]

# Marker for "use the gate's default timeout"
DEFAULT_TIMEOUT = object()


class GateState(str, Enum):
    UNBOUND = "unbound"
    BOUND_PENDING_INIT = "bound-pending-init"
    BOUND_INITIALIZED = "bound-initialized"


class ReadinessGate:
    """Hands a resource to any number of waiters once it is ready.

    Waiters call ready() without knowing whether the resource has been bound
    or initialized yet. The gate queues them and hands the resource over, in
    arrival order, once their condition holds:

    - WaitMode.FULL_INIT (default): bound and initialized
    - WaitMode.BINDING_ONLY: bound

    Example:
        gate = ReadinessGate()
        future = gate.ready()
        gate.bind(server)
        await server.initialize()
        assert await future is server
    """

    def __init__(
        self,
        resource: Any = None,
        *,
        name: Optional[str] = None,
        default_timeout_ms: Optional[float] = None,
    ):
        """Initialize gate.

        Args:
            resource: Resource to bind right away (optional)
            name: Component name used in timeout messages
            default_timeout_ms: Deadline for ready() calls that don't pass one;
                falls back to Settings.default_timeout_ms
        """
        if name is None or default_timeout_ms is None:
            settings = get_settings()
            name = name or settings.gate_name
            if default_timeout_ms is None:
                default_timeout_ms = settings.default_timeout_ms
        if default_timeout_ms < 0:
            raise ValueError("default_timeout_ms must be >= 0")

        self._name = name
        self._default_timeout_ms = default_timeout_ms
        self._binding = ResourceBinding()
        self._observer = LifecycleObserver(self._on_lifecycle_complete)
        self._waiters = WaiterQueue()
        self._race = TimeoutRace(name)
        self._initialized = False
        self._init_error: Optional[BaseException] = None

        if resource is not None:
            self.bind(resource)

    @property
    def name(self) -> str:
        return self._name

    @property
    def default_timeout_ms(self) -> float:
        return self._default_timeout_ms

    @property
    def resource(self) -> Optional[Any]:
        return self._binding.resource

    @property
    def hook_installed(self) -> bool:
        return self._observer.attached

    @property
    def initialization_error(self) -> Optional[BaseException]:
        """Failure reported by the resource's lifecycle, if any."""
        return self._init_error

    @property
    def pending_count(self) -> int:
        """Number of waiters still queued."""
        return len(self._waiters)

    @property
    def state(self) -> GateState:
        if not self._binding.bound:
            return GateState.UNBOUND
        if self._initialized:
            return GateState.BOUND_INITIALIZED
        return GateState.BOUND_PENDING_INIT

    def is_bound(self) -> bool:
        return self._binding.bound

    def is_ready(self) -> bool:
        """Check if the bound resource finished initializing."""
        return self._initialized

    def bind(self, resource: Any) -> None:
        """Bind the resource and start observing its initialization.

        Raises:
            GateMisuseError: If called more than once, with None, or with an
                object that is not a LifecycleResource
        """
        self._binding.assign(resource)
        logger.info(f"{self._name} bound to {type(resource).__name__}")

        self._observer.attach(resource)
        self._flush()

    def ready(
        self,
        timeout_ms: Any = DEFAULT_TIMEOUT,
        *,
        mode: Union[WaitMode, str] = WaitMode.FULL_INIT,
        callback: Optional[ReadyCallback] = None,
    ) -> Optional["asyncio.Future[Any]"]:
        """Wait for the resource.

        Must be called with a running event loop. A request whose condition
        already holds is delivered before this method returns (unless earlier
        requests are still being delivered, in which case it follows them).

        Args:
            timeout_ms: Deadline in milliseconds; None, False or 0 waits forever.
                Defaults to the gate's default_timeout_ms.
            mode: WaitMode or its string value
            callback: Called once as callback(error, resource). If omitted a
                future is returned instead.

        Returns:
            None if callback was given, otherwise a future resolving to the
            resource or failing with GateTimeoutError / GateLifecycleError
        """
        mode = WaitMode(mode)
        if timeout_ms is DEFAULT_TIMEOUT or timeout_ms is True:
            timeout_ms = self._default_timeout_ms
        if is_timeout_disabled(timeout_ms):
            timeout_ms = None
        elif timeout_ms < 0:
            raise ValueError("timeout_ms must be >= 0")

        loop = asyncio.get_running_loop()
        future: Optional[asyncio.Future[Any]] = None
        if callback is None:
            future = loop.create_future()
            deliver = _future_deliver(future)
        else:
            deliver = callback

        request = WaitRequest(mode=mode, deliver=deliver, timeout_ms=timeout_ms)
        self._waiters.enqueue(request)
        self._flush()

        if not request.settled:
            self._race.arm(request, self._waiters.discard)
            if future is not None:
                future.add_done_callback(lambda f: self._withdraw(request, f))

        return future

    def _outcome_for(self, request: WaitRequest) -> Optional[Outcome]:
        if not self._binding.bound:
            return None
        if request.mode is WaitMode.BINDING_ONLY or self._initialized:
            return None, self._binding.resource
        if self._init_error is not None:
            error = GateLifecycleError(
                f"{self._name} resource failed to initialize: {self._init_error}",
                cause=self._init_error,
            )
            return error, None
        return None

    def _settle(self, request: WaitRequest, outcome: Outcome) -> None:
        error, resource = outcome
        self._race.settle(request, error, resource)

    def _flush(self) -> None:
        delivered = self._waiters.drain(self._outcome_for, self._settle)
        if delivered:
            logger.debug(f"{self._name} delivered {delivered} waiter(s)")

    def _on_lifecycle_complete(self, error: Optional[BaseException]) -> None:
        if self._initialized or self._init_error is not None:
            logger.debug(f"{self._name} ignoring repeated lifecycle signal")
            return

        if error is not None:
            self._init_error = error
            logger.error(f"{self._name} resource failed to initialize: {error}")
        else:
            self._initialized = True
            logger.info(f"{self._name} resource initialized")

        self._flush()

    def _withdraw(self, request: WaitRequest, future: "asyncio.Future[Any]") -> None:
        if future.cancelled() and not request.settled:
            request.settled = True
            if request.timer is not None:
                request.timer.cancel()
                request.timer = None
            self._waiters.discard(request)
            logger.debug(f"Request {request.id} withdrawn by cancellation")


def _future_deliver(future: "asyncio.Future[Any]") -> Deliver:
    def deliver(error: Optional[BaseException], resource: Any) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(resource)

    return deliver
