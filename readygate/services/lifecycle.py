"""Lifecycle protocols for resources handed off through a ReadinessGate."""

import logging
from typing import Callable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

InitializationHook = Callable[[Optional[BaseException]], None]


@runtime_checkable
class AsyncService(Protocol):
    """Protocol for services with async lifecycle management."""

    async def initialize(self) -> None:
        """Initialize the service (load resources, connect)."""
        ...

    async def shutdown(self) -> None:
        """Shutdown the service and cleanup resources."""
        ...

    def is_initialized(self) -> bool:
        """Check if the service is initialized and ready."""
        ...


@runtime_checkable
class LifecycleResource(Protocol):
    """Minimal contract a resource must offer to be bound to a gate."""

    def on_initialized(self, hook: InitializationHook) -> None:
        """Register a one-time hook called when initialization finishes.

        The hook receives None on success or the exception that made
        initialization fail. Hooks registered after initialization already
        finished are not called; callers check is_initialized() instead.
        """
        ...

    def is_initialized(self) -> bool:
        """Check if initialization has completed."""
        ...


class ManagedService:
    """Base class for services that satisfy both AsyncService and LifecycleResource.

    Subclasses override _startup() and _teardown(). initialize() is
    idempotent and notifies registered hooks exactly once.
    """

    def __init__(self) -> None:
        self._initialized = False
        self._hooks: list[InitializationHook] = []

    def on_initialized(self, hook: InitializationHook) -> None:
        self._hooks.append(hook)

    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Run startup and notify hooks.

        Raises:
            Exception: Whatever _startup() raised; hooks see it first
        """
        if self._initialized:
            logger.debug(f"{type(self).__name__} already initialized")
            return

        try:
            await self._startup()
        except Exception as e:
            logger.error(f"{type(self).__name__} failed to initialize: {e}")
            self._notify(e)
            raise

        self._initialized = True
        logger.info(f"{type(self).__name__} initialized")
        self._notify(None)

    async def shutdown(self) -> None:
        await self._teardown()
        self._initialized = False

    async def _startup(self) -> None:
        pass

    async def _teardown(self) -> None:
        pass

    def _notify(self, error: Optional[BaseException]) -> None:
        hooks, self._hooks = self._hooks, []
        for hook in hooks:
            try:
                hook(error)
            except Exception as e:
                logger.error(f"Initialization hook failed: {e}", exc_info=True)
