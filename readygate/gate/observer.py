"""Attach to a resource's initialization lifecycle."""

import logging
from typing import Callable, Optional

from readygate.exceptions import GateMisuseError
from readygate.services.lifecycle import LifecycleResource

logger = logging.getLogger(__name__)


class LifecycleObserver:
    """Registers a single completion hook on a bound resource.

    attach() registers the hook and then queries is_initialized(), so a
    resource that finished before binding is reported as complete right away
    instead of waiting for a hook call that will never come. on_complete may
    therefore be invoked more than once; the gate ignores repeats.
    """

    def __init__(self, on_complete: Callable[[Optional[BaseException]], None]):
        self._on_complete = on_complete
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self, resource: LifecycleResource) -> None:
        if self._attached:
            raise GateMisuseError("Lifecycle observer is already attached to a resource.")

        resource.on_initialized(self._handle)
        self._attached = True

        if resource.is_initialized():
            logger.debug(f"{type(resource).__name__} was initialized before binding")
            self._handle(None)

    def _handle(self, error: Optional[BaseException] = None) -> None:
        self._on_complete(error)
