"""One-time resource assignment for a gate."""

from typing import Any, Optional

from readygate.exceptions import GateMisuseError
from readygate.services.lifecycle import LifecycleResource


class ResourceBinding:
    """Holds the gate's resource; it can be assigned exactly once."""

    def __init__(self) -> None:
        self._resource: Optional[Any] = None
        self._bound = False

    @property
    def resource(self) -> Optional[Any]:
        return self._resource

    @property
    def bound(self) -> bool:
        return self._bound

    def assign(self, resource: Any) -> None:
        """Store the resource.

        Raises:
            GateMisuseError: If a resource is already bound, or resource is None
                or lacks on_initialized()/is_initialized()
        """
        if self._bound:
            raise GateMisuseError("Can't call gate.bind(resource) more than once.")
        if resource is None:
            raise GateMisuseError("Can't bind None as the gate's resource.")
        if not isinstance(resource, LifecycleResource):
            raise GateMisuseError(
                f"Can't bind {type(resource).__name__}: it must provide "
                "on_initialized(hook) and is_initialized()."
            )

        self._resource = resource
        self._bound = True
