"""Services module for host resource lifecycle helpers."""

from readygate.services.lifecycle import (
    AsyncService,
    InitializationHook,
    LifecycleResource,
    ManagedService,
)

__all__ = [
    "AsyncService",
    "InitializationHook",
    "LifecycleResource",
    "ManagedService",
]
