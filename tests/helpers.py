"""Shared test helpers for gate tests."""

import asyncio
from typing import Any

from readygate.services.lifecycle import ManagedService


class FakeServer(ManagedService):
    """ManagedService whose startup can be delayed or made to fail."""

    def __init__(self, startup_delay: float = 0.0, fail_with: Exception | None = None):
        super().__init__()
        self.startup_delay = startup_delay
        self.fail_with = fail_with
        self.startup_calls = 0
        self.teardown_calls = 0

    async def _startup(self) -> None:
        self.startup_calls += 1
        if self.startup_delay:
            await asyncio.sleep(self.startup_delay)
        if self.fail_with is not None:
            raise self.fail_with

    async def _teardown(self) -> None:
        self.teardown_calls += 1


class BareResource:
    """Implements only the hook contract, with hooks fired by hand."""

    def __init__(self, initialized: bool = False):
        self.initialized = initialized
        self.hooks: list[Any] = []

    def on_initialized(self, hook: Any) -> None:
        self.hooks.append(hook)

    def is_initialized(self) -> bool:
        return self.initialized

    def complete(self, error: BaseException | None = None) -> None:
        if error is None:
            self.initialized = True
        for hook in list(self.hooks):
            hook(error)


class Recorder:
    """Collects (error, resource) pairs passed to ready() callbacks."""

    def __init__(self) -> None:
        self.calls: list[tuple[BaseException | None, Any]] = []

    def __call__(self, error: BaseException | None, resource: Any) -> None:
        self.calls.append((error, resource))

    def tagged(self, order: list[int], n: int):
        def callback(error: BaseException | None, resource: Any) -> None:
            self.calls.append((error, resource))
            order.append(n)

        return callback
