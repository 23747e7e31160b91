"""Exception hierarchy for the readiness gate."""

from typing import Any


class GateError(Exception):
    """Base exception for gate errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class GateMisuseError(GateError):
    """Programming error, such as binding a gate twice."""

    pass


class GateTimeoutError(GateError, TimeoutError):
    """A waiter's deadline elapsed before its condition was met."""

    def __init__(self, message: str, timeout_ms: float, mode: Any):
        super().__init__(message)
        self.timeout_ms = timeout_ms
        self.mode = mode


class GateLifecycleError(GateError):
    """The bound resource reported a failed initialization."""

    def __init__(self, message: str, cause: BaseException):
        super().__init__(message)
        self.cause = cause
        self.__cause__ = cause
