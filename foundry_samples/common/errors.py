"""Exception hierarchy shared by the runner, evaluator and web layers."""

from __future__ import annotations


class FoundrySampleError(Exception):
    """Base class for errors raised by this package (not by the SDK)."""


class ConfigurationError(FoundrySampleError):
    """A required environment variable is missing or malformed."""

    def __init__(self, missing: list[str] | tuple[str, ...] = (), message: str = "") -> None:
        self.missing = list(missing)
        if not message:
            message = "Missing required environment variable(s): " + ", ".join(self.missing)
        super().__init__(message)


class ProvisioningError(FoundrySampleError):
    """A remote resource could not be brought to a usable state."""


class PollTimeoutError(FoundrySampleError):
    """A polled resource did not reach a terminal status within the attempt budget."""

    def __init__(self, what: str, attempts: int, last_status: str) -> None:
        self.what = what
        self.attempts = attempts
        self.last_status = last_status
        super().__init__(
            f"{what} still '{last_status}' after {attempts} polls"
        )


class EvaluationError(FoundrySampleError):
    """The remote evaluation finished without usable results."""
