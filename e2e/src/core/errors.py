from __future__ import annotations

from typing import Optional


class StepError(Exception):
    """Base for everything a single step can fail with."""

    kind = "step_error"

    def __init__(
        self,
        message: str,
        locator: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.locator = locator
        self.expected = expected
        self.actual = actual


class NavigationError(StepError):
    kind = "navigation"


class LocatorError(StepError):
    kind = "locator"

    def __init__(self, locator: str, count: int) -> None:
        what = "no element matches" if count == 0 else f"{count} elements match"
        super().__init__(f"{what} locator {locator!r}", locator=locator)
        self.count = count


class InputError(StepError):
    kind = "input"


class StepTimeoutError(StepError, TimeoutError):
    kind = "timeout"


class StepAssertionError(StepError, AssertionError):
    kind = "assertion"


class SessionError(StepError):
    """Page, context or browser went away or refused the call."""

    kind = "session"
