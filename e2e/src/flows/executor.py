# e2e/src/flows/executor.py
from __future__ import annotations

import re
from typing import Callable, Optional

from src.core.errors import SessionError, StepAssertionError
from src.core.session import BrowserSession
from src.core.text import normalize_text
from src.core.types import AssertText, AssertTitle, Click, Fill, Navigate, Step
from src.core.waits import poll_until


class StepExecutor:
    """
    Runs one step at a time against a session. Locator waits and
    assertion polling share the same timeout budget per step.
    """

    def __init__(self, session: BrowserSession, timeout_ms: int = 30000, nav_timeout_ms: int | None = None, poll_interval_sec: float = 0.2) -> None:
        self.session = session
        self.timeout_ms = timeout_ms
        self.nav_timeout_ms = nav_timeout_ms if nav_timeout_ms is not None else timeout_ms
        self.poll_interval_sec = poll_interval_sec

    def execute(self, step: Step) -> None:
        if isinstance(step, Navigate):
            self.session.navigate(step.url, self.nav_timeout_ms)
        elif isinstance(step, Fill):
            handle = self.session.locate(step.locator, self.timeout_ms)
            self.session.fill(handle, step.value, self.timeout_ms)
        elif isinstance(step, Click):
            handle = self.session.locate(step.locator, self.timeout_ms)
            self.session.click(handle, self.timeout_ms)
        elif isinstance(step, AssertText):
            self._assert_text(step)
        elif isinstance(step, AssertTitle):
            self._assert_title(step)
        else:
            raise TypeError(f"Unknown step type: {type(step).__name__}")

    def _assert_text(self, step: AssertText) -> None:
        handle = self.session.locate(step.locator, self.timeout_ms)
        expected = normalize_text(step.expected)
        read = _RetriedRead(lambda: normalize_text(self.session.text_of(handle)))
        ok, actual = poll_until(
            read,
            lambda cur: cur is not None and expected in cur,
            timeout_sec=self.timeout_ms / 1000,
            interval_sec=self.poll_interval_sec,
        )
        if not ok:
            read.raise_if_failed()
            raise StepAssertionError(
                f"text of {step.locator!r} does not contain {step.expected!r}",
                locator=step.locator,
                expected=step.expected,
                actual=actual,
            )

    def _assert_title(self, step: AssertTitle) -> None:
        rx = re.compile(step.pattern)
        read = _RetriedRead(self.session.title)
        ok, actual = poll_until(
            read,
            lambda cur: cur is not None and rx.search(cur) is not None,
            timeout_sec=self.timeout_ms / 1000,
            interval_sec=self.poll_interval_sec,
        )
        if not ok:
            read.raise_if_failed()
            raise StepAssertionError(
                f"title does not match /{step.pattern}/",
                expected=step.pattern,
                actual=actual,
            )


class _RetriedRead:
    """
    A read that may fail mid-navigation; the poll loop just reads again.
    Only the outcome of the last read counts.
    """

    def __init__(self, read: Callable[[], str]) -> None:
        self._read = read
        self.error: Optional[SessionError] = None

    def __call__(self) -> Optional[str]:
        try:
            value = self._read()
        except SessionError as e:
            self.error = e
            return None
        self.error = None
        return value

    def raise_if_failed(self) -> None:
        if self.error is not None:
            raise self.error
