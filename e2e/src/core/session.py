from __future__ import annotations

from typing import Any, Protocol
from urllib.parse import urljoin

from playwright.sync_api import (
    Error as PlaywrightError,
    Locator,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)

from src.core.errors import InputError, LocatorError, NavigationError, SessionError, StepTimeoutError


class BrowserSession(Protocol):
    """What the step executor needs from a browser. One per test case."""

    def navigate(self, url: str, timeout_ms: int) -> None: ...

    def locate(self, selector: str, timeout_ms: int) -> Any: ...

    def fill(self, handle: Any, value: str, timeout_ms: int) -> None: ...

    def click(self, handle: Any, timeout_ms: int) -> None: ...

    def text_of(self, handle: Any) -> str: ...

    def title(self) -> str: ...

    def screenshot(self, path: str) -> None: ...

    def content(self) -> str: ...


class PlaywrightSession:
    """
    Page wrapper that speaks the step error taxonomy instead of Playwright's.
    Relative urls are resolved against base_url.
    """

    def __init__(self, page: Page, base_url: str = "") -> None:
        self.page = page
        self.base_url = base_url

    def resolve(self, url: str) -> str:
        return urljoin(self.base_url, url) if self.base_url else url

    def navigate(self, url: str, timeout_ms: int) -> None:
        target = self.resolve(url)
        try:
            response = self.page.goto(target, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise NavigationError(f"timed out loading {target} after {timeout_ms}ms") from e
        except PlaywrightError as e:
            raise NavigationError(f"could not load {target}: {e.message}") from e
        if response is not None and not response.ok:
            raise NavigationError(f"{target} answered HTTP {response.status}")

    def locate(self, selector: str, timeout_ms: int) -> Locator:
        loc = self.page.locator(selector)
        try:
            loc.first.wait_for(state="attached", timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise LocatorError(selector, loc.count()) from e
        n = loc.count()
        if n != 1:
            raise LocatorError(selector, n)
        return loc

    def fill(self, handle: Locator, value: str, timeout_ms: int) -> None:
        try:
            # disabled / readonly fields would otherwise just wait out the timeout
            if not handle.is_editable(timeout=timeout_ms):
                raise InputError("element is disabled or readonly")
            handle.fill(value, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise StepTimeoutError(f"element did not become editable within {timeout_ms}ms") from e
        except PlaywrightError as e:
            raise InputError(f"element rejected input: {e.message}") from e

    def click(self, handle: Locator, timeout_ms: int) -> None:
        try:
            handle.click(timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise StepTimeoutError(f"element was not clickable within {timeout_ms}ms") from e
        except PlaywrightError as e:
            raise SessionError(f"click failed: {e.message}") from e

    def text_of(self, handle: Locator) -> str:
        try:
            return handle.inner_text()
        except PlaywrightError as e:
            raise SessionError(f"could not read element text: {e.message}") from e

    def title(self) -> str:
        try:
            return self.page.title()
        except PlaywrightError as e:
            # e.g. "Execution context was destroyed" while the page navigates
            raise SessionError(f"could not read page title: {e.message}") from e

    def screenshot(self, path: str) -> None:
        self.page.screenshot(path=path, full_page=True)

    def content(self) -> str:
        return self.page.content()
