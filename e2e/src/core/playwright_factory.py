from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from playwright.sync_api import sync_playwright, Browser, BrowserContext, Playwright

from src.core.config import Settings
from src.core.session import PlaywrightSession

logger = logging.getLogger(__name__)


@dataclass
class PWBrowserBundle:
    playwright: Playwright
    browser: Browser


def launch_kwargs(settings: Settings) -> dict:
    kw = {"headless": settings.headless, "slow_mo": settings.slow_mo_ms}
    if settings.channel:
        kw["channel"] = settings.channel
    return kw


def launch_browser(settings: Settings) -> PWBrowserBundle:
    pw = sync_playwright().start()
    try:
        browser = pw.chromium.launch(**launch_kwargs(settings))
    except Exception:
        pw.stop()
        raise
    return PWBrowserBundle(playwright=pw, browser=browser)


def new_context(browser: Browser, settings: Settings) -> BrowserContext:
    """
    Fresh context per test case: no cookies or history shared between cases.
    """
    context = browser.new_context()
    context.set_default_timeout(settings.timeout_ms)
    context.set_default_navigation_timeout(settings.nav_timeout_ms)
    if settings.trace:
        context.tracing.start(screenshots=True, snapshots=True, sources=True)
    return context


@contextmanager
def open_session(browser: Browser, settings: Settings, scenario_id: str) -> Iterator[PlaywrightSession]:
    context = new_context(browser, settings)
    try:
        page = context.new_page()
        yield PlaywrightSession(page, base_url=settings.base_url)
    finally:
        if settings.trace:
            out_dir = settings.artifact_dir / scenario_id
            out_dir.mkdir(parents=True, exist_ok=True)
            context.tracing.stop(path=str(out_dir / "trace.zip"))
        context.close()


def close_browser(bundle: PWBrowserBundle) -> None:
    try:
        bundle.browser.close()
    except Exception as e:
        logger.warning("browser close failed: %s", e)
    bundle.playwright.stop()
