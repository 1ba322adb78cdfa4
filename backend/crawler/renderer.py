"""
Page rendering capability used by the crawlers.

The crawlers only depend on :class:`PageRenderer`; :class:`PlaywrightRenderer`
is the production implementation backed by a headless Chromium.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeout
from playwright.sync_api import sync_playwright

from .config import CrawlerConfig, Timeouts
from .errors import NavigationTimeout, RenderError, RendererUnavailable

logger = logging.getLogger(__name__)


class Document(Protocol):
    """A rendered page that can run extraction scripts."""

    def evaluate(self, expression: str, arg: Any = None) -> Any: ...


class PageRenderer(Protocol):
    def render(self, url: str, *, wait_for: str, timeouts: Timeouts) -> Document: ...

    def close(self) -> None: ...


RendererFactory = Callable[[], PageRenderer]


class PlaywrightRenderer:
    """Chromium-backed renderer holding one browser, context and page."""

    def __init__(self, *, headless: bool = True, user_agent: str | None = None, wait_until: str = "networkidle") -> None:
        self._wait_until = wait_until
        self._playwright = None
        self._browser = None
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=headless)
            self._context = self._browser.new_context(user_agent=user_agent)
            self._page = self._context.new_page()
        except PlaywrightError as exc:
            self.close()
            raise RendererUnavailable(str(exc)) from exc

    def render(self, url: str, *, wait_for: str, timeouts: Timeouts) -> Document:
        """Navigate to ``url`` and block until ``wait_for`` matches an element."""

        logger.info("Navigating to %s", url)
        try:
            self._page.goto(url, wait_until=self._wait_until, timeout=timeouts.navigation * 1000)
            self._page.wait_for_selector(wait_for, timeout=timeouts.selector * 1000)
        except PlaywrightTimeout as exc:
            raise NavigationTimeout(url, str(exc)) from exc
        except PlaywrightError as exc:
            raise RenderError(url, str(exc)) from exc
        return self._page

    def close(self) -> None:
        if self._browser is not None:
            try:
                self._browser.close()
            except PlaywrightError as exc:
                logger.warning("Browser close failed: %s", exc)
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None


def playwright_factory(config: CrawlerConfig) -> RendererFactory:
    """Build a renderer factory honouring the browser settings in ``config``."""

    def _factory() -> PageRenderer:
        return PlaywrightRenderer(
            headless=config.headless,
            user_agent=config.user_agent,
            wait_until=config.wait_until,
        )

    return _factory
