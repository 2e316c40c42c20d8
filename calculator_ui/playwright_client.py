"""
Direct Playwright Client
========================

Launches Playwright in-process and owns the browser, context and default
page for one scenario.

Usage:
    from calculator_ui.playwright_client import PlaywrightClient

    async with PlaywrightClient() as client:
        await client.page.goto(settings.calculator_url)
"""

import logging
from typing import Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Error as PlaywrightError, Page, Playwright

from calculator_ui.config import settings

logger = logging.getLogger(__name__)


class BrowserLaunchError(RuntimeError):
    """The browser executable could not be started (usually not installed)."""


class PlaywrightClient:
    """
    Direct Playwright client for one isolated browser session.

    Each client gets its own browser and context, so cookies (including the
    consent cookie) never leak between scenarios.

    Example:
        async with PlaywrightClient(locale="pl-PL") as client:
            page = client.page
            await page.goto("https://example.com")
    """

    def __init__(
        self,
        browser_type: Optional[str] = None,
        headless: Optional[bool] = None,
        timeout: Optional[int] = None,
        locale: Optional[str] = None,
    ):
        """
        Args:
            browser_type: chromium, firefox or webkit (None = PLAYWRIGHT_BROWSER)
            headless: Run headless (None = PLAYWRIGHT_HEADLESS)
            timeout: Default action timeout in milliseconds (None = PLAYWRIGHT_TIMEOUT_MS)
            locale: Context locale (None = locale of the active profile)
        """
        self.browser_type = browser_type or settings.browser_type
        self.headless = settings.playwright_headless if headless is None else headless
        self.timeout = settings.action_timeout_ms if timeout is None else timeout
        self.locale = locale or settings.locale

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def connect(self):
        """Launch the browser and open a context with one page."""
        self._playwright = await async_playwright().start()
        launcher = getattr(self._playwright, self.browser_type)
        try:
            self._browser = await launcher.launch(headless=self.headless)
        except PlaywrightError as exc:
            await self._playwright.stop()
            self._playwright = None
            raise BrowserLaunchError(f"could not launch {self.browser_type}: {exc}") from exc

        logger.debug(
            "Launched %s (headless=%s, locale=%s)", self.browser_type, self.headless, self.locale
        )
        self._context = await self._browser.new_context(locale=self.locale)
        self._context.set_default_timeout(self.timeout)
        self._page = await self._context.new_page()

    async def close(self):
        """Close all connections and cleanup resources."""
        if self._page:
            await self._page.close()
            self._page = None

        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def page(self) -> Page:
        if not self._page:
            raise RuntimeError("Client not connected or page not created")
        return self._page
