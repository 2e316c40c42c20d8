"""Thin wrapper around direct Playwright for ergonomic assertions."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict

from playwright.async_api import Locator, Page, TimeoutError as PlaywrightTimeout

logger = logging.getLogger(__name__)


@dataclass
class ToolError(Exception):
    """Raised when a browser operation fails."""

    name: str
    payload: Dict[str, Any]
    message: str

    def __str__(self) -> str:  # pragma: no cover - human readable helper
        return f"{self.name} failed ({self.message}) with payload={self.payload}"


class Browser:
    """Convenience wrapper over a Playwright page."""

    def __init__(self, page: Page) -> None:
        self._page = page
        self.current_url: str | None = None
        self.current_title: str | None = None

    @property
    def page(self) -> Page:
        return self._page

    async def _update_state(self) -> None:
        self.current_url = self._page.url
        self.current_title = await self._page.title()

    async def reset(self) -> Dict[str, Any]:
        """Navigate to about:blank (reset state)."""
        await self._page.goto("about:blank")
        await self._update_state()
        return {"url": self.current_url, "title": self.current_title}

    async def goto(self, url: str, wait_until: str = "load", timeout: int | None = None) -> Dict[str, Any]:
        """Navigate to URL and return response with status.

        Args:
            url: URL to navigate to
            wait_until: "load", "domcontentloaded" or "networkidle"
            timeout: Timeout in milliseconds (None = context default)

        Note: the calculator keeps analytics connections open, so
              "networkidle" can time out; "load" is the default.
        """
        try:
            response = await self._page.goto(url, wait_until=wait_until, timeout=timeout)
            await self._update_state()
            return {"url": self.current_url, "title": self.current_title, "status": response.status if response else None}
        except PlaywrightTimeout as exc:
            raise ToolError(name="goto", payload={"url": url, "wait_until": wait_until}, message=str(exc)) from exc

    async def wait(self, milliseconds: int) -> None:
        """Fixed pause for page scripts that give no observable signal."""
        if milliseconds > 0:
            await self._page.wait_for_timeout(milliseconds)

    def locator(self, selector: str) -> Locator:
        return self._page.locator(selector)

    async def fill(self, selector: str, value: str) -> Dict[str, Any]:
        """Fill input field."""
        try:
            await self._page.locator(selector).fill(value)
            return {"selector": selector, "value": value}
        except Exception as exc:
            raise ToolError(name="fill", payload={"selector": selector, "value": value}, message=str(exc)) from exc

    async def click(self, selector: str) -> Dict[str, Any]:
        """Click element."""
        try:
            await self._page.locator(selector).click()
            await self._update_state()
            return {"selector": selector, "url": self.current_url}
        except Exception as exc:
            raise ToolError(name="click", payload={"selector": selector}, message=str(exc)) from exc

    async def input_value(self, selector: str) -> str:
        """Get the current value of an input."""
        try:
            return await self._page.locator(selector).input_value(timeout=5000)
        except Exception as exc:
            raise ToolError(name="input_value", payload={"selector": selector}, message=str(exc)) from exc

    async def get_attribute(self, selector: str, attribute: str) -> str | None:
        """Get attribute value of element (None when the attribute is absent)."""
        try:
            return await self._page.locator(selector).first.get_attribute(attribute, timeout=5000)
        except Exception as exc:
            raise ToolError(name="get_attribute", payload={"selector": selector, "attribute": attribute}, message=str(exc)) from exc

    async def is_visible(self, selector: str) -> bool:
        try:
            return await self._page.locator(selector).first.is_visible()
        except Exception as exc:
            raise ToolError(name="is_visible", payload={"selector": selector}, message=str(exc)) from exc

    async def screenshot(self, path: str, full_page: bool = True) -> str:
        """Write a PNG screenshot to path, creating its directory."""
        try:
            directory = os.path.dirname(path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            await self._page.screenshot(path=path, type="png", full_page=full_page)
            logger.info("Screenshot written to %s", path)
            return path
        except Exception as exc:
            raise ToolError(name="screenshot", payload={"path": path}, message=str(exc)) from exc
