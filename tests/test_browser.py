"""Browser wrapper error handling, against a mocked Playwright page."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from calculator_ui.browser import Browser, ToolError

pytestmark = pytest.mark.asyncio


def _page_with_locator(locator):
    page = MagicMock()
    page.locator.return_value.first = locator
    return page


async def test_is_visible_returns_page_state():
    locator = MagicMock()
    locator.is_visible = AsyncMock(return_value=True)
    browser = Browser(_page_with_locator(locator))

    assert await browser.is_visible('input[name="buildingArea"]') is True


async def test_is_visible_failure_raises_tool_error():
    locator = MagicMock()
    locator.is_visible = AsyncMock(side_effect=RuntimeError("Target page, context or browser has been closed"))
    browser = Browser(_page_with_locator(locator))

    with pytest.raises(ToolError) as excinfo:
        await browser.is_visible('input[name="buildingArea"]')

    assert excinfo.value.name == "is_visible"
    assert excinfo.value.payload == {"selector": 'input[name="buildingArea"]'}
    assert isinstance(excinfo.value.__cause__, RuntimeError)


async def test_get_attribute_failure_raises_tool_error():
    locator = MagicMock()
    locator.get_attribute = AsyncMock(side_effect=RuntimeError("detached"))
    browser = Browser(_page_with_locator(locator))

    with pytest.raises(ToolError) as excinfo:
        await browser.get_attribute('input[name="buildYear"]', "min")

    assert excinfo.value.payload == {"selector": 'input[name="buildYear"]', "attribute": "min"}
