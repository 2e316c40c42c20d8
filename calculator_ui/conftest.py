import sys
import threading
from pathlib import Path

import pytest
import pytest_asyncio

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from calculator_ui import workflows
from calculator_ui.browser import Browser
from calculator_ui.config import TargetProfile, settings
from calculator_ui.playwright_client import BrowserLaunchError, PlaywrightClient

MOCK = "mock"


def pytest_collection_modifyitems(config, items):
    """Skip scenarios against the real website unless UI_LIVE=1."""
    if settings.live_enabled:
        return
    skip_live = pytest.mark.skip(reason="live website scenarios need UI_LIVE=1")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


# ============================================================================
# Mock calculator fixtures
# ============================================================================

@pytest.fixture(scope='function')
def mock_calculator_server():
    """Fixture that provides a running mock calculator on a free local port."""
    from werkzeug.serving import make_server
    from calculator_ui.mock_calculator import (
        CALCULATOR_PATH,
        create_mock_calculator_app,
        reset_mock_state,
    )

    class MockServer:
        def __init__(self, host='127.0.0.1', port=0):
            self.host = host
            self.port = port
            self.app = create_mock_calculator_app()
            self.server = None
            self.thread = None

        def start(self):
            self.server = make_server(self.host, self.port, self.app, threaded=True)
            self.port = self.server.server_port
            self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)
            self.thread.start()

        def stop(self):
            if self.server:
                self.server.shutdown()
                if self.thread:
                    self.thread.join(timeout=5)

        @property
        def url(self):
            return f"http://{self.host}:{self.port}{CALCULATOR_PATH}"

    reset_mock_state()
    server = MockServer()
    server.start()

    yield server

    server.stop()
    reset_mock_state()


@pytest.fixture()
def mock_profile(mock_calculator_server, monkeypatch, tmp_path):
    """Point the suite at the mock calculator with short waits."""
    from calculator_ui.mock_calculator import ACCEPT_TEXT

    monkeypatch.setattr(settings, "consent_settle_ms", 0)
    monkeypatch.setattr(settings, "post_submit_wait_ms", 500)
    monkeypatch.setattr(settings, "screenshot_dir", str(tmp_path / "screenshots"))

    profile = TargetProfile(
        name=MOCK,
        calculator_url=mock_calculator_server.url,
        consent_accept_text=ACCEPT_TEXT,
    )
    with settings.use_profile(profile):
        yield settings.active_profile


# ============================================================================
# Target and browser fixtures
# ============================================================================

def _target_params():
    params = [
        pytest.param(profile, id=profile.name, marks=pytest.mark.live)
        for profile in settings.profiles()
    ]
    params.append(pytest.param(MOCK, id=MOCK))
    return params


@pytest.fixture(params=_target_params())
def target_profile(request):
    """Activate each configured target (live profiles and the mock) for the test run."""
    if request.param == MOCK:
        yield request.getfixturevalue("mock_profile")
        return
    with settings.use_profile(request.param):
        yield settings.active_profile


async def connect_or_skip(client: PlaywrightClient) -> None:
    """Connect, skipping the scenario only when the browser itself will not start."""
    try:
        await client.connect()
    except BrowserLaunchError as exc:
        pytest.skip(f"Playwright browser not available - run 'playwright install {client.browser_type}': {exc}")


@pytest_asyncio.fixture()
async def playwright_client(target_profile):
    """Launch a fresh browser for one scenario, or skip when none is installed."""
    client = PlaywrightClient(locale=target_profile.locale)
    try:
        await connect_or_skip(client)
        yield client
    finally:
        await client.close()


@pytest_asyncio.fixture()
async def browser(playwright_client):
    """Create a Browser instance with the Playwright page."""
    browser = Browser(playwright_client.page)
    await browser.reset()
    return browser


@pytest_asyncio.fixture()
async def fresh_page(target_profile, browser):
    """Calculator freshly opened, consent banner still showing."""
    await workflows.open_calculator(browser, target_profile.calculator_url)
    return browser


@pytest_asyncio.fixture()
async def calculator_page(fresh_page):
    """Calculator opened with the consent banner dismissed."""
    await workflows.dismiss_consent_banner(fresh_page)
    return fresh_page
