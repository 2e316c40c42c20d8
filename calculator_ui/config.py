"""Shared configuration for the calculator UI tests.

Values come from environment variables, falling back to `.env.defaults`
at the repository root (see `calculator_ui.env_defaults`).

Two target profiles are supported:
- primary: CALCULATOR_URL (defaults to the live mubi.pl calculator)
- smoke: UI_SMOKE_CALCULATOR_URL, only when set

Set UI_LIVE=1 to run the scenarios marked `live` against the real website.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass
from typing import Dict, Iterator, List

from calculator_ui.env_defaults import env

logger = logging.getLogger(__name__)

DEFAULT_CALCULATOR_URL = "https://mubi.pl/kalkulator-ubezpieczenia-mieszkania-i-domu/"
DEFAULT_CONSENT_ACCEPT_TEXT = "Zezwól na wszystkie"
DEFAULT_LOCALE = "pl-PL"
SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")

_TRUE_VALUES = {"1", "true", "yes"}


def _as_bool(value: str | None, fallback: bool) -> bool:
    if value is None:
        return fallback
    return value.strip().lower() in _TRUE_VALUES


def _as_int(key: str, fallback: int) -> int:
    value = env(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        logger.warning("%s=%r is not an integer, using default: %s", key, value, fallback)
        return fallback


@dataclass
class TargetProfile:
    """Calculator page plus the consent text and locale it is served with."""

    name: str
    calculator_url: str
    consent_accept_text: str = DEFAULT_CONSENT_ACCEPT_TEXT
    locale: str = DEFAULT_LOCALE


class CalculatorTestConfig:
    """Configuration for the calculator scenarios.

    The active profile decides which page the scenarios drive; everything
    else (browser, timeouts, screenshots) is shared by all profiles.
    """

    def __init__(self) -> None:
        self.playwright_headless: bool = _as_bool(env("PLAYWRIGHT_HEADLESS"), True)

        browser_type = env("PLAYWRIGHT_BROWSER", "chromium")
        if browser_type not in SUPPORTED_BROWSERS:
            logger.warning(
                "PLAYWRIGHT_BROWSER=%r not supported, using default: chromium", browser_type
            )
            browser_type = "chromium"
        self.browser_type: str = browser_type

        self.action_timeout_ms: int = _as_int("PLAYWRIGHT_TIMEOUT_MS", 30000)
        self.consent_settle_ms: int = _as_int("CONSENT_SETTLE_MS", 2000)
        self.consent_timeout_ms: int = _as_int("CONSENT_TIMEOUT_MS", 5000)
        self.post_submit_wait_ms: int = _as_int("POST_SUBMIT_WAIT_MS", 3000)
        self.screenshot_dir: str = env("SCREENSHOT_DIR", "screenshots")
        self.live_enabled: bool = _as_bool(env("UI_LIVE"), False)

        primary = TargetProfile(
            name="primary",
            calculator_url=env("CALCULATOR_URL", DEFAULT_CALCULATOR_URL),
            consent_accept_text=env("CONSENT_ACCEPT_TEXT", DEFAULT_CONSENT_ACCEPT_TEXT),
            locale=env("CALCULATOR_LOCALE", DEFAULT_LOCALE),
        )

        # Optional second target, e.g. a staging copy or another locale
        smoke_url = env("UI_SMOKE_CALCULATOR_URL")
        smoke_profile: TargetProfile | None = None
        if smoke_url:
            smoke_profile = TargetProfile(
                name="smoke",
                calculator_url=smoke_url,
                consent_accept_text=env("UI_SMOKE_CONSENT_ACCEPT_TEXT", primary.consent_accept_text),
                locale=env("UI_SMOKE_LOCALE", primary.locale),
            )

        self._profiles: Dict[str, TargetProfile] = {primary.name: primary}
        if smoke_profile:
            self._profiles[smoke_profile.name] = smoke_profile

        self._active: TargetProfile = primary

    # ---- active profile helpers -------------------------------------------------
    @property
    def active_profile(self) -> TargetProfile:
        return self._active

    @property
    def calculator_url(self) -> str:
        return self._active.calculator_url

    @property
    def consent_accept_text(self) -> str:
        return self._active.consent_accept_text

    @property
    def locale(self) -> str:
        return self._active.locale

    # ---- profile orchestration --------------------------------------------------
    def profiles(self) -> List[TargetProfile]:
        return list(self._profiles.values())

    @contextmanager
    def use_profile(self, profile: TargetProfile) -> Iterator[TargetProfile]:
        """Temporarily switch the active profile.

        The profile is deep-copied so a scenario mutating it cannot leak
        into the next one.
        """
        previous = self._active
        self._active = deepcopy(profile)
        try:
            yield self._active
        finally:
            self._active = previous


# Singleton instance - initialized on first import
settings = CalculatorTestConfig()
