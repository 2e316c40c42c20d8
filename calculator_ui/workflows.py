"""Reusable workflows for driving the insurance calculator form.

Each workflow performs one scripted interaction and asserts (or, for the
exploratory probes, logs) the observable page state afterwards. The live
page's sanitisation rules are not known in advance, so boundary inputs are
recorded rather than asserted.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date
from typing import List, Literal, Optional, Sequence, Tuple

from playwright.async_api import expect

from calculator_ui.browser import Browser, ToolError
from calculator_ui.config import settings
from calculator_ui.locators import (
    ANSWER_YES,
    BUILD_YEAR,
    BUILDING_AREA,
    CONSENT_BANNER,
    FLOOR_GROUP,
    INVALID_YEAR_MESSAGE,
    PROPERTY_TYPE_HOUSE,
    ROOF_QUESTION_LABEL,
    SUBMIT_BUTTON_TEXT,
    YEAR_TEXTBOX_NAME,
    FieldRef,
    RadioGroupRef,
    accept_button_selector,
    submit_button_selector,
    text_selector,
)

logger = logging.getLogger(__name__)

# "retained": the field must hold the raw input verbatim afterwards
# "rejected": the field must not hold the raw input verbatim
# "observe": record whatever the page accepted
ProbeCheck = Literal["retained", "rejected", "observe"]
ProbePlan = Sequence[Tuple[str, ProbeCheck]]

BUILDING_AREA_PLAN: ProbePlan = (
    ("abc", "rejected"),
    ("-10", "observe"),
    ("0", "retained"),
    ("999999", "observe"),
    ("75.5", "observe"),
    ("75", "retained"),
)

EMPTY_FIELDS_SCREENSHOT = "empty_fields.png"


@dataclass
class ProbeResult:
    field: str
    raw_input: str
    accepted: str

    @property
    def retained(self) -> bool:
        return self.accepted == self.raw_input


@dataclass
class FieldAttributes:
    field: str
    type: Optional[str]
    min: Optional[str]
    max: Optional[str]
    required: Optional[str]
    declared_min: Optional[int] = None
    declared_max: Optional[int] = None

    @property
    def undeclared_bounds(self) -> List[str]:
        """Known bounds the page does not expose as matching min/max attributes."""
        missing = []
        if self.declared_min is not None and self.min != str(self.declared_min):
            missing.append("min")
        if self.declared_max is not None and self.max != str(self.declared_max):
            missing.append("max")
        return missing


@dataclass
class SubmissionOutcome:
    url_before: str
    url_after: str
    form_visible: bool

    @property
    def navigated(self) -> bool:
        return self.url_after != self.url_before


def build_year_plan(today: date | None = None) -> ProbePlan:
    """Probe plan for the build year; the future year moves with the calendar."""
    future_year = str((today or date.today()).year + 5)
    return (
        ("abc", "rejected"),
        (future_year, "observe"),
        ("1800", "observe"),
        ("2000", "retained"),
    )


# =============================================================================
# Page setup
# =============================================================================

async def open_calculator(browser: Browser, url: str | None = None, settle_ms: int | None = None) -> str:
    """Navigate to the calculator and give the consent script time to render."""
    url = url or settings.calculator_url
    await browser.goto(url)
    await browser.wait(settings.consent_settle_ms if settle_ms is None else settle_ms)
    logger.info("Opened calculator at %s", browser.current_url)
    return url


async def dismiss_consent_banner(
    browser: Browser,
    accept_text: str | None = None,
    timeout_ms: int | None = None,
) -> None:
    """Accept all cookies and wait for the consent banner to go away.

    Exactly one accept control must match; anything else is a locator
    problem in this suite or on the page, and raises ToolError.
    """
    selector = accept_button_selector(accept_text or settings.consent_accept_text)
    timeout_ms = settings.consent_timeout_ms if timeout_ms is None else timeout_ms

    accept = browser.locator(selector)
    try:
        await expect(accept).to_have_count(1)
    except AssertionError as exc:
        found = await accept.count()
        raise ToolError(
            name="locate",
            payload={"selector": selector, "count": found},
            message=f"expected exactly one consent accept control, found {found}",
        ) from exc

    await browser.click(selector)

    banner = browser.locator(CONSENT_BANNER)
    try:
        await expect(banner).to_be_hidden(timeout=timeout_ms)
    except AssertionError as exc:
        raise ToolError(
            name="wait_hidden",
            payload={"selector": CONSENT_BANNER, "timeout_ms": timeout_ms},
            message=f"consent banner still visible after {timeout_ms} ms",
        ) from exc
    logger.info("Consent banner dismissed")


# =============================================================================
# Field probes
# =============================================================================

async def fill_and_validate(
    browser: Browser,
    field: FieldRef,
    raw_input: str,
    check: ProbeCheck = "observe",
) -> ProbeResult:
    """Fill one field, read back what the page accepted and check it."""
    await browser.fill(field.selector, raw_input)
    locator = browser.locator(field.selector)

    if check == "retained":
        await expect(locator).to_have_value(raw_input)
    elif check == "rejected":
        await expect(locator).not_to_have_value(raw_input)

    result = ProbeResult(
        field=field.name,
        raw_input=raw_input,
        accepted=await browser.input_value(field.selector),
    )
    logger.info("Value after entering %r into %s: %r", raw_input, field.name, result.accepted)
    return result


async def probe_field(browser: Browser, field: FieldRef, plan: ProbePlan) -> List[ProbeResult]:
    results = []
    for raw_input, check in plan:
        results.append(await fill_and_validate(browser, field, raw_input, check))
    return results


async def probe_building_area(browser: Browser) -> List[ProbeResult]:
    return await probe_field(browser, BUILDING_AREA, BUILDING_AREA_PLAN)


async def probe_build_year(browser: Browser, today: date | None = None) -> List[ProbeResult]:
    return await probe_field(browser, BUILD_YEAR, build_year_plan(today))


# =============================================================================
# Radio groups
# =============================================================================

async def select_each_option(browser: Browser, group: RadioGroupRef) -> List[str]:
    """Check every option in turn; exactly one radio may be checked after each."""
    group_locator = browser.page.get_by_role("radiogroup", name=group.label)
    selected = []
    for option in group.options:
        radio = group_locator.get_by_role("radio", name=option)
        # check() fires the change events the page listens for
        await radio.check()
        await expect(radio).to_be_checked()
        await expect(group_locator.locator(group.checked_selector)).to_have_count(1)
        selected.append(option)
    return selected


async def select_each_floor_option(browser: Browser) -> List[str]:
    return await select_each_option(browser, FLOOR_GROUP)


# =============================================================================
# Submission
# =============================================================================

async def _outcome(browser: Browser, url_before: str) -> SubmissionOutcome:
    outcome = SubmissionOutcome(
        url_before=url_before,
        url_after=browser.page.url,
        form_visible=await browser.is_visible(BUILDING_AREA.selector),
    )
    logger.info("URL after form submission: %s", outcome.url_after)
    logger.info("Form still visible after submission: %s", outcome.form_visible)
    return outcome


async def submit_empty_form(browser: Browser, url: str | None = None) -> None:
    """Clear the required fields and submit; the page must refuse to move on."""
    url = url or settings.calculator_url
    await browser.fill(BUILDING_AREA.selector, "")
    await browser.fill(BUILD_YEAR.selector, "")

    await browser.click(submit_button_selector())

    await expect(browser.page).to_have_url(url)
    logger.info("Checking for validation indicators after empty form submission")
    await expect(browser.locator(text_selector(INVALID_YEAR_MESSAGE))).to_be_visible()


async def submit_untouched_form(browser: Browser, screenshot_dir: str | None = None) -> str:
    """Submit without filling anything and keep a screenshot for manual review."""
    await browser.click(submit_button_selector())
    await browser.wait(settings.post_submit_wait_ms)
    path = os.path.join(screenshot_dir or settings.screenshot_dir, EMPTY_FIELDS_SCREENSHOT)
    return await browser.screenshot(path, full_page=True)


async def submit_valid_form(
    browser: Browser,
    area: str = "75",
    year: str = "2000",
    floor: str = "Pośrednie",
) -> SubmissionOutcome:
    """Fill every field with known-good values and submit.

    Whether the live page moves on to the next step is unknown, so the
    outcome is returned and logged, not asserted.
    """
    await browser.fill(BUILDING_AREA.selector, area)
    await browser.fill(BUILD_YEAR.selector, year)
    await browser.page.get_by_role("radio", name=floor).click(force=True)

    url_before = browser.page.url
    await browser.click(submit_button_selector())
    await browser.wait(settings.post_submit_wait_ms)
    return await _outcome(browser, url_before)


# =============================================================================
# Diagnostics
# =============================================================================

async def inspect_field_attributes(browser: Browser, field: FieldRef) -> FieldAttributes:
    """Read the validation-related attributes of a field, for the log only."""
    attributes = FieldAttributes(
        field=field.name,
        type=await browser.get_attribute(field.selector, "type"),
        min=await browser.get_attribute(field.selector, "min"),
        max=await browser.get_attribute(field.selector, "max"),
        required=await browser.get_attribute(field.selector, "required"),
        declared_min=field.min,
        declared_max=field.max,
    )
    logger.info(
        "%s (%s) field type: %s, min: %s, max: %s, required: %s",
        field.name, field.kind, attributes.type, attributes.min, attributes.max, attributes.required,
    )
    for bound in attributes.undeclared_bounds:
        logger.info(
            "%s enforces %s=%s but the page declares %s",
            field.name, bound, getattr(field, bound), getattr(attributes, bound),
        )
    return attributes


async def inspect_floor_required(browser: Browser, group: RadioGroupRef = FLOOR_GROUP) -> Optional[str]:
    required = await browser.get_attribute(group.inputs_selector, "required")
    logger.info("Floor selection required: %s", required)
    return required


# =============================================================================
# Recorded flow
# =============================================================================

async def fill_house_quote(browser: Browser, area: str = "33", year: str = "2026") -> SubmissionOutcome:
    """Replay the recorded house-quote session on a freshly opened page.

    Accepts cookies through the accessible button, picks a house, answers
    both yes/no questions, fills area and year and moves on.
    """
    page = browser.page
    await page.get_by_role("button", name=settings.consent_accept_text).click()
    await page.locator("label").filter(has_text=PROPERTY_TYPE_HOUSE).click()
    await page.locator("label").filter(has_text=ANSWER_YES).click()
    await page.get_by_label(ROOF_QUESTION_LABEL).locator("label").filter(has_text=ANSWER_YES).click()

    area_field = page.locator(BUILDING_AREA.selector)
    await area_field.click()
    await area_field.fill(area)

    year_box = page.get_by_role("textbox", name=YEAR_TEXTBOX_NAME)
    await year_box.click()
    await year_box.fill(year)

    url_before = page.url
    await page.get_by_role("button", name=SUBMIT_BUTTON_TEXT).click()
    await browser.wait(settings.post_submit_wait_ms)
    return await _outcome(browser, url_before)
