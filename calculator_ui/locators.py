"""Locators for the insurance calculator page.

These must match the external page's markup exactly; the page is not
ours, so when the markup changes this is the only module to update.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

# Enumerated choices are radio groups, see RadioGroupRef
ValueKind = Literal["numeric", "year"]


@dataclass(frozen=True)
class FieldRef:
    """A named input control on the calculator page.

    min/max are the bounds the calculator is known to enforce, which the
    page may or may not also declare as HTML attributes.
    """

    name: str
    kind: ValueKind
    min: Optional[int] = None
    max: Optional[int] = None

    @property
    def selector(self) -> str:
        return f'input[name="{self.name}"]'


@dataclass(frozen=True)
class RadioGroupRef:
    """An exclusive-choice group, found by its accessible name."""

    label: str
    input_name: str
    options: Tuple[str, ...]

    @property
    def checked_selector(self) -> str:
        return f'input[type="radio"][name="{self.input_name}"]:checked'

    @property
    def inputs_selector(self) -> str:
        return f'input[type="radio"][name="{self.input_name}"]'


BUILDING_AREA = FieldRef(name="buildingArea", kind="numeric")
BUILD_YEAR = FieldRef(name="buildYear", kind="year", min=1000)

FLOOR_GROUP = RadioGroupRef(
    label="Piętro",
    input_name="floor",
    options=("Parter", "Pośrednie", "Ostatnie"),
)

CONSENT_BANNER = "#CybotCookiebotDialog"
SUBMIT_BUTTON_TEXT = "Przejdź dalej"
YEAR_TEXTBOX_NAME = "Wpisz rok budowy"

# Recorded house flow
PROPERTY_TYPE_HOUSE = "Dom"
ANSWER_YES = "Tak"
ROOF_QUESTION_LABEL = "Czy budynek ma dach oraz"

INVALID_YEAR_MESSAGE = (
    "Wpisano nieprawidłowy rok budowy. Wprowadź rok w przedziale od 1000 do obecnego."
)


def accept_button_selector(text: str) -> str:
    return f'button:has-text("{text}")'


def submit_button_selector() -> str:
    return f'button:has-text("{SUBMIT_BUTTON_TEXT}")'


def text_selector(text: str) -> str:
    return f"text={text}"
