"""Tests for the result models and probe plans used by the workflows."""

from datetime import date

from calculator_ui.workflows import (
    BUILDING_AREA_PLAN,
    FieldAttributes,
    ProbeResult,
    SubmissionOutcome,
    build_year_plan,
)


def test_probe_result_retained():
    assert ProbeResult(field="buildingArea", raw_input="75", accepted="75").retained
    assert not ProbeResult(field="buildingArea", raw_input="abc", accepted="").retained


def test_submission_outcome_navigated():
    stayed = SubmissionOutcome(url_before="https://a/", url_after="https://a/", form_visible=True)
    moved = SubmissionOutcome(url_before="https://a/", url_after="https://a/krok-2/", form_visible=False)

    assert not stayed.navigated
    assert moved.navigated


def test_building_area_plan_only_asserts_known_rules():
    checks = dict(BUILDING_AREA_PLAN)

    assert [raw for raw, _ in BUILDING_AREA_PLAN] == ["abc", "-10", "0", "999999", "75.5", "75"]
    assert checks["abc"] == "rejected"
    assert checks["0"] == checks["75"] == "retained"
    assert checks["-10"] == checks["999999"] == checks["75.5"] == "observe"


def test_build_year_plan_probes_five_years_ahead():
    plan = build_year_plan(date(2024, 6, 1))

    assert plan == (
        ("abc", "rejected"),
        ("2029", "observe"),
        ("1800", "observe"),
        ("2000", "retained"),
    )


def test_build_year_plan_defaults_to_today():
    future = build_year_plan()[1][0]
    assert future == str(date.today().year + 5)


def test_field_attributes_report_undeclared_bounds():
    attributes = FieldAttributes(
        field="buildYear", type="text", min=None, max=None, required=None, declared_min=1000,
    )

    assert attributes.undeclared_bounds == ["min"]


def test_field_attributes_matching_bounds():
    declared = FieldAttributes(
        field="buildYear", type="number", min="1000", max="2030", required="",
        declared_min=1000, declared_max=2030,
    )
    unknown = FieldAttributes(field="buildingArea", type="text", min="1", max=None, required=None)

    assert declared.undeclared_bounds == []
    assert unknown.undeclared_bounds == []
