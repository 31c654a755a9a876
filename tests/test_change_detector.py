"""Test change detection, the service selection cascade and agenda grouping."""
from dataclasses import replace
from datetime import date, datetime, timedelta

import pytest

from use_cases.nursing.domain.policies import validate
from use_cases.nursing.domain.services import (
    AgendaBuilder,
    ChangeDetector,
    apply_service_selection,
    has_significant_change,
    reschedule,
)
from use_cases.nursing.models import AppointmentDraft, ColorTag


def _normalized(appointment, catalog, **changes):
    """Validated draft of `appointment` with `changes` applied."""
    draft = replace(AppointmentDraft.from_appointment(appointment), **changes)
    result = validate(draft, catalog, is_editing=True)
    assert result.ok, result.errors
    return result.appointment


class TestChangeDetector:
    """Which edits need confirmation."""

    def test_new_appointment_never_needs_confirmation(self, prenatal_draft, catalog):
        pending = validate(prenatal_draft, catalog).appointment

        assert not has_significant_change(None, pending)
        assert ChangeDetector().changed_fields(None, pending) == []

    def test_untouched_edit(self, make_appointment, catalog):
        original = make_appointment(id=1)

        assert not has_significant_change(original, _normalized(original, catalog))

    def test_notes_change_is_significant(self, make_appointment, catalog):
        original = make_appointment(id=1)
        pending = _normalized(original, catalog, notes="Trazer exames")

        assert has_significant_change(original, pending)
        assert ChangeDetector().changed_fields(original, pending) == ["notes"]

    def test_nurse_change_is_not_significant(self, make_appointment, catalog):
        original = make_appointment(id=1)
        pending = _normalized(original, catalog, nurse_id="ana", nurse_name="Ana Santos")

        assert pending.nurse_name == "Ana Santos"
        assert not has_significant_change(original, pending)

    def test_title_change_is_not_significant(self, make_appointment, catalog):
        original = make_appointment(id=1)

        assert not has_significant_change(original, _normalized(original, catalog, title="Retorno"))

    def test_color_change_is_significant(self, make_appointment, catalog):
        original = make_appointment(id=1)
        pending = _normalized(original, catalog, color_tag="red")

        assert ChangeDetector().changed_fields(original, pending) == ["color_tag"]

    def test_service_change_is_significant(self, make_appointment, catalog):
        original = make_appointment(id=1)
        pending = _normalized(
            original,
            catalog,
            service_name="Saúde da Mulher",
            end_date_time=datetime(2025, 3, 10, 9, 45),
        )

        assert ChangeDetector().changed_fields(original, pending) == [
            "end_date_time",
            "service_name",
        ]

    def test_moved_times_are_significant(self, make_appointment, catalog):
        original = make_appointment(id=1)
        pending = _normalized(
            original,
            catalog,
            start_date_time=datetime(2025, 3, 10, 10, 0),
            end_date_time=datetime(2025, 3, 10, 11, 0),
        )

        detector = ChangeDetector()
        assert detector.execute(original, pending)
        assert not detector.is_date_change(original, pending)

    def test_date_change(self, make_appointment, catalog):
        original = make_appointment(id=1)
        pending = _normalized(
            original,
            catalog,
            start_date_time=datetime(2025, 3, 11, 9, 0),
            end_date_time=datetime(2025, 3, 11, 10, 0),
        )

        assert ChangeDetector().is_date_change(original, pending)


class TestApplyServiceSelection:
    """Cascade of a service choice into the draft."""

    def test_fills_title_end_and_default_nurse(self, catalog):
        draft = AppointmentDraft(start_date_time=datetime(2025, 3, 10, 14, 0))
        service = catalog.find_service_by_id("amamentacao")

        updated = apply_service_selection(draft, service, catalog)

        assert updated.service_id == "amamentacao"
        assert updated.title == "Consultoria em Amamentação"
        assert updated.end_date_time == datetime(2025, 3, 10, 14, 45)
        assert updated.nurse_id == "maria"
        assert draft.service_id is None

    def test_keeps_chosen_nurse(self, catalog):
        draft = AppointmentDraft(nurse_id="juliana", start_date_time=datetime(2025, 3, 10, 14, 0))

        updated = apply_service_selection(draft, catalog.find_service_by_id("pre-natal"), catalog)

        assert updated.nurse_id == "juliana"
        assert updated.nurse_name is None

    def test_without_start_leaves_end_alone(self, catalog):
        draft = AppointmentDraft(end_date_time="keep")

        updated = apply_service_selection(draft, catalog.find_service_by_id("pre-natal"), catalog)

        assert updated.end_date_time == "keep"

    def test_result_validates(self, catalog):
        draft = AppointmentDraft(start_date_time=datetime(2025, 3, 10, 8, 30))

        updated = apply_service_selection(draft, catalog.find_service_by_id("pos-parto"), catalog)

        assert validate(updated, catalog).ok


class TestReschedule:

    def test_preserves_duration_and_fields(self, make_appointment):
        original = make_appointment(id=4, color_tag="purple")

        draft = reschedule(original, datetime(2025, 3, 12, 15, 30))

        assert draft.start_date_time == datetime(2025, 3, 12, 15, 30)
        assert draft.end_date_time == datetime(2025, 3, 12, 16, 30)
        assert draft.color_tag == "purple"
        assert draft.notes == original.notes
        assert draft.nurse_id == "maria"


class TestAgendaBuilder:
    """Grouping for the agenda view."""

    @pytest.fixture
    def appointments(self, make_appointment):
        base = datetime(2025, 3, 10, 9, 0)
        return [
            make_appointment(id=1, start_date_time=base + timedelta(days=1),
                             end_date_time=base + timedelta(days=1, hours=1), color_tag="red"),
            make_appointment(id=2, start_date_time=base + timedelta(hours=3),
                             end_date_time=base + timedelta(hours=4), color_tag="blue"),
            make_appointment(id=3, start_date_time=base,
                             end_date_time=base + timedelta(hours=1), color_tag="red"),
        ]

    def test_group_by_date(self, appointments):
        groups = AgendaBuilder().group(appointments, "date")

        assert list(groups) == [date(2025, 3, 10), date(2025, 3, 11)]
        assert [a.id for a in groups[date(2025, 3, 10)]] == [3, 2]

    def test_group_by_color_follows_tag_order(self, appointments):
        groups = AgendaBuilder().group(appointments, "color")

        assert list(groups) == [ColorTag.BLUE, ColorTag.RED]
        assert [a.id for a in groups[ColorTag.RED]] == [3, 1]

    def test_ties_ordered_by_id(self, make_appointment):
        appointments = [make_appointment(id=9), make_appointment(id=2)]

        groups = AgendaBuilder().execute(appointments)

        assert [a.id for a in groups[date(2025, 3, 10)]] == [2, 9]

    def test_empty(self):
        assert AgendaBuilder().group([]) == {}

    def test_unknown_grouping(self, appointments):
        with pytest.raises(ValueError):
            AgendaBuilder().group(appointments, "nurse")
