"""Test calendar operations end to end over an in-memory store."""
from datetime import date, datetime, time

import pytest

from core.presentation import NotificationLevel
from use_cases.nursing.calendar import BookingRequest
from use_cases.nursing.models import ColorTag
from use_cases.nursing.session import EditFlowStep

from conftest import MONDAY, SATURDAY


class TestCreate:
    """New appointments commit without confirmation."""

    def test_open_new_defaults(self, calendar):
        session = calendar.open_new(datetime(2025, 3, 10, 14, 0))

        assert session.draft.start_date_time == datetime(2025, 3, 10, 14, 0)
        assert session.draft.end_date_time == datetime(2025, 3, 10, 14, 30)
        assert session.draft.color_tag == "blue"
        assert not session.is_editing

    def test_select_service_then_submit(self, calendar, store):
        session = calendar.open_new(datetime(2025, 3, 10, 14, 0))
        calendar.select_service(session, "pre-natal")

        result = calendar.submit(session)

        assert result.success
        assert result.step == EditFlowStep.COMMITTED
        assert not result.needs_confirmation
        assert result.appointment.id == 1
        assert result.appointment.end_date_time == datetime(2025, 3, 10, 15, 0)
        assert result.appointment.owner.id == "maria"
        assert result.notification.level == NotificationLevel.SUCCESS
        assert "scheduled" in result.notification.message
        assert len(store) == 1

    def test_unknown_service_selection(self, calendar):
        session = calendar.open_new(datetime(2025, 3, 10, 14, 0))

        result = calendar.select_service(session, "acupuntura")

        assert not result.success
        assert result.errors[0].field == "service"
        assert session.draft.service_id is None

    def test_rejected_draft_keeps_values(self, calendar, store):
        session = calendar.open_new(datetime(2025, 3, 10, 14, 0))
        session.draft.nurse_id = "maria"
        session.draft.service_name = "Consulta Pré-natal"

        result = calendar.submit(session)

        assert not result.success
        assert result.step == EditFlowStep.DRAFT
        assert [e.field for e in result.errors] == ["duration"]
        assert result.notification.is_error
        assert session.draft.service_name == "Consulta Pré-natal"
        assert len(store) == 0

    def test_resubmit_after_fix(self, calendar):
        session = calendar.open_new(datetime(2025, 3, 10, 14, 0))
        session.draft.nurse_id = "maria"
        session.draft.service_name = "Consulta Pré-natal"
        calendar.submit(session)

        session.draft.end_date_time = datetime(2025, 3, 10, 15, 0)

        assert calendar.submit(session).step == EditFlowStep.COMMITTED

    def test_create_on_saturday_with_reference_day(self, calendar):
        session = calendar.open_new(datetime(2025, 3, 15, 10, 0))
        calendar.select_service(session, "pre-natal")

        result = calendar.submit(session, today=MONDAY)

        assert [e.code for e in result.errors] == ["ineligible_date"]


class TestEdit:
    """Edits with significant changes wait for confirmation."""

    def test_open_edit_missing(self, calendar):
        assert calendar.open_edit(99) is None

    def test_notes_change_needs_confirmation(self, calendar, store, stored):
        session = calendar.open_edit(stored.id)
        session.draft.notes = "Trazer exames"

        result = calendar.submit(session)

        assert result.success
        assert result.needs_confirmation
        assert result.prompt.title == "Confirm change"
        assert store.get_by_id(stored.id).notes == "Primeira consulta"

    def test_confirm_commits(self, calendar, store, stored):
        session = calendar.open_edit(stored.id)
        session.draft.notes = "Trazer exames"
        calendar.submit(session)

        result = calendar.confirm(session)

        assert result.step == EditFlowStep.COMMITTED
        assert result.appointment.id == stored.id
        assert "updated" in result.notification.message
        assert store.get_by_id(stored.id).notes == "Trazer exames"
        assert len(store) == 1

    def test_cancel_leaves_store_untouched(self, calendar, store, stored):
        session = calendar.open_edit(stored.id)
        session.draft.notes = "Trazer exames"
        calendar.submit(session)

        result = calendar.cancel(session)

        assert result.step == EditFlowStep.DRAFT
        assert session.draft.notes == "Primeira consulta"
        assert store.get_by_id(stored.id) == stored

    def test_unchanged_edit_of_untrimmed_notes_commits(self, calendar, store, make_appointment):
        appointment = store.add(make_appointment(notes="Primeira consulta ", title=" Consulta Pré-natal"))
        session = calendar.open_edit(appointment.id)

        result = calendar.submit(session)

        assert result.step == EditFlowStep.COMMITTED
        assert result.prompt is None

    def test_nurse_change_commits_directly(self, calendar, store, stored):
        session = calendar.open_edit(stored.id)
        session.draft.nurse_id = "ana"
        session.draft.nurse_name = "Ana Santos"

        result = calendar.submit(session)

        assert result.step == EditFlowStep.COMMITTED
        assert result.prompt is None
        assert store.get_by_id(stored.id).nurse_name == "Ana Santos"
        assert store.get_by_id(stored.id).owner.id == "maria"

    def test_date_change_prompt(self, calendar, stored):
        session = calendar.open_edit(stored.id)
        session.draft.start_date_time = datetime(2025, 3, 12, 9, 0)
        session.draft.end_date_time = datetime(2025, 3, 12, 10, 0)

        result = calendar.submit(session)

        assert result.prompt.title == "Confirm date change"
        assert result.prompt.details[1].startswith("To: 12 Mar 2025")

    def test_edit_accepts_weekend(self, calendar, stored):
        session = calendar.open_edit(stored.id)
        session.draft.start_date_time = datetime(2025, 3, 15, 9, 0)
        session.draft.end_date_time = datetime(2025, 3, 15, 10, 0)

        assert calendar.submit(session, today=MONDAY).needs_confirmation

    def test_confirm_after_concurrent_delete(self, calendar, store, stored):
        session = calendar.open_edit(stored.id)
        session.draft.notes = "Trazer exames"
        calendar.submit(session)
        store.remove(stored.id)

        result = calendar.confirm(session)

        assert not result.success
        assert result.notification.is_error
        assert result.step == EditFlowStep.PENDING
        assert not result.needs_confirmation
        assert len(store) == 0

    def test_confirm_without_pending(self, calendar, stored):
        with pytest.raises(ValueError):
            calendar.confirm(calendar.open_edit(stored.id))

    def test_submit_twice(self, calendar, stored):
        session = calendar.open_edit(stored.id)
        session.draft.notes = "Trazer exames"
        calendar.submit(session)

        with pytest.raises(ValueError):
            calendar.submit(session)


class TestMoveAndDelete:

    def test_move_asks_first(self, calendar, store, stored):
        result = calendar.move(stored.id, datetime(2025, 3, 11, 14, 0))

        assert result.needs_confirmation
        assert result.prompt.confirm_label == "Move appointment"
        assert "11 Mar 2025 at 14:00" in result.prompt.description
        assert store.get_by_id(stored.id).start_date_time == datetime(2025, 3, 10, 9, 0)

        confirmed = calendar.confirm(result.session)

        moved = store.get_by_id(stored.id)
        assert confirmed.success
        assert moved.start_date_time == datetime(2025, 3, 11, 14, 0)
        assert moved.end_date_time == datetime(2025, 3, 11, 15, 0)

    def test_move_missing(self, calendar):
        result = calendar.move(7, datetime(2025, 3, 11, 14, 0))

        assert not result.success
        assert "no longer exists" in result.notification.message

    def test_move_to_same_slot_commits(self, calendar, stored):
        result = calendar.move(stored.id, stored.start_date_time)

        assert result.step == EditFlowStep.COMMITTED

    def test_delete_twice(self, calendar, store, stored):
        first = calendar.delete(stored.id)
        second = calendar.delete(stored.id)

        assert first.success
        assert "cancelled" in first.notification.message
        assert not second.success
        assert second.notification.is_error
        assert len(store) == 0


class TestBook:
    """Restrictive booking page."""

    def test_available_times(self, calendar):
        times = calendar.available_times()

        assert times[0] == time(8, 0)
        assert times[-1] == time(17, 30)

    def test_books_weekday_slot(self, calendar, store):
        request = BookingRequest(
            nurse_id="juliana",
            service_id="amamentacao",
            color_tag="yellow",
            day=date(2025, 3, 12),
            start_time="10:30",
            notes="Bebê de 2 semanas",
        )

        result = calendar.book(request, today=MONDAY)

        assert result.success
        appointment = result.appointment
        assert appointment.start_date_time == datetime(2025, 3, 12, 10, 30)
        assert appointment.end_date_time == datetime(2025, 3, 12, 11, 15)
        assert appointment.owner.id == "juliana"
        assert appointment.color_tag == ColorTag.YELLOW
        assert len(store) == 1

    def test_saturday_refused_before_validation(self, calendar, store):
        request = BookingRequest(
            nurse_id="maria",
            service_id="pre-natal",
            day=SATURDAY,
            start_time="09:00",
        )

        result = calendar.book(request, today=MONDAY)

        assert not result.success
        assert result.session is None
        assert [(e.field, e.code) for e in result.errors] == [("date", "ineligible_date")]
        assert len(store) == 0

    def test_off_grid_time_and_unknown_refs(self, calendar):
        request = BookingRequest(
            nurse_id="joana",
            service_id="acupuntura",
            day=date(2025, 3, 12),
            start_time="09:10",
        )

        result = calendar.book(request, today=MONDAY)

        assert [e.field for e in result.errors] == ["time", "nurse", "service"]

    def test_datetime_day_is_reduced_to_its_date(self, calendar):
        request = BookingRequest(
            nurse_id="maria",
            service_id="pre-natal",
            day=datetime(2025, 3, 12, 16, 20),
            start_time="09:00",
        )

        result = calendar.book(request, today=MONDAY)

        assert request.day == date(2025, 3, 12)
        assert result.appointment.start_date_time == datetime(2025, 3, 12, 9, 0)

    def test_past_day_refused(self, calendar):
        request = BookingRequest(
            nurse_id="maria",
            service_id="pre-natal",
            day=date(2025, 3, 7),
            start_time="09:00",
        )

        assert not calendar.book(request, today=MONDAY).success


class TestAgenda:

    def test_default_grouping_from_settings(self, calendar, store, make_appointment):
        store.add(make_appointment(
            start_date_time=datetime(2025, 3, 11, 9, 0),
            end_date_time=datetime(2025, 3, 11, 10, 0),
        ))
        store.add(make_appointment())

        agenda = calendar.agenda()

        assert list(agenda) == [date(2025, 3, 10), date(2025, 3, 11)]

    def test_group_by_color(self, calendar, store, make_appointment):
        store.add(make_appointment(color_tag="orange"))

        assert list(calendar.agenda("color")) == [ColorTag.ORANGE]
