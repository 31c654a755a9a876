"""Shared test fixtures."""
from datetime import date, datetime

import pytest

from config import Settings
from use_cases.nursing.calendar import CalendarService
from use_cases.nursing.catalog import Catalog
from use_cases.nursing.models import Appointment, AppointmentDraft, Owner
from use_cases.nursing.store import EventStore

# 2025-03-10 is a Monday
MONDAY = date(2025, 3, 10)
SATURDAY = date(2025, 3, 15)


@pytest.fixture
def catalog() -> Catalog:
    return Catalog()


@pytest.fixture
def store() -> EventStore:
    return EventStore()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def calendar(store, catalog, settings) -> CalendarService:
    return CalendarService(store=store, catalog=catalog, settings=settings)


@pytest.fixture
def prenatal_draft() -> AppointmentDraft:
    """A valid one-hour prenatal consultation draft."""
    return AppointmentDraft(
        nurse_id="maria",
        service_name="Consulta Pré-natal",
        color_tag="green",
        start_date_time=datetime(2025, 3, 10, 9, 0),
        end_date_time=datetime(2025, 3, 10, 10, 0),
        notes="Primeira consulta",
    )


@pytest.fixture
def make_appointment():
    """Factory for stored-looking appointments."""
    def _create(**overrides) -> Appointment:
        values = {
            "id": None,
            "title": "Consulta Pré-natal",
            "nurse_name": "Maria Silva",
            "service_name": "Consulta Pré-natal",
            "start_date_time": datetime(2025, 3, 10, 9, 0),
            "end_date_time": datetime(2025, 3, 10, 10, 0),
            "color_tag": "green",
            "notes": "Primeira consulta",
            "owner": Owner(id="maria", name="Maria Silva"),
        }
        values.update(overrides)
        return Appointment(**values)
    return _create


@pytest.fixture
def stored(store, make_appointment) -> Appointment:
    """An appointment already committed to the store."""
    return store.add(make_appointment())
