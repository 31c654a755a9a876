"""
Sample calendar content.

Generates a month either side of `now` worth of appointments so the
calendar has something to show during development and demos.
"""

import random
from datetime import datetime, timedelta
from typing import List, Optional

from .catalog import DEFAULT_CATALOG, Catalog
from .domain.policies import derive_end_time
from .models import Appointment, ColorTag, Owner

SAMPLE_NOTES = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua."
)

RANGE_DAYS = 30
FIRST_HOUR = 8
HOUR_SPAN = 12


def generate_sample_appointments(
    count: int,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    catalog: Optional[Catalog] = None,
) -> List[Appointment]:
    """
    Build `count` appointments with ids 1..count.

    The first one starts today at 09:00; the others start on a random
    day within 30 days of `now`, between 08:00 and 19:59. Every
    appointment lasts exactly as long as its service. One nurse, picked
    at random, owns the whole batch.

    Args:
        count: Number of appointments
        now: Reference time (default: current time)
        rng: Random source; pass a seeded one for reproducible output
        catalog: Where nurses and services come from
    """
    if count <= 0:
        return []

    now = (now or datetime.now()).replace(microsecond=0)
    rng = rng or random.Random()
    catalog = catalog or DEFAULT_CATALOG
    services = catalog.list_services()
    nurse = rng.choice(catalog.list_nurses())
    owner = Owner.from_nurse(nurse)

    range_start = now - timedelta(days=RANGE_DAYS)
    range_seconds = int(timedelta(days=2 * RANGE_DAYS).total_seconds())

    starts = [now.replace(hour=9, minute=0, second=0)]
    for _ in range(count - 1):
        day = range_start + timedelta(seconds=rng.randint(0, range_seconds))
        starts.append(day.replace(
            hour=FIRST_HOUR + rng.randrange(HOUR_SPAN),
            minute=rng.randrange(60),
            second=0,
        ))

    appointments = []
    for appointment_id, start in enumerate(starts, start=1):
        service = rng.choice(services)
        appointments.append(Appointment(
            id=appointment_id,
            title=service.name,
            nurse_name=nurse.name,
            service_name=service.name,
            start_date_time=start,
            end_date_time=derive_end_time(start, service),
            color_tag=rng.choice(list(ColorTag)),
            notes=SAMPLE_NOTES,
            owner=owner,
        ))
    return appointments
