"""
Nursing Calendar demo entry point.

Loads sample appointments into an event store and prints the agenda,
then walks one edit through the confirm-before-commit flow.

Run with:
    python main.py
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from config import settings
from use_cases.nursing import CalendarService, EventStore
from use_cases.nursing.sample_data import generate_sample_appointments

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_calendar(now: Optional[datetime] = None) -> CalendarService:
    """Create a calendar service preloaded with sample appointments."""
    store = EventStore(generate_sample_appointments(settings.sample_event_count, now=now))
    logger.info(f"Loaded {len(store)} sample appointments")
    return CalendarService(store=store, settings=settings)


def print_agenda(calendar: CalendarService):
    """Print the agenda grouped as configured."""
    for group, appointments in calendar.agenda().items():
        label = group.label if hasattr(group, "label") else group.strftime("%A %d %B %Y")
        print(f"\n{label}")
        for appointment in appointments:
            start = calendar.composer.format_time(appointment.start_date_time)
            end = calendar.composer.format_time(appointment.end_date_time)
            print(f"  [{appointment.id}] {start}-{end} {appointment.title} ({appointment.nurse_name})")


def main():
    calendar = build_calendar()
    print_agenda(calendar)

    if not len(calendar.store):
        return

    first = calendar.store.list()[0]
    result = calendar.move(first.id, first.start_date_time + timedelta(hours=1))
    if result.needs_confirmation:
        print(f"\n{result.prompt.title}: {result.prompt.description}")
        result = calendar.confirm(result.session)
    if result.notification:
        print(result.notification.message)


if __name__ == "__main__":
    main()
