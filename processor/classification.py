"""Status-based partitioning of events."""
from typing import List, Tuple

from processor.models import Event

STATUS_UPCOMING = 'Upcoming'
STATUS_ACTIVE = 'Active'
STATUS_COMPLETE = 'Complete'


def is_upcoming(event: Event) -> bool:
    """Upcoming and active events are shown in the upcoming list."""
    return event.status in (STATUS_UPCOMING, STATUS_ACTIVE)


def is_colorizable(event: Event) -> bool:
    """Everything except upcoming events goes through logo colorization."""
    return event.status != STATUS_UPCOMING


def is_recent(event: Event) -> bool:
    return event.status == STATUS_COMPLETE


def classify(events: List[Event]) -> Tuple[List[Event], List[Event]]:
    """
    Split events into upcoming and colorizable lists.

    The lists overlap: active events are both upcoming and colorizable.

    Args:
        events: Normalized events

    Returns:
        Tuple of (upcoming events, colorizable events), each in input order
    """
    upcoming = [event for event in events if is_upcoming(event)]
    colorizable = [event for event in events if is_colorizable(event)]
    return upcoming, colorizable
