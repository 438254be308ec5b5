"""Event processor for normalizing raw events table records."""
import json
import logging
from datetime import datetime
from typing import Any, Dict, List

from processor.models import Event

logger = logging.getLogger(__name__)


def format_date(value: str) -> str:
    """
    Format an ISO 8601 date or datetime for display.

    Args:
        value: Date string such as "2024-01-15" or "2024-01-15T09:00:00.000Z"

    Returns:
        Date formatted as "January 15, 2024", an empty string for empty
        input, or the input unchanged if it cannot be parsed
    """
    if not value or not str(value).strip():
        return ''

    date_formats = [
        '%Y-%m-%d',                # ISO 8601 date
        '%Y-%m-%dT%H:%M:%S.%fZ',   # ISO 8601 UTC with milliseconds
        '%Y-%m-%dT%H:%M:%SZ',      # ISO 8601 UTC
        '%Y-%m-%dT%H:%M:%S',       # ISO 8601 local
    ]

    text = str(value).strip()
    for fmt in date_formats:
        try:
            date_obj = datetime.strptime(text, fmt)
            return f"{date_obj.strftime('%B')} {date_obj.day}, {date_obj.year}"
        except ValueError:
            continue

    logger.debug(f"Leaving unrecognized date unformatted: {text}")
    return text


class EventProcessor:
    """Processor for turning events table records into Event objects."""

    def __init__(self, default_photo: str):
        """
        Initialize the event processor.

        Args:
            default_photo: Photo URL used when a record has no usable photos
        """
        self.default_photo = default_photo

    def process_records(self, records: List[Dict[str, Any]]) -> List[Event]:
        """
        Normalize raw table records.

        Args:
            records: Records shaped as {"id": ..., "fields": {...}}

        Returns:
            List of Event objects
        """
        events = []

        for record in records:
            try:
                events.append(self._process_single_record(record))
            except (KeyError, TypeError) as e:
                logger.warning(f"Failed to process record {record!r}: {e}")
                continue

        logger.info(
            f"Processed {len(events)} events out of {len(records)} records"
        )
        return events

    def _process_single_record(self, record: Dict[str, Any]) -> Event:
        """
        Process a single record.

        Args:
            record: Raw table record

        Returns:
            Event object
        """
        fields = record.get('fields') or {}

        return Event(
            id=record['id'],
            name=fields.get('Name', ''),
            status=fields.get('Status', ''),
            description=fields.get('Description', ''),
            location=fields.get('Location', ''),
            start_date=format_date(fields.get('Start Date')),
            end_date=format_date(fields.get('End Date')),
            logo=fields.get('Logo') or None,
            photos=self.parse_photos(fields.get('Photos')),
            photo_creds=fields.get('Photo Creds'),
            website=fields.get('Website'),
            github_link=fields.get('GitHub Link')
        )

    def parse_photos(self, raw_photos: Any) -> List[str]:
        """
        Parse the JSON-encoded Photos field.

        Args:
            raw_photos: JSON array of photo URLs, or None

        Returns:
            Parsed photo list, or a single default photo when the field is
            missing, blank, malformed, not a list, or empty
        """
        photos = [self.default_photo]

        if not isinstance(raw_photos, str) or not raw_photos.strip():
            return photos

        try:
            parsed = json.loads(raw_photos)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Error parsing Photos field: {e}")
            return photos

        if isinstance(parsed, list) and len(parsed) > 0:
            return parsed

        return photos
