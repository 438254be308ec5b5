"""Event pipeline: fetch, classify and colorize events from the events table."""
import logging
from dataclasses import asdict
from typing import List, Optional

from imaging.logo_fetcher import ImageDecodeError, ImageFetchError, LogoFetcher
from processor.classification import classify, is_recent
from processor.colors import make_pastel
from processor.event_processor import EventProcessor
from processor.models import (
    ColorizeResult,
    Event,
    EventLists,
    EventWithColors,
    SkipReason,
)
from processor.overrides import DEFAULT_OVERRIDES, ColorOverrides
from processor.palette import extract_palette
from storage.events_table import EventsTable

logger = logging.getLogger(__name__)


class EventPipeline:
    """Builds the upcoming, colorized and recent event lists."""

    def __init__(
        self,
        events_table: EventsTable,
        processor: EventProcessor,
        logo_fetcher: LogoFetcher,
        overrides: ColorOverrides = DEFAULT_OVERRIDES
    ):
        """
        Initialize the pipeline with its collaborators.

        Args:
            events_table: Source of raw event records
            processor: Normalizer for raw records
            logo_fetcher: Logo downloader and decoder
            overrides: Manual background color table
        """
        self.events_table = events_table
        self.processor = processor
        self.logo_fetcher = logo_fetcher
        self.overrides = overrides

    def fetch_events(self) -> List[Event]:
        """
        Fetch and normalize all events. Store errors propagate.

        Returns:
            List of Event objects
        """
        records = self.events_table.get_all_records()
        return self.processor.process_records(records)

    def colorize_event(self, event: Event) -> ColorizeResult:
        """
        Derive tag and background colors for one event from its logo.

        Args:
            event: Event to colorize

        Returns:
            ColorizeResult holding either the colorized event or the
            reason it was skipped
        """
        try:
            image = self.logo_fetcher.fetch_logo_pixels(event.logo)
        except ImageFetchError as e:
            return self._skip(event, SkipReason.FETCH_FAILED, e)
        except ImageDecodeError as e:
            return self._skip(event, SkipReason.DECODE_FAILED, e)

        try:
            colors = extract_palette(image.pixels, image.width, image.height)
        except Exception as e:
            return self._skip(event, SkipReason.EXTRACTION_FAILED, e)

        if not colors:
            return self._skip(event, SkipReason.NO_COLORS)

        primary = colors[0]
        colorized = EventWithColors(
            **asdict(event),
            tag_color=primary.hex,
            logo_preview_background_color=make_pastel(primary).hex
        )
        return ColorizeResult(event=event, colorized=self.overrides.apply(colorized))

    def colorize_events(self, events: List[Event]) -> List[ColorizeResult]:
        """
        Colorize events one after another.

        A failure on one event never stops the others.

        Args:
            events: Events to colorize

        Returns:
            One ColorizeResult per event, in input order
        """
        results = [self.colorize_event(event) for event in events]

        succeeded = sum(1 for result in results if result.ok)
        logger.info(
            f"Colorized {succeeded} events out of {len(events)}, "
            f"skipped {len(events) - succeeded}"
        )
        return results

    def build_event_lists(self) -> EventLists:
        """
        Fetch events once and build every list from them.

        Returns:
            EventLists with upcoming, colorized, recent and skipped entries
        """
        events = self.fetch_events()
        upcoming, colorizable = classify(events)
        results = self.colorize_events(colorizable)

        colorized = [result.colorized for result in results if result.ok]
        return EventLists(
            upcoming=upcoming,
            colorized=colorized,
            recent=[event for event in colorized if is_recent(event)],
            skipped=[result for result in results if not result.ok],
            fetched=len(events)
        )

    def list_upcoming_events(self) -> List[Event]:
        """Return upcoming and active events."""
        upcoming, _ = classify(self.fetch_events())
        return upcoming

    def list_colorized_events(self) -> List[EventWithColors]:
        """Return every non-upcoming event whose logo could be colorized."""
        _, colorizable = classify(self.fetch_events())
        return [
            result.colorized for result in self.colorize_events(colorizable)
            if result.ok
        ]

    def list_recent_events(self) -> List[EventWithColors]:
        """Return colorized events that are complete."""
        return [event for event in self.list_colorized_events() if is_recent(event)]

    def _skip(self, event: Event, reason: SkipReason, error: Optional[Exception] = None) -> ColorizeResult:
        logger.warning(
            f"Skipping colors for event '{event.name}' ({reason.value})"
            + (f": {error}" if error else ""),
            exc_info=reason is SkipReason.EXTRACTION_FAILED
        )
        return ColorizeResult(
            event=event,
            skip_reason=reason,
            error=str(error) if error else None
        )
