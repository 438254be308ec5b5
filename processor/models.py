"""Data models for event processing and logo colorization."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass
class Event:
    """Normalized event record from the events table."""
    id: str
    name: str
    status: str
    description: str
    location: str
    start_date: str
    end_date: str
    logo: Optional[str]
    photos: List[str]
    photo_creds: Optional[str]
    website: Optional[str]
    github_link: Optional[str]


@dataclass
class EventWithColors(Event):
    """Event with theme colors derived from its logo."""
    tag_color: str
    logo_preview_background_color: str


@dataclass
class ExtractedColor:
    """Representative color extracted from a logo image."""
    hex: str
    red: int
    green: int
    blue: int
    hue: float
    saturation: float
    lightness: float
    intensity: float
    area: float


@dataclass
class DecodedImage:
    """Uncompressed RGBA pixel data, 4 bytes per pixel."""
    pixels: bytes
    width: int
    height: int


class SkipReason(Enum):
    """Why an event was left out of the colorized list."""
    FETCH_FAILED = 'fetch_failed'
    DECODE_FAILED = 'decode_failed'
    EXTRACTION_FAILED = 'extraction_failed'
    NO_COLORS = 'no_colors'


@dataclass
class ColorizeResult:
    """Outcome of colorizing a single event."""
    event: Event
    colorized: Optional[EventWithColors] = None
    skip_reason: Optional[SkipReason] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.colorized is not None


@dataclass
class EventLists:
    """Event lists consumed by the rendering layer."""
    upcoming: List[Event] = field(default_factory=list)
    colorized: List[EventWithColors] = field(default_factory=list)
    recent: List[EventWithColors] = field(default_factory=list)
    skipped: List[ColorizeResult] = field(default_factory=list)
    fetched: int = 0
