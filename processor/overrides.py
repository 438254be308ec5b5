"""Manual logo background overrides for events the extractor renders poorly."""
import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

from processor.models import EventWithColors

logger = logging.getLogger(__name__)

WHITE = '#FFFFFF'


@dataclass(frozen=True)
class ColorOverrides:
    """
    Fixed event name to background color table.

    Names in ``force_white`` always get a white background. Otherwise names
    in ``colors`` get their listed color. White takes precedence.
    """
    force_white: FrozenSet[str] = frozenset()
    colors: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def background_for(self, name: str) -> Optional[str]:
        """Return the forced background for an event name, if any."""
        if name in self.force_white:
            return WHITE
        return self.colors.get(name)

    def apply(self, event: EventWithColors) -> EventWithColors:
        """
        Apply the override for an event, leaving tag_color untouched.

        Args:
            event: Event with automatically derived colors

        Returns:
            A copy with the forced background, or the same event when no
            override exists for its name
        """
        background = self.background_for(event.name)
        if background is None:
            return event

        logger.debug(f"Overriding background for '{event.name}' with {background}")
        return replace(event, logo_preview_background_color=background)


# Old events with white backgrounds, or flat backgrounds the extractor misses.
# Only add an entry when a card looks wrong once deployed.
DEFAULT_OVERRIDES = ColorOverrides(
    force_white=frozenset({
        'Horizon',
        'Halo',
        'Alpine',
        'Harvest',
        'LoneStar',
        'Think Like a Programmer',
    }),
    colors=MappingProxyType({
        'Luna': '#c8a2e0',
        'Spark': '#eadfff',
        'Ascend': '#2B028B',
        'Blossom': '#FFD3E0',
    })
)
