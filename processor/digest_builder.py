"""Digest builder that filters, sorts and renders events as Discord embeds."""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from bs4 import BeautifulSoup
from dateutil.relativedelta import relativedelta

from processor.models import NormalizedEvent

logger = logging.getLogger(__name__)

INTRO_TEXT = (
    "Hey @everyone, we just wanted to let you know about some of the "
    "community events coming up this month!"
)


class DigestBuilder:
    """Builds the list of embeds posted in the monthly events digest."""

    EMBED_COLOR = 0xBF1C2E
    MAX_DESCRIPTION_LENGTH = 480
    MEETUP_URL = "https://meetup.com"
    DURATION_UNITS = ('years', 'months', 'days', 'hours', 'minutes', 'seconds')
    WEEKDAYS = (
        'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday'
    )
    MONTHS = (
        'January', 'February', 'March', 'April', 'May', 'June', 'July',
        'August', 'September', 'October', 'November', 'December'
    )

    def build(self, events: List[NormalizedEvent], now: Optional[datetime] = None) -> List[dict]:
        """
        Filter, sort and render events into embeds.

        Args:
            events: Events from all fetched groups
            now: Reference time for the month cutoff (default: current local time)

        Returns:
            List of embed dicts; empty when there is nothing to send
        """
        selected = self.sort_events(self.filter_events(events, now=now))
        embeds = [self.event_to_embed(event) for event in selected]

        logger.info(
            f"Built digest with {len(embeds)} embeds out of "
            f"{len(events)} events"
        )
        return embeds

    def filter_events(self, events: List[NormalizedEvent], now: Optional[datetime] = None) -> List[NormalizedEvent]:
        """Keep events starting before the end of the current month."""
        cutoff = self.end_of_month(now or datetime.now())
        return [event for event in events if event.datetime < cutoff]

    def sort_events(self, events: List[NormalizedEvent]) -> List[NormalizedEvent]:
        """Sort events by start time, keeping ties in input order."""
        return sorted(events, key=lambda event: event.datetime)

    @staticmethod
    def end_of_month(now: datetime) -> datetime:
        """Return the last instant of the month containing ``now``."""
        first_of_month = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        return first_of_month + relativedelta(months=1) - timedelta(microseconds=1)

    def event_to_embed(self, event: NormalizedEvent) -> dict:
        """
        Render a single event as a Discord rich embed.

        Args:
            event: NormalizedEvent object

        Returns:
            Embed dictionary
        """
        return {
            'type': 'rich',
            'author': {
                'name': event.group.name,
                'url': f"{self.MEETUP_URL}/{event.group.urlname}"
            },
            'color': self.EMBED_COLOR,
            'title': event.name,
            'description': self.strip_html(event.description)[:self.MAX_DESCRIPTION_LENGTH],
            'url': event.link,
            'fields': [
                {
                    'name': '🗓️ When?',
                    'value': f"`{self.format_datetime(event.datetime)}`"
                },
                {
                    'name': '📍 Where?',
                    'value': f"`{self.format_location(event)}`"
                },
                {
                    'name': '⏲️ Duration?',
                    'value': f"`{self.format_duration(event.duration)}`"
                }
            ]
        }

    @staticmethod
    def strip_html(text: str) -> str:
        """Remove HTML tags from an event description."""
        if not text:
            return ''
        return BeautifulSoup(text, 'html.parser').get_text()

    @staticmethod
    def ordinal(day: int) -> str:
        """Return a day of month with its English suffix, e.g. 1st, 22nd."""
        if 11 <= day % 100 <= 13:
            suffix = 'th'
        else:
            suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(day % 10, 'th')
        return f"{day}{suffix}"

    def format_datetime(self, value: datetime) -> str:
        """Format as e.g. 'Monday, 1st January, 18:30' in English regardless of locale."""
        return (
            f"{self.WEEKDAYS[value.weekday()]}, {self.ordinal(value.day)} "
            f"{self.MONTHS[value.month - 1]}, {value:%H:%M}"
        )

    def format_location(self, event: NormalizedEvent) -> str:
        if event.event_type != 'PHYSICAL':
            return 'Online'
        if event.venue is None:
            return 'TBC'
        return f"{event.venue.name}, {event.venue.city}"

    def format_duration(self, duration: relativedelta) -> str:
        """
        Format a duration as e.g. '3 hours 30 minutes'.

        Zero-valued units are omitted; a zero duration gives an empty string.
        """
        parts = []
        for unit in self.DURATION_UNITS:
            value = getattr(duration, unit)
            if value:
                label = unit if value != 1 else unit[:-1]
                parts.append(f"{value} {label}")
        return ' '.join(parts)
