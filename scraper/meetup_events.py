"""Event fetcher for the Meetup events API."""
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta
from typing import List, Optional

import requests
from dateutil.relativedelta import relativedelta

from exceptions import UpstreamFetchError
from processor.models import NormalizedEvent, RawEvent

logger = logging.getLogger(__name__)


class MeetupEventsFetcher:
    """Fetcher for upcoming events of Meetup groups."""

    BASE_URL = "https://api.meetup.com"
    DATETIME_FORMAT = '%Y-%m-%d %H:%M'
    EPOCH = datetime(1970, 1, 1)

    def __init__(self, timeout: int = 30, max_workers: Optional[int] = None):
        """
        Initialize the events fetcher.

        Args:
            timeout: HTTP request timeout in seconds (default: 30)
            max_workers: Thread pool size for fetch_all (default: one per group)
        """
        self.timeout = timeout
        self.max_workers = max_workers

    def fetch_all(self, groups: List[str], limit: int = 10) -> List[NormalizedEvent]:
        """
        Fetch events for every group concurrently and flatten the results.

        The join is all-or-nothing: if any group fails the error propagates
        and no events are returned.

        Args:
            groups: Group URL slugs
            limit: Page size per group (default: 10)

        Returns:
            Events of all groups, grouped in the order of ``groups``
        """
        if not groups:
            return []

        workers = self.max_workers or len(groups)
        logger.info(f"Fetching events for {len(groups)} groups")

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self.fetch_events, group, limit)
                for group in groups
            ]
            results = [future.result() for future in futures]

        events = [event for group_events in results for event in group_events]
        logger.info(f"Fetched {len(events)} events across {len(groups)} groups")
        return events

    def fetch_events(self, group: str, limit: int = 10) -> List[NormalizedEvent]:
        """
        Fetch one page of upcoming events for a group.

        Args:
            group: Group URL slug
            limit: Page size (default: 10)

        Returns:
            List of NormalizedEvent objects in API order

        Raises:
            UpstreamFetchError: On network failure, non-2xx status,
                malformed JSON or unparseable event fields
        """
        payload = self._fetch_events_json(group, limit)

        try:
            events = [
                self.normalize_event(RawEvent.from_api(item))
                for item in payload
            ]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Failed to parse events for group '{group}': {e}")
            raise UpstreamFetchError(group, f"invalid event data: {e}") from e

        logger.info(f"Fetched {len(events)} events for group '{group}'")
        return events

    def _fetch_events_json(self, group: str, limit: int) -> list:
        """
        Request the raw event listing for a group.

        Args:
            group: Group URL slug
            limit: Page size

        Returns:
            Decoded JSON array
        """
        url = f"{self.BASE_URL}/{group}/events"
        params = {
            'photo-host': 'public',
            'page': limit
        }

        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            # JSONDecodeError from requests is a RequestException too
            logger.error(f"Request for group '{group}' failed: {e}")
            raise UpstreamFetchError(group, str(e)) from e

        if not isinstance(payload, list):
            raise UpstreamFetchError(group, "expected a JSON array of events")

        return payload

    def normalize_event(self, raw: RawEvent) -> NormalizedEvent:
        """
        Convert a raw API event into a NormalizedEvent.

        Args:
            raw: RawEvent object

        Returns:
            NormalizedEvent with parsed datetime and duration
        """
        return NormalizedEvent(
            id=raw.id,
            name=raw.name,
            local_date=raw.local_date,
            local_time=raw.local_time,
            group=raw.group,
            venue=raw.venue,
            event_type=raw.event_type,
            description=raw.description,
            link=raw.link,
            datetime=self.parse_datetime(raw.local_date, raw.local_time),
            duration=self.duration_from_millis(raw.duration)
        )

    def parse_datetime(self, local_date: str, local_time: str) -> datetime:
        """
        Combine Meetup's local date and time into a naive local datetime.

        Raises:
            ValueError: If the strings don't match YYYY-MM-DD HH:MM
        """
        return datetime.strptime(f"{local_date} {local_time}", self.DATETIME_FORMAT)

    def duration_from_millis(self, millis: int) -> relativedelta:
        """Break an interval in milliseconds into calendar units."""
        end = self.EPOCH + timedelta(milliseconds=millis)
        return relativedelta(end, self.EPOCH)
