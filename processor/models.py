"""Data models for Meetup events and group registration."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from dateutil.relativedelta import relativedelta


@dataclass(frozen=True)
class MeetupGroup:
    """Group descriptor nested in a Meetup event."""
    name: str
    urlname: str


@dataclass(frozen=True)
class Venue:
    """Venue descriptor for physical events."""
    name: str
    city: str


@dataclass(frozen=True)
class RawEvent:
    """Event as returned by the Meetup events API."""
    id: str
    name: str
    local_date: str
    local_time: str
    duration: int
    group: MeetupGroup
    venue: Optional[Venue]
    event_type: str
    description: str
    link: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'RawEvent':
        """
        Build a RawEvent from one element of the API's JSON array.
        
        Args:
            data: Decoded JSON object for a single event
            
        Returns:
            RawEvent object
            
        Raises:
            KeyError: If a required field is missing
        """
        group = data['group']
        venue = data.get('venue')
        
        return cls(
            id=str(data['id']),
            name=data['name'],
            local_date=data['local_date'],
            local_time=data['local_time'],
            duration=int(data.get('duration') or 0),
            group=MeetupGroup(name=group['name'], urlname=group['urlname']),
            venue=Venue(name=venue.get('name', ''), city=venue.get('city', '')) if venue else None,
            event_type=data.get('eventType') or '',
            description=data.get('description') or '',
            link=data['link']
        )


@dataclass(frozen=True)
class NormalizedEvent:
    """Meetup event with an absolute start time and structured duration."""
    id: str
    name: str
    local_date: str
    local_time: str
    group: MeetupGroup
    venue: Optional[Venue]
    event_type: str
    description: str
    link: str
    datetime: datetime
    duration: relativedelta


@dataclass
class RegistrationResult:
    """Outcome of a successful group registration."""
    groups: List[str]

    @property
    def count(self) -> int:
        return len(self.groups)

    @property
    def message(self) -> str:
        return (
            f"Added {', '.join(self.groups)} to store, "
            f"currently {self.count} groups stored"
        )
