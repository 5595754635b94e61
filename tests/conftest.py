"""Shared pytest fixtures."""
import os
from datetime import datetime
from unittest.mock import patch

import pytest
from dateutil.relativedelta import relativedelta

from processor.models import MeetupGroup, NormalizedEvent, Venue


@pytest.fixture(autouse=True)
def aws_credentials():
    """Point boto3 at fake credentials so no real AWS account is used."""
    env_vars = {
        'AWS_ACCESS_KEY_ID': 'testing',
        'AWS_SECRET_ACCESS_KEY': 'testing',
        'AWS_SECURITY_TOKEN': 'testing',
        'AWS_SESSION_TOKEN': 'testing',
        'AWS_DEFAULT_REGION': 'us-east-1'
    }
    with patch.dict(os.environ, env_vars):
        yield


@pytest.fixture
def make_event():
    """Factory for NormalizedEvent objects."""
    def _make_event(
        when: datetime,
        name: str = 'Test Event',
        group: str = 'python-london',
        event_type: str = 'PHYSICAL',
        venue: Venue = Venue(name='The Hub', city='London'),
        description: str = 'An evening of talks',
        duration: relativedelta = relativedelta(hours=2)
    ) -> NormalizedEvent:
        return NormalizedEvent(
            id=f"{group}-{when.isoformat()}",
            name=name,
            local_date=when.strftime('%Y-%m-%d'),
            local_time=when.strftime('%H:%M'),
            group=MeetupGroup(name=group.replace('-', ' ').title(), urlname=group),
            venue=venue,
            event_type=event_type,
            description=description,
            link=f"https://www.meetup.com/{group}/events/1/",
            datetime=when,
            duration=duration
        )
    return _make_event
