"""Error types raised by the Meetup digest components."""
from typing import Optional


class MeetupDigestError(Exception):
    """Base class for all digest errors."""


class AuthenticationError(MeetupDigestError):
    """Registration token missing or not equal to the admin token."""
    
    def __init__(self, message: str = 'Authentication Required.'):
        super().__init__(message)
        self.message = message


class ValidationError(MeetupDigestError):
    """Registration request is missing the group parameter."""
    
    def __init__(self, message: str = '`group` is a required field.'):
        super().__init__(message)
        self.message = message


class UpstreamFetchError(MeetupDigestError):
    """Fetching or parsing a group's events from Meetup failed."""
    
    def __init__(self, group: str, message: str):
        super().__init__(f"Failed to fetch events for group '{group}': {message}")
        self.group = group


class DeliveryError(MeetupDigestError):
    """Posting the digest message to Discord failed."""
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(MeetupDigestError):
    """A setting the run needs is missing from the environment."""
