"""Runtime configuration for the Meetup digest functions."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class Config:
    """Settings shared by the scheduled and registration handlers."""
    admin_token: Optional[str]
    discord_api_token: Optional[str]
    discord_channel: Optional[str]
    table_name: str = 'meetup-digest-registry'
    event_page_size: int = 10
    timeout_seconds: int = 30
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Config':
        """
        Build configuration from environment variables.
        
        Args:
            environ: Mapping to read from (default: os.environ)
            
        Returns:
            Config instance
        """
        if environ is None:
            environ = os.environ
        
        return cls(
            admin_token=environ.get('ADMIN_TOKEN') or None,
            discord_api_token=environ.get('DISCORD_API_TOKEN') or None,
            discord_channel=environ.get('DISCORD_CHANNEL') or None,
            table_name=environ.get('TABLE_NAME', 'meetup-digest-registry'),
            event_page_size=int(environ.get('EVENT_PAGE_SIZE', '10')),
            timeout_seconds=int(environ.get('TIMEOUT_SECONDS', '30')),
            log_level=environ.get('LOG_LEVEL', 'INFO')
        )
