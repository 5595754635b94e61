"""Discord notifier for posting the events digest."""
import logging
from typing import List, Optional

import requests

from exceptions import DeliveryError

logger = logging.getLogger(__name__)


class DiscordNotifier:
    """Posts messages to a Discord channel through the REST API."""
    
    BASE_URL = "https://discord.com/api/v10"
    
    def __init__(self, token: str, channel: str, timeout: int = 30):
        """
        Initialize the notifier.
        
        Args:
            token: Discord bot token
            channel: Destination channel ID
            timeout: HTTP request timeout in seconds (default: 30)
        """
        self.token = token
        self.channel = channel
        self.timeout = timeout
    
    @property
    def messages_url(self) -> str:
        return f"{self.BASE_URL}/channels/{self.channel}/messages"
    
    def send_message(
        self,
        content: str,
        embeds: Optional[List[dict]] = None,
        components: Optional[List[dict]] = None
    ) -> dict:
        """
        Post a single message to the configured channel.
        
        The embeds are sent as given; no splitting is done when they exceed
        Discord's per-message limits.
        
        Args:
            content: Message text
            embeds: Rich embeds to attach
            components: Message components to attach
            
        Returns:
            Decoded JSON response from Discord
            
        Raises:
            DeliveryError: If the request fails or Discord rejects it
        """
        body = {
            'channel_id': self.channel,
            'content': content,
            'components': components or [],
            'embeds': embeds or []
        }
        headers = {
            'Content-Type': 'application/json',
            'Authorization': f"Bot {self.token}"
        }
        
        logger.info(
            f"Posting message with {len(body['embeds'])} embeds to channel {self.channel}"
        )
        
        try:
            response = requests.post(
                self.messages_url,
                json=body,
                headers=headers,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Failed to reach Discord: {e}")
            raise DeliveryError(f"Failed to reach Discord: {e}") from e
        
        if not response.ok:
            logger.error(
                f"Discord rejected message: {response.status_code} {response.text}"
            )
            raise DeliveryError(
                f"Discord returned {response.status_code}: {response.text}",
                status_code=response.status_code
            )
        
        return response.json() if response.content else {}
