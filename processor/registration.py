"""Registration of Meetup groups to track."""
import logging
from typing import Optional

from config import Config
from exceptions import AuthenticationError, ValidationError
from processor.models import RegistrationResult
from storage.registry_store import RegistryStore

logger = logging.getLogger(__name__)


class RegistrationHandler:
    """Adds groups to the tracked group registry."""
    
    def __init__(self, config: Config, store: RegistryStore):
        self.config = config
        self.store = store
    
    def register(self, token: Optional[str], group: Optional[str]) -> RegistrationResult:
        """
        Append one or more comma-separated groups to the registry.
        
        New groups are appended after the existing ones without removing
        duplicates. The read and write are not atomic.
        
        Args:
            token: Caller-supplied admin token
            group: Group slug, or several separated by commas
            
        Returns:
            RegistrationResult with every tracked group
            
        Raises:
            AuthenticationError: If the token doesn't match the admin token
            ValidationError: If no group was supplied
        """
        if not self.config.admin_token or token != self.config.admin_token:
            logger.warning("Rejected registration with invalid token")
            raise AuthenticationError()
        
        if not group:
            logger.warning("Rejected registration without group")
            raise ValidationError()
        
        new_groups = [name for name in group.split(',') if name]
        groups = self.store.get_tracked_groups() + new_groups
        self.store.save_tracked_groups(groups)
        
        logger.info(
            f"Registered {len(new_groups)} groups, {len(groups)} now tracked"
        )
        return RegistrationResult(groups=groups)
