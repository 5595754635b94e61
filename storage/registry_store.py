"""DynamoDB-backed key/value store for the tracked group registry."""
import logging
from typing import List, Optional

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class RegistryStore:
    """Key/value store holding the comma-joined list of tracked groups."""
    
    GROUPS_KEY = 'groups'
    
    def __init__(self, table_name: str, region_name: Optional[str] = None):
        """
        Initialize DynamoDB resource and table reference.
        
        Args:
            table_name: Name of the DynamoDB table (hash key ``key``)
            region_name: AWS region (default: from the environment)
        """
        self.table_name = table_name
        self.dynamodb = boto3.resource('dynamodb', region_name=region_name)
        self.table = self.dynamodb.Table(table_name)
        logger.info(f"Initialized RegistryStore for table: {table_name}")
    
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.
        
        Returns:
            Stored string, or None if the key is absent
        """
        try:
            response = self.table.get_item(Key={'key': key})
        except ClientError as e:
            logger.error(f"Error reading key '{key}' from DynamoDB: {e}")
            raise
        
        item = response.get('Item')
        return item.get('value') if item else None
    
    def put(self, key: str, value: str) -> None:
        """Store a string under a key, replacing any previous value."""
        try:
            self.table.put_item(Item={'key': key, 'value': value})
        except ClientError as e:
            logger.error(f"Error writing key '{key}' to DynamoDB: {e}")
            raise
    
    def get_tracked_groups(self) -> List[str]:
        """
        Read the tracked groups in stored order.
        
        Blank entries are dropped; duplicates are kept.
        """
        data = self.get(self.GROUPS_KEY) or ''
        return [group for group in data.split(',') if group]
    
    def save_tracked_groups(self, groups: List[str]) -> None:
        """Replace the tracked groups with ``groups``."""
        self.put(self.GROUPS_KEY, ','.join(groups))
        logger.info(f"Saved {len(groups)} tracked groups")
