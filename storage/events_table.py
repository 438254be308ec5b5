"""DynamoDB-backed events table client."""
import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class EventsTable:
    """Read access to the events table."""

    ID_ATTRIBUTE = 'record_id'

    def __init__(self, table_name: str, region_name: Optional[str] = None):
        """
        Initialize DynamoDB resource and table reference.

        Args:
            table_name: Name of the DynamoDB table
            region_name: AWS region, or None for the environment default
        """
        self.table_name = table_name
        self.dynamodb = boto3.resource('dynamodb', region_name=region_name)
        self.table = self.dynamodb.Table(table_name)
        logger.info(f"Initialized EventsTable for table: {table_name}")

    def get_all_records(self) -> List[Dict[str, Any]]:
        """
        Retrieve every row of the events table using Scan.

        Returns:
            Records shaped as {"id": <record id>, "fields": {<columns>}}

        Raises:
            ClientError: If the table cannot be scanned
        """
        logger.info("Scanning DynamoDB table for all event records")

        try:
            response = self.table.scan()
            items = response.get('Items', [])

            # Handle pagination
            while 'LastEvaluatedKey' in response:
                response = self.table.scan(
                    ExclusiveStartKey=response['LastEvaluatedKey']
                )
                items.extend(response.get('Items', []))

        except ClientError as e:
            logger.error(f"Error scanning DynamoDB table: {e}")
            raise

        records = [self._item_to_record(item) for item in items]
        logger.info(f"Retrieved {len(records)} event records from DynamoDB")
        return records

    def _item_to_record(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Split a DynamoDB item into its record id and column fields.

        Args:
            item: DynamoDB item dictionary

        Returns:
            Record dictionary
        """
        fields = {
            key: value for key, value in item.items()
            if key != self.ID_ATTRIBUTE
        }
        return {'id': item.get(self.ID_ATTRIBUTE), 'fields': fields}
