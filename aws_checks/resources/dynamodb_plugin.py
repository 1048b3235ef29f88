import logging
from typing import List, Optional, Sequence

from .base_plugin import BaseResourcePlugin, select_by_name
from .resource import Resource

logger = logging.getLogger(__name__)


class DynamoDBPlugin(BaseResourcePlugin):
    """Plugin for discovering DynamoDB tables and their provisioned capacity."""

    service_name = "dynamodb"

    def filter_table_info(self, table: dict) -> Resource:
        """Extract relevant information from a DescribeTable response."""
        throughput = table.get("ProvisionedThroughput", {})
        return Resource(
            type="DynamoDB",
            name=table["TableName"],
            id=table.get("TableArn", ""),
            attributes={
                "read_capacity_units": throughput.get("ReadCapacityUnits", 0),
                "write_capacity_units": throughput.get("WriteCapacityUnits", 0),
            },
        )

    def discover(self, names: Optional[Sequence[str]] = None) -> List[Resource]:
        table_names = select_by_name(
            self._paginate("list_tables", "TableNames"), names, key=lambda name: name
        )
        logger.info(f"Discovered {len(table_names)} DynamoDB tables")
        return [
            self.filter_table_info(self.client.describe_table(TableName=name)["Table"])
            for name in table_names
        ]
