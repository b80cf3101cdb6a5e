"""
Metadata table operations for the JPEG Files API.

One item per stored file, keyed by `ID`, with a global secondary index on
`Hash` used for content deduplication.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

from jpeg_files_api.schemas import FileMetadata

try:
    from mypy_boto3_dynamodb import DynamoDBClient
except ImportError:
    ...

logger = logging.getLogger(__name__)

# FileMetadata field -> DynamoDB attribute name
ATTRIBUTE_NAMES = {
    "id": "ID",
    "hash": "Hash",
    "extension": "Extension",
    "created_at": "CreatedAt",
    "updated_at": "UpdatedAt",
}

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def metadata_to_item(metadata: FileMetadata) -> Dict[str, Any]:
    """Marshal metadata into a DynamoDB attribute-value map."""
    return {
        attribute: _serializer.serialize(getattr(metadata, field))
        for field, attribute in ATTRIBUTE_NAMES.items()
    }


def item_to_metadata(item: Dict[str, Any]) -> FileMetadata:
    """Unmarshal a DynamoDB attribute-value map into metadata."""
    values = {}
    for field, attribute in ATTRIBUTE_NAMES.items():
        if attribute in item:
            values[field] = _deserializer.deserialize(item[attribute])
        else:
            values[field] = ""
    return FileMetadata(**values)


def put_file_metadata(
    table_name: str,
    metadata: FileMetadata,
    dynamodb_client: Optional["DynamoDBClient"] = None,
) -> None:
    """
    Write a metadata item.

    :raises ValueError: if the metadata has an empty id or hash; nothing is written.
    """
    if not metadata.id or not metadata.hash:
        raise ValueError("metadata must have non-empty ID and Hash")

    dynamodb_client = dynamodb_client or boto3.client("dynamodb")
    dynamodb_client.put_item(
        TableName=table_name,
        Item=metadata_to_item(metadata),
    )


def get_file_metadata(
    table_name: str,
    file_id: str,
    dynamodb_client: Optional["DynamoDBClient"] = None,
) -> Optional[FileMetadata]:
    """
    Point lookup by primary key.

    :return: the metadata, or None if no item has that id.
    """
    dynamodb_client = dynamodb_client or boto3.client("dynamodb")
    result = dynamodb_client.get_item(
        TableName=table_name,
        Key={"ID": {"S": file_id}},
    )
    item = result.get("Item")
    if not item:
        return None
    return item_to_metadata(item)


def delete_file_metadata(
    table_name: str,
    file_id: str,
    dynamodb_client: Optional["DynamoDBClient"] = None,
) -> None:
    """Delete the metadata item with the given id."""
    dynamodb_client = dynamodb_client or boto3.client("dynamodb")
    dynamodb_client.delete_item(
        TableName=table_name,
        Key={"ID": {"S": file_id}},
    )


def find_file_metadata_by_hash(
    table_name: str,
    index_name: str,
    file_hash: str,
    dynamodb_client: Optional["DynamoDBClient"] = None,
) -> Optional[FileMetadata]:
    """
    Query the hash index for a record with exactly this hash.

    Limited to one result; when several records share a hash the first
    returned by the index wins.

    :raises ValueError: if the hash is empty.
    """
    if not file_hash:
        raise ValueError("hash cannot be empty")

    dynamodb_client = dynamodb_client or boto3.client("dynamodb")
    result = dynamodb_client.query(
        TableName=table_name,
        IndexName=index_name,
        KeyConditionExpression="#hash = :hash",
        ExpressionAttributeNames={"#hash": "Hash"},
        ExpressionAttributeValues={":hash": {"S": file_hash}},
        Limit=1,
    )
    items = result.get("Items", [])
    if not items:
        return None
    return item_to_metadata(items[0])


def create_table_if_missing(
    table_name: str,
    index_name: str,
    dynamodb_client: Optional["DynamoDBClient"] = None,
) -> bool:
    """
    Create the metadata table with its hash index unless it already exists.

    :return: True if the table was created, False if it was already there.
    """
    dynamodb_client = dynamodb_client or boto3.client("dynamodb")
    try:
        dynamodb_client.describe_table(TableName=table_name)
        return False
    except dynamodb_client.exceptions.ResourceNotFoundException:
        pass

    logger.info(f"Creating DynamoDB table {table_name} with index {index_name}")
    dynamodb_client.create_table(
        TableName=table_name,
        AttributeDefinitions=[
            {"AttributeName": "ID", "AttributeType": "S"},
            {"AttributeName": "Hash", "AttributeType": "S"},
        ],
        KeySchema=[{"AttributeName": "ID", "KeyType": "HASH"}],
        GlobalSecondaryIndexes=[
            {
                "IndexName": index_name,
                "KeySchema": [{"AttributeName": "Hash", "KeyType": "HASH"}],
                "Projection": {"ProjectionType": "ALL"},
            }
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    dynamodb_client.get_waiter("table_exists").wait(TableName=table_name)
    return True
