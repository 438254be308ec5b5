"""Unit tests for the DynamoDB events table client."""
import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from storage.events_table import EventsTable

TABLE_NAME = 'test-events'
REGION = 'us-east-1'


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches real AWS."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', REGION)


@pytest.fixture
def dynamodb_table(aws_credentials):
    """Create a mock DynamoDB events table for testing."""
    with mock_aws():
        dynamodb = boto3.resource('dynamodb', region_name=REGION)

        table = dynamodb.create_table(
            TableName=TABLE_NAME,
            KeySchema=[
                {'AttributeName': 'record_id', 'KeyType': 'HASH'}
            ],
            AttributeDefinitions=[
                {'AttributeName': 'record_id', 'AttributeType': 'S'}
            ],
            BillingMode='PAY_PER_REQUEST'
        )

        yield table


@pytest.fixture
def events_table(dynamodb_table):
    """Create EventsTable instance with mock table."""
    return EventsTable(TABLE_NAME, region_name=REGION)


def test_get_all_records_empty_table(events_table):
    """Test get_all_records returns an empty list for an empty table."""
    assert events_table.get_all_records() == []


def test_get_all_records_splits_id_and_fields(events_table, dynamodb_table):
    """Test items come back as id plus column fields."""
    dynamodb_table.put_item(Item={
        'record_id': 'recABC',
        'Name': 'Outernet',
        'Status': 'Complete',
        'Start Date': '2024-07-12',
        'Photos': '["a.png"]',
        'GitHub Link': 'https://github.com/example/outernet'
    })

    records = events_table.get_all_records()

    assert records == [{
        'id': 'recABC',
        'fields': {
            'Name': 'Outernet',
            'Status': 'Complete',
            'Start Date': '2024-07-12',
            'Photos': '["a.png"]',
            'GitHub Link': 'https://github.com/example/outernet'
        }
    }]


def test_get_all_records_follows_pagination(events_table, dynamodb_table):
    """Test every page of a large table is read."""
    description = 'x' * 20000
    with dynamodb_table.batch_writer() as writer:
        for i in range(120):
            writer.put_item(Item={
                'record_id': f'rec{i:03d}',
                'Name': f'Event {i}',
                'Description': description
            })

    records = events_table.get_all_records()

    assert len(records) == 120
    assert {r['id'] for r in records} == {f'rec{i:03d}' for i in range(120)}


def test_get_all_records_missing_table_raises(aws_credentials):
    """Test scan errors propagate to the caller."""
    with mock_aws():
        table = EventsTable('does-not-exist', region_name=REGION)

        with pytest.raises(ClientError):
            table.get_all_records()
