import boto3
import pytest
from moto import mock_aws

TABLE_NAME = "test-events-table"
REGION = "us-east-2"


@pytest.fixture
def aws_env(monkeypatch):
    """Point the handler at a fake table and keep boto3 off real credentials."""
    monkeypatch.setenv("EVENTS_TABLE", TABLE_NAME)
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.delenv("DEFAULT_ORIGIN", raising=False)


@pytest.fixture
def events_table(aws_env):
    """Mocked DynamoDB events table, keyed on `id` like the deployed one."""
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name=REGION)
        table = dynamodb.create_table(
            TableName=TABLE_NAME,
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        table.wait_until_exists()
        yield table
