import pytest

from kinesis_client import config
from kinesis_client.testing.config import (
    TEST_AWS_ACCESS_KEY_ID,
    TEST_AWS_REGION_NAME,
    TEST_AWS_SECRET_ACCESS_KEY,
)
from kinesis_client.testing.http import MockHttpClient


@pytest.fixture(autouse=True)
def set_boto_test_credentials_and_region(monkeypatch):
    """
    Automatically sets the default credentials and region for all unit tests.
    """
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", TEST_AWS_ACCESS_KEY_ID)
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", TEST_AWS_SECRET_ACCESS_KEY)
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_AWS_REGION_NAME)
    monkeypatch.setattr(config, "DEFAULT_REGION", TEST_AWS_REGION_NAME)
    monkeypatch.setattr(config, "ENDPOINT_URL", None)


@pytest.fixture
def http_client():
    return MockHttpClient()


@pytest.fixture
def kinesis_client(http_client):
    from kinesis_client import KinesisClient

    with KinesisClient(
        aws_access_key_id=TEST_AWS_ACCESS_KEY_ID,
        aws_secret_access_key=TEST_AWS_SECRET_ACCESS_KEY,
        http_client=http_client,
    ) as client:
        yield client
