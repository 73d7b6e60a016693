import threading
import time
from concurrent.futures import CancelledError

import pytest

from kinesis_client.aws.api.kinesis import ResourceNotFoundException
from kinesis_client.http import NetworkException, Response
from kinesis_client.services.kinesis import KinesisClient
from kinesis_client.testing.http import MockHttpClient


def _put_record(client: KinesisClient):
    return client.put_record(StreamName="my-stream", Data=b"data", PartitionKey="key")


def _blocking_response(event: threading.Event, body: bytes = b"{}"):
    def _respond(_request):
        event.wait(timeout=10)
        return Response(body, status=200)

    return _respond


def test_resolve_returns_false_on_timeout(kinesis_client, http_client):
    event = threading.Event()
    http_client.add_response(_blocking_response(event, b'{"ShardId": "shardId-000000000000"}'))

    result = _put_record(kinesis_client)
    try:
        assert result.resolve(timeout=0.01) is False
        assert result.info()["resolved"] is False
    finally:
        event.set()

    assert result.resolve(timeout=5) is True
    assert result.info()["resolved"] is True
    assert result.shard_id == "shardId-000000000000"


def test_resolve_timeout_while_another_thread_is_resolving(kinesis_client, http_client):
    event = threading.Event()
    http_client.add_response(_blocking_response(event, b'{"ShardId": "shardId-000000000000"}'))

    result = _put_record(kinesis_client)
    resolved = []
    waiting = threading.Thread(target=lambda: resolved.append(result.resolve()))
    waiting.start()
    try:
        # let the other thread enter resolve
        waiting.join(timeout=0.1)
        started = time.monotonic()
        assert result.resolve(timeout=0.2) is False
        assert time.monotonic() - started < 2
    finally:
        event.set()
        waiting.join(timeout=5)

    assert resolved == [True]
    assert result.resolve(timeout=5) is True
    assert result.shard_id == "shardId-000000000000"


def test_info(kinesis_client, http_client):
    http_client.add_json_response({"ShardId": "shardId-000000000000", "SequenceNumber": "1"})

    result = _put_record(kinesis_client)
    result.resolve()

    info = result.info()
    assert info["resolved"] is True
    assert info["status"] == 200
    assert isinstance(info["response"], Response)


def test_error_is_raised_again(kinesis_client, http_client):
    http_client.add_error_response("ResourceNotFoundException", "Stream my-stream not found")

    result = _put_record(kinesis_client)
    with pytest.raises(ResourceNotFoundException) as first:
        result.resolve()
    with pytest.raises(ResourceNotFoundException) as second:
        result.resolve()

    assert first.value is second.value
    assert result.info()["resolved"] is True
    assert result.info()["status"] == 400


def test_accessing_the_output_raises_the_error(kinesis_client, http_client):
    http_client.add_error_response("ResourceNotFoundException", "Stream my-stream not found")

    result = _put_record(kinesis_client)
    with pytest.raises(ResourceNotFoundException):
        _ = result.sequence_number


def test_network_errors_are_raised(kinesis_client, http_client):
    http_client.add_response(NetworkException("connection refused"))

    result = _put_record(kinesis_client)
    with pytest.raises(NetworkException):
        result.resolve()
    assert result.info() == {"resolved": True, "response": None, "status": None}


def test_cancel_pending_call():
    event = threading.Event()
    http_client = MockHttpClient([_blocking_response(event)])

    with KinesisClient(http_client=http_client, max_workers=1) as client:
        first = _put_record(client)
        second = _put_record(client)
        try:
            assert second.cancel() is True
        finally:
            event.set()

        assert first.resolve(timeout=5)
        with pytest.raises(CancelledError):
            second.resolve()

    assert len(http_client.requests) == 1


def test_request_id(kinesis_client, http_client):
    http_client.add_json_response({}, headers={"x-amzn-RequestId": "c0ffee"})
    assert _put_record(kinesis_client).request_id == "c0ffee"
