import json
from datetime import datetime, timezone

import pytest

from kinesis_client.aws.protocol.parser import (
    JSONResponseParser,
    ProtocolParserError,
    create_parser,
)
from kinesis_client.aws.spec import load_operation, load_service
from kinesis_client.http import Response


@pytest.fixture
def parser():
    return create_parser(load_service("kinesis"))


def _json_response(doc, status: int = 200, headers: dict = None) -> Response:
    return Response(
        json.dumps(doc), status=status, headers=headers, mimetype="application/x-amz-json-1.1"
    )


def test_create_parser_for_json_protocol(parser):
    assert isinstance(parser, JSONResponseParser)


def test_parse_put_record(parser):
    response = _json_response(
        {"ShardId": "shardId-000000000001", "SequenceNumber": "4961", "EncryptionType": "KMS"},
        headers={"x-amzn-RequestId": "a1b2c3"},
    )
    parsed = parser.parse(response, load_operation("kinesis", "PutRecord"))

    assert parsed["ShardId"] == "shardId-000000000001"
    assert parsed["SequenceNumber"] == "4961"
    assert parsed["EncryptionType"] == "KMS"
    assert parsed["ResponseMetadata"]["RequestId"] == "a1b2c3"
    assert parsed["ResponseMetadata"]["HTTPStatusCode"] == 200
    assert parsed["ResponseMetadata"]["HTTPHeaders"]["x-amzn-requestid"] == "a1b2c3"


def test_parse_put_records_with_failed_entries(parser):
    response = _json_response(
        {
            "FailedRecordCount": 1,
            "Records": [
                {"ShardId": "shardId-000000000000", "SequenceNumber": "1"},
                {
                    "ErrorCode": "ProvisionedThroughputExceededException",
                    "ErrorMessage": "Rate exceeded for shard shardId-000000000000",
                },
            ],
        }
    )
    parsed = parser.parse(response, load_operation("kinesis", "PutRecords"))

    assert parsed["FailedRecordCount"] == 1
    assert parsed["Records"][0] == {"ShardId": "shardId-000000000000", "SequenceNumber": "1"}
    assert parsed["Records"][1]["ErrorCode"] == "ProvisionedThroughputExceededException"


@pytest.mark.parametrize("timestamp", [1609459200, 1609459200.0, "2021-01-01T00:00:00Z"])
def test_parse_timestamps(parser, timestamp):
    response = _json_response(
        {
            "Consumer": {
                "ConsumerName": "consumer",
                "ConsumerARN": "arn:aws:kinesis:us-east-1:000000000000:stream/s/consumer/c:1",
                "ConsumerStatus": "CREATING",
                "ConsumerCreationTimestamp": timestamp,
            }
        }
    )
    parsed = parser.parse(response, load_operation("kinesis", "RegisterStreamConsumer"))

    creation_timestamp = parsed["Consumer"]["ConsumerCreationTimestamp"]
    assert creation_timestamp == datetime(2021, 1, 1, tzinfo=timezone.utc)
    assert creation_timestamp.tzinfo is not None


def test_parse_blobs(parser):
    response = _json_response(
        {
            "Records": [
                {"SequenceNumber": "1", "Data": "aGVsbG8=", "PartitionKey": "key"},
            ],
            "MillisBehindLatest": 0,
        }
    )
    parsed = parser.parse(response, load_operation("kinesis", "GetRecords"))
    assert parsed["Records"][0]["Data"] == b"hello"


def test_unknown_members_are_ignored(parser):
    response = _json_response({"ShardId": "shardId-000000000000", "SomethingNew": True})
    parsed = parser.parse(response, load_operation("kinesis", "PutRecord"))
    assert "SomethingNew" not in parsed
    assert parsed["ShardId"] == "shardId-000000000000"


def test_empty_body(parser):
    parsed = parser.parse(Response(b"", status=200), load_operation("kinesis", "PutRecord"))
    assert list(parsed.keys()) == ["ResponseMetadata"]


def test_invalid_json_raises_protocol_error(parser):
    with pytest.raises(ProtocolParserError):
        parser.parse(Response(b"<html/>", status=200), load_operation("kinesis", "PutRecord"))


def test_parse_error_with_namespaced_type(parser):
    response = _json_response(
        {
            "__type": "com.amazonaws.kinesis.v20131202#ResourceNotFoundException",
            "message": "Stream my-stream under account 000000000000 not found.",
        },
        status=400,
    )
    error = parser.parse_error(response)
    assert error.code == "ResourceNotFoundException"
    assert error.message == "Stream my-stream under account 000000000000 not found."
    assert error.members == {}


def test_parse_error_from_header(parser):
    response = Response(
        b"",
        status=400,
        headers={"X-Amzn-Errortype": "InvalidArgumentException:http://internal.amazon.com/"},
    )
    error = parser.parse_error(response)
    assert error.code == "InvalidArgumentException"
    assert error.message == ""


def test_parse_error_with_capitalized_members(parser):
    response = _json_response(
        {"Code": "LimitExceededException", "Message": "too many consumers", "Limit": 20},
        status=400,
    )
    error = parser.parse_error(response)
    assert error.code == "LimitExceededException"
    assert error.message == "too many consumers"
    assert error.members == {"Limit": 20}


def test_parse_error_without_code(parser):
    error = parser.parse_error(Response(b"Internal Server Error", status=500))
    assert error.code is None
    assert error.message == ""
