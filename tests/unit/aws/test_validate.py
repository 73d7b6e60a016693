import pytest

from kinesis_client.aws.protocol.validate import (
    InvalidLength,
    InvalidType,
    MissingRequiredField,
    ParameterValidationError,
    UnknownField,
    validate_request,
)
from kinesis_client.aws.spec import load_operation


def _validate(operation: str, request: dict):
    return validate_request(load_operation("kinesis", operation), request)


def test_valid_request():
    errors = _validate(
        "PutRecord", {"StreamName": "my-stream", "Data": b"data", "PartitionKey": "key"}
    )
    assert not errors.has_errors()
    errors.raise_first()


def test_missing_required_field():
    errors = _validate("PutRecord", {"StreamName": "my-stream", "Data": b"data"})
    with pytest.raises(MissingRequiredField) as e:
        errors.raise_first()
    assert e.value.required_name == "PartitionKey"
    assert "PartitionKey" in e.value.message


def test_unknown_field():
    errors = _validate(
        "RegisterStreamConsumer",
        {"StreamARN": "arn:aws:kinesis:us-east-1:000000000000:stream/s", "ConsumerName": "c", "Foo": 1},
    )
    with pytest.raises(UnknownField) as e:
        errors.raise_first()
    assert e.value.unknown_param == "Foo"


def test_invalid_type():
    errors = _validate("PutRecord", {"StreamName": "my-stream", "Data": b"data", "PartitionKey": 1})
    with pytest.raises(InvalidType):
        errors.raise_first()


def test_invalid_length():
    errors = _validate("PutRecord", {"StreamName": "my-stream", "Data": b"data", "PartitionKey": ""})
    with pytest.raises(InvalidLength):
        errors.raise_first()


def test_invalid_list_entry():
    errors = _validate("PutRecords", {"StreamName": "my-stream", "Records": [{"Data": b"data"}]})
    with pytest.raises(MissingRequiredField) as e:
        errors.raise_first()
    assert e.value.required_name == "PartitionKey"


def test_none_members_are_treated_as_missing():
    errors = _validate(
        "PutRecord",
        {"StreamName": None, "Data": b"data", "PartitionKey": "key", "ExplicitHashKey": None},
    )
    assert not errors.has_errors()

    errors = _validate("PutRecord", {"StreamName": "s", "Data": b"data", "PartitionKey": None})
    with pytest.raises(MissingRequiredField):
        errors.raise_first()


def test_all_errors_are_collected():
    errors = _validate("PutRecord", {"Foo": "bar"})
    assert len(errors.exceptions) == 3
    assert all(isinstance(e, ParameterValidationError) for e in errors.exceptions)


def test_validation_does_not_modify_the_request():
    entry = {"Data": b"data", "PartitionKey": "key", "ExplicitHashKey": None}
    request = {"StreamName": "my-stream", "Records": [entry], "StreamARN": None}

    errors = _validate("PutRecords", request)

    assert not errors.has_errors()
    assert entry == {"Data": b"data", "PartitionKey": "key", "ExplicitHashKey": None}
    assert request["StreamARN"] is None
