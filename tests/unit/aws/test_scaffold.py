from types import ModuleType

import pytest
from click.testing import CliRunner

from kinesis_client.aws.api import ServiceEnum, ServiceException
from kinesis_client.aws.scaffold import generate, generate_code

OPERATIONS = ["PutRecord", "PutRecords", "RegisterStreamConsumer"]


def _load(code: str, name: str = "kinesis") -> ModuleType:
    module = ModuleType(name)
    exec(compile(code, "<string>", "exec"), module.__dict__)
    return module


def test_generated_code_compiles(caplog):
    # Deactivate logging on CLI (https://github.com/pallets/click/issues/824#issuecomment-562581313)
    caplog.set_level(100000)

    runner = CliRunner()
    args = ["kinesis", "--no-doc", "--print"]
    for operation in OPERATIONS:
        args.extend(["--operation", operation])
    result = runner.invoke(generate, args)
    assert result.exit_code == 0

    module = _load(result.output)
    assert issubclass(module.EncryptionType, ServiceEnum)
    assert module.EncryptionType.exists("KMS")
    assert issubclass(module.ResourceNotFoundException, ServiceException)
    assert module.ResourceNotFoundException.code == "ResourceNotFoundException"
    assert "Data" in module.PutRecordInput.__annotations__
    assert module.Timestamp.__name__ == "datetime"


def test_operations_limit_the_generated_types():
    module = _load(generate_code("kinesis", ["RegisterStreamConsumer"]))

    assert hasattr(module, "RegisterStreamConsumerInput")
    assert hasattr(module, "Consumer")
    assert not hasattr(module, "PutRecordInput")


def test_all_operations():
    module = _load(generate_code("kinesis"))
    assert hasattr(module, "PutRecordInput")
    assert hasattr(module, "ListShardsInput")


@pytest.mark.parametrize(
    "args, message",
    [
        (["not-a-service", "--print"], "unknown service"),
        (["kinesis", "--operation", "NotAnOperation", "--print"], "unknown operation"),
    ],
)
def test_unknown_service_or_operation(args, message):
    result = CliRunner().invoke(generate, args)
    assert result.exit_code != 0
    assert message in result.output


def test_save(tmp_path):
    result = CliRunner().invoke(
        generate,
        ["kinesis", "--operation", "PutRecord", "--save", "--path", str(tmp_path)],
    )
    assert result.exit_code == 0
    assert (tmp_path / "kinesis" / "__init__.py").exists()
