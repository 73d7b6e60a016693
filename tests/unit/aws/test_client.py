import pytest
from botocore import UNSIGNED
from botocore.credentials import Credentials

from kinesis_client.aws.api import (
    ClientException,
    RedirectionException,
    RequestContext,
    ServerException,
)
from kinesis_client.aws.api.kinesis import ResourceNotFoundException
from kinesis_client.aws.client import UNKNOWN_ERROR_CODE, AbstractServiceClient
from kinesis_client.aws.protocol.parser import ParsedError
from kinesis_client.http import Response
from kinesis_client.services.kinesis import KinesisClient
from kinesis_client.testing.http import MockHttpClient


def _put_record(client: KinesisClient, **kwargs):
    return client.put_record(StreamName="my-stream", Data=b"data", PartitionKey="key", **kwargs)


def test_requests_are_signed_with_sigv4(kinesis_client, http_client):
    _put_record(kinesis_client).resolve()

    request = http_client.last_request
    authorization = request.headers["Authorization"]
    assert authorization.startswith("AWS4-HMAC-SHA256 Credential=test/")
    assert "/us-east-1/kinesis/aws4_request" in authorization
    assert "x-amz-target" in authorization
    assert request.headers["X-Amz-Date"]


def test_fips_regions_are_signed_with_base_region(kinesis_client, http_client):
    _put_record(kinesis_client, region="fips-us-west-2").resolve()

    request = http_client.last_request
    assert request.url == "https://kinesis-fips.us-west-2.amazonaws.com/"
    assert "/us-west-2/kinesis/aws4_request" in request.headers["Authorization"]


def test_session_token_is_sent():
    http_client = MockHttpClient()
    credentials = Credentials("AKIDEXAMPLE", "secret", token="session-token")
    with KinesisClient(credentials=credentials, http_client=http_client) as client:
        _put_record(client).resolve()

    request = http_client.last_request
    assert request.headers["X-Amz-Security-Token"] == "session-token"
    assert "Credential=AKIDEXAMPLE/" in request.headers["Authorization"]


def test_unsigned_requests():
    http_client = MockHttpClient()
    with KinesisClient(credentials=UNSIGNED, http_client=http_client) as client:
        _put_record(client).resolve()

    assert "Authorization" not in http_client.last_request.headers


def test_close_closes_http_client():
    http_client = MockHttpClient()
    client = KinesisClient(credentials=UNSIGNED, http_client=http_client)
    client.close()
    assert http_client.closed


def test_abstract_client_cannot_be_instantiated():
    with pytest.raises(TypeError):
        AbstractServiceClient()


class TestCreateServiceException:
    @staticmethod
    def _context() -> RequestContext:
        context = RequestContext()
        context.exception_mapping = {"ResourceNotFoundException": ResourceNotFoundException}
        return context

    def test_mapped_exception(self):
        response = Response(b"", status=400, headers={"x-amzn-RequestId": "request-id"})
        exception = AbstractServiceClient.create_service_exception(
            self._context(),
            response,
            ParsedError("ResourceNotFoundException", "Stream not found", {}),
        )

        assert isinstance(exception, ResourceNotFoundException)
        assert exception.code == "ResourceNotFoundException"
        assert exception.message == "Stream not found"
        assert exception.request_id == "request-id"
        assert exception.status_code == 400
        assert exception.response is response

    @pytest.mark.parametrize(
        "status_code, exception_type, sender_fault",
        [
            (301, RedirectionException, False),
            (400, ClientException, True),
            (403, ClientException, True),
            (500, ServerException, False),
            (503, ServerException, False),
        ],
    )
    def test_unmapped_exception(self, status_code, exception_type, sender_fault):
        exception = AbstractServiceClient.create_service_exception(
            self._context(),
            Response(b"", status=status_code),
            ParsedError("AccessDeniedException", "denied", {"Reason": "policy"}),
        )

        assert type(exception) is exception_type
        assert exception.code == "AccessDeniedException"
        assert exception.message == "denied"
        assert exception.status_code == status_code
        assert exception.sender_fault == sender_fault
        assert exception.Reason == "policy"

    def test_exception_without_code(self):
        exception = AbstractServiceClient.create_service_exception(
            self._context(), Response(b"", status=502), ParsedError(None, "", {})
        )
        assert isinstance(exception, ServerException)
        assert exception.code == UNKNOWN_ERROR_CODE
