from typing import Optional

from kinesis_client.aws.api import ExceptionMapping
from kinesis_client.aws.api.kinesis import (
    InvalidArgumentException,
    KMSAccessDeniedException,
    KMSDisabledException,
    KMSInvalidStateException,
    KMSNotFoundException,
    KMSOptInRequired,
    KMSThrottlingException,
    LimitExceededException,
    ProvisionedThroughputExceededException,
    PutRecordInput,
    PutRecordsInput,
    RegisterStreamConsumerInput,
    ResourceInUseException,
    ResourceNotFoundException,
)
from kinesis_client.aws.client import AbstractServiceClient
from kinesis_client.aws.endpoints import KINESIS_ENDPOINTS, EndpointMetadata, resolve_endpoint
from kinesis_client.constants import KINESIS_API_VERSION, KINESIS_SERVICE_NAME

from .results import PutRecordResult, PutRecordsResult, RegisterStreamConsumerResult


def _exception_mapping(*exceptions) -> ExceptionMapping:
    return {exception.code: exception for exception in exceptions}


PUT_RECORD_EXCEPTIONS = _exception_mapping(
    ResourceNotFoundException,
    InvalidArgumentException,
    ProvisionedThroughputExceededException,
    KMSDisabledException,
    KMSInvalidStateException,
    KMSAccessDeniedException,
    KMSNotFoundException,
    KMSOptInRequired,
    KMSThrottlingException,
)

PUT_RECORDS_EXCEPTIONS = PUT_RECORD_EXCEPTIONS

REGISTER_STREAM_CONSUMER_EXCEPTIONS = _exception_mapping(
    InvalidArgumentException,
    LimitExceededException,
    ResourceInUseException,
    ResourceNotFoundException,
)


class KinesisClient(AbstractServiceClient):
    """
    Client of the Amazon Kinesis Data Streams service.

    The calls return immediately with a result object, the request is sent in the background. The result raises the
    exception of a failed call when it is resolved, f.e.::

        with KinesisClient(region_name="eu-central-1") as client:
            result = client.put_record(StreamName="my-stream", Data=b"hello", PartitionKey="key")
            print(result.sequence_number)
    """

    service_name = KINESIS_SERVICE_NAME
    api_version = KINESIS_API_VERSION

    def put_record(
        self, input: Optional[PutRecordInput] = None, region: Optional[str] = None, **params
    ) -> PutRecordResult:
        """
        Writes a single data record into an Amazon Kinesis data stream.

        :param input: the PutRecordInput (``Data``, ``PartitionKey``, and the ``StreamName`` or ``StreamARN``)
        :param region: the region of this call, defaults to the region of the client
        :param params: members of the input, merged over ``input``
        :return: the PutRecordResult
        :raises ParameterValidationError: if the input is not valid
        """
        return self.invoke(
            "PutRecord",
            input,
            params,
            region=region,
            result_class=PutRecordResult,
            exception_mapping=PUT_RECORD_EXCEPTIONS,
        )

    def put_records(
        self, input: Optional[PutRecordsInput] = None, region: Optional[str] = None, **params
    ) -> PutRecordsResult:
        """
        Writes multiple data records into a Kinesis data stream in a single call. Records which could not be
        processed are reported in the entries of the result (``FailedRecordCount``), not with an exception.

        :param input: the PutRecordsInput (``Records``, and the ``StreamName`` or ``StreamARN``)
        :param region: the region of this call, defaults to the region of the client
        :param params: members of the input, merged over ``input``
        :return: the PutRecordsResult
        :raises ParameterValidationError: if the input is not valid
        """
        return self.invoke(
            "PutRecords",
            input,
            params,
            region=region,
            result_class=PutRecordsResult,
            exception_mapping=PUT_RECORDS_EXCEPTIONS,
        )

    def register_stream_consumer(
        self,
        input: Optional[RegisterStreamConsumerInput] = None,
        region: Optional[str] = None,
        **params,
    ) -> RegisterStreamConsumerResult:
        """
        Registers a consumer with a Kinesis data stream, to be used with enhanced fan-out.

        :param input: the RegisterStreamConsumerInput (``StreamARN`` and ``ConsumerName``)
        :param region: the region of this call, defaults to the region of the client
        :param params: members of the input, merged over ``input``
        :return: the RegisterStreamConsumerResult
        :raises ParameterValidationError: if the input is not valid
        """
        return self.invoke(
            "RegisterStreamConsumer",
            input,
            params,
            region=region,
            result_class=RegisterStreamConsumerResult,
            exception_mapping=REGISTER_STREAM_CONSUMER_EXCEPTIONS,
        )

    def get_endpoint_metadata(self, region: Optional[str]) -> EndpointMetadata:
        return resolve_endpoint(
            region or self.region_name,
            endpoint_url=self.endpoint_url,
            service=self.service_name,
            endpoints=KINESIS_ENDPOINTS,
        )
