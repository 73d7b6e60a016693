"""
The dispatch core of the generated service clients.

A service client declares its operations as thin methods which call ``AbstractServiceClient.invoke`` with the name of
the operation, the exception mapping of the operation and the result class. ``invoke`` validates and serializes the
input, resolves the endpoint of the region, signs the request, and submits it to the thread pool of the client. The
returned ``Result`` parses the response (or raises the mapped service exception) when it is resolved.
"""
import abc
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import cached_property
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

import botocore.session
from botocore import UNSIGNED
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials
from botocore.model import ServiceModel

from kinesis_client import config
from kinesis_client.aws.api import (
    ClientException,
    CommonServiceException,
    ExceptionMapping,
    RedirectionException,
    RequestContext,
    ServerException,
    ServiceException,
)
from kinesis_client.aws.endpoints import EndpointMetadata
from kinesis_client.aws.logging import RequestLogger
from kinesis_client.aws.protocol.parser import ParsedError, ResponseParser, create_parser
from kinesis_client.aws.protocol.serializer import RequestSerializer, create_serializer
from kinesis_client.aws.protocol.validate import validate_request
from kinesis_client.aws.result import Result
from kinesis_client.aws.spec import load_service
from kinesis_client.constants import HEADER_AMZN_REQUEST_ID
from kinesis_client.http import HttpClient, Response, SimpleRequestsClient

LOG = logging.getLogger(__name__)

R = TypeVar("R", bound=Result)

# error code used for error responses which do not contain any error code
UNKNOWN_ERROR_CODE = "UnknownError"


class AbstractServiceClient(abc.ABC):
    """
    Base class of the service clients.

    :param region_name: the default region of the calls, ``config.DEFAULT_REGION`` if not set
    :param endpoint_url: a custom endpoint (f.e. ``http://localhost:4566``), ``config.ENDPOINT_URL`` if not set
    :param credentials: the credentials used to sign the requests. ``botocore.UNSIGNED`` sends anonymous requests,
                        if not set the credentials are resolved with the botocore credential chain.
    :param aws_access_key_id: access key used to create the credentials (if ``credentials`` are not set)
    :param aws_secret_access_key: secret key used to create the credentials (if ``credentials`` are not set)
    :param aws_session_token: session token used to create the credentials (if ``credentials`` are not set)
    :param http_client: the transport, a ``SimpleRequestsClient`` is created if not set
    :param max_workers: the number of threads used to dispatch the calls, ``config.MAX_WORKERS`` if not set
    """

    service_name: str
    api_version: Optional[str] = None

    def __init__(
        self,
        region_name: str = None,
        endpoint_url: str = None,
        credentials: Union[Credentials, object, None] = None,
        aws_access_key_id: str = None,
        aws_secret_access_key: str = None,
        aws_session_token: str = None,
        http_client: HttpClient = None,
        max_workers: int = None,
    ):
        self.region_name = region_name or config.DEFAULT_REGION
        self.endpoint_url = endpoint_url or config.ENDPOINT_URL
        if credentials is None and (aws_access_key_id or aws_secret_access_key):
            credentials = Credentials(
                access_key=aws_access_key_id,
                secret_key=aws_secret_access_key,
                token=aws_session_token,
            )
        self._credentials = credentials
        self.http_client = http_client or SimpleRequestsClient()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or config.MAX_WORKERS,
            thread_name_prefix=f"{self.service_name}-client",
        )
        self.request_logger = RequestLogger()

    @cached_property
    def service_model(self) -> ServiceModel:
        return load_service(self.service_name, self.api_version)

    @cached_property
    def serializer(self) -> RequestSerializer:
        return create_serializer(self.service_model)

    @cached_property
    def parser(self) -> ResponseParser:
        return create_parser(self.service_model)

    @cached_property
    def credentials(self) -> Optional[Credentials]:
        """
        The credentials used to sign the requests, or None if the requests are sent unsigned.
        """
        if self._credentials is UNSIGNED:
            return None
        if self._credentials is not None:
            return self._credentials
        credentials = botocore.session.get_session().get_credentials()
        if credentials is None:
            LOG.debug("No credentials found, requests to %s are sent unsigned", self.service_name)
        return credentials

    @abc.abstractmethod
    def get_endpoint_metadata(self, region: Optional[str]) -> EndpointMetadata:
        """
        Resolves the endpoint and the signing parameters of the given region.

        :param region: the region of the call
        :return: the endpoint metadata of the region
        """
        raise NotImplementedError

    def invoke(
        self,
        operation_name: str,
        input: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
        region: Optional[str] = None,
        result_class: Type[R] = Result,
        exception_mapping: Optional[ExceptionMapping] = None,
    ) -> R:
        """
        Sends a call of the given operation.

        :param operation_name: the name of the operation in the service model (f.e. ``PutRecord``)
        :param input: the input of the operation
        :param params: additional input members (f.e. keyword arguments), which are merged over ``input``
        :param region: the region of this call, defaults to the region of the client
        :param result_class: the type of the returned result
        :param exception_mapping: maps the error codes of the operation to the exceptions raised for them
        :return: the result of the call, the request is already dispatched
        :raises ParameterValidationError: if the input is not valid, nothing is sent in this case
        :raises RequestSerializerError: if the input cannot be serialized
        """
        operation = self.service_model.operation_model(operation_name)

        service_request = dict(input or {})
        service_request.update(params or {})
        service_request = {key: value for key, value in service_request.items() if value is not None}

        validate_request(operation, service_request).raise_first()

        context = RequestContext()
        context.service = self.service_model
        context.operation = operation
        context.region = region or self.region_name
        context.service_request = service_request
        context.exception_mapping = exception_mapping or {}

        endpoint = self.get_endpoint_metadata(context.region)
        context.endpoint = endpoint.endpoint

        request = self.serializer.serialize_to_request(service_request, operation)
        request.url = endpoint.endpoint + request.url
        self._sign(request, endpoint)
        context.request = request

        LOG.debug("Sending %s request to %s", operation_name, request.url)
        future = self._executor.submit(self.http_client.request, request)
        return result_class(self, context, future)

    def _sign(self, request: AWSRequest, endpoint: EndpointMetadata):
        credentials = self.credentials
        if credentials is None:
            return
        signer = SigV4Auth(
            credentials.get_frozen_credentials(), endpoint.sign_service, endpoint.sign_region
        )
        signer.add_auth(request)

    def handle_response(self, context: RequestContext, response: Response) -> Dict[str, Any]:
        """
        Parses the response of a call. Used by the results of the calls when they are resolved.

        :param context: the context of the call
        :param response: the response of the service
        :return: the parsed output of the operation
        :raises ServiceException: if the response is an error response
        :raises ResponseParserError: if the response cannot be parsed
        """
        if response.status_code >= 300:
            exception = self.create_service_exception(
                context, response, self.parser.parse_error(response)
            )
            self.request_logger.log(context, response, exception=exception)
            raise exception

        service_response = self.parser.parse(response, context.operation)
        self.request_logger.log(context, response, service_response=service_response)
        return service_response

    @staticmethod
    def create_service_exception(
        context: RequestContext, response: Response, error: ParsedError
    ) -> ServiceException:
        """
        Creates the exception for an error response. If the exception mapping of the operation contains the error
        code, the mapped exception is created. Otherwise, a ``CommonServiceException`` subclass matching the status
        code is created.

        :param context: the context of the call
        :param response: the error response
        :param error: the parsed error
        :return: the exception to raise
        """
        status_code = response.status_code
        exception_type = context.exception_mapping.get(error.code) if error.code else None
        if exception_type:
            exception = exception_type(error.message)
        else:
            if status_code < 400:
                common_type = RedirectionException
            elif status_code < 500:
                common_type = ClientException
            else:
                common_type = ServerException
            exception: CommonServiceException = common_type(
                code=error.code or UNKNOWN_ERROR_CODE,
                message=error.message,
                status_code=status_code,
                sender_fault=400 <= status_code < 500,
            )

        for key, value in error.members.items():
            setattr(exception, key, value)
        exception.status_code = status_code
        exception.request_id = response.headers.get(HEADER_AMZN_REQUEST_ID)
        exception.response = response
        return exception

    def close(self):
        """
        Waits for the pending calls and releases the thread pool and the transport of the client.
        """
        self._executor.shutdown(wait=True)
        self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
