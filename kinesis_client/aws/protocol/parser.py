"""
Response parsers for the AWS service protocols.

The module contains classes that take an HTTP response sent by a service, and given an operation model, parse the
response according to the specified output shape. Error responses are parsed to the error code, message, and the
additional members of the error body, which are used by the client to create the service exceptions.

It can be seen as the counterpart to the ``serializer`` module in this package. It has a lot of similarities with the
``parse`` module in ``botocore``, but it operates on our own ``Response`` type.

The class hierarchy looks as follows:
::
                   ┌──────────────┐
                   │ResponseParser│
                   └──────────────┘
                           ▲
                ┌──────────┴───────────┐
                │BaseJSONResponseParser│
                └──────────────────────┘
                           ▲
                 ┌─────────┴──────────┐
                 │JSONResponseParser  │
                 └────────────────────┘
::

The ``ResponseParser`` contains the dynamic dispatch to the ``_parse_<type>`` methods and the scalar conversions, the
``BaseJSONResponseParser`` parses JSON bodies, and the ``JSONResponseParser`` implements the error conventions of the
``json`` protocol (``__type`` in the body, ``X-Amzn-Errortype`` header as fallback).
"""
import abc
import base64
import datetime
import functools
import logging
from typing import Any, Dict, NamedTuple, Optional

import dateutil.parser
from botocore.model import ListShape, MapShape, OperationModel, ServiceModel, Shape, StructureShape

from kinesis_client.constants import HEADER_AMZ_ID_2, HEADER_AMZN_ERROR_TYPE, HEADER_AMZN_REQUEST_ID
from kinesis_client.http import Response

LOG = logging.getLogger(__name__)


class ResponseParserError(Exception):
    """
    Error which is thrown if the response parsing fails.
    Super class of all exceptions raised by the parser.
    """

    pass


class UnknownParserError(ResponseParserError):
    """
    Error which indicates that the raised exception of the parser could be caused by invalid data or by any other
    (unknown) issue. Errors like this should be reported and indicate an issue in the parser itself.
    """

    pass


class ProtocolParserError(ResponseParserError):
    """
    Error which indicates that the given data is not compliant with the service's specification and cannot be parsed
    (f.e. a body which is not valid JSON).
    """

    pass


def _handle_exceptions(func):
    """
    Decorator which handles the exceptions raised by the parser. It ensures that all exceptions raised by the public
    methods of the parser are instances of ResponseParserError.
    :param func: to wrap in order to add the exception handling
    :return: wrapped function
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ResponseParserError:
            raise
        except Exception as e:
            raise UnknownParserError(
                "An unknown error occurred when trying to parse the response."
            ) from e

    return wrapper


class ParsedError(NamedTuple):
    """
    An error response of a service.

    Attributes:
        code        The error code (without the namespace prefix)
        message     The error message (empty if the service did not send one)
        members     Additional members of the error body
    """

    code: Optional[str]
    message: str
    members: Dict[str, Any]


class ResponseParser(abc.ABC):
    """
    The response parser is responsible for parsing the HTTP response of a service into the output of the invoked
    operation.
    """

    service: ServiceModel
    DEFAULT_ENCODING = "utf-8"
    TIMESTAMP_FORMAT = "iso8601"

    def __init__(self, service: ServiceModel):
        self.service = service

    @_handle_exceptions
    def parse(self, response: Response, operation_model: OperationModel) -> Dict[str, Any]:
        """
        Parses a successful response of the given operation.

        :param response: the response of the service
        :param operation_model: the operation the response belongs to
        :return: the parsed output shape, extended by the ``ResponseMetadata``
        :raises ResponseParserError: if the response cannot be parsed
        """
        parsed = self._do_parse(response, operation_model.output_shape) or {}
        parsed["ResponseMetadata"] = self._parse_response_metadata(response)
        return parsed

    @_handle_exceptions
    def parse_error(self, response: Response) -> ParsedError:
        """
        Parses an error response.

        :param response: the (non 2xx) response of the service
        :return: the code, message and additional members of the error
        :raises ResponseParserError: if the response cannot be parsed
        """
        return self._do_parse_error(response)

    @abc.abstractmethod
    def _do_parse(self, response: Response, shape: Optional[Shape]) -> Optional[dict]:
        raise NotImplementedError

    @abc.abstractmethod
    def _do_parse_error(self, response: Response) -> ParsedError:
        raise NotImplementedError

    @staticmethod
    def _parse_response_metadata(response: Response) -> dict:
        metadata = {
            "HTTPStatusCode": response.status_code,
            "HTTPHeaders": {key.lower(): value for key, value in response.headers.items()},
        }
        request_id = response.headers.get(HEADER_AMZN_REQUEST_ID) or response.headers.get(
            HEADER_AMZ_ID_2
        )
        if request_id:
            metadata["RequestId"] = request_id
        return metadata

    def _parse_shape(self, shape: Optional[Shape], node: Any) -> Any:
        """
        Main parsing method which dynamically calls the parsing function for the specific shape.

        :param shape: of the node
        :param node: the single part of the response body to parse
        :return: result of the parsing operation, the type depends on the shape
        """
        if shape is None or node is None:
            return None
        fn_name = "_parse_%s" % shape.type_name
        handler = getattr(self, fn_name, self._noop_parser)
        try:
            return handler(shape, node)
        except (TypeError, ValueError, AttributeError) as e:
            raise ProtocolParserError(
                f"Invalid type when parsing {shape.name}: '{node}' cannot be parsed to {shape.type_name}."
            ) from e

    def _parse_list(self, shape: ListShape, node: list):
        return [self._parse_shape(shape.member, item) for item in node]

    @staticmethod
    def _noop_parser(_, node: Any):
        return node

    def _parse_integer(self, _, node: Any) -> int:
        return int(node)

    def _parse_float(self, _, node: Any) -> float:
        return float(node)

    def _parse_blob(self, _, node: str) -> bytes:
        return base64.b64decode(node)

    def _parse_timestamp(self, shape: Shape, node: Any) -> datetime.datetime:
        return self._convert_str_to_timestamp(node, shape.serialization.get("timestampFormat"))

    _parse_character = _parse_string = _parse_boolean = _noop_parser
    _parse_double = _parse_float
    _parse_long = _parse_integer

    def _convert_str_to_timestamp(self, value: Any, timestamp_format=None) -> datetime.datetime:
        # services are lenient with the format, epoch values are accepted regardless of the declared format
        try:
            return self._timestamp_unixtimestamp(value)
        except ValueError:
            pass
        if timestamp_format is None or timestamp_format.lower() == "unixtimestamp":
            timestamp_format = "iso8601"
        converter = getattr(self, "_timestamp_%s" % timestamp_format.lower())
        return converter(value)

    @staticmethod
    def _timestamp_iso8601(date_string: str) -> datetime.datetime:
        parsed = dateutil.parser.isoparse(date_string)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=datetime.timezone.utc)
        return parsed

    @staticmethod
    def _timestamp_unixtimestamp(timestamp: Any) -> datetime.datetime:
        return datetime.datetime.fromtimestamp(float(timestamp), tz=datetime.timezone.utc)

    @staticmethod
    def _timestamp_rfc822(datetime_string: str) -> datetime.datetime:
        return dateutil.parser.parse(datetime_string)


class BaseJSONResponseParser(ResponseParser, abc.ABC):
    """
    The ``BaseJSONResponseParser`` is the base class for all JSON-based AWS service protocols.
    This base-class handles parsing the payload / body as JSON.
    """

    TIMESTAMP_FORMAT = "unixtimestamp"

    def _do_parse(self, response: Response, shape: Optional[Shape]) -> Optional[dict]:
        body = self._parse_body_as_json(response)
        if shape is None:
            return {}
        return self._parse_shape(shape, body)

    def _parse_structure(self, shape: StructureShape, value: dict) -> Optional[dict]:
        if shape.is_document_type:
            return value
        if not isinstance(value, dict):
            raise ProtocolParserError(
                f"Invalid type when parsing {shape.name}: expected an object, got '{value}'."
            )
        final_parsed = {}
        for member_name, member_shape in shape.members.items():
            json_name = member_shape.serialization.get("name", member_name)
            parsed = self._parse_shape(member_shape, value.get(json_name))
            if parsed is not None:
                final_parsed[member_name] = parsed
        return final_parsed

    def _parse_map(self, shape: MapShape, value: dict) -> dict:
        parsed = {}
        for key, item in value.items():
            parsed[self._parse_shape(shape.key, key)] = self._parse_shape(shape.value, item)
        return parsed

    def _parse_body_as_json(self, response: Response) -> Any:
        try:
            body = response.get_json_body()
        except ValueError as e:
            raise ProtocolParserError("HTTP body could not be parsed as JSON.") from e
        return {} if body is None else body


class JSONResponseParser(BaseJSONResponseParser):
    """
    The ``JSONResponseParser`` is responsible for parsing the responses of services which use the ``json`` protocol.
    Errors are identified by the ``__type`` member of the body, or by the ``X-Amzn-Errortype`` header if the body does
    not contain one.
    """

    def _do_parse_error(self, response: Response) -> ParsedError:
        try:
            body = self._parse_body_as_json(response)
        except ProtocolParserError:
            LOG.debug("Error response body of status %s is not JSON", response.status_code)
            body = {}
        if not isinstance(body, dict):
            body = {}

        code = self._parse_error_code(body.get("__type") or body.get("code") or body.get("Code"))
        if not code:
            # the header contains additional information after a colon, f.e. "ResourceNotFoundException:http://..."
            header_value = response.headers.get(HEADER_AMZN_ERROR_TYPE)
            if header_value:
                code = header_value.split(":")[0]

        message = body.get("message") or body.get("Message") or ""
        members = {
            key: value
            for key, value in body.items()
            if key not in ("__type", "code", "Code", "message", "Message")
        }
        return ParsedError(code or None, str(message), members)

    @staticmethod
    def _parse_error_code(value: Optional[str]) -> Optional[str]:
        # the error type can be prefixed with the namespace of the shape, f.e. "com.amazonaws.kinesis#InvalidArgument"
        if not value:
            return None
        return str(value).rsplit("#", 1)[-1]


def create_parser(service: ServiceModel) -> ResponseParser:
    """
    Creates the right parser for the given service model.

    :param service: to create the parser for
    :return: ResponseParser which can handle the protocol of the service
    :raises NotImplementedError: if the protocol of the service is not supported
    """
    parsers = {
        "json": JSONResponseParser,
    }
    protocol = service.protocol
    if protocol not in parsers:
        raise NotImplementedError(f"Protocol {protocol} is not supported by the response parser.")
    return parsers[protocol](service)
