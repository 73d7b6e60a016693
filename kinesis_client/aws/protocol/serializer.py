"""
Request serializers for the AWS service protocols.

The module contains classes that take the parameters of a service call and, given an operation model, serialize the
HTTP request according to the specified input shape.

It is the client-side counterpart of the ``parser`` module in this package (which parses the responses to the requests
created by these serializers). It has a lot of similarities with the ``serialize`` module in ``botocore``, but it is
bound to our own request / response types and error hierarchy.

The class hierarchy looks as follows:
::
                   ┌─────────────────┐
                   │RequestSerializer│
                   └─────────────────┘
                            ▲
                 ┌──────────┴──────────┐
                 │JSONRequestSerializer│
                 └─────────────────────┘
::

The ``RequestSerializer`` contains the logic that is shared among all protocols (timestamp and blob conversion, the
request skeleton), the ``JSONRequestSerializer`` implements the ``json`` protocol used by Kinesis (JSON 1.1 body,
``X-Amz-Target`` header naming the operation).

The result of the serialization is a ``botocore.awsrequest.AWSRequest`` with a path-only URL. The client prefixes the
URL with the resolved endpoint and signs the request afterwards.
"""
import abc
import base64
import functools
import json
import logging
from datetime import datetime
from typing import Any, Optional, Union

from botocore.awsrequest import AWSRequest
from botocore.model import ListShape, MapShape, OperationModel, ServiceModel, Shape, StructureShape
from botocore.serialize import ISO8601, ISO8601_MICRO
from botocore.utils import parse_to_aware_datetime

from kinesis_client.constants import HEADER_AMZ_TARGET, USER_AGENT

LOG = logging.getLogger(__name__)


class RequestSerializerError(Exception):
    """
    Error which is thrown if the request serialization fails.
    Super class of all exceptions raised by the serializer.
    """

    pass


class UnknownSerializerError(RequestSerializerError):
    """
    Error which indicates that the raised exception of the serializer could be caused by invalid data or by any other
    (unknown) issue. Errors like this should be reported and indicate an issue in the serializer itself.
    """

    pass


class ProtocolSerializerError(RequestSerializerError):
    """
    Error which indicates that the given data is not compliant with the service's specification and cannot be
    serialized. The request is not sent in this case.
    """

    pass


def _handle_exceptions(func):
    """
    Decorator which handles the exceptions raised by the serializer. It ensures that all exceptions raised by the public
    methods of the serializer are instances of RequestSerializerError.
    :param func: to wrap in order to add the exception handling
    :return: wrapped function
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except RequestSerializerError:
            raise
        except Exception as e:
            raise UnknownSerializerError(
                "An unknown error occurred when trying to serialize the request."
            ) from e

    return wrapper


class RequestSerializer(abc.ABC):
    """
    The request serializer is responsible for the serialization of the parameters of a service call to an actual HTTP
    request (which will be signed and sent to the service).
    """

    DEFAULT_ENCODING = "utf-8"
    DEFAULT_METHOD = "POST"
    TIMESTAMP_FORMAT = "iso8601"

    def __init__(self, service: ServiceModel):
        self.service = service

    @_handle_exceptions
    def serialize_to_request(self, parameters: dict, operation_model: OperationModel) -> AWSRequest:
        """
        Takes the parameters of a service call and serializes them to an HTTP request.

        :param parameters: the (validated) input of the operation
        :param operation_model: the operation the parameters are serialized for
        :return: the request with a path-only URL, not signed yet
        :raises RequestSerializerError: if the parameters cannot be serialized
        """
        request = AWSRequest(
            method=operation_model.http.get("method", self.DEFAULT_METHOD),
            url=operation_model.http.get("requestUri", "/"),
            headers={"User-Agent": USER_AGENT},
        )
        self._serialize_request(parameters or {}, request, operation_model.input_shape, operation_model)
        return request

    @abc.abstractmethod
    def _serialize_request(
        self,
        parameters: dict,
        request: AWSRequest,
        shape: Optional[Shape],
        operation_model: OperationModel,
    ) -> None:
        raise NotImplementedError

    # Some extra utility methods subclasses can use.

    @staticmethod
    def _timestamp_iso8601(value: datetime) -> str:
        if value.microsecond > 0:
            timestamp_format = ISO8601_MICRO
        else:
            timestamp_format = ISO8601
        return value.strftime(timestamp_format)

    @staticmethod
    def _timestamp_unixtimestamp(value: datetime) -> float:
        return value.timestamp()

    def _convert_timestamp_to_str(
        self, value: Union[int, str, datetime], timestamp_format=None
    ) -> Union[str, float]:
        if timestamp_format is None:
            timestamp_format = self.TIMESTAMP_FORMAT
        timestamp_format = timestamp_format.lower()
        datetime_obj = parse_to_aware_datetime(value)
        converter = getattr(self, "_timestamp_%s" % timestamp_format)
        return converter(datetime_obj)

    def _get_base64(self, value: Union[str, bytes]) -> str:
        """
        Returns the base64-encoded version of value, handling
        both strings and bytes. The returned value is a string
        via the default encoding.
        """
        if isinstance(value, str):
            value = value.encode(self.DEFAULT_ENCODING)
        return base64.b64encode(value).strip().decode(self.DEFAULT_ENCODING)

    def _encode_payload(self, body: Union[bytes, str]) -> bytes:
        if isinstance(body, str):
            return body.encode(self.DEFAULT_ENCODING)
        return body


class JSONRequestSerializer(RequestSerializer):
    """
    The ``JSONRequestSerializer`` is responsible for the serialization of requests to services with the ``json``
    protocol. Every operation is sent as a ``POST`` to ``/``, the operation is named by the ``X-Amz-Target`` header and
    the input shape is serialized to the JSON body.
    """

    TIMESTAMP_FORMAT = "unixtimestamp"

    def _serialize_request(
        self,
        parameters: dict,
        request: AWSRequest,
        shape: Optional[Shape],
        operation_model: OperationModel,
    ) -> None:
        metadata = operation_model.metadata
        json_version = metadata.get("jsonVersion", "1.0")
        request.headers["Content-Type"] = "application/x-amz-json-%s" % json_version
        request.headers["Accept"] = "application/json"
        request.headers[HEADER_AMZ_TARGET] = "%s.%s" % (
            metadata["targetPrefix"],
            operation_model.name,
        )
        request.data = self._encode_payload(self._serialize_body_params(parameters, shape))

    def _serialize_body_params(self, params: dict, shape: Optional[Shape]) -> str:
        body = {}
        if shape is not None:
            self._serialize(body, params, shape)
        return json.dumps(body)

    def _serialize(self, body: dict, value: Any, shape: Shape, key: Optional[str] = None):
        """This method dynamically invokes the correct `_serialize_type_*` method for each shape type."""
        try:
            method = getattr(self, "_serialize_type_%s" % shape.type_name, self._default_serialize)
            method(body, value, shape, key)
        except (TypeError, ValueError, AttributeError) as e:
            raise ProtocolSerializerError(
                f"Invalid type when serializing {shape.name}: '{value}' cannot be serialized as {shape.type_name}."
            ) from e

    def _serialize_type_structure(self, body: dict, value: dict, shape: StructureShape, key: str):
        if value is None:
            return
        if shape.is_document_type:
            body[key] = value
            return
        if key is not None:
            # nested structures are serialized into a new child dict of the given body
            new_serialized = {}
            body[key] = new_serialized
            body = new_serialized
        members = shape.members
        for member_key, member_value in value.items():
            if member_value is None:
                continue
            try:
                member_shape = members[member_key]
            except KeyError:
                raise ProtocolSerializerError(
                    f"Request object {shape.name} contains a member which is not specified: {member_key}"
                )
            member_key = member_shape.serialization.get("name", member_key)
            self._serialize(body, member_value, member_shape, member_key)

    def _serialize_type_map(self, body: dict, value: dict, shape: MapShape, key: str):
        if value is None:
            return
        map_obj = {}
        body[key] = map_obj
        for sub_key, sub_value in value.items():
            if sub_value is not None:
                self._serialize(map_obj, sub_value, shape.value, sub_key)

    def _serialize_type_list(self, body: dict, value: list, shape: ListShape, key: str):
        if value is None:
            return
        list_obj = []
        body[key] = list_obj
        for list_item in value:
            if list_item is not None:
                # list items are serialized into a wrapper dict with a fixed key and then appended to the list
                wrapper = {}
                self._serialize(wrapper, list_item, shape.member, "__current__")
                list_obj.append(wrapper["__current__"])

    def _default_serialize(self, body: dict, value: Any, _, key: str):
        body[key] = value

    def _serialize_type_timestamp(self, body: dict, value: Any, shape: Shape, key: str):
        body[key] = self._convert_timestamp_to_str(
            value, shape.serialization.get("timestampFormat")
        )

    def _serialize_type_blob(self, body: dict, value: Union[str, bytes], _, key: str):
        body[key] = self._get_base64(value)


def create_serializer(service: ServiceModel) -> RequestSerializer:
    """
    Creates the right serializer for the given service model.

    :param service: to create the serializer for
    :return: RequestSerializer which can handle the protocol of the service
    :raises NotImplementedError: if the protocol of the service is not supported
    """
    serializers = {
        "json": JSONRequestSerializer,
    }
    protocol = service.protocol
    if protocol not in serializers:
        raise NotImplementedError(f"Protocol {protocol} is not supported by the request serializer.")
    return serializers[protocol](service)
