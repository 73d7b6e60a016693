from typing import TYPE_CHECKING, Any, Dict, NamedTuple, Optional, Type, TypedDict

from botocore.awsrequest import AWSRequest
from botocore.model import OperationModel, ServiceModel

if TYPE_CHECKING:
    from kinesis_client.http import Response


class ServiceRequest(TypedDict):
    pass


ServiceResponse = Any


class ServiceEnum(str):
    """
    Base class of the generated enums. The members are plain string constants, the class only adds lookup helpers.
    """

    @classmethod
    def values(cls) -> Dict[str, str]:
        values = {}
        for klass in reversed(cls.__mro__):
            if not issubclass(klass, ServiceEnum) or klass is ServiceEnum:
                continue
            for key, value in vars(klass).items():
                if not key.startswith("_") and isinstance(value, str):
                    values[key] = value
        return values

    @classmethod
    def exists(cls, value: str) -> bool:
        """Checks whether the given value is one of the members of the enum."""
        return value in cls.values().values()


class ServiceException(Exception):
    """
    An exception that indicates that a service error occurred.
    These exceptions are raised by the client when the remote service responds with an error. The generated subclasses
    define the code, fault and status defaults of the error shapes of the service specification.
    """

    code: str = "ServiceException"
    status_code: int = 400
    sender_fault: bool = False
    message: str
    request_id: Optional[str] = None
    response: Optional["Response"] = None

    def __init__(self, *args: Any, **kwargs: Any):
        super(ServiceException, self).__init__(*args)

        if len(args) >= 1:
            self.message = args[0]
        else:
            self.message = ""
        for key, value in kwargs.items():
            setattr(self, key, value)


class CommonServiceException(ServiceException):
    """
    An exception for errors which are not specified (i.e. not generated based on the service specification), or which
    are not declared by the invoked operation.
    In the AWS API references, this kind of errors are usually referred to as "Common Errors", f.e.:
    https://docs.aws.amazon.com/kinesis/latest/APIReference/CommonErrors.html
    """

    def __init__(self, code: str, message: str, status_code: int = 400, sender_fault: bool = False):
        self.code = code
        self.status_code = status_code
        self.sender_fault = sender_fault
        self.message = message
        super().__init__(self.message)


class RedirectionException(CommonServiceException):
    """Raised for undeclared errors with a 3xx status code."""


class ClientException(CommonServiceException):
    """Raised for undeclared errors with a 4xx status code."""


class ServerException(CommonServiceException):
    """Raised for undeclared errors with a 5xx status code."""


ExceptionMapping = Dict[str, Type[ServiceException]]


class ServiceOperation(NamedTuple):
    service: str
    operation: str


class RequestContext:
    """
    Holds the state of a single call: the operation model, the region it is sent to, the (validated) service request,
    and the exception mapping of the operation.
    """

    service: Optional[ServiceModel]
    operation: Optional[OperationModel]
    region: Optional[str]
    service_request: Optional[ServiceRequest]
    exception_mapping: ExceptionMapping
    endpoint: Optional[str]
    request: Optional[AWSRequest]

    def __init__(self) -> None:
        super().__init__()
        self.service = None
        self.operation = None
        self.region = None
        self.service_request = None
        self.exception_mapping = {}
        self.endpoint = None
        self.request = None

    @property
    def service_operation(self) -> Optional[ServiceOperation]:
        if not self.service or not self.operation:
            return None
        return ServiceOperation(self.service.service_name, self.operation.name)
