from .core import (
    ClientException,
    CommonServiceException,
    ExceptionMapping,
    RedirectionException,
    RequestContext,
    ServerException,
    ServiceEnum,
    ServiceException,
    ServiceRequest,
    ServiceResponse,
)

__all__ = [
    "RequestContext",
    "ServiceEnum",
    "ServiceException",
    "CommonServiceException",
    "ClientException",
    "ServerException",
    "RedirectionException",
    "ExceptionMapping",
    "ServiceRequest",
    "ServiceResponse",
]
