from .client import HttpClient, NetworkException, SimpleRequestsClient
from .response import Response

__all__ = [
    "HttpClient",
    "NetworkException",
    "Response",
    "SimpleRequestsClient",
]
