import abc
import logging
from typing import Optional, Tuple

import requests
from botocore.awsrequest import AWSRequest
from werkzeug.datastructures import Headers

from kinesis_client import config

from .response import Response

LOG = logging.getLogger(__name__)


class NetworkException(Exception):
    """
    Raised when a request could not be sent or its response could not be received (DNS resolution, connection errors,
    timeouts, TLS errors). The original error is available as ``__cause__``.
    """

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.url = url


class HttpClient(abc.ABC):
    """
    An HTTP client that sends (signed) botocore requests and returns werkzeug responses.
    """

    @abc.abstractmethod
    def request(self, request: AWSRequest) -> Response:
        """
        Sends the given request.

        :param request: the request to send, its URL has to be absolute
        :return: the response, the body is fully read
        :raises NetworkException: if the request could not be sent or the response could not be received
        """
        raise NotImplementedError

    def close(self):
        """
        Close any underlying resources the client may need.
        """
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class _VerifyRespectingSession(requests.Session):
    """
    A class which wraps requests.Session to circumvent https://github.com/psf/requests/issues/3829.
    This ensures that if `REQUESTS_CA_BUNDLE` or `CURL_CA_BUNDLE` are set, the request does not perform the TLS
    verification if `session.verify` is set to `False.
    """

    def merge_environment_settings(self, url, proxies, stream, verify, *args, **kwargs):
        if self.verify is False:
            verify = False

        return super(_VerifyRespectingSession, self).merge_environment_settings(
            url, proxies, stream, verify, *args, **kwargs
        )


class SimpleRequestsClient(HttpClient):
    session: requests.Session
    timeout: Tuple[float, float]

    def __init__(
        self,
        session: requests.Session = None,
        connect_timeout: float = None,
        read_timeout: float = None,
        verify: bool = None,
    ):
        self.session = session or _VerifyRespectingSession()
        self.session.verify = config.VERIFY_SSL if verify is None else verify
        self.timeout = (
            config.CONNECT_TIMEOUT if connect_timeout is None else connect_timeout,
            config.READ_TIMEOUT if read_timeout is None else read_timeout,
        )

    def request(self, request: AWSRequest) -> Response:
        headers = dict(request.headers.items())

        # urllib3 adds "Accept-Encoding: gzip,deflate" otherwise, the body is signed and read as-is
        if not request.headers.get("Accept-Encoding"):
            headers["Accept-Encoding"] = "identity"

        try:
            response = self.session.request(
                method=request.method,
                url=request.url,
                headers=headers,
                data=request.body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            LOG.debug("Error while sending %s request to %s: %s", request.method, request.url, e)
            raise NetworkException(
                f"Could not send the request to {request.url}: {e}", url=request.url
            ) from e

        response_headers = Headers(dict(response.headers))
        # the body is already decoded and read completely
        response_headers.pop("Content-Encoding", None)
        response_headers.pop("Transfer-Encoding", None)
        response_headers.pop("Content-Length", None)

        return Response(
            response=response.content,
            status=response.status_code,
            headers=response_headers,
        )

    def close(self):
        self.session.close()
