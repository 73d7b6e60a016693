import logging
import threading
from concurrent.futures import Future, wait
from typing import TYPE_CHECKING, Any, Dict, Optional

from kinesis_client.aws.api import RequestContext
from kinesis_client.constants import HEADER_AMZN_REQUEST_ID
from kinesis_client.http import Response

if TYPE_CHECKING:
    from kinesis_client.aws.client import AbstractServiceClient

LOG = logging.getLogger(__name__)


class Result:
    """
    The result of a call. The request is already dispatched when the result is created, the response is parsed
    lazily when the result is resolved (explicitly with ``resolve``, or implicitly by accessing the output).

    If the call failed, resolving the result raises the exception of the failure (f.e. the mapped
    ``ServiceException``). The same exception is raised again by every following resolve.
    """

    def __init__(
        self, client: "AbstractServiceClient", context: RequestContext, future: "Future[Response]"
    ):
        self._client = client
        self._context = context
        self._future = future
        self._lock = threading.RLock()
        self._resolved = False
        self._response: Optional[Response] = None
        self._output: Optional[Dict[str, Any]] = None
        self._exception: Optional[Exception] = None

    @property
    def context(self) -> RequestContext:
        return self._context

    def resolve(self, timeout: Optional[float] = None) -> bool:
        """
        Waits for the response and parses it.

        :param timeout: the number of seconds to wait for the response, waits indefinitely if None
        :return: True if the result is resolved, False if the response did not arrive within the timeout
        :raises ServiceException: if the service responded with an error
        :raises NetworkException: if the request could not be sent
        """
        # wait outside of the lock, so a timeout applies even if another thread is resolving the result
        done, _ = wait([self._future], timeout=timeout)
        if not done:
            return False

        with self._lock:
            if not self._resolved:
                try:
                    response = self._future.result()
                except Exception as e:
                    self._resolve_with_exception(e)
                else:
                    self._response = response
                    try:
                        self._output = self._client.handle_response(self._context, response)
                    except Exception as e:
                        self._resolve_with_exception(e)
                    self._resolved = True

            if self._exception is not None:
                raise self._exception
            return True

    def _resolve_with_exception(self, exception: Exception):
        LOG.debug(
            "Call of %s failed: %s",
            self._context.operation.name if self._context.operation else "unknown operation",
            exception,
        )
        self._exception = exception
        self._resolved = True

    def info(self) -> Dict[str, Any]:
        """
        Returns the state of the call, without waiting for the response.

        :return: a dict with the keys ``resolved`` (whether the result is resolved), ``response`` (the HTTP response
                 if it was received) and ``status`` (its status code)
        """
        response = self._response
        if response is None and self._future.done() and not self._future.cancelled():
            if self._future.exception() is None:
                response = self._future.result()
        return {
            "resolved": self._resolved,
            "response": response,
            "status": response.status_code if response is not None else None,
        }

    def cancel(self) -> bool:
        """
        Cancels the call if the request was not sent yet.

        :return: True if the call was cancelled
        """
        return self._future.cancel()

    @property
    def output(self) -> Dict[str, Any]:
        """The parsed output of the operation, resolves the result if necessary."""
        self.resolve()
        return self._output

    @property
    def request_id(self) -> Optional[str]:
        """The request ID assigned by the service, resolves the result if necessary."""
        self.resolve()
        return self._response.headers.get(HEADER_AMZN_REQUEST_ID)
