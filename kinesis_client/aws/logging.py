"""Logging of the calls of the service clients."""
import logging
from functools import cached_property
from typing import Any, Dict, Optional, Type

from kinesis_client.aws.api import RequestContext, ServiceException
from kinesis_client.http import Response
from kinesis_client.logging.format import AwsTraceLoggingFormatter
from kinesis_client.logging.setup import create_default_handler

# attributes set on every service exception, the others are members of the error response
_EXCEPTION_ATTRIBUTES = ("code", "message", "status_code", "sender_fault", "request_id", "response")


class RequestLogger:
    """
    Logs every completed call onto the ``kinesis_client.request`` logger. If the logger is enabled for ``DEBUG``, the
    logger gets its own handler which additionally prints the service request and the parsed response (or error).
    """

    logger_name = "kinesis_client.request"

    @cached_property
    def logger(self) -> logging.Logger:
        return self._prepare_logger(logging.getLogger(self.logger_name), AwsTraceLoggingFormatter)

    # make sure loggers are loaded after logging config is loaded
    def _prepare_logger(self, logger: logging.Logger, formatter: Type) -> logging.Logger:
        if logger.isEnabledFor(logging.DEBUG):
            logger.propagate = False
            # the logger is shared by all clients
            if not logger.handlers:
                handler = create_default_handler(logger.level)
                handler.setFormatter(formatter())
                logger.addHandler(handler)
        return logger

    def log(
        self,
        context: RequestContext,
        response: Response,
        service_response: Optional[Any] = None,
        exception: Optional[ServiceException] = None,
    ):
        operation = context.operation
        if exception:
            self.logger.info(
                "%s.%s => %d (%s)",
                context.service.service_name,
                operation.name,
                response.status_code,
                exception.code,
                extra={
                    # request
                    "input_type": operation.input_shape.name if operation.input_shape else "Request",
                    "input": context.service_request,
                    "request_headers": dict(context.request.headers) if context.request else {},
                    # response
                    "output_type": exception.code,
                    "output": self._error_output(exception),
                    "response_headers": dict(response.headers),
                },
            )
        else:
            self.logger.info(
                "%s.%s => %d",
                context.service.service_name,
                operation.name,
                response.status_code,
                extra={
                    # request
                    "input_type": operation.input_shape.name if operation.input_shape else "Request",
                    "input": context.service_request,
                    "request_headers": dict(context.request.headers) if context.request else {},
                    # response
                    "output_type": operation.output_shape.name if operation.output_shape else "Response",
                    "output": service_response,
                    "response_headers": dict(response.headers),
                },
            )

    @staticmethod
    def _error_output(exception: ServiceException) -> Dict[str, Any]:
        """The code, the message and the additional members of a service error."""
        output = {"Code": exception.code, "Message": exception.message}
        for key, value in vars(exception).items():
            if key not in _EXCEPTION_ATTRIBUTES:
                output[key] = value
        return output
