"""Tools for formatting kinesis-client logs."""
import logging
import re
from functools import lru_cache
from typing import Any, Dict

from kinesis_client.utils.numbers import format_bytes

MAX_THREAD_NAME_LEN = 12
MAX_NAME_LEN = 26

LOG_FORMAT = f"%(asctime)s.%(msecs)03d %(kc_level)5s --- [%(kc_thread){MAX_THREAD_NAME_LEN}s] %(kc_name)-{MAX_NAME_LEN}s : %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

CUSTOM_LEVEL_NAMES = {
    50: "FATAL",
    40: "ERROR",
    30: "WARN",
    20: "INFO",
    10: "DEBUG",
}


class DefaultFormatter(logging.Formatter):
    """
    A formatter that uses ``LOG_FORMAT`` and ``LOG_DATE_FORMAT``.
    """

    def __init__(self, fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT):
        super(DefaultFormatter, self).__init__(fmt=fmt, datefmt=datefmt)


class AddFormattedAttributes(logging.Filter):
    """
    Filter that adds three attributes to a log record:

    - kc_level: the abbreviated loglevel that's max 5 characters long
    - kc_name: the abbreviated name of the logger (e.g., `k.aws.protocol.parser`), trimmed to ``MAX_NAME_LEN``
    - kc_thread: the abbreviated thread name (prefix trimmed, .e.g, ``client_0``)
    """

    max_name_len: int
    max_thread_len: int

    def __init__(self, max_name_len: int = None, max_thread_len: int = None):
        super(AddFormattedAttributes, self).__init__()
        self.max_name_len = max_name_len if max_name_len else MAX_NAME_LEN
        self.max_thread_len = max_thread_len if max_thread_len else MAX_THREAD_NAME_LEN

    def filter(self, record):
        record.kc_level = CUSTOM_LEVEL_NAMES.get(record.levelno, record.levelname)
        record.kc_name = self._get_compressed_logger_name(record.name)
        record.kc_thread = record.threadName[-self.max_thread_len :]
        return True

    @lru_cache(maxsize=256)
    def _get_compressed_logger_name(self, name):
        return compress_logger_name(name, self.max_name_len)


def compress_logger_name(name: str, length: int) -> str:
    """
    Creates a short version of a logger name. For example ``my.very.long.logger.name`` with length=17 turns into
    ``m.v.l.logger.name``.

    :param name: the logger name
    :param length: the max length of the logger name
    :return: the compressed name
    """
    if len(name) <= length:
        return name

    parts = name.split(".")
    abbreviated = [part[0] for part in parts]

    # expand the trailing parts as long as the name fits into the length
    expanded = 0
    while expanded < len(parts):
        split = len(parts) - expanded - 1
        if len(".".join(abbreviated[:split] + parts[split:])) > length:
            break
        expanded += 1

    if not expanded:
        # not even the last part fits, keep as much of it as possible
        prefix = abbreviated[:-1]
        remaining = length - 2 * len(prefix)
        return ".".join(prefix + [parts[-1][: max(remaining, 1)]])

    split = len(parts) - expanded
    return ".".join(abbreviated[:split] + parts[split:])


_SIGNATURE = re.compile(r"(Signature=)[0-9a-fA-F]+")


class AwsTraceLoggingFormatter(logging.Formatter):
    """
    Formats the records of the ``RequestLogger``: the service request with the signed request headers, and the parsed
    response (or the code, message and members of the error) with the response headers.

    Blobs larger than ``bytes_length_display_threshold`` (like the ``Data`` of a record) are replaced with their size,
    the signature and the session token in the request headers are masked, and the ``ResponseMetadata`` is left out
    of the output since the response headers are printed anyway.
    """

    aws_trace_log_format = (
        LOG_FORMAT
        + "; %(input_type)s(%(input)s, headers=%(request_headers)s); %(output_type)s(%(output)s, headers=%(response_headers)s)"
    )
    bytes_length_display_threshold = 512

    def __init__(self):
        super().__init__(fmt=self.aws_trace_log_format, datefmt=LOG_DATE_FORMAT)

    def _format_payload(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: self._format_payload(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._format_payload(item) for item in value]
        if isinstance(value, (bytes, bytearray)) and len(value) > self.bytes_length_display_threshold:
            return f"Bytes({format_bytes(len(value))})"
        return value

    @staticmethod
    def _mask_headers(headers: Dict[str, Any]) -> Dict[str, Any]:
        masked = {}
        for key, value in (headers or {}).items():
            if key.lower() == "authorization":
                value = _SIGNATURE.sub(r"\1***", str(value))
            elif key.lower() == "x-amz-security-token":
                value = "***"
            masked[key] = value
        return masked

    def format(self, record: logging.LogRecord) -> str:
        output = getattr(record, "output", None)
        if isinstance(output, dict):
            output = {key: value for key, value in output.items() if key != "ResponseMetadata"}

        record.input = self._format_payload(getattr(record, "input", None))
        record.output = self._format_payload(output)
        record.request_headers = self._mask_headers(getattr(record, "request_headers", None))
        return super().format(record=record)
