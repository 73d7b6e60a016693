import logging
import os
import time
from typing import Optional, Union

from kinesis_client.constants import (
    AWS_REGION_US_EAST_1,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_WORKERS,
    DEFAULT_READ_TIMEOUT,
    FALSE_STRINGS,
    LOG_LEVELS,
    TRACE_LOG_LEVELS,
    TRUE_STRINGS,
)

# keep track of start time, for performance debugging
load_start_time = time.time()


def eval_log_type(env_var_name: str) -> Union[str, bool]:
    """Get the log type from environment variable"""
    log_type = os.environ.get(env_var_name, "").lower().strip()
    return log_type if log_type in LOG_LEVELS else False


def parse_boolean_env(env_var_name: str) -> Optional[bool]:
    """Parse the value of the given env variable and return True/False, or None if it is not a boolean value."""
    value = os.environ.get(env_var_name, "").lower().strip()
    if value in TRUE_STRINGS:
        return True
    if value in FALSE_STRINGS:
        return False
    return None


def is_env_true(env_var_name: str) -> bool:
    """Whether the given environment variable has a truthy value."""
    return os.environ.get(env_var_name, "").lower().strip() in TRUE_STRINGS


def is_env_not_false(env_var_name: str) -> bool:
    """Whether the given environment variable is empty or has a truthy value."""
    return os.environ.get(env_var_name, "").lower().strip() not in FALSE_STRINGS


def _parse_float_env(env_var_name: str, default: float) -> float:
    value = os.environ.get(env_var_name, "").strip()
    return float(value) if value else default


# default region of new clients, follows the lookup order of the AWS CLI
DEFAULT_REGION = (
    os.environ.get("AWS_REGION", "").strip()
    or os.environ.get("AWS_DEFAULT_REGION", "").strip()
    or AWS_REGION_US_EAST_1
)

# custom endpoint of the kinesis service (e.g., "http://localhost:4566" or "https://%region%.example.com")
ENDPOINT_URL = (
    os.environ.get("AWS_ENDPOINT_URL_KINESIS", "").strip()
    or os.environ.get("AWS_ENDPOINT_URL", "").strip()
    or None
)

# log level of the client loggers ("trace" additionally logs the request and response payloads)
KINESIS_CLIENT_LOG = eval_log_type("KINESIS_CLIENT_LOG")
DEBUG = is_env_true("DEBUG") or KINESIS_CLIENT_LOG in TRACE_LOG_LEVELS

# timeouts of the HTTP transport in seconds
CONNECT_TIMEOUT = _parse_float_env("KINESIS_CLIENT_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT)
READ_TIMEOUT = _parse_float_env("KINESIS_CLIENT_READ_TIMEOUT", DEFAULT_READ_TIMEOUT)

# whether the TLS certificates of the endpoint are verified
VERIFY_SSL = is_env_not_false("KINESIS_CLIENT_VERIFY_SSL")

# number of worker threads a client uses to dispatch calls
MAX_WORKERS = int(os.environ.get("KINESIS_CLIENT_MAX_WORKERS", "").strip() or DEFAULT_MAX_WORKERS)

DEFAULT_ENCODING = "utf-8"


def is_trace_logging_enabled():
    if KINESIS_CLIENT_LOG:
        log_level = str(KINESIS_CLIENT_LOG).upper()
        return log_level.lower() in TRACE_LOG_LEVELS
    return False


# set log levels immediately, but will be overwritten later by setup_logging
if DEBUG:
    logging.getLogger("kinesis_client").setLevel(logging.DEBUG)

LOG = logging.getLogger(__name__)
if is_trace_logging_enabled():
    load_end_time = time.time()
    LOG.debug(
        "Initializing the configuration took %s ms", int((load_end_time - load_start_time) * 1000)
    )
