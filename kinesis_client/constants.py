from kinesis_client.version import __version__

# kinesis-client version
VERSION = __version__

# user agent sent with every request
USER_AGENT = f"kinesis-client/{VERSION}"

# default region used when neither the client nor the environment specify one
AWS_REGION_US_EAST_1 = "us-east-1"

# name of the service in the botocore data directory, also used as the SigV4 signing name
KINESIS_SERVICE_NAME = "kinesis"
KINESIS_API_VERSION = "2013-12-02"

# HTTP headers used by the json protocol
HEADER_AMZ_TARGET = "X-Amz-Target"
HEADER_AMZN_ERROR_TYPE = "X-Amzn-Errortype"
HEADER_AMZN_REQUEST_ID = "x-amzn-RequestId"
HEADER_AMZ_ID_2 = "x-amz-id-2"

# supported signature versions
SIGNATURE_VERSION_V4 = "v4"

# placeholder which is replaced with the request region in custom endpoint URLs
ENDPOINT_REGION_PLACEHOLDER = "%region%"

TRUE_STRINGS = ("1", "true", "True")
FALSE_STRINGS = ("0", "false", "False")

LOG_LEVELS = ("trace", "debug", "info", "warn", "error", "warning")

# trace log level (logging request and response payloads), configurable via $KINESIS_CLIENT_LOG
LOG_TRACE = "trace"
TRACE_LOG_LEVELS = [LOG_TRACE]

# default number of worker threads used to dispatch deferred calls
DEFAULT_MAX_WORKERS = 10

# default timeouts (in seconds) of the HTTP transport
DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_READ_TIMEOUT = 60
