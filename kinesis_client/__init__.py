from kinesis_client.version import __version__  # noqa: F401

from botocore import UNSIGNED  # noqa: F401

from kinesis_client.aws.api import (  # noqa: F401
    ClientException,
    CommonServiceException,
    RedirectionException,
    ServerException,
    ServiceException,
)
from kinesis_client.aws.api.kinesis import (  # noqa: F401
    EncryptionType,
    InvalidArgumentException,
    KMSAccessDeniedException,
    KMSDisabledException,
    KMSInvalidStateException,
    KMSNotFoundException,
    KMSOptInRequired,
    KMSThrottlingException,
    LimitExceededException,
    ProvisionedThroughputExceededException,
    ResourceInUseException,
    ResourceNotFoundException,
)
from kinesis_client.aws.protocol.validate import ParameterValidationError  # noqa: F401
from kinesis_client.http import NetworkException  # noqa: F401
from kinesis_client.services.kinesis import (  # noqa: F401
    KinesisClient,
    PutRecordResult,
    PutRecordsResult,
    RegisterStreamConsumerResult,
)
