from .client import KinesisClient
from .results import PutRecordResult, PutRecordsResult, RegisterStreamConsumerResult

__all__ = [
    "KinesisClient",
    "PutRecordResult",
    "PutRecordsResult",
    "RegisterStreamConsumerResult",
]
