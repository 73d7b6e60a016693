from typing import List, Optional

from kinesis_client.aws.api.kinesis import (
    Consumer,
    EncryptionType,
    PutRecordsResultEntry,
    SequenceNumber,
    ShardId,
)
from kinesis_client.aws.result import Result


class PutRecordResult(Result):
    @property
    def shard_id(self) -> ShardId:
        """The shard ID of the shard where the data record was placed."""
        return self.output.get("ShardId")

    @property
    def sequence_number(self) -> SequenceNumber:
        """The sequence number identifier that was assigned to the put data record."""
        return self.output.get("SequenceNumber")

    @property
    def encryption_type(self) -> Optional[EncryptionType]:
        return self.output.get("EncryptionType")


class PutRecordsResult(Result):
    @property
    def failed_record_count(self) -> int:
        """The number of unsuccessfully processed records in a ``PutRecords`` request."""
        return self.output.get("FailedRecordCount") or 0

    @property
    def records(self) -> List[PutRecordsResultEntry]:
        """
        The results of the records, in the order of the request. A successful entry contains ``ShardId`` and
        ``SequenceNumber``, a failed entry ``ErrorCode`` and ``ErrorMessage``.
        """
        return self.output.get("Records") or []

    @property
    def encryption_type(self) -> Optional[EncryptionType]:
        return self.output.get("EncryptionType")


class RegisterStreamConsumerResult(Result):
    @property
    def consumer(self) -> Consumer:
        """The registered consumer, its status is ``CREATING`` until the consumer can be used."""
        return self.output.get("Consumer")
