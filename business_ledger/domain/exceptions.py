"""Domain-specific exceptions"""

from typing import List


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Input payload is missing required fields or has bad values"""

    def __init__(self, messages: List[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class NotFoundError(DomainException):
    """Identifier does not match any record in the collection"""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record {record_id!r} not found")


class StorageError(DomainException):
    """Durable dataset could not be read or written"""

    pass


class AssistantUnavailable(DomainException):
    """Remote completion service failed or returned an unusable reply"""

    pass
