"""Domain-specific exceptions.

The metrics engine itself never raises these: sparse data degrades to
neutral values. They belong to the boundary that loads records.
"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class RecordStoreError(DomainException):
    """Record store returned an error, is unavailable, or sent a malformed payload"""

    pass


class InvalidRecordError(DomainException):
    """A record violates a model invariant (e.g. zero-amount transaction)"""

    pass
