"""Exceptions raised by the catalog and order service."""


class StoreError(Exception):
    """Base exception for all store errors."""

    status_code = 500


class NotFoundError(StoreError):
    """Raised when no record matches an identifier."""

    status_code = 404

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} not found")


class InvalidRecordError(StoreError):
    """Raised when a record fails validation or violates a unique index."""

    status_code = 400
