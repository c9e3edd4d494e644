"""Domain errors raised by the service layer."""


class LinkshelfError(Exception):
    """Base class for service-layer errors."""


class UserAlreadyExistsError(LinkshelfError):
    """An account with this email is already registered."""

    def __init__(self, email: str):
        super().__init__(f"User with email {email} already exists")
        self.email = email


class RecordDecodeError(LinkshelfError):
    """A stored row does not fit the typed record shape."""

    def __init__(self, table: str, record_id: str | None, reason: str):
        super().__init__(f"Cannot decode {table} record {record_id}: {reason}")
        self.table = table
        self.record_id = record_id
        self.reason = reason
