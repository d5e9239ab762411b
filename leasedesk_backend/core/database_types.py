"""Custom database types."""

import uuid

from sqlalchemy import CHAR, TypeDecorator


class UUID(TypeDecorator):
    """Portable UUID column.

    Stored as CHAR(36) so MySQL and SQLite behave the same; values are
    always handed back to Python as ``uuid.UUID``.
    """

    impl = CHAR(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(str(value))
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)
