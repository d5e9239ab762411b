"""Common schemas shared across modules."""

from .schemas import BaseResponse, MessageResponse

__all__ = [
    "BaseResponse",
    "MessageResponse",
]
