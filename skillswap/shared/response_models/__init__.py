"""Shared response models."""

from skillswap.shared.response_models.base import (
    BaseResponse,
    ErrorResponse,
    PaginationInfo,
    StatusResponse,
)

__all__ = [
    "BaseResponse",
    "ErrorResponse",
    "PaginationInfo",
    "StatusResponse",
]
