"""Base response models for SkillSwap API.

This module contains standardized response models used across
the API to ensure consistent response formats.
"""

from datetime import datetime
from typing import (
    Any,
    Dict,
    Optional,
)

from pydantic import (
    BaseModel,
    Field,
)

from skillswap.domain.services.pagination import Page
from skillswap.shared.utils.time import utc_now


class BaseResponse(BaseModel):
    """Base response model for all successful API responses.

    Endpoint responses extend it with their payload keys at the top level.
    """

    success: bool = Field(True, description="Whether the operation was successful")
    message: Optional[str] = Field(None, description="Response message")


class ErrorResponse(BaseModel):
    """Standard error response model."""

    success: bool = Field(False, description="Always false for errors")
    error: str = Field(description="Error type or code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None, description="Additional error details"
    )
    timestamp: datetime = Field(
        default_factory=utc_now, description="Error timestamp"
    )


class PaginationInfo(BaseModel):
    """Pagination information model."""

    page: int = Field(description="Current page number")
    limit: int = Field(description="Items per page")
    total: int = Field(description="Total number of items")
    pages: int = Field(description="Total number of pages")

    @classmethod
    def from_page(cls, page: Page) -> "PaginationInfo":
        return cls(page=page.page, limit=page.limit, total=page.total, pages=page.pages)


class StatusResponse(BaseModel):
    """Status response model for health checks and status endpoints."""

    status: str = Field(description="Service status")
    version: Optional[str] = Field(None, description="API version")
    environment: Optional[str] = Field(None, description="Running environment")
    checks: Optional[Dict[str, Any]] = Field(None, description="Health check results")
    timestamp: datetime = Field(
        default_factory=utc_now, description="Response timestamp"
    )
