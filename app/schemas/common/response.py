# --- File: app/schemas/common/response.py ---
"""
Error envelope returned by every failing request.
"""

from typing import List, Union

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
]


class ErrorDetail(BaseSchema):
    """Error detail information."""

    field: Union[str, None] = Field(
        default=None,
        description="Field name causing error",
    )
    message: str = Field(..., description="Error message")
    code: Union[str, None] = Field(
        default=None,
        description="Error code",
    )
    location: Union[List[str], None] = Field(
        default=None,
        description="Error location in nested structure",
    )


class ErrorResponse(BaseSchema):
    """Standard error response."""

    success: bool = Field(default=False, description="Success flag")
    message: str = Field(..., description="Error message")
    errors: Union[List[ErrorDetail], None] = Field(
        default=None,
        description="Detailed errors",
    )
    error_code: Union[str, None] = Field(
        default=None,
        description="Application error code",
    )
    timestamp: Union[str, None] = Field(
        default=None,
        description="Error timestamp",
    )
    path: Union[str, None] = Field(
        default=None,
        description="Request path that caused error",
    )

    @classmethod
    def create(
        cls,
        message: str,
        errors: Union[List[ErrorDetail], None] = None,
        error_code: Union[str, None] = None,
        path: Union[str, None] = None,
        timestamp: Union[str, None] = None,
    ):
        """Create error response."""
        return cls(
            success=False,
            message=message,
            errors=errors,
            error_code=error_code,
            path=path,
            timestamp=timestamp,
        )
