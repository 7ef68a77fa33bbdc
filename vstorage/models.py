"""
API response models for consistent response formatting.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict


class ErrorResponse(BaseModel):
    """Standard error response format."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "error": "Not Found",
                "message": "File not found: reports/today.txt"
            }
        }
    )

    success: bool = Field(
        False,
        description="Always false for error responses"
    )

    error: str = Field(
        ...,
        description="Brief error description"
    )

    message: str = Field(
        ...,
        description="Detailed error message"
    )


class SuccessResponse(BaseModel):
    """Standard success response format for simple operations."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "File stored",
                "data": {
                    "path": "reports/today.txt"
                }
            }
        }
    )

    success: bool = Field(
        True,
        description="Always true for success responses"
    )

    message: str = Field(
        ...,
        description="Success message"
    )

    data: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional response data"
    )


class ExistsResponse(BaseModel):
    """Existence check result for one path."""

    path: str = Field(
        ...,
        description="Requested storage path",
        min_length=1
    )

    exists: bool = Field(
        ...,
        description="Whether any adapter holds the path"
    )
