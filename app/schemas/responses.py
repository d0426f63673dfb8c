"""Standardized API Response Schemas"""

from typing import Generic, TypeVar
from pydantic import BaseModel, Field


T = TypeVar('T')


class SuccessResponse(BaseModel, Generic[T]):
    """
    Standard success response envelope.

    Example:
        {
            "success": true,
            "data": {"outstanding_balance": "1500.00", ...},
            "message": "Account summary retrieved"
        }
    """
    success: bool = True
    data: T
    message: str = "Operation successful"


class ErrorDetail(BaseModel):
    """Error details structure"""
    code: str
    message: str


class ErrorResponse(BaseModel):
    """
    Standard error response envelope.

    Example:
        {
            "success": false,
            "error": {
                "code": "CORRECTION_REJECTED",
                "message": "Target balance matches current balance. No fix needed."
            }
        }
    """
    success: bool = False
    error: ErrorDetail


class PaginationMeta(BaseModel):
    """Pagination metadata"""
    page: int = Field(..., ge=1, description="Current page number")
    page_size: int = Field(..., ge=1, le=100, description="Items per page")
    total: int = Field(..., ge=0, description="Total number of items")
    total_pages: int = Field(..., ge=0, description="Total number of pages")


class PaginatedResponse(BaseModel, Generic[T]):
    """List response with pagination metadata (students, audit log)"""
    success: bool = True
    data: list[T]
    meta: PaginationMeta
    message: str = "Operation successful"


def paginate(items: list, page: int, page_size: int) -> dict:
    """Slice ``items`` for one page and build the matching meta block."""
    total = len(items)
    start = (page - 1) * page_size
    return {
        "data": items[start:start + page_size],
        "meta": {
            "page": page,
            "page_size": page_size,
            "total": total,
            "total_pages": (total + page_size - 1) // page_size,
        },
    }
