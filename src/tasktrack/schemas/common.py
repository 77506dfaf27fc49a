"""Shared response schemas."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PageRead(BaseModel, Generic[T]):
    """One page of results (zero-based page numbers)."""
    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Body of every error response; `error` is the ErrorKind."""
    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
