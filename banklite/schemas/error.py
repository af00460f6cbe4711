"""Error body returned by the mapped exception handlers."""

from datetime import datetime

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """
    Structured error payload.

    timestamp is a local (naive) datetime, serialized as ISO-8601 without
    an offset. path is the request path that produced the error.
    """
    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
