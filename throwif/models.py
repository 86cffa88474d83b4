from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from throwif.errors import ErrorCode


class ErrorResponse(BaseModel):
    error: str
    code: ErrorCode
    details: dict[str, object] | None = None
    timestamp: datetime
