"""Error body returned by every failing endpoint."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class FieldErrorOut(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    timestamp: datetime = Field(default_factory=datetime.now)
    status: int
    error: str
    message: str
    path: str
    errors: Optional[List[FieldErrorOut]] = None
