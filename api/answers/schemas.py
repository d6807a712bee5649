"""
Pydantic schemas for answer endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

MAX_CONTENT_LENGTH = 300


class AnswerPayload(BaseModel):
    content: str = Field(..., min_length=1, max_length=MAX_CONTENT_LENGTH)
