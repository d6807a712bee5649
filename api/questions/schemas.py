"""
Pydantic schemas for question endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class QuestionPayload(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
