"""
Pydantic schemas for vote endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictInt

from core.db import MAX_VOTE, MIN_VOTE


class VotePayload(BaseModel):
    # Strict: booleans, numeric strings and floats are rejected.
    vote: StrictInt = Field(..., ge=MIN_VOTE, le=MAX_VOTE)
