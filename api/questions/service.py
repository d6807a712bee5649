"""
Question business logic.

Maps repository outcomes to HTTP outcomes: missing rows become 404, store
failures become `StoreError` (rendered as 500 by the global handler).
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from core.db import Database
from core.errors import store_errors

from . import repository, schemas, search

QUESTION_NOT_FOUND = "Question not found."

logger = logging.getLogger(__name__)


def _to_question(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "title": str(row["title"]),
        "category": str(row["category"]),
        "description": str(row["description"]),
    }


async def list_questions(database: Database) -> list[dict[str, Any]]:
    with store_errors("Unable to fetch questions."):
        rows = await repository.list_questions(database)
    return [_to_question(row) for row in rows]


async def search_questions(
    database: Database,
    *,
    title: str | None = None,
    category: str | None = None,
) -> list[dict[str, Any]]:
    try:
        query = search.build_search_query(title=title, category=category)
    except search.InvalidSearch as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid search parameters.",
        ) from exc

    with store_errors("Unable to fetch a question."):
        rows = await repository.search_questions(database, query)
    return [_to_question(row) for row in rows]


async def get_question(database: Database, question_id: int) -> dict[str, Any]:
    with store_errors("Unable to fetch questions."):
        row = await repository.get_question(database, question_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=QUESTION_NOT_FOUND)
    return _to_question(row)


async def create_question(database: Database, payload: schemas.QuestionPayload) -> dict[str, Any]:
    with store_errors("Unable to create question."):
        row = await repository.create_question(
            database,
            title=payload.title,
            description=payload.description,
            category=payload.category,
        )
    logger.info("question_created id=%s", row["id"])
    return _to_question(row)


async def update_question(
    database: Database,
    question_id: int,
    payload: schemas.QuestionPayload,
) -> dict[str, Any]:
    with store_errors("Unable to update question."):
        row = await repository.update_question(
            database,
            question_id,
            title=payload.title,
            description=payload.description,
            category=payload.category,
        )
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=QUESTION_NOT_FOUND)
    logger.info("question_updated id=%s", question_id)
    return _to_question(row)


async def delete_question(database: Database, question_id: int) -> None:
    with store_errors("Unable to delete question."):
        deleted = await repository.delete_question(database, question_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=QUESTION_NOT_FOUND)
    logger.info("question_deleted id=%s", question_id)
