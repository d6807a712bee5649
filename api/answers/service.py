"""
Answer business logic.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from core.db import Database
from core.errors import store_errors
from questions.service import QUESTION_NOT_FOUND

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_answer(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "question_id": int(row["question_id"]),
        "answer_id": int(row["answer_id"]),
        "content": str(row["content"]),
    }


async def list_answers(database: Database, question_id: int) -> list[dict[str, Any]]:
    with store_errors("Unable to fetch answers."):
        rows = await repository.list_answers(database, question_id)
    return [_to_answer(row) for row in rows]


async def create_answer(
    database: Database,
    question_id: int,
    payload: schemas.AnswerPayload,
) -> dict[str, Any]:
    with store_errors("Unable to create answers."):
        row = await repository.create_answer(database, question_id, content=payload.content)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=QUESTION_NOT_FOUND)
    logger.info("answer_created id=%s question_id=%s", row["id"], question_id)
    return {
        "question_id": int(row["question_id"]),
        "answer_id": int(row["id"]),
        "content": str(row["content"]),
    }


async def delete_answers(database: Database, question_id: int) -> int:
    with store_errors("Unable to delete answers."):
        deleted = await repository.delete_answers_for_question(database, question_id)
    if deleted is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=QUESTION_NOT_FOUND)
    logger.info("answers_deleted question_id=%s count=%s", question_id, deleted)
    return deleted
