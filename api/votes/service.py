"""
Vote business logic.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from core.db import Database
from core.errors import store_errors
from questions.service import QUESTION_NOT_FOUND

from . import repository, schemas

ANSWER_NOT_FOUND = "Answer not found."

logger = logging.getLogger(__name__)


async def vote_question(database: Database, question_id: int, payload: schemas.VotePayload) -> None:
    with store_errors("Unable to vote question."):
        row = await repository.create_question_vote(database, question_id, vote=payload.vote)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=QUESTION_NOT_FOUND)
    logger.info("question_voted question_id=%s vote=%s", question_id, payload.vote)


async def vote_answer(database: Database, answer_id: int, payload: schemas.VotePayload) -> None:
    with store_errors("Unable to vote answer."):
        row = await repository.create_answer_vote(database, answer_id, vote=payload.vote)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ANSWER_NOT_FOUND)
    logger.info("answer_voted answer_id=%s vote=%s", answer_id, payload.vote)


async def question_tally(database: Database, question_id: int) -> dict[str, Any]:
    with store_errors("Unable to fetch votes."):
        row = await repository.question_vote_tally(database, question_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=QUESTION_NOT_FOUND)
    return {
        "question_id": int(row["question_id"]),
        "count": int(row["count"]),
        "score": int(row["score"]),
    }


async def answer_tally(database: Database, answer_id: int) -> dict[str, Any]:
    with store_errors("Unable to fetch votes."):
        row = await repository.answer_vote_tally(database, answer_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ANSWER_NOT_FOUND)
    return {
        "answer_id": int(row["answer_id"]),
        "count": int(row["count"]),
        "score": int(row["score"]),
    }
