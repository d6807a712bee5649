"""
Vote API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from core import db

from . import schemas, service

router = APIRouter()


@router.post("/questions/{question_id}/vote", summary="Vote on a question")
async def vote_question(
    payload: schemas.VotePayload,
    question_id: int = Path(..., ge=1, le=db.MAX_ID),
    database: db.Database = Depends(db.get_db),
) -> dict:
    await service.vote_question(database, question_id, payload)
    return {"message": "Vote on the question has been recorded successfully."}


@router.post("/answers/{answer_id}/vote", summary="Vote on an answer")
async def vote_answer(
    payload: schemas.VotePayload,
    answer_id: int = Path(..., ge=1, le=db.MAX_ID),
    database: db.Database = Depends(db.get_db),
) -> dict:
    await service.vote_answer(database, answer_id, payload)
    return {"message": "Vote on the answer has been recorded successfully."}


@router.get("/questions/{question_id}/vote", summary="Vote tally of a question")
async def question_tally(
    question_id: int = Path(..., ge=1, le=db.MAX_ID),
    database: db.Database = Depends(db.get_db),
) -> dict:
    return {"data": await service.question_tally(database, question_id)}


@router.get("/answers/{answer_id}/vote", summary="Vote tally of an answer")
async def answer_tally(
    answer_id: int = Path(..., ge=1, le=db.MAX_ID),
    database: db.Database = Depends(db.get_db),
) -> dict:
    return {"data": await service.answer_tally(database, answer_id)}
