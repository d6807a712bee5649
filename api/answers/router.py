"""
Answer API endpoints (nested under a question).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status

from core import db

from . import schemas, service

router = APIRouter()


@router.get("/questions/{question_id}/answers", summary="Get answers for a question")
async def list_answers(
    question_id: int = Path(..., ge=1, le=db.MAX_ID),
    database: db.Database = Depends(db.get_db),
) -> dict:
    rows = await service.list_answers(database, question_id)
    return {"data": rows}


@router.post(
    "/questions/{question_id}/answers",
    status_code=status.HTTP_201_CREATED,
    summary="Answer a question",
)
async def create_answer(
    payload: schemas.AnswerPayload,
    question_id: int = Path(..., ge=1, le=db.MAX_ID),
    database: db.Database = Depends(db.get_db),
) -> dict:
    await service.create_answer(database, question_id, payload)
    return {"message": "Answer created successfully."}


@router.delete("/questions/{question_id}/answers", summary="Delete all answers of a question")
async def delete_answers(
    question_id: int = Path(..., ge=1, le=db.MAX_ID),
    database: db.Database = Depends(db.get_db),
) -> dict:
    """
    Delete every answer of the question. The question itself is deleted too.
    """
    await service.delete_answers(database, question_id)
    return {"message": "All answers for the question have been deleted successfully."}
