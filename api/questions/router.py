"""
Question API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query, status

from core import db

from . import schemas, service

router = APIRouter()


@router.get("/questions", summary="Get all questions")
async def list_questions(database: db.Database = Depends(db.get_db)) -> list[dict]:
    return await service.list_questions(database)


# Declared before /questions/{question_id} so "search" is not parsed as an id.
@router.get("/questions/search", summary="Search questions by title or category")
async def search_questions(
    title: str | None = Query(default=None, description="Substring of the title"),
    category: str | None = Query(default=None, description="Substring of the category"),
    database: db.Database = Depends(db.get_db),
) -> dict:
    rows = await service.search_questions(database, title=title, category=category)
    return {"data": rows}


@router.get("/questions/{question_id}", summary="Get a specific question by ID")
async def get_question(
    question_id: int = Path(..., ge=1, le=db.MAX_ID),
    database: db.Database = Depends(db.get_db),
) -> dict:
    question = await service.get_question(database, question_id)
    return {"data": [question]}


@router.post("/questions", status_code=status.HTTP_201_CREATED, summary="Create a new question")
async def create_question(
    payload: schemas.QuestionPayload,
    database: db.Database = Depends(db.get_db),
) -> dict:
    question = await service.create_question(database, payload)
    return {"message": "Question created successfully.", "data": question}


@router.put("/questions/{question_id}", summary="Update a specific question")
async def update_question(
    payload: schemas.QuestionPayload,
    question_id: int = Path(..., ge=1, le=db.MAX_ID),
    database: db.Database = Depends(db.get_db),
) -> dict:
    await service.update_question(database, question_id, payload)
    return {"message": "Question updated successfully."}


@router.delete("/questions/{question_id}", summary="Delete a question")
async def delete_question(
    question_id: int = Path(..., ge=1, le=db.MAX_ID),
    database: db.Database = Depends(db.get_db),
) -> dict:
    """
    Delete a question. Its answers and all related votes go with it.
    """
    await service.delete_question(database, question_id)
    return {"message": "Question post has been deleted successfully."}
