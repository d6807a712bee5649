"""
Answer persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core.db import Database
from questions import repository as question_repository


async def list_answers(database: Database, question_id: int) -> list[dict[str, Any]]:
    return await database.fetch_all(
        """
        SELECT questions.id AS question_id, answers.id AS answer_id, answers.content
        FROM answers
        INNER JOIN questions ON questions.id = answers.question_id
        WHERE questions.id = $1
        ORDER BY answers.id
        """,
        question_id,
    )


async def create_answer(database: Database, question_id: int, *, content: str) -> dict[str, Any] | None:
    """
    Insert an answer only if the question exists, in a single statement.
    Returns None when the question is missing.
    """
    try:
        return await database.fetch_one(
            """
            INSERT INTO answers (question_id, content)
            SELECT q.id, $2::text
            FROM questions q
            WHERE q.id = $1
            RETURNING id, question_id, content
            """,
            question_id,
            content,
        )
    except asyncpg.ForeignKeyViolationError:
        # The question was deleted between the SELECT and the INSERT.
        return None


async def delete_answers_for_question(database: Database, question_id: int) -> int | None:
    """
    Delete every answer of a question, then the question itself.

    Returns the number of answers removed, or None (nothing changed) when the
    question does not exist.
    """
    async with database.transaction() as tx:
        if not await question_repository.lock_question(tx, question_id):
            return None
        await question_repository.lock_answers(tx, question_id)
        await tx.execute(
            """
            DELETE FROM answer_votes
            WHERE answer_id IN (SELECT id FROM answers WHERE question_id = $1)
            """,
            question_id,
        )
        deleted = await tx.fetch_all(
            """
            DELETE FROM answers
            WHERE question_id = $1
            RETURNING id
            """,
            question_id,
        )
        await tx.execute("DELETE FROM question_votes WHERE question_id = $1", question_id)
        await tx.execute("DELETE FROM questions WHERE id = $1", question_id)
    return len(deleted)
