"""
Question persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Database

from .search import SearchQuery


async def list_questions(database: Database) -> list[dict[str, Any]]:
    return await database.fetch_all(
        """
        SELECT id, title, category, description
        FROM questions
        ORDER BY id
        """
    )


async def search_questions(database: Database, query: SearchQuery) -> list[dict[str, Any]]:
    return await database.fetch_all(
        f"""
        SELECT id, title, category, description
        FROM questions
        WHERE {query.where()}
        ORDER BY id
        """,
        *query.args,
    )


async def get_question(database: Database, question_id: int) -> dict[str, Any] | None:
    return await database.fetch_one(
        """
        SELECT id, title, category, description
        FROM questions
        WHERE id = $1
        """,
        question_id,
    )


async def create_question(
    database: Database,
    *,
    title: str,
    description: str,
    category: str,
) -> dict[str, Any]:
    row = await database.fetch_one(
        """
        INSERT INTO questions (title, description, category)
        VALUES ($1, $2, $3)
        RETURNING id, title, category, description
        """,
        title,
        description,
        category,
    )
    if row is None:
        raise RuntimeError("Failed to insert question.")
    return row


async def update_question(
    database: Database,
    question_id: int,
    *,
    title: str,
    description: str,
    category: str,
) -> dict[str, Any] | None:
    """
    Full-row update. Returns None when no question has this id.
    """
    return await database.fetch_one(
        """
        UPDATE questions
        SET title = $2, description = $3, category = $4
        WHERE id = $1
        RETURNING id, title, category, description
        """,
        question_id,
        title,
        description,
        category,
    )


async def lock_question(database: Database, question_id: int) -> bool:
    """
    Lock the question row for the rest of the transaction.
    Returns False when it does not exist.
    """
    row = await database.fetch_one(
        """
        SELECT id
        FROM questions
        WHERE id = $1
        FOR UPDATE
        """,
        question_id,
    )
    return row is not None


async def lock_answers(database: Database, question_id: int) -> list[int]:
    """
    Lock every answer row of the question so no vote can attach to them
    until the transaction ends. Returns the locked answer ids.
    """
    rows = await database.fetch_all(
        """
        SELECT id
        FROM answers
        WHERE question_id = $1
        FOR UPDATE
        """,
        question_id,
    )
    return [int(row["id"]) for row in rows]


async def delete_question(database: Database, question_id: int) -> bool:
    """
    Delete a question together with its answers and all their votes.

    Runs in one transaction; returns False (and changes nothing) when the
    question does not exist.
    """
    async with database.transaction() as tx:
        if not await lock_question(tx, question_id):
            return False
        await lock_answers(tx, question_id)
        await tx.execute(
            """
            DELETE FROM answer_votes
            WHERE answer_id IN (SELECT id FROM answers WHERE question_id = $1)
            """,
            question_id,
        )
        await tx.execute("DELETE FROM answers WHERE question_id = $1", question_id)
        await tx.execute("DELETE FROM question_votes WHERE question_id = $1", question_id)
        await tx.execute("DELETE FROM questions WHERE id = $1", question_id)
    return True
