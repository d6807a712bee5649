"""
Vote persistence (raw SQL).

Votes are append-only rows; tallies are computed on read.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core.db import Database


async def create_question_vote(database: Database, question_id: int, *, vote: int) -> dict[str, Any] | None:
    """
    Record a vote if the question exists. Returns None otherwise.
    """
    try:
        return await database.fetch_one(
            """
            INSERT INTO question_votes (question_id, vote)
            SELECT q.id, $2::integer
            FROM questions q
            WHERE q.id = $1
            RETURNING id, question_id, vote, created_at
            """,
            question_id,
            vote,
        )
    except asyncpg.ForeignKeyViolationError:
        return None


async def create_answer_vote(database: Database, answer_id: int, *, vote: int) -> dict[str, Any] | None:
    """
    Record a vote if the answer exists. Returns None otherwise.
    """
    try:
        return await database.fetch_one(
            """
            INSERT INTO answer_votes (answer_id, vote)
            SELECT a.id, $2::integer
            FROM answers a
            WHERE a.id = $1
            RETURNING id, answer_id, vote, created_at
            """,
            answer_id,
            vote,
        )
    except asyncpg.ForeignKeyViolationError:
        return None


async def question_vote_tally(database: Database, question_id: int) -> dict[str, Any] | None:
    return await database.fetch_one(
        """
        SELECT q.id AS question_id, count(v.id) AS count, COALESCE(sum(v.vote), 0) AS score
        FROM questions q
        LEFT JOIN question_votes v ON v.question_id = q.id
        WHERE q.id = $1
        GROUP BY q.id
        """,
        question_id,
    )


async def answer_vote_tally(database: Database, answer_id: int) -> dict[str, Any] | None:
    return await database.fetch_one(
        """
        SELECT a.id AS answer_id, count(v.id) AS count, COALESCE(sum(v.vote), 0) AS score
        FROM answers a
        LEFT JOIN answer_votes v ON v.answer_id = a.id
        WHERE a.id = $1
        GROUP BY a.id
        """,
        answer_id,
    )
