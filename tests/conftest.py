"""Shared fixtures: an in-memory fake store and an HTTP client bound to the app.

The fake understands exactly the SQL statements the repositories issue
(whitespace-insensitive) and keeps rows in plain dicts. Every statement is
recorded in `fake_db.statements` so tests can assert that nothing was written.
"""

import copy
import re
from contextlib import asynccontextmanager
from itertools import count

import pytest
from httpx import ASGITransport, AsyncClient

from core import db
from main import app

QUESTION_COLUMNS = ("id", "title", "category", "description")


def _normalize(sql: str) -> str:
    return " ".join(sql.split())


def _ilike(value: str, pattern: str) -> bool:
    regex = "".join(
        ".*" if ch == "%" else "." if ch == "_" else re.escape(ch)
        for ch in pattern
    )
    return re.fullmatch(regex, value, flags=re.IGNORECASE | re.DOTALL) is not None


class FakeDatabase:
    def __init__(self):
        self.tables = {
            "questions": [],
            "answers": [],
            "question_votes": [],
            "answer_votes": [],
        }
        self._ids = {name: count(1) for name in self.tables}
        self.statements = []
        self.fail_with = None

    # Seeding helpers

    def insert(self, table, **values):
        row = {"id": next(self._ids[table]), **values}
        self.tables[table].append(row)
        return dict(row)

    def question(self, question_id):
        return next((q for q in self.tables["questions"] if q["id"] == question_id), None)

    def mutations(self):
        return [sql for sql, _ in self.statements if not sql.startswith("SELECT")]

    # Database interface

    async def fetch_one(self, sql, *args):
        rows = self._run(sql, args)
        return rows[0] if rows else None

    async def fetch_all(self, sql, *args):
        return self._run(sql, args)

    async def execute(self, sql, *args):
        rows = self._run(sql, args)
        return f"OK {len(rows)}"

    @asynccontextmanager
    async def transaction(self):
        snapshot = copy.deepcopy(self.tables)
        try:
            yield self
        except BaseException:
            self.tables = snapshot
            raise

    # SQL emulation

    def _run(self, sql, args):
        if self.fail_with is not None:
            raise self.fail_with
        sql = _normalize(sql)
        self.statements.append((sql, args))
        for prefix, handler in self._handlers():
            if sql.startswith(prefix):
                return [dict(row) for row in handler(sql, args)]
        raise AssertionError(f"FakeDatabase does not understand: {sql}")

    def _handlers(self):
        return [
            ("SELECT id, title, category, description FROM questions ORDER BY id", self._list_questions),
            ("SELECT id, title, category, description FROM questions WHERE id = $1", self._get_question),
            ("SELECT id, title, category, description FROM questions WHERE", self._search_questions),
            ("SELECT id FROM questions WHERE id = $1 FOR UPDATE", self._get_question),
            ("SELECT id FROM answers WHERE question_id = $1 FOR UPDATE", self._lock_answers),
            ("INSERT INTO questions", self._insert_question),
            ("UPDATE questions", self._update_question),
            ("DELETE FROM answer_votes", self._delete_answer_votes_of_question),
            ("DELETE FROM answers WHERE question_id = $1", self._delete_answers),
            ("DELETE FROM question_votes WHERE question_id = $1", self._delete_question_votes),
            ("DELETE FROM questions WHERE id = $1", self._delete_question),
            ("SELECT questions.id AS question_id", self._list_answers),
            ("INSERT INTO answers", self._insert_answer),
            ("INSERT INTO question_votes", self._insert_question_vote),
            ("INSERT INTO answer_votes", self._insert_answer_vote),
            ("SELECT q.id AS question_id", self._question_tally),
            ("SELECT a.id AS answer_id", self._answer_tally),
        ]

    def _list_questions(self, sql, args):
        return sorted(self.tables["questions"], key=lambda q: q["id"])

    def _get_question(self, sql, args):
        row = self.question(args[0])
        return [row] if row else []

    def _search_questions(self, sql, args):
        where = re.search(r"WHERE (.+) ORDER BY id$", sql).group(1)
        predicates = []
        for clause in where.split(" AND "):
            column, position = re.fullmatch(r"(\w+) ILIKE \$(\d+)", clause).groups()
            predicates.append((column, args[int(position) - 1]))
        return [
            q for q in self._list_questions(sql, args)
            if all(_ilike(q[column], pattern) for column, pattern in predicates)
        ]

    def _insert_question(self, sql, args):
        title, description, category = args
        return [self.insert("questions", title=title, description=description, category=category)]

    def _update_question(self, sql, args):
        question_id, title, description, category = args
        row = self.question(question_id)
        if row is None:
            return []
        row.update(title=title, description=description, category=category)
        return [row]

    def _lock_answers(self, sql, args):
        return [{"id": answer_id} for answer_id in sorted(self._answer_ids(args[0]))]

    def _answer_ids(self, question_id):
        return {a["id"] for a in self.tables["answers"] if a["question_id"] == question_id}

    def _delete_where(self, table, predicate):
        removed = [row for row in self.tables[table] if predicate(row)]
        self.tables[table] = [row for row in self.tables[table] if not predicate(row)]
        return removed

    def _delete_answer_votes_of_question(self, sql, args):
        answer_ids = self._answer_ids(args[0])
        return self._delete_where("answer_votes", lambda v: v["answer_id"] in answer_ids)

    def _delete_answers(self, sql, args):
        if any(v["answer_id"] in self._answer_ids(args[0]) for v in self.tables["answer_votes"]):
            raise AssertionError("foreign key violation: answer_votes still reference answers")
        return [{"id": a["id"]} for a in self._delete_where("answers", lambda a: a["question_id"] == args[0])]

    def _delete_question_votes(self, sql, args):
        return self._delete_where("question_votes", lambda v: v["question_id"] == args[0])

    def _delete_question(self, sql, args):
        question_id = args[0]
        if self._answer_ids(question_id) or any(
            v["question_id"] == question_id for v in self.tables["question_votes"]
        ):
            raise AssertionError("foreign key violation: rows still reference the question")
        return self._delete_where("questions", lambda q: q["id"] == question_id)

    def _list_answers(self, sql, args):
        if self.question(args[0]) is None:
            return []
        return [
            {"question_id": a["question_id"], "answer_id": a["id"], "content": a["content"]}
            for a in sorted(self.tables["answers"], key=lambda a: a["id"])
            if a["question_id"] == args[0]
        ]

    def _insert_answer(self, sql, args):
        question_id, content = args
        if self.question(question_id) is None:
            return []
        return [self.insert("answers", question_id=question_id, content=content)]

    def _insert_question_vote(self, sql, args):
        question_id, vote = args
        if self.question(question_id) is None:
            return []
        return [self.insert("question_votes", question_id=question_id, vote=vote, created_at=None)]

    def _insert_answer_vote(self, sql, args):
        answer_id, vote = args
        if not any(a["id"] == answer_id for a in self.tables["answers"]):
            return []
        return [self.insert("answer_votes", answer_id=answer_id, vote=vote, created_at=None)]

    def _question_tally(self, sql, args):
        if self.question(args[0]) is None:
            return []
        votes = [v["vote"] for v in self.tables["question_votes"] if v["question_id"] == args[0]]
        return [{"question_id": args[0], "count": len(votes), "score": sum(votes)}]

    def _answer_tally(self, sql, args):
        if not any(a["id"] == args[0] for a in self.tables["answers"]):
            return []
        votes = [v["vote"] for v in self.tables["answer_votes"] if v["answer_id"] == args[0]]
        return [{"answer_id": args[0], "count": len(votes), "score": sum(votes)}]


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
async def client(fake_db):
    """App client with the database dependency pointed at the fake store."""
    app.dependency_overrides[db.get_db] = lambda: fake_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def seed_question(fake_db):
    return fake_db.insert(
        "questions",
        title="What is a closure?",
        category="Programming",
        description="Explain closures in JavaScript.",
    )


@pytest.fixture
def seed_answer(fake_db, seed_question):
    return fake_db.insert(
        "answers",
        question_id=seed_question["id"],
        content="A function bundled with its lexical environment.",
    )
