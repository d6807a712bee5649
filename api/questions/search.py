"""
Conditional WHERE-clause assembly for question search.

Clauses and their bound values are accumulated together, so every
placeholder number is the position of its own value in `args`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Only these columns are ever interpolated into SQL.
SEARCHABLE_COLUMNS = ("title", "category")


class InvalidSearch(ValueError):
    pass


@dataclass
class SearchQuery:
    clauses: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)

    def add_substring(self, column: str, value: str) -> None:
        if column not in SEARCHABLE_COLUMNS:
            raise InvalidSearch(f"Column is not searchable: {column}")
        self.args.append(f"%{value}%")
        self.clauses.append(f"{column} ILIKE ${len(self.args)}")

    def where(self) -> str:
        return " AND ".join(self.clauses)


def build_search_query(*, title: str | None = None, category: str | None = None) -> SearchQuery:
    """
    Build a case-insensitive substring search over title and/or category.

    Empty values count as absent. Raises `InvalidSearch` when nothing is left
    to filter on; there is no "match everything" fallback.
    """
    query = SearchQuery()
    for column, value in (("title", title), ("category", category)):
        if value:
            query.add_substring(column, value)
    if not query.clauses:
        raise InvalidSearch("Invalid search parameters.")
    return query
