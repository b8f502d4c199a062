"""Query-building helpers shared by the list endpoints."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.sql import ColumnElement, Select

from ..schemas import Pagination
from ..timeutils import local_now


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_predicate(term: Optional[str], columns: Sequence[ColumnElement]) -> Optional[ColumnElement]:
    """Case-insensitive "contains" match OR-ed across ``columns``; None when there is no term."""
    if not term:
        return None
    pattern = f"%{_escape_like(term)}%"
    return or_(*(column.ilike(pattern, escape="\\") for column in columns))


def fetch_page(
    db: Session,
    stmt: Select,
    count_stmt: Select,
    pagination: Pagination,
    predicate: Optional[ColumnElement] = None,
) -> Tuple[List[Any], int]:
    """Run a list query and its count query under the same predicate.

    ``limit == -1`` skips LIMIT/OFFSET entirely and returns every matching row.
    """
    if predicate is not None:
        stmt = stmt.where(predicate)
        count_stmt = count_stmt.where(predicate)

    total = db.scalar(count_stmt) or 0
    if not pagination.is_unbounded:
        stmt = stmt.offset(pagination.offset).limit(pagination.limit)
    items = db.scalars(stmt).all()
    return list(items), total


def touch(row) -> None:
    """Refresh ``updated_at``; it never moves backwards or stays equal."""
    now = local_now()
    if row.updated_at is not None and now <= row.updated_at:
        now = row.updated_at + timedelta(microseconds=1)
    row.updated_at = now


def apply_patch(row, updates: Dict[str, Any]) -> None:
    for field, value in updates.items():
        setattr(row, field, value)
    touch(row)
