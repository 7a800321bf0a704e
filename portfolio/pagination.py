"""
Keyset pagination over (updated_at DESC, id DESC).
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, Select, and_, or_
from sqlalchemy.orm import Session

from portfolio.errors import BadRequestError
from portfolio.schemas import Cursor

DEFAULT_LIMIT = 10
MAX_LIMIT = 100

T = TypeVar("T")


def clamp_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return max(1, min(limit, MAX_LIMIT))


def paginate(
    db: Session,
    stmt: Select[Any],
    model: type[T],
    cursor: Cursor | None,
    limit: int | None,
    tie_break_filters: Sequence[ColumnElement[bool]] = (),
) -> tuple[list[T], Cursor | None]:
    """
    Return one page of `model` rows from `stmt` and the cursor for the next.

    `tie_break_filters` only apply to rows sharing the cursor's updated_at.
    One extra row is fetched to know whether another page exists.
    """
    limit = clamp_limit(limit)
    updated_at = model.updated_at  # type: ignore[attr-defined]
    pk = model.id  # type: ignore[attr-defined]
    if cursor is not None:
        stmt = stmt.where(
            or_(
                updated_at < cursor.updated_at,
                and_(updated_at == cursor.updated_at, *tie_break_filters, pk < cursor.id),
            )
        )
    stmt = stmt.order_by(updated_at.desc(), pk.desc()).limit(limit + 1)
    rows = list(db.scalars(stmt).all())
    if len(rows) <= limit:
        return rows, None
    items = rows[:limit]
    last = items[-1]
    return items, Cursor(id=last.id, updated_at=last.updated_at)  # type: ignore[attr-defined]


def cursor_from_query(
    cursor_id: UUID | None, cursor_updated_at: datetime | None
) -> Cursor | None:
    """Build a cursor from its two query parameters; both or neither."""
    if cursor_id is None and cursor_updated_at is None:
        return None
    if cursor_id is None or cursor_updated_at is None:
        error_message = "cursor_id and cursor_updated_at must be given together"
        raise BadRequestError(error_message)
    return Cursor(id=cursor_id, updated_at=cursor_updated_at)
