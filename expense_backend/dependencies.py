# expense_backend/dependencies.py
# Shared FastAPI dependencies for database sessions and request parameters

from typing import Iterator, Optional

from fastapi import Query
from sqlalchemy.orm import Session

from . import models
from .errors import InvalidParameter, MissingParameter
from .schemas import MAX_ID


# ===== DATABASE DEPENDENCY =====
def get_db() -> Iterator[Session]:
    """Database session dependency: one pooled session per request.

    Routes that write call db.commit() themselves, so a failed commit
    reaches the error handlers before any response is sent.
    """
    db = models.SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# ===== PARAMETER DEPENDENCIES =====
def parse_user_id(value) -> int:
    """Coerce a user id from a query string or JSON body."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingParameter("User ID is required")
    if isinstance(value, bool):
        raise InvalidParameter("User ID must be an integer")
    try:
        user_id = int(value)
    except (TypeError, ValueError):
        raise InvalidParameter("User ID must be an integer")
    if isinstance(value, float) and value != user_id:
        raise InvalidParameter("User ID must be an integer")
    if not 1 <= user_id <= MAX_ID:
        raise InvalidParameter("User ID is out of range")
    return user_id


def get_user_id(user_id: Optional[str] = Query(None, description="Owning user id")) -> int:
    """Required user_id query parameter."""
    return parse_user_id(user_id)


def get_search_term(q: Optional[str] = Query(None, description="Keyword to search in descriptions")) -> str:
    """Required, non-empty search keyword. Whitespace is part of the keyword."""
    if not q:
        raise MissingParameter("Search query is required")
    return q
