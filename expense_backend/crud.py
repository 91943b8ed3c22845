# expense_backend/crud.py
# Expense queries, always scoped by the owning user

import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from . import models
from .errors import InvalidParameter, MissingParameter, NotFound
from .schemas import format_amount

logger = logging.getLogger(__name__)


def _require(**fields):
    missing = [
        name for name, value in fields.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise MissingParameter(f"Missing required parameter(s): {', '.join(missing)}")


def _check_amount(amount) -> Decimal:
    try:
        amount = Decimal(str(amount))
    except InvalidOperation:
        raise InvalidParameter("Amount must be a number")
    if not amount.is_finite():
        raise InvalidParameter("Amount must be a number")
    if amount < 0:
        raise InvalidParameter("Amount must not be negative")
    return amount


def _owned(db: Session, user_id: int) -> Query:
    return db.query(models.Expense).filter(models.Expense.user_id == user_id)


def _newest_first(query: Query) -> List[models.Expense]:
    return query.order_by(
        models.Expense.created_at.desc(),
        models.Expense.id.desc(),
    ).all()


def total_amount(expenses: List[models.Expense]) -> str:
    """Sum of the amounts, formatted with two fraction digits."""
    return format_amount(sum((Decimal(e.amount) for e in expenses), Decimal("0")))


# ===== READ =====

def list_expenses(db: Session, user_id: Optional[int]) -> List[models.Expense]:
    _require(user_id=user_id)
    return _newest_first(_owned(db, user_id))


def list_today_expenses(db: Session, user_id: Optional[int], today: Optional[date] = None) -> List[models.Expense]:
    """Expenses created on the current calendar day of the server clock."""
    _require(user_id=user_id)
    today = today or models.server_now().date()
    start = datetime.combine(today, time.min)
    end = start + timedelta(days=1)
    query = _owned(db, user_id).filter(
        models.Expense.created_at >= start,
        models.Expense.created_at < end,
    )
    return _newest_first(query)


def search_expenses(db: Session, user_id: Optional[int], keyword: Optional[str]) -> List[models.Expense]:
    """Case-insensitive substring match on the description.

    The keyword is used as given, so a single space matches descriptions
    containing a space.
    """
    _require(user_id=user_id)
    if not keyword:
        raise MissingParameter("Search query is required")
    query = _owned(db, user_id).filter(
        func.lower(models.Expense.description).contains(keyword.lower(), autoescape=True)
    )
    return _newest_first(query)


def get_expense(db: Session, expense_id: int, user_id: int) -> models.Expense:
    expense = _owned(db, user_id).filter(models.Expense.id == expense_id).first()
    if expense is None:
        raise NotFound(f"Expense {expense_id} not found")
    return expense


# ===== WRITE =====

def add_expense(
    db: Session,
    user_id: Optional[int],
    description: Optional[str],
    amount,
    on_date: Optional[date] = None,
) -> models.Expense:
    """Insert an expense; created_at is now, or midnight of on_date when given."""
    _require(user_id=user_id, description=description, amount=amount)
    amount = _check_amount(amount)

    if db.get(models.User, user_id) is None:
        raise NotFound("User not found")

    created_at = datetime.combine(on_date, time.min) if on_date else models.server_now()
    expense = models.Expense(
        user_id=user_id,
        description=description.strip(),
        amount=amount,
        created_at=created_at,
    )
    db.add(expense)
    db.flush()
    db.refresh(expense)

    logger.info("Added expense %s for user %s", expense.id, user_id)
    return expense


def update_expense(
    db: Session,
    expense_id: int,
    user_id: Optional[int],
    description: Optional[str],
    amount,
) -> models.Expense:
    """Update description and amount of an expense owned by user_id."""
    _require(user_id=user_id, description=description, amount=amount)
    amount = _check_amount(amount)

    expense = get_expense(db, expense_id, user_id)
    expense.description = description.strip()
    expense.amount = amount
    db.flush()
    db.refresh(expense)

    logger.info("Updated expense %s for user %s", expense_id, user_id)
    return expense


def delete_expense(db: Session, expense_id: int, user_id: Optional[int]) -> int:
    """Delete the expense matching both ids. Other rows keep their ids."""
    _require(user_id=user_id)
    deleted = (
        _owned(db, user_id)
        .filter(models.Expense.id == expense_id)
        .delete()
    )
    if deleted == 0:
        raise NotFound("Expense not found")

    logger.info("Deleted expense %s for user %s", expense_id, user_id)
    return expense_id
