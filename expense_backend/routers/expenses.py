# expense_backend/routers/expenses.py
# Per-user expense endpoints

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from .. import crud, models, schemas
from ..schemas import MAX_ID
from ..dependencies import get_db, get_search_term, get_user_id

router = APIRouter()


def _expense_list(expenses: List[models.Expense]) -> schemas.ExpenseList:
    return schemas.ExpenseList(
        expenses=[schemas.ExpenseRead.model_validate(expense) for expense in expenses],
        total=crud.total_amount(expenses),
    )


# ===== LISTING =====

@router.get("", response_model=schemas.ExpenseList)
def get_expenses(user_id: int = Depends(get_user_id), db: Session = Depends(get_db)):
    """All expenses of a user, newest first, with their total."""
    return _expense_list(crud.list_expenses(db, user_id))


@router.get("/today", response_model=schemas.ExpenseList)
def get_today_expenses(user_id: int = Depends(get_user_id), db: Session = Depends(get_db)):
    """Expenses created today according to the server clock."""
    return _expense_list(crud.list_today_expenses(db, user_id))


@router.get("/search", response_model=schemas.ExpenseList)
def search_expenses(
    user_id: int = Depends(get_user_id),
    q: str = Depends(get_search_term),
    db: Session = Depends(get_db),
):
    """Case-insensitive substring search on descriptions."""
    return _expense_list(crud.search_expenses(db, user_id, q))


# ===== MUTATIONS =====

@router.post("", response_model=schemas.ExpenseRead, status_code=status.HTTP_201_CREATED)
def create_expense(expense_in: schemas.ExpenseCreate, db: Session = Depends(get_db)):
    expense = crud.add_expense(
        db,
        user_id=expense_in.user_id,
        description=expense_in.description,
        amount=expense_in.amount,
        on_date=expense_in.date,
    )
    created = schemas.ExpenseRead.model_validate(expense)
    db.commit()
    return created


@router.put("/{expense_id}", response_model=schemas.ExpenseRead)
def update_expense(
    update_in: schemas.ExpenseUpdate,
    expense_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
):
    """Update description and amount; the expense must belong to user_id."""
    expense = crud.update_expense(
        db,
        expense_id,
        user_id=update_in.user_id,
        description=update_in.description,
        amount=update_in.amount,
    )
    updated = schemas.ExpenseRead.model_validate(expense)
    db.commit()
    return updated


@router.delete("/{expense_id}", response_model=schemas.DeleteResponse)
def delete_expense(
    expense_id: int = Path(..., ge=1, le=MAX_ID),
    user_id: int = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    deleted_id = crud.delete_expense(db, expense_id, user_id)
    db.commit()
    return schemas.DeleteResponse(deleted_id=deleted_id)
