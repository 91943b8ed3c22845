# expense_backend/routers/auth.py
# Login and registration endpoints

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import auth, schemas
from ..dependencies import get_db

router = APIRouter()


@router.post("/login", response_model=schemas.LoginResponse)
def login(credentials: schemas.Credentials, db: Session = Depends(get_db)):
    """Check name and password; unknown names and wrong passwords both give 401."""
    user = auth.authenticate(db, credentials.name, credentials.password)
    return schemas.LoginResponse(user_id=user.id, name=user.name)


@router.post(
    "/register",
    response_model=schemas.RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(credentials: schemas.Credentials, db: Session = Depends(get_db)):
    user = auth.register_user(db, credentials.name, credentials.password)
    response = schemas.RegisterResponse(user_id=user.id, name=user.name)
    db.commit()
    return response
