# expense_backend/schemas.py
# Data validation schemas (Pydantic) for requests and responses

import re
from datetime import date as date_type, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, field_serializer, field_validator

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Largest value a signed 64-bit id column can hold
MAX_ID = 2**63 - 1


def format_amount(value: Decimal) -> str:
    """Two fraction digits, e.g. Decimal('50') -> '50.00'."""
    return f"{Decimal(value):.2f}"


# --- Auth Schemas ---
class Credentials(BaseModel):
    """Login / registration body. `username` is accepted as an alias of `name`."""
    name: Optional[str] = Field(None, validation_alias=AliasChoices("name", "username"))
    password: Optional[str] = None


class LoginResponse(BaseModel):
    user_id: int
    name: str
    message: str = "Login successful"


class RegisterResponse(BaseModel):
    user_id: int
    name: str
    message: str = "User registered successfully"


# --- Expense Request Schemas ---
class ExpenseFields(BaseModel):
    """Fields shared by create and update; presence is checked by the caller."""
    user_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
    description: Optional[str] = Field(
        None,
        max_length=100,
        validation_alias=AliasChoices("description", "item"),
    )
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)

    @field_validator("description")
    @classmethod
    def strip_description(cls, value):
        return value.strip() if isinstance(value, str) else value


class ExpenseCreate(ExpenseFields):
    date: Optional[date_type] = None

    @field_validator("date", mode="before")
    @classmethod
    def check_date_format(cls, value):
        if value is None or value == "":
            return None
        if not isinstance(value, str) or not DATE_PATTERN.match(value):
            raise ValueError("date must be formatted as YYYY-MM-DD")
        return value


class ExpenseUpdate(ExpenseFields):
    pass


# --- Response Schemas ---
class ExpenseRead(BaseModel):
    """Schema for reading an expense."""
    id: int
    user_id: int
    description: str
    amount: Decimal
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def item(self) -> str:
        return self.description

    @field_serializer("amount")
    def serialize_amount(self, value: Decimal) -> str:
        return format_amount(value)


class ExpenseList(BaseModel):
    expenses: List[ExpenseRead]
    total: str


class DeleteResponse(BaseModel):
    deleted_id: int
    message: str = "Expense deleted successfully"


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    database: str
