# expense_backend/models.py
# Database setup and models for users and their expenses

import logging
from datetime import datetime

from sqlalchemy import (
    create_engine, text, Column, Integer, String, Numeric, DateTime, ForeignKey, Index
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import relationship, sessionmaker, declarative_base

from .config import get_settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False, pool_pre_ping: bool = True) -> Engine:
    """Create a pooled engine for the given URL."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        database_url,
        connect_args=connect_args,
        echo=echo,
        pool_pre_ping=pool_pre_ping,
    )


# Database Setup
_settings = get_settings()
engine = build_engine(_settings.database_url, _settings.sql_echo, _settings.pool_pre_ping)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def server_now() -> datetime:
    """Server-local timestamp truncated to whole seconds."""
    return datetime.now().replace(microsecond=0)


# ===== MODELS =====

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    expenses = relationship("Expense", back_populates="owner")


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    description = Column(String(100), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, default=server_now)

    owner = relationship("User", back_populates="expenses")

    __table_args__ = (
        Index("ix_expenses_user_created", "user_id", "created_at"),
    )


# ===== HELPERS =====

def create_tables(bind=None):
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=bind or engine)


def check_connection(bind=None) -> bool:
    """Run a trivial query against the store; raises if it is unreachable."""
    with (bind or engine).connect() as conn:
        conn.execute(text("SELECT 1"))
    return True
