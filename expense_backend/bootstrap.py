# expense_backend/bootstrap.py
# Idempotent schema creation and demo data seeding

import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from . import models
from .auth import auth_manager
from .config import get_settings

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS = [
    ("Lisa", "1111"),
    ("Tom", "2222"),
]

# (owner name, description, amount, created_at)
SAMPLE_EXPENSES = [
    ("Tom", "lunch", Decimal("50.00"), datetime(2025, 8, 20, 13, 27, 39)),
    ("Tom", "bun", Decimal("20.00"), datetime(2025, 8, 20, 21, 2, 36)),
]


class DatabaseBootstrap:
    """Create tables and seed the demo accounts without duplicating anything."""

    def __init__(self, db: Session, seed_samples: Optional[bool] = None):
        self.db = db
        if seed_samples is None:
            seed_samples = get_settings().seed_sample_expenses
        self.seed_samples = seed_samples

    def create_schema(self):
        # Runs on the session's connection so it shares the request transaction
        models.create_tables(bind=self.db.connection())

    def seed_users(self) -> Dict[str, models.User]:
        """Insert each demo account that does not exist yet; return the new ones."""
        names = [name for name, _ in DEMO_ACCOUNTS]
        existing = {
            user.name
            for user in self.db.query(models.User).filter(models.User.name.in_(names))
        }

        created = {}
        for name, password in DEMO_ACCOUNTS:
            if name in existing:
                continue
            user = models.User(name=name, password_hash=auth_manager.get_password_hash(password))
            self.db.add(user)
            created[name] = user

        if created:
            self.db.flush()
            logger.info("Created demo users: %s", ", ".join(created))
        return created

    def seed_expenses(self, owners: Dict[str, models.User]) -> List[models.Expense]:
        """Sample expenses, only for owners created in this run."""
        expenses = []
        for owner_name, description, amount, created_at in SAMPLE_EXPENSES:
            owner = owners.get(owner_name)
            if owner is None:
                continue
            expenses.append(models.Expense(
                user_id=owner.id,
                description=description,
                amount=amount,
                created_at=created_at,
            ))

        if expenses:
            self.db.add_all(expenses)
            self.db.flush()
            logger.info("Added %d sample expenses", len(expenses))
        return expenses

    def run(self) -> dict:
        logger.info("Initializing database...")
        self.create_schema()
        created_users = self.seed_users()
        sample_expenses = self.seed_expenses(created_users) if self.seed_samples else []
        return {
            "created_users": sorted(created_users),
            "sample_expenses": len(sample_expenses),
        }


def initialize(db: Session, seed_samples: Optional[bool] = None) -> dict:
    """Create schema and seed data; safe to call any number of times."""
    return DatabaseBootstrap(db, seed_samples).run()
