# expense_backend/auth.py
# Password hashing and credential verification

import logging
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models
from .config import get_settings
from .errors import Conflict, InvalidCredentials, MissingParameter

logger = logging.getLogger(__name__)


def build_password_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


# Password hashing
pwd_context = build_password_context(get_settings().bcrypt_rounds)


class AuthManager:
    """Verifies credentials against the users table."""

    def __init__(self, context: CryptContext = pwd_context):
        self.context = context

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a plaintext password against its hash."""
        return self.context.verify(plain_password, hashed_password)

    def get_password_hash(self, password: str) -> str:
        """Hash a password for storing."""
        return self.context.hash(password)

    def authenticate(self, db: Session, name: Optional[str], password: Optional[str]) -> models.User:
        """Return the user matching name and password.

        Unknown names and wrong passwords raise the same InvalidCredentials
        so callers cannot tell whether an account exists. A dummy hash check
        runs for unknown names to keep the response time comparable.
        """
        if not name or not password:
            raise MissingParameter("Name and password are required")

        user = db.query(models.User).filter(models.User.name == name).first()
        if user is None:
            self.context.dummy_verify()
            logger.info("Login failed for unknown user %r", name)
            raise InvalidCredentials()

        if not self.verify_password(password, user.password_hash):
            logger.info("Login failed for user %r: wrong password", name)
            raise InvalidCredentials()

        logger.info("User %r (id=%s) logged in", user.name, user.id)
        return user

    def register(self, db: Session, name: Optional[str], password: Optional[str]) -> models.User:
        """Create a new user with a hashed password."""
        if not name or not password:
            raise MissingParameter("Name and password are required")

        existing = db.query(models.User).filter(models.User.name == name).first()
        if existing:
            raise Conflict("Name already registered")

        user = models.User(name=name, password_hash=self.get_password_hash(password))
        db.add(user)
        try:
            db.flush()
        except IntegrityError as exc:
            raise Conflict("Name already registered") from exc
        db.refresh(user)

        logger.info("Registered user %r (id=%s)", user.name, user.id)
        return user


# Global auth manager instance
auth_manager = AuthManager()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return auth_manager.verify_password(plain_password, hashed_password)


def authenticate(db: Session, name: Optional[str], password: Optional[str]) -> models.User:
    return auth_manager.authenticate(db, name, password)


def register_user(db: Session, name: Optional[str], password: Optional[str]) -> models.User:
    return auth_manager.register(db, name, password)
