"""Business logic for user accounts."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..security import generate_password_hash, verify_password

LOGGER = logging.getLogger(__name__)


class UserServiceError(RuntimeError):
    """Raised when an account operation cannot be completed."""


class UserService:
    """Registration, authentication and workspace selection of users."""

    @staticmethod
    def _normalize_email(email: str) -> str:
        return email.strip().lower()

    @staticmethod
    def get_user(db: Session, user_id: str) -> Optional[models.User]:
        return db.query(models.User).filter(models.User.id == user_id).first()

    @staticmethod
    def register(db: Session, email: str, password: str) -> models.User:
        normalized = UserService._normalize_email(email)
        existing = db.query(models.User).filter(models.User.email == normalized).first()
        if existing is not None:
            raise UserServiceError("Utente già registrato. Prova ad accedere.")
        user = models.User(email=normalized, password_hash=generate_password_hash(password))
        db.add(user)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise UserServiceError("Utente già registrato. Prova ad accedere.") from exc
        db.refresh(user)
        LOGGER.info("Registered user %s", user.id)
        return user

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> Optional[models.User]:
        normalized = UserService._normalize_email(email)
        user = db.query(models.User).filter(models.User.email == normalized).first()
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    @staticmethod
    def remember_selection(db: Session, user_id: str, company_id: Optional[str]) -> None:
        user = UserService.get_user(db, user_id)
        if user is None or user.selected_company_id == company_id:
            return
        user.selected_company_id = company_id
        db.add(user)
        db.commit()
