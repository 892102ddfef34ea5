# address_book/models/base.py
"""
Shared SQLAlchemy instance, abstract base model and the unit-of-work helper.
"""

from contextlib import contextmanager
from datetime import datetime, timezone

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import SQLAlchemyError

from address_book.errors import PersistenceError

db = SQLAlchemy()


def utcnow():
    return datetime.now(timezone.utc)


class BaseModel(db.Model):
    """Abstract base adding store-managed timestamps"""

    __abstract__ = True

    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False, index=True
    )


@contextmanager
def transaction():
    """
    Run the enclosed block as one all-or-nothing unit of work.

    Commits on success. Any exception rolls the session back; database
    failures are re-raised as PersistenceError so callers see one message.
    """
    try:
        yield db.session
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Transaction rolled back after database error: {str(e)}")
        raise PersistenceError("The change could not be saved. Please try again.") from e
    except Exception:
        db.session.rollback()
        raise
