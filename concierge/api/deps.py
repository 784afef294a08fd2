import logging
from typing import Generator

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from concierge.core.database import SessionLocal

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_400(db: Session, detail: str) -> None:
    """Commit, turning FK / unique violations into a 400 instead of a 500."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("%s: %s", detail, e.orig)
        raise HTTPException(status_code=400, detail=detail)
