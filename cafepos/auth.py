import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from . import db as store
from . import models

logger = logging.getLogger(__name__)

TOKEN_PREFIX = "TOKEN_"


@dataclass(frozen=True)
class SessionToken:
    """Opaque bearer credential. Valid while it equals a user's stored token."""

    value: str

    @classmethod
    def issue(cls) -> "SessionToken":
        return cls(f"{TOKEN_PREFIX}{uuid.uuid4()}")

    @classmethod
    def from_header(cls, header: Optional[str]) -> Optional["SessionToken"]:
        """Read `<scheme> <token>`; the scheme itself is not checked."""
        if not header:
            return None
        parts = header.split(" ")
        if len(parts) < 2 or not parts[1]:
            return None
        return cls(parts[1])

    def __str__(self) -> str:
        return self.value


def login(db: Session, username: Optional[str], password: Optional[str]) -> Optional[SessionToken]:
    """Check credentials and mint a new token, replacing the user's previous one."""
    user = (
        db.query(models.User)
        .filter(models.User.username == username, models.User.password == password)
        .first()
    )
    if user is None:
        logger.info("Login failed for %r", username)
        return None
    token = SessionToken.issue()
    user.token = token.value
    db.commit()
    logger.info("Login succeeded for %r", username)
    return token


def is_authorized(db: Session, header: Optional[str]) -> bool:
    token = SessionToken.from_header(header)
    if token is None:
        return False
    user = store.query_one(db, "SELECT id FROM users WHERE token = :token", {"token": token.value})
    return user is not None
