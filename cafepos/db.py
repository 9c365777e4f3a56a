import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from . import config

logger = logging.getLogger(__name__)

DATABASE_URL = config.state.database_url

# For SQLite, enable check_same_thread=False for multithreading in FastAPI
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args, future=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()


# -------------------- Query gateway --------------------
# Statements use named parameters (":name"). Nothing here commits; callers
# decide where the transaction ends.

def execute(db: Session, statement: str, params: Optional[Dict[str, Any]] = None) -> int:
    """Run a write statement. Returns the new row id for INSERTs, else the affected row count."""
    result = db.execute(text(statement), params or {})
    if statement.lstrip().upper().startswith("INSERT"):
        return result.lastrowid
    return result.rowcount


def query_one(db: Session, statement: str, params: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
    row = db.execute(text(statement), params or {}).first()
    return dict(row._mapping) if row is not None else None


def query_all(db: Session, statement: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    return [dict(row._mapping) for row in db.execute(text(statement), params or {})]


# -------------------- Bootstrap --------------------

def init_schema(bind: Engine) -> None:
    # models must be imported so their tables are registered on Base
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info("Schema ready on %s", bind.url)


def seed_admin(db: Session, username: str, password: str) -> bool:
    """Create the administrator account unless one with this username exists."""
    if query_one(db, "SELECT id FROM users WHERE username = :u", {"u": username}):
        return False
    execute(db, "INSERT INTO users (username, password) VALUES (:u, :p)", {"u": username, "p": password})
    db.commit()
    logger.info("Admin created: %s", username)
    return True
