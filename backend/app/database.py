"""Database engine and session handling for the business backend."""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

_DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "business.db"
_DEFAULT_DATABASE_URL = f"sqlite:///{_DEFAULT_DB_PATH.as_posix()}"

REQUIRE_POSTGRES_ENV = "REQUIRE_POSTGRES"
POOL_SIZE_ENV = "DATABASE_POOL_SIZE"
POOL_MAX_OVERFLOW_ENV = "DATABASE_MAX_OVERFLOW"
POOL_TIMEOUT_ENV = "DATABASE_POOL_TIMEOUT"
POOL_RECYCLE_ENV = "DATABASE_POOL_RECYCLE"
CONNECT_TIMEOUT_ENV = "DATABASE_CONNECT_TIMEOUT"

# (environment variable, default) pairs for the pooled engines.
_POOL_SETTINGS = {
    "pool_size": (POOL_SIZE_ENV, 5),
    "max_overflow": (POOL_MAX_OVERFLOW_ENV, 10),
    "pool_timeout": (POOL_TIMEOUT_ENV, 30),
    "pool_recycle": (POOL_RECYCLE_ENV, 1800),
}
DEFAULT_CONNECT_TIMEOUT = 10


def _read_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return value


def read_bool_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _prepare_sqlite_file(database: str | None) -> None:
    if database in (None, "", ":memory:"):
        return
    Path(database).parent.mkdir(parents=True, exist_ok=True)


def _resolve_database_url(raw_url: str | None) -> str:
    postgres_required = read_bool_env(REQUIRE_POSTGRES_ENV, False)
    if not raw_url:
        if postgres_required:
            raise RuntimeError(
                "DATABASE_URL must point to PostgreSQL when REQUIRE_POSTGRES=1"
            )
        _prepare_sqlite_file(str(_DEFAULT_DB_PATH))
        return _DEFAULT_DATABASE_URL

    url = make_url(raw_url)
    is_sqlite = url.drivername.startswith("sqlite")
    if is_sqlite and postgres_required:
        raise RuntimeError("SQLite is not permitted when REQUIRE_POSTGRES=1")
    if is_sqlite:
        _prepare_sqlite_file(url.database)
    return url.render_as_string(hide_password=False)


def _engine_options(database_url: str) -> Dict[str, Any]:
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}

    options: Dict[str, Any] = {"pool_pre_ping": True}
    for option, (env_name, default) in _POOL_SETTINGS.items():
        options[option] = _read_int_env(env_name, default)
    options["connect_args"] = {
        "connect_timeout": _read_int_env(CONNECT_TIMEOUT_ENV, DEFAULT_CONNECT_TIMEOUT)
    }
    return options


SQLALCHEMY_DATABASE_URL = _resolve_database_url(os.getenv("DATABASE_URL"))

engine = create_engine(SQLALCHEMY_DATABASE_URL, **_engine_options(SQLALCHEMY_DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Generator:
    """Yield a database session and ensure it is closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Generator:
    """Transactional scope for work done outside of a request."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
