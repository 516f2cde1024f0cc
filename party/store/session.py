"""Engine factory, session factory and unit of work.

This module provides:

* ``create_party_engine``   -- Create a SQLAlchemy engine from a URL.
* ``PartySession``          -- A ``Session`` with ``expire_on_commit=False``.
* ``party_session_factory`` -- A ``sessionmaker`` producing ``PartySession``.
* ``unit_of_work``          -- Transaction scope that commits on success and
  when a ``BusinessError`` escapes, and rolls back on any other error.
* ``create_schema``         -- Create every party table.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from party.exceptions import BusinessError

logger = logging.getLogger(__name__)


def create_party_engine(
    url: str = "sqlite:///party.db",
    *,
    echo: bool = False,
    pool_size: int | None = None,
    max_overflow: int | None = None,
    pool_timeout: int | None = None,
    **kwargs: Any,
) -> Engine:
    """Create a SQLAlchemy engine.

    Parameters
    ----------
    url : str
        Database URL (``sqlite:///...``, ``postgresql+psycopg://...``).
    echo : bool
        If ``True``, log all SQL.
    pool_size, max_overflow, pool_timeout : int, optional
        Connection pool parameters (ignored for SQLite).
    **kwargs
        Extra arguments forwarded to ``sqlalchemy.create_engine``.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        engine = create_engine(url, echo=echo, **kwargs)

        # SQLite leaves foreign keys off unless asked on every connection
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection: Any, _record: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    pool_kwargs: dict[str, Any] = {"pool_pre_ping": True}
    if pool_size is not None:
        pool_kwargs["pool_size"] = pool_size
    if max_overflow is not None:
        pool_kwargs["max_overflow"] = max_overflow
    if pool_timeout is not None:
        pool_kwargs["pool_timeout"] = pool_timeout

    return create_engine(url, echo=echo, **pool_kwargs, **kwargs)


class PartySession(Session):
    """Session with ``expire_on_commit=False`` so aggregates stay usable after commit.

    ``sessionmaker`` always passes its own ``expire_on_commit``, so
    ``party_session_factory`` sets it there as well.
    """

    def __init__(self, bind: Engine | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("expire_on_commit", False)
        super().__init__(bind=bind, **kwargs)


def party_session_factory(engine: Engine) -> sessionmaker[PartySession]:
    """Return a ``sessionmaker`` bound to *engine* that produces ``PartySession`` instances."""
    return sessionmaker(bind=engine, class_=PartySession, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    """Create every party table that does not exist yet."""
    # Imported for the side effect of registering every mapped table.
    import party.models  # noqa: F401
    import party.models.reference  # noqa: F401
    from party.models.base import Base

    Base.metadata.create_all(engine)


@contextmanager
def unit_of_work(session_factory: sessionmaker) -> Iterator[Session]:
    """Run a block of work in one transaction.

    Business errors (not found, duplicate, invalid argument) are expected
    outcomes: the work done before them is committed and the error is
    re-raised for the caller to inspect. Any other exception rolls the
    transaction back.

    Examples
    --------
    >>> with unit_of_work(factory) as session:
    ...     PartyStore(session).create_person(person)
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except BusinessError as e:
        logger.debug("Committing after business error: %s", e)
        session.commit()
        raise
    except Exception:
        logger.debug("Rolling back after unexpected error", exc_info=True)
        session.rollback()
        raise
    finally:
        session.close()
