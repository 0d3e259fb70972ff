# Overview: Transaction and locking helpers shared by the write paths.

from __future__ import annotations

import time

from flask import current_app
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from ..errors import SalesError, TransactionFailure
from ..extensions import db

RETRYABLE_ERRORS = (OperationalError, StaleDataError)


def begin_write_transaction() -> None:
    """
    Take the database write lock up front on SQLite.

    SQLite ignores SELECT ... FOR UPDATE, so writers are serialized with
    BEGIN IMMEDIATE instead. Must be the first statement of the session's
    transaction. No-op on other dialects.
    """
    if db.engine.dialect.name == "sqlite":
        db.session.execute(text("BEGIN IMMEDIATE"))


def lock_for_update(query):
    """
    Apply row-level locking for critical operations.

    populate_existing() refreshes rows already in the identity map so the
    caller sees the values that were current when the lock was taken.
    """
    return query.with_for_update().populate_existing()


def run_with_retry(func, *, attempts: int = 3, backoff_base: float = 0.1, retry_on=RETRYABLE_ERRORS):
    """
    Execute a DB operation with retry on concurrency-related failures.

    Retries on OperationalError (deadlocks, lock timeouts, "database is
    locked") and StaleDataError by default. Every failed attempt is rolled
    back first.
    """
    for attempt in range(attempts):
        try:
            return func()
        except retry_on:
            db.session.rollback()
            if attempt >= attempts - 1:
                raise
            time.sleep(backoff_base * (2 ** attempt))


def run_in_transaction(func, *, action: str, attempts: int = 3, retry_on=RETRYABLE_ERRORS):
    """
    Run func as one all-or-nothing unit.

    func must begin its own transaction and commit on success. Domain errors
    roll back and propagate unchanged; storage errors roll back, are logged
    with the DB detail, and surface as a generic TransactionFailure.
    """
    try:
        return run_with_retry(func, attempts=attempts, retry_on=retry_on)
    except SalesError:
        db.session.rollback()
        raise
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception("Failed to %s", action)
        raise TransactionFailure(f"Failed to {action}") from exc
