"""
Repository: the one path services take to the database.

Reads are retried on connection errors with exponential backoff.
The retry policy is built once at startup (see main.py) and
handed to every request's Repository, so there is exactly one
place where attempts and backoff are decided.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from fastapi import Depends, Request
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from hisaab_kitaab.config import Settings
from hisaab_kitaab.errors import PersistenceError
from hisaab_kitaab.models.base import get_db

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """How many times, and how patiently, to retry a failed read."""

    max_attempts: int = 3
    backoff_seconds: float = 1.0
    max_backoff_seconds: float = 5.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.DB_RETRY_ATTEMPTS,
            backoff_seconds=settings.DB_RETRY_BACKOFF_SECONDS,
            max_backoff_seconds=settings.DB_RETRY_MAX_BACKOFF_SECONDS,
        )

    def retrying(self) -> Retrying:
        # Delays: backoff, 2*backoff, 4*backoff, ... capped at max_backoff
        return Retrying(
            stop=stop_after_attempt(max(self.max_attempts, 1)),
            wait=wait_exponential(
                multiplier=self.backoff_seconds,
                max=self.max_backoff_seconds,
            ),
            retry=retry_if_exception_type(OperationalError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )


class Repository:
    """
    Thin wrapper around a Session.

    Services call get/scalars for reads, add/delete/flush
    for writes. Routes call commit() once the service returns.

    Once the unit of work holds writes, a failed read is not
    retried: the rollback a retry needs would discard them.
    """

    def __init__(self, db: Session, policy: RetryPolicy | None = None):
        self.db = db
        self.policy = policy or RetryPolicy()
        self.has_pending_writes = False

    def _discard(self) -> None:
        self.db.rollback()
        self.has_pending_writes = False

    def _read(self, fn: Callable[[], T]) -> T:
        if self.has_pending_writes:
            try:
                return fn()
            except OperationalError as e:
                self._discard()
                logger.error(
                    "Database read failed inside a unit of work: %s", e.orig
                )
                raise PersistenceError() from e

        def attempt() -> T:
            try:
                return fn()
            except OperationalError:
                # A dead connection leaves the session unusable until rollback
                self.db.rollback()
                raise

        try:
            return self.policy.retrying()(attempt)
        except OperationalError as e:
            logger.error(
                "Database read failed after %d attempts: %s",
                self.policy.max_attempts, e.orig,
            )
            raise PersistenceError() from e

    # --- Reads ---

    def get(self, model: type[T], ident: Any) -> T | None:
        return self._read(lambda: self.db.get(model, ident))

    def scalars(self, statement) -> list:
        return self._read(
            lambda: list(self.db.execute(statement).scalars().all())
        )

    # --- Writes ---

    def add(self, instance) -> None:
        self.db.add(instance)
        self.has_pending_writes = True

    def delete(self, instance) -> None:
        self.db.delete(instance)
        self.has_pending_writes = True

    def flush(self) -> None:
        self.has_pending_writes = True
        try:
            self.db.flush()
        except OperationalError as e:
            self._discard()
            logger.error("Database flush failed: %s", e.orig)
            raise PersistenceError() from e

    def commit(self) -> None:
        """Commit the unit of work. Never retried."""
        try:
            self.db.commit()
        except OperationalError as e:
            self._discard()
            logger.error("Database commit failed: %s", e.orig)
            raise PersistenceError() from e
        self.has_pending_writes = False


# --- Dependency for FastAPI ---
def get_repository(
    request: Request,
    db: Session = Depends(get_db),
) -> Repository:
    """Build the request's Repository from its session and the app's policy."""
    return Repository(db, request.app.state.retry_policy)
