from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Iterator, Optional

import mysql.connector

from ..core.constants import WRITE_LOCK_NAME, WRITE_LOCK_TIMEOUT_SECONDS
from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "lecture_tracker")),
        )


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation, except inside
    ``transaction()`` where every repository call shares one connection.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._active: ContextVar[Optional[Any]] = ContextVar(f"lecture_tracker_tx_{id(self)}", default=None)

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
            )
        except mysql.connector.Error as exc:
            raise StorageError(f"Database unavailable: {exc}") from exc

    @property
    def write_lock_name(self) -> str:
        return f"{WRITE_LOCK_NAME}:{self._config.database}"

    @property
    def active_connection(self):
        """Connection of the enclosing transaction, if any."""
        return self._active.get()

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        if self._active.get() is not None:
            yield self._active.get()
            return

        conn = self.connect()
        token = self._active.set(conn)
        locked = False
        try:
            _acquire_write_lock(conn, self.write_lock_name)
            locked = True
            yield conn
            conn.commit()
        except mysql.connector.Error as exc:
            conn.rollback()
            raise StorageError(f"Database write failed: {exc}") from exc
        except BaseException:
            conn.rollback()
            raise
        finally:
            self._active.reset(token)
            try:
                if locked:
                    _release_write_lock(conn, self.write_lock_name)
            finally:
                conn.close()


def _acquire_write_lock(conn, name: str) -> None:
    """Serialize transactions across threads and processes sharing the database.

    Taken before the first read so the transaction's snapshot sees every
    commit made by the previous holder.
    """
    cur = conn.cursor()
    try:
        cur.execute("SELECT GET_LOCK(%s, %s)", (name, WRITE_LOCK_TIMEOUT_SECONDS))
        row = cur.fetchone()
    finally:
        cur.close()
    if not row or row[0] != 1:
        raise StorageError(f"Timed out waiting for the {name} lock")


def _release_write_lock(conn, name: str) -> None:
    # Closing the session frees the lock too, so a failed release only warns.
    try:
        cur = conn.cursor()
        try:
            cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
            cur.fetchone()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        logger.warning("Releasing the %s lock failed: %s", name, exc)
