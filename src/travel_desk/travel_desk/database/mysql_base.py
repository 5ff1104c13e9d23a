from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreFailure
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, with_database: bool = True):
    """Yield (conn, cur); commit on success, roll back and raise StoreFailure on DB errors."""
    try:
        conn = conn_factory.connect(with_database=with_database)
    except mysql.connector.Error as e:
        logger.error("Database connection failed: %s", e)
        raise StoreFailure("Database unavailable") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        logger.error("Database operation failed: %s", e)
        raise StoreFailure("Database operation failed") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def dump_extra(extra: Optional[dict]) -> Optional[str]:
    """Serialize the extension map for a JSON column."""
    if not extra:
        return None
    return json.dumps(extra, ensure_ascii=False, default=str)


def load_extra(value: Any) -> dict:
    if value is None or value == "":
        return {}
    if isinstance(value, dict):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    return json.loads(value)


def build_where(clauses: List[str]) -> str:
    return " AND ".join(clauses) if clauses else "1=1"
