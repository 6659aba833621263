from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import psycopg2
from psycopg2.extensions import make_dsn

from ..config.loader import DatabaseConfig
from ..models.question import CanonicalQuestion

"""Read-only access to a tenant's question bank in PostgreSQL.

The store wraps a cursor handed in by the caller (no module-level client):
the CLI opens the connection with `connect()` and builds one QuestionStore per
run. Tables follow the Prisma defaults of the back-office schema.
"""

__all__ = [
    "QuestionStoreError",
    "QuestionStore",
    "build_dsn",
    "connect",
]

FETCH_QUESTIONS_SQL = (
    'SELECT q."id", q."question", s."title", q."order" '
    'FROM "QuestionnaireQuestion" q '
    'JOIN "QuestionnaireSection" s ON s."id" = q."sectionId" '
    'WHERE s."userId" = %s '
    'ORDER BY s."order" ASC, q."order" ASC'
)


class QuestionStoreError(Exception):
    pass


class QuestionStore:
    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor

    def fetch_canonical_questions(self, owner_id: str) -> list[CanonicalQuestion]:
        """Questions of `owner_id` ordered by section order, then question order."""
        try:
            self._cursor.execute(FETCH_QUESTIONS_SQL, (owner_id,))
            rows = self._cursor.fetchall()
        except psycopg2.Error as e:
            raise QuestionStoreError(f"failed to fetch questions for owner {owner_id}: {e}") from e
        return [
            CanonicalQuestion(
                id=str(qid),
                text=text or "",
                section_title=title or "",
                order=order if order is not None else 0,
            )
            for qid, text, title, order in rows
        ]


def build_dsn(db_cfg: DatabaseConfig) -> str:
    """Resolve the connection string.

    Priority: DATABASE_URL / PGDSN, then PGHOST/PGPORT/PGUSER/PGPASSWORD/
    PGDATABASE, then the `database` section of the config file.
    """
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "postgres")
    # make_dsn quotes values with spaces or quotes; None drops the key
    return make_dsn(
        host=host, port=port, user=user, dbname=database, password=password or None
    )


@contextmanager
def connect(db_cfg: DatabaseConfig) -> Iterator[Any]:  # pragma: no cover (thin wrapper)
    """Yield a read-only cursor; the connection is always closed."""
    try:
        conn = psycopg2.connect(build_dsn(db_cfg))
    except psycopg2.Error as e:
        raise QuestionStoreError(f"database connection failed: {e}") from e
    try:
        conn.set_session(readonly=True, autocommit=True)
        with conn.cursor() as cur:
            yield cur
    finally:
        conn.close()
