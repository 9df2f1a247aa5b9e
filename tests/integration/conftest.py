import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from altseo.config.settings import Settings
from altseo.database.connection import close_pool, get_connection, init_pool
from altseo.database.schema import apply_schema


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "altseo_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        apply_schema()
    except Exception as e:
        close_pool()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def clean_tables(integration_pool: None) -> Generator[None, None, None]:
    """Empty the option and document tables around each test."""

    def _truncate() -> None:
        with get_connection() as conn:
            conn.execute("TRUNCATE altseo_options, documents RESTART IDENTITY")
            conn.commit()

    _truncate()
    yield
    _truncate()


@pytest.fixture
def seed_documents(
    db_conn: psycopg.Connection[Any],
    clean_tables: None,
) -> list[int]:
    """Three published posts, one draft and one attachment; returns published ids."""
    rows = [
        ("Alpha", "<p>Das ist ein Test über Fahrräder.</p>", "publish", "post"),
        ("Beta", '<p>The bike shop.</p><img src="https://example.com/bike.jpg">', "publish", "page"),
        ("Draft", "<p>Not yet.</p>", "draft", "post"),
        ("Gamma", "<p>Le vélo est très rapide.</p>", "publish", "post"),
        ("Logo", "", "publish", "attachment"),
    ]
    published: list[int] = []
    with db_conn.cursor() as cur:
        for title, content, status, doc_type in rows:
            cur.execute(
                """
                INSERT INTO documents (title, content, status, doc_type)
                VALUES (%s, %s, %s, %s)
                RETURNING id
                """,
                (title, content, status, doc_type),
            )
            row = cur.fetchone()
            assert row is not None
            if status == "publish" and doc_type in ("post", "page"):
                published.append(row[0])
    db_conn.commit()
    return published
