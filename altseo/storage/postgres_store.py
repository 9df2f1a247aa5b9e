from typing import Any

import psycopg
from psycopg.types.json import Jsonb

from altseo.database.connection import get_connection
from altseo.storage.base import BaseKeyValueStore
from altseo.storage.exceptions import StateStoreError


class PostgresKeyValueStore(BaseKeyValueStore):
    """Key/value operations on the altseo_options table."""

    def get(self, key: str, default: Any = None) -> Any:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "SELECT option_value FROM altseo_options WHERE option_name = %s",
                        (key,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise StateStoreError(f"Failed to read option '{key}': {exc}") from exc

        if row is None:
            return default
        return row[0]

    def set(self, key: str, value: Any) -> None:
        try:
            with get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO altseo_options (option_name, option_value)
                    VALUES (%s, %s)
                    ON CONFLICT (option_name)
                    DO UPDATE SET option_value = EXCLUDED.option_value, updated_at = NOW()
                    """,
                    (key, Jsonb(value)),
                )
                conn.commit()
        except psycopg.Error as exc:
            raise StateStoreError(f"Failed to write option '{key}': {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            with get_connection() as conn:
                conn.execute(
                    "DELETE FROM altseo_options WHERE option_name = %s",
                    (key,),
                )
                conn.commit()
        except psycopg.Error as exc:
            raise StateStoreError(f"Failed to delete option '{key}': {exc}") from exc

    def compare_and_set(self, key: str, expected: Any, new: Any) -> bool:
        try:
            with get_connection() as conn:
                if expected is None:
                    cur = conn.execute(
                        """
                        INSERT INTO altseo_options (option_name, option_value)
                        VALUES (%s, %s)
                        ON CONFLICT (option_name) DO NOTHING
                        """,
                        (key, Jsonb(new)),
                    )
                else:
                    cur = conn.execute(
                        """
                        UPDATE altseo_options
                        SET option_value = %s, updated_at = NOW()
                        WHERE option_name = %s AND option_value = %s
                        """,
                        (Jsonb(new), key, Jsonb(expected)),
                    )
                swapped = cur.rowcount == 1
                conn.commit()
        except psycopg.Error as exc:
            raise StateStoreError(f"Failed to swap option '{key}': {exc}") from exc
        return swapped

    def compare_and_delete(self, key: str, expected: Any) -> bool:
        try:
            with get_connection() as conn:
                cur = conn.execute(
                    "DELETE FROM altseo_options WHERE option_name = %s AND option_value = %s",
                    (key, Jsonb(expected)),
                )
                deleted = cur.rowcount == 1
                conn.commit()
        except psycopg.Error as exc:
            raise StateStoreError(f"Failed to delete option '{key}': {exc}") from exc
        return deleted
