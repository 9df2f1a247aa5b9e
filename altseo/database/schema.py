from pathlib import Path

from altseo.database.connection import get_connection

_SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def apply_schema() -> None:
    """Create the option and document tables if they do not exist yet."""
    sql = _SCHEMA_PATH.read_text(encoding="utf-8")
    with get_connection() as conn:
        conn.execute(sql)
        conn.commit()
