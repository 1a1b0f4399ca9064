"""Database access for sqlitejson.

Example usage:
    ```python
    from sqlitejson.db import create_engine, dispose_engine, fetch_rows

    engine = create_engine("data/presidents.db")
    rows = await fetch_rows(engine, "SELECT * FROM presidents")
    await dispose_engine(engine)
    ```
"""

from sqlitejson.db.engine import (
    create_engine,
    dispose_engine,
    fetch_rows,
    list_tables,
    list_views,
    to_database_url,
)

__all__ = [
    "create_engine",
    "dispose_engine",
    "fetch_rows",
    "list_tables",
    "list_views",
    "to_database_url",
]
