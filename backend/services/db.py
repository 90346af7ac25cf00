"""DuckDB-backed document store for portfolio content.

Documents are JSON objects grouped into collections (``achievements``,
``projects``, ``settings``). Each one lives in a single ``documents`` row
keyed by ``(collection, id)``; the JSON body is stored as text.
"""

import json
import os
import uuid
from datetime import datetime, timezone

import duckdb
import pandas as pd
import polars as pl

from backend.core.config import DB_PATH

COLLECTIONS = ("achievements", "projects", "settings")


def now_iso() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return (
        datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    )


def _new_id() -> str:
    return uuid.uuid4().hex[:20]


def _connect(db_path: str | None = None) -> duckdb.DuckDBPyConnection:
    path = db_path or DB_PATH
    if path != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    con = duckdb.connect(path)
    con.execute("""
        CREATE TABLE IF NOT EXISTS documents (
            collection VARCHAR,
            id VARCHAR,
            data VARCHAR,
            created_at VARCHAR,
            updated_at VARCHAR,
            PRIMARY KEY (collection, id)
        )
    """)
    return con


def _row_to_doc(doc_id: str, data: str) -> dict:
    return {"id": doc_id, **json.loads(data)}


def list_documents(collection: str, db_path: str | None = None) -> list[dict]:
    """Return every document in ``collection`` with its ``id`` merged in.

    Args:
        collection: Collection name.
        db_path: Database file; ``DB_PATH`` by default.

    Returns:
        Documents in creation order.
    """
    con = _connect(db_path)
    try:
        df: pd.DataFrame = con.execute(
            "SELECT id, data FROM documents WHERE collection = ? ORDER BY created_at, rowid",
            [collection],
        ).df()
    finally:
        con.close()
    return [_row_to_doc(row.id, row.data) for row in df.itertuples(index=False)]


def get_document(collection: str, doc_id: str, db_path: str | None = None) -> dict | None:
    con = _connect(db_path)
    try:
        row = con.execute(
            "SELECT id, data FROM documents WHERE collection = ? AND id = ?",
            [collection, doc_id],
        ).fetchone()
    finally:
        con.close()
    return _row_to_doc(row[0], row[1]) if row else None


def add_document(collection: str, data: dict, db_path: str | None = None) -> dict:
    """Store ``data`` under a generated id, stamped with ``createdAt``.

    Returns:
        The stored document including its new ``id``.
    """
    doc_id = _new_id()
    stamp = now_iso()
    body = {k: v for k, v in data.items() if k != "id"}
    body["createdAt"] = stamp
    con = _connect(db_path)
    try:
        con.execute(
            "INSERT INTO documents VALUES (?, ?, ?, ?, ?)",
            [collection, doc_id, json.dumps(body), stamp, stamp],
        )
    finally:
        con.close()
    return {"id": doc_id, **body}


def update_document(
    collection: str, doc_id: str, data: dict, db_path: str | None = None
) -> dict | None:
    """Merge ``data`` into an existing document and stamp ``updatedAt``.

    Returns:
        The updated document, or None if ``doc_id`` does not exist.
    """
    con = _connect(db_path)
    try:
        row = con.execute(
            "SELECT data FROM documents WHERE collection = ? AND id = ?",
            [collection, doc_id],
        ).fetchone()
        if row is None:
            return None
        stamp = now_iso()
        body = json.loads(row[0])
        body.update({k: v for k, v in data.items() if k != "id"})
        body["updatedAt"] = stamp
        con.execute(
            "UPDATE documents SET data = ?, updated_at = ? WHERE collection = ? AND id = ?",
            [json.dumps(body), stamp, collection, doc_id],
        )
    finally:
        con.close()
    return {"id": doc_id, **body}


def set_document(
    collection: str,
    doc_id: str,
    data: dict,
    merge: bool = False,
    db_path: str | None = None,
) -> dict:
    """Create or overwrite the document ``doc_id`` (merging when ``merge``)."""
    con = _connect(db_path)
    try:
        row = con.execute(
            "SELECT data, created_at FROM documents WHERE collection = ? AND id = ?",
            [collection, doc_id],
        ).fetchone()
        stamp = now_iso()
        body = dict(data)
        if row is not None and merge:
            body = {**json.loads(row[0]), **data}
        con.execute(
            "DELETE FROM documents WHERE collection = ? AND id = ?", [collection, doc_id]
        )
        con.execute(
            "INSERT INTO documents VALUES (?, ?, ?, ?, ?)",
            [collection, doc_id, json.dumps(body), row[1] if row else stamp, stamp],
        )
    finally:
        con.close()
    return body


def delete_document(collection: str, doc_id: str, db_path: str | None = None) -> None:
    con = _connect(db_path)
    try:
        con.execute(
            "DELETE FROM documents WHERE collection = ? AND id = ?", [collection, doc_id]
        )
    finally:
        con.close()


def insert_documents(
    collection: str,
    rows: list[dict],
    stamp_field: str = "createdAt",
    db_path: str | None = None,
) -> int:
    """Bulk-insert ``rows`` into ``collection`` under fresh ids.

    Any ``id`` in the input is dropped. Each row gets ``stamp_field`` set to
    the insertion time.

    Returns:
        Number of documents inserted.
    """
    if not rows:
        return 0
    stamp = now_iso()
    records = []
    for row in rows:
        body = {k: v for k, v in row.items() if k != "id"}
        body[stamp_field] = stamp
        records.append(
            {
                "collection": collection,
                "id": _new_id(),
                "data": json.dumps(body),
                "created_at": stamp,
                "updated_at": stamp,
            }
        )
    df = pl.DataFrame(records)
    con = _connect(db_path)
    try:
        con.execute("INSERT INTO documents SELECT * FROM df")
    finally:
        con.close()
    return len(records)


def ping(db_path: str | None = None) -> bool:
    """Return True if the database answers a trivial query."""
    try:
        con = _connect(db_path)
    except duckdb.Error:
        return False
    try:
        return con.execute("SELECT 1").fetchone()[0] == 1
    finally:
        con.close()
