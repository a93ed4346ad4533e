# orders/store.py

import sqlite3
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DB_PATH, MEDIA_DIR, MEDIA_BUCKET
from .exceptions import StoreError
from .logger import get_logger


log = get_logger("store")

SCHEMA = {
    "orders": """
    CREATE TABLE IF NOT EXISTS orders (
        id TEXT PRIMARY KEY,
        order_number TEXT,
        order_name TEXT,
        client_id TEXT,
        manufacturer_id TEXT,
        status TEXT,
        created_by TEXT,
        sample_fee TEXT,
        sample_eta TEXT,
        sample_status TEXT,
        sample_notes TEXT,
        sample_routed_to TEXT,
        sample_workflow_status TEXT,
        sample_routed_at TEXT,
        sample_routed_by TEXT,
        created_at TEXT
    )
    """,
    "order_products": """
    CREATE TABLE IF NOT EXISTS order_products (
        id TEXT PRIMARY KEY,
        order_id TEXT,
        product_id TEXT,
        product_order_number TEXT,
        description TEXT,
        standard_price TEXT,
        bulk_price TEXT,
        shipping_air_price TEXT,
        shipping_boat_price TEXT,
        production_time TEXT,
        sample_required INTEGER,
        sample_fee TEXT,
        sample_eta TEXT,
        sample_status TEXT,
        sample_notes TEXT,
        product_status TEXT,
        routed_to TEXT,
        created_at TEXT
    )
    """,
    "order_items": """
    CREATE TABLE IF NOT EXISTS order_items (
        id TEXT PRIMARY KEY,
        order_product_id TEXT,
        variant_combo TEXT,
        quantity INTEGER,
        notes TEXT,
        admin_status TEXT,
        manufacturer_status TEXT,
        created_at TEXT
    )
    """,
    "order_media": """
    CREATE TABLE IF NOT EXISTS order_media (
        id TEXT PRIMARY KEY,
        order_product_id TEXT,
        file_url TEXT,
        file_type TEXT,
        uploaded_by TEXT,
        original_filename TEXT,
        display_name TEXT,
        created_at TEXT
    )
    """,
    "manufacturer_notifications": """
    CREATE TABLE IF NOT EXISTS manufacturer_notifications (
        id TEXT PRIMARY KEY,
        manufacturer_id TEXT,
        order_id TEXT,
        product_id TEXT,
        type TEXT,
        message TEXT,
        is_read INTEGER,
        created_at TEXT
    )
    """,
    "notifications": """
    CREATE TABLE IF NOT EXISTS notifications (
        id TEXT PRIMARY KEY,
        user_id TEXT,
        type TEXT,
        message TEXT,
        order_id TEXT,
        created_at TEXT
    )
    """,
    "audit_log": """
    CREATE TABLE IF NOT EXISTS audit_log (
        id TEXT PRIMARY KEY,
        user_id TEXT,
        user_name TEXT,
        action_type TEXT,
        target_type TEXT,
        target_id TEXT,
        old_value TEXT,
        new_value TEXT,
        timestamp TEXT,
        created_at TEXT
    )
    """,
}


class OrderStore:
    """
    Local persistence for orders: SQLite tables plus a media directory.

    Every call opens its own connection, so there is no transaction spanning
    an order and its products.
    """

    def __init__(self, db_path: str = DB_PATH, media_dir: str = MEDIA_DIR):
        self.db_path = str(db_path)
        self.media_dir = Path(media_dir)

    def _conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _check_table(self, table: str) -> None:
        if table not in SCHEMA:
            raise StoreError(f"Unknown table: {table}")

    def _columns(self, cur: sqlite3.Cursor, table: str) -> set[str]:
        cur.execute(f"PRAGMA table_info({table})")
        return {row[1] for row in cur.fetchall()}

    def init_db(self) -> None:
        conn = self._conn()
        cur = conn.cursor()
        for ddl in SCHEMA.values():
            cur.execute(ddl)
        cur.execute("CREATE INDEX IF NOT EXISTS idx_order_products_order ON order_products(order_id)")
        cur.execute("CREATE INDEX IF NOT EXISTS idx_order_items_product ON order_items(order_product_id)")
        conn.commit()
        conn.close()
        log.info(f"Store initialized at {self.db_path}")

    # ---------- Rows ----------
    def insert(self, table: str, row: Dict[str, Any]) -> str:
        """Insert one row and return its id (generated when missing)."""
        return self.insert_many(table, [row])[0]

    def insert_many(self, table: str, rows: List[Dict[str, Any]]) -> List[str]:
        self._check_table(table)
        if not rows:
            return []

        conn = self._conn()
        try:
            cur = conn.cursor()
            known = self._columns(cur, table)
            now = datetime.now().isoformat()
            ids = []
            for row in rows:
                data = dict(row)
                data.setdefault("id", str(uuid.uuid4()))
                if "created_at" in known:
                    data.setdefault("created_at", now)
                unknown = set(data) - known
                if unknown:
                    raise StoreError(f"Unknown columns for {table}: {sorted(unknown)}")
                cols = ", ".join(f'"{c}"' for c in data)
                marks = ", ".join("?" for _ in data)
                cur.execute(f"INSERT INTO {table} ({cols}) VALUES ({marks})", tuple(data.values()))
                ids.append(data["id"])
            conn.commit()
            return ids
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"Insert into {table} failed: {e}") from e
        finally:
            conn.close()

    def update(self, table: str, row_id: str, values: Dict[str, Any]) -> int:
        self._check_table(table)
        if not values:
            return 0
        conn = self._conn()
        try:
            sets = ", ".join(f'"{c}"=?' for c in values)
            cur = conn.execute(
                f"UPDATE {table} SET {sets} WHERE id=?",
                (*values.values(), row_id),
            )
            conn.commit()
            return cur.rowcount
        except sqlite3.Error as e:
            raise StoreError(f"Update of {table}.{row_id} failed: {e}") from e
        finally:
            conn.close()

    def fetch_one(self, table: str, row_id: str) -> Optional[Dict[str, Any]]:
        self._check_table(table)
        conn = self._conn()
        row = conn.execute(f"SELECT * FROM {table} WHERE id=?", (row_id,)).fetchone()
        conn.close()
        return dict(row) if row else None

    def fetch_all(self, table: str, **where: Any) -> List[Dict[str, Any]]:
        """Fetch rows matching all given column=value filters, oldest first."""
        self._check_table(table)
        sql = f"SELECT * FROM {table}"
        if where:
            sql += " WHERE " + " AND ".join(f'"{c}"=?' for c in where)
        sql += " ORDER BY rowid"
        conn = self._conn()
        try:
            rows = conn.execute(sql, tuple(where.values())).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Query on {table} failed: {e}") from e
        finally:
            conn.close()
        return [dict(r) for r in rows]

    def order_numbers(self, limit: int = 100) -> List[str]:
        """Most recent order numbers, newest first."""
        conn = self._conn()
        rows = conn.execute(
            "SELECT order_number FROM orders ORDER BY created_at DESC, rowid DESC LIMIT ?",
            (limit,),
        ).fetchall()
        conn.close()
        return [r["order_number"] for r in rows if r["order_number"]]

    def find_order(self, order_number: str) -> Optional[Dict[str, Any]]:
        rows = self.fetch_all("orders", order_number=order_number)
        return rows[0] if rows else None

    def latest_order_number(self) -> Optional[str]:
        numbers = self.order_numbers(limit=1)
        return numbers[0] if numbers else None

    # ---------- Storage ----------
    def upload(self, path: str, data: bytes) -> str:
        """Store file bytes under the media bucket and return its public URL."""
        target = self.media_dir / MEDIA_BUCKET / path
        if target.exists():
            raise StoreError(f"File already exists: {path}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        return (self.media_dir / MEDIA_BUCKET / path).resolve().as_uri()

    def remove(self, path: str) -> None:
        """Delete a stored file (missing files are ignored)."""
        (self.media_dir / MEDIA_BUCKET / path).unlink(missing_ok=True)
