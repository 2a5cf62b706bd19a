# =============================================================================
# tests/fakes.py - In-Memory Supabase Stand-In
# =============================================================================
# A small in-memory double for the parts of the supabase-py client the
# services use:
# - client.table(name).select/insert/update/delete + eq/neq/in_/order/limit
# - client.storage.from_(bucket).upload/get_public_url/remove
#
# It enforces the constraints from supabase/schema.sql that the services
# rely on (unique category slug, foreign keys, on delete set null/cascade)
# and raises postgrest APIError with the real Postgres codes.
#
# Failures can be injected per (table, action) or per storage operation.
# =============================================================================

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from postgrest.exceptions import APIError

BASE_TIME = datetime(2024, 12, 1, 8, 0, tzinfo=timezone.utc)

TABLE_DEFAULTS = {
    "categories": {
        "description": None,
        "image_url": None,
        "display_order": 0,
    },
    "products": {
        "description": None,
        "price": None,
        "category_id": None,
        "is_available": True,
    },
    "product_images": {
        "storage_path": None,
        "is_primary": False,
        "display_order": 0,
    },
    "testimonials": {
        "product_id": None,
        "image_url": None,
        "is_featured": False,
    },
}

UNIQUE_COLUMNS = {
    "categories": ["slug"],
}

# (table, column) -> referenced table
FOREIGN_KEYS = {
    ("products", "category_id"): "categories",
    ("product_images", "product_id"): "products",
    ("testimonials", "product_id"): "products",
}

# referenced table -> [(table, column, on_delete)]
ON_DELETE = {
    "categories": [("products", "category_id", "set null")],
    "products": [
        ("product_images", "product_id", "cascade"),
        ("testimonials", "product_id", "set null"),
    ],
}


class FakeResponse:
    def __init__(self, data: list[dict], count: int | None = None):
        self.data = data
        self.count = count


class FakeQuery:
    """One PostgREST request being built; runs against FakeSupabase on execute()."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.action = "select"
        self.columns = "*"
        self.count_mode = None
        self.payload: Any = None
        self.filters: list = []
        self.orders: list[tuple[str, bool]] = []
        self.row_limit: int | None = None

    # Actions

    def select(self, columns: str = "*", count: str | None = None) -> "FakeQuery":
        self.action = "select"
        self.columns = columns
        self.count_mode = count
        return self

    def insert(self, row: dict | list[dict]) -> "FakeQuery":
        self.action = "insert"
        self.payload = row if isinstance(row, list) else [row]
        return self

    def update(self, values: dict) -> "FakeQuery":
        self.action = "update"
        self.payload = values
        return self

    def delete(self) -> "FakeQuery":
        self.action = "delete"
        return self

    # Filters and modifiers

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def in_(self, column: str, values: list) -> "FakeQuery":
        allowed = list(values)
        self.filters.append(lambda row: row.get(column) in allowed)
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.orders.append((column, desc))
        return self

    def limit(self, size: int) -> "FakeQuery":
        self.row_limit = size
        return self

    def execute(self) -> FakeResponse:
        self.db.executed.append((self.table, self.action))
        self.db.check_failure(self.table, self.action)
        return getattr(self, f"_run_{self.action}")()

    # Runners

    def _matching(self) -> list[dict]:
        return [row for row in self.db.tables[self.table] if all(f(row) for f in self.filters)]

    def _run_select(self) -> FakeResponse:
        rows = self._matching()
        for column, desc in reversed(self.orders):
            present = [r for r in rows if r.get(column) is not None]
            missing = [r for r in rows if r.get(column) is None]
            present.sort(key=lambda r: r[column], reverse=desc)
            # Postgres puts NULLs last ascending, first descending
            rows = missing + present if desc else present + missing

        total = len(rows)
        if self.row_limit is not None:
            rows = rows[: self.row_limit]

        if self.columns != "*":
            wanted = [c.strip() for c in self.columns.split(",")]
            rows = [{c: r.get(c) for c in wanted} for r in rows]
        else:
            rows = [dict(r) for r in rows]

        return FakeResponse(rows, count=total if self.count_mode else None)

    def _run_insert(self) -> FakeResponse:
        inserted = []
        for values in self.payload:
            row = {
                "id": str(uuid.uuid4()),
                **TABLE_DEFAULTS.get(self.table, {}),
                **values,
            }
            row.setdefault("created_at", self.db.next_timestamp())
            if self.table == "products":
                row.setdefault("updated_at", row["created_at"])
            self.db.check_constraints(self.table, row)
            self.db.tables[self.table].append(row)
            inserted.append(dict(row))
        return FakeResponse(inserted)

    def _run_update(self) -> FakeResponse:
        rows = self._matching()
        for row in rows:
            self.db.check_constraints(self.table, {**row, **self.payload}, exclude_id=row["id"])
        for row in rows:
            row.update(self.payload)
        return FakeResponse([dict(r) for r in rows])

    def _run_delete(self) -> FakeResponse:
        rows = self._matching()
        for row in rows:
            self.db.tables[self.table].remove(row)
            self.db.apply_on_delete(self.table, row["id"])
        return FakeResponse([dict(r) for r in rows])


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path: str, file: bytes, file_options: dict | None = None) -> dict:
        if "upload" in self.storage.failures:
            raise RuntimeError("storage unavailable")
        if (self.name, path) in self.storage.objects:
            raise RuntimeError("The resource already exists")
        content_type = (file_options or {}).get("content-type")
        self.storage.objects[(self.name, path)] = (file, content_type)
        return {"Key": f"{self.name}/{path}"}

    def get_public_url(self, path: str) -> str:
        return f"{self.storage.base_url}/storage/v1/object/public/{self.name}/{path}"

    def remove(self, paths: list[str]) -> list[dict]:
        if "remove" in self.storage.failures:
            raise RuntimeError("storage unavailable")
        removed = []
        for path in paths:
            if self.storage.objects.pop((self.name, path), None) is not None:
                removed.append({"name": path})
        return removed


class FakeStorage:
    def __init__(self, base_url: str):
        self.base_url = base_url
        self.objects: dict[tuple[str, str], tuple[bytes, str | None]] = {}
        self.failures: set[str] = set()

    def from_(self, bucket: str) -> FakeBucket:
        return FakeBucket(self, bucket)

    def get_bucket(self, bucket: str) -> dict:
        return {"id": bucket, "name": bucket, "public": True}

    def keys(self, bucket: str = "kue") -> list[str]:
        return sorted(path for name, path in self.objects if name == bucket)


class FakeSupabase:
    """
    In-memory Supabase client.

    Example:
        client = FakeSupabase()
        client.fail("product_images", "insert")
        client.storage.failures.add("remove")
    """

    def __init__(self, url: str = "https://test-project.supabase.co"):
        self.url = url
        self.tables: dict[str, list[dict]] = {name: [] for name in TABLE_DEFAULTS}
        self.storage = FakeStorage(url)
        self.failures: dict[tuple[str, str], str] = {}
        self.executed: list[tuple[str, str]] = []
        self._tick = 0

    def table(self, name: str) -> FakeQuery:
        if name not in self.tables:
            raise APIError({"message": f'relation "{name}" does not exist', "code": "42P01"})
        return FakeQuery(self, name)

    def rows(self, table: str) -> list[dict]:
        return [dict(r) for r in self.tables[table]]

    def fail(self, table: str, action: str, code: str = "XX000") -> None:
        """Make every `action` on `table` fail until recover() is called."""
        self.failures[(table, action)] = code

    def recover(self) -> None:
        self.failures.clear()

    def check_failure(self, table: str, action: str) -> None:
        code = self.failures.get((table, action))
        if code is not None:
            raise APIError({"message": f"{action} on {table} failed", "code": code})

    def next_timestamp(self) -> str:
        self._tick += 1
        return (BASE_TIME + timedelta(seconds=self._tick)).isoformat()

    def check_constraints(self, table: str, row: dict, exclude_id: str | None = None) -> None:
        for column in UNIQUE_COLUMNS.get(table, []):
            for other in self.tables[table]:
                if other["id"] != exclude_id and other.get(column) == row.get(column):
                    raise APIError({
                        "message": f'duplicate key value violates unique constraint "{table}_{column}_key"',
                        "code": "23505",
                    })

        for (fk_table, column), referenced in FOREIGN_KEYS.items():
            if fk_table != table or row.get(column) is None:
                continue
            if not any(r["id"] == row[column] for r in self.tables[referenced]):
                raise APIError({
                    "message": f'insert or update on table "{table}" violates foreign key constraint',
                    "code": "23503",
                })

    def apply_on_delete(self, table: str, row_id: str) -> None:
        for child_table, column, action in ON_DELETE.get(table, []):
            children = [r for r in self.tables[child_table] if r.get(column) == row_id]
            for child in children:
                if action == "cascade":
                    self.tables[child_table].remove(child)
                else:
                    child[column] = None


class RecordingInvalidator:
    """ViewInvalidator that remembers every batch of paths it was given."""

    def __init__(self):
        self.calls: list[list[str]] = []

    def invalidate(self, paths: list[str]) -> bool:
        self.calls.append(list(paths))
        return True

    @property
    def paths(self) -> set[str]:
        return {path for call in self.calls for path in call}


class FakeClock:
    """Deterministic clock: each call is one second after the previous."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        self.now += 1
        return self.now
