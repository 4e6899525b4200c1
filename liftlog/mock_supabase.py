import copy
import uuid
from datetime import datetime, timezone

TABLES = ("users", "profiles", "exercises", "sessions", "session_exercises", "session_sets")


class MockSupabaseClient:
    """In-memory stand-in for the Supabase client (enabled with MOCK_DB=true).

    Supports the subset of the PostgREST query builder the app uses:
    select/insert/update/delete, eq/in_/gte filters,
    multi-column order with null placement, limit and exact counts.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        self.data = {name: [] for name in TABLES}
        self._failures = []

    def table(self, table_name):
        self.data.setdefault(table_name, [])
        return MockQuery(self, table_name)

    def inject_failure(self, table_name, operation, after=0):
        """Make the (after+1)-th matching operation on a table raise."""
        self._failures.append({"table": table_name, "operation": operation, "remaining": after})

    def _check_failure(self, table_name, operation):
        for failure in self._failures:
            if failure["table"] == table_name and failure["operation"] == operation:
                if failure["remaining"] == 0:
                    self._failures.remove(failure)
                    raise RuntimeError(f"Injected {operation} failure on {table_name}")
                failure["remaining"] -= 1
                return


class MockQuery:
    def __init__(self, client, table_name):
        self.client = client
        self.table_name = table_name
        self.operation = "select"
        self.payload = None
        self.filters = []
        self.orders = []
        self.limit_count = None
        self.count_mode = None

    # --- operations ---

    def select(self, columns="*", count=None):
        self.operation = "select"
        self.count_mode = count
        return self

    def insert(self, data):
        self.operation = "insert"
        self.payload = data
        return self

    def update(self, data):
        self.operation = "update"
        self.payload = data
        return self

    def delete(self):
        self.operation = "delete"
        return self

    # --- filters ---

    def eq(self, column, value):
        self.filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def in_(self, column, values):
        wanted = {str(v) for v in values}
        self.filters.append(lambda row: str(row.get(column)) in wanted)
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row.get(column) >= value)
        return self

    def order(self, column, desc=False, nullsfirst=None):
        self.orders.append((column, desc, nullsfirst))
        return self

    def limit(self, count):
        self.limit_count = count
        return self

    # --- execution ---

    def _matching(self, rows):
        for f in self.filters:
            rows = [r for r in rows if f(r)]
        return rows

    def _sorted(self, rows):
        # Apply the least significant key first; sorts are stable.
        for column, desc, nullsfirst in reversed(self.orders):
            if nullsfirst is None:
                # Postgres default: NULLS FIRST for DESC, NULLS LAST for ASC
                nullsfirst = desc
            present = [r for r in rows if r.get(column) is not None]
            missing = [r for r in rows if r.get(column) is None]
            present.sort(key=lambda r: r.get(column), reverse=desc)
            rows = missing + present if nullsfirst else present + missing
        return rows

    def execute(self):
        self.client._check_failure(self.table_name, self.operation)
        table = self.client.data[self.table_name]

        if self.operation == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for item in items:
                row = copy.deepcopy(item)
                row.setdefault("id", str(uuid.uuid4()))
                row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
                table.append(row)
                inserted.append(copy.deepcopy(row))
            return MockResponse(inserted)

        rows = self._matching(table)

        if self.operation == "update":
            for row in rows:
                row.update(copy.deepcopy(self.payload))
            return MockResponse([copy.deepcopy(r) for r in rows])

        if self.operation == "delete":
            removed = [copy.deepcopy(r) for r in rows]
            ids = {id(r) for r in rows}
            self.client.data[self.table_name] = [r for r in table if id(r) not in ids]
            return MockResponse(removed)

        rows = self._sorted(rows)
        total = len(rows)
        if self.limit_count is not None:
            rows = rows[:self.limit_count]
        count = total if self.count_mode == "exact" else None
        return MockResponse([copy.deepcopy(r) for r in rows], count=count)


class MockResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count
