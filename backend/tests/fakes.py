"""
In-memory stand-ins for the supabase-py client used by the admin tests.

FakeSupabase keeps one list of dict rows per table and implements the part
of the PostgREST query builder the managers use: select (with simple column
projection and ``count="exact"``), insert, update, upsert(on_conflict),
delete, eq/neq/in_/is_/not_.is_, order and limit.  Unique columns are
enforced per table so constraint violations surface as ``APIError`` the way
PostgREST reports them.

FakeAuth mirrors the GoTrue calls made by IdentityProviderClient.
"""

import threading
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError

# Columns with a unique index in the migration.
UNIQUE_COLUMNS: Dict[str, List[str]] = {
    "profiles": ["user_id"],
    "system_settings": ["key"],
    "feature_flags": ["name"],
    "email_settings": ["singleton"],
    "api_keys": ["key_hash"],
    "system_backups": ["filename"],
}

# Server defaults applied on insert.
DEFAULTS: Dict[str, Dict[str, Any]] = {
    "api_keys": {"is_active": True, "last_used_at": None, "revoked_at": None},
    "feature_flags": {"enabled": False},
    "email_settings": {"singleton": True, "notification_signups": True},
    "profiles": {"role": "user", "status": "pending", "admin_role": None},
}

# Tables keyed by something other than ``id``.
NO_ID_TABLES = {"profiles", "system_settings", "workspace_members"}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class FakeResponse:
    def __init__(self, data: List[Dict], count: Optional[int] = None):
        self.data = data
        self.count = count


class _NotProxy:
    """``query.not_.is_(col, "null")``"""

    def __init__(self, query: "FakeQuery"):
        self._query = query

    def is_(self, field: str, value: Any) -> "FakeQuery":
        expected = None if value in ("null", None) else value
        self._query._filters.append(lambda row: row.get(field) is not expected)
        return self._query

    def eq(self, field: str, value: Any) -> "FakeQuery":
        self._query._filters.append(lambda row: row.get(field) != value)
        return self._query


class FakeQuery:
    """Chainable query builder; nothing happens until ``execute()``."""

    def __init__(self, db: "FakeSupabase", table: str):
        self._db = db
        self._table = table
        self._op = "select"
        self._columns = "*"
        self._count: Optional[str] = None
        self._payload: Any = None
        self._on_conflict: Optional[str] = None
        self._filters: list = []
        self._order: list = []
        self._limit: Optional[int] = None

    # -- operations ----------------------------------------------------------

    def select(self, *columns: str, count: Optional[str] = None, **kwargs):
        self._op = "select"
        self._columns = ",".join(columns) if columns else "*"
        self._count = count
        return self

    def insert(self, payload, **kwargs):
        self._op = "insert"
        self._payload = payload
        return self

    def update(self, payload, **kwargs):
        self._op = "update"
        self._payload = payload
        return self

    def upsert(self, payload, on_conflict: str = "", **kwargs):
        self._op = "upsert"
        self._payload = payload
        self._on_conflict = on_conflict or None
        return self

    def delete(self, **kwargs):
        self._op = "delete"
        return self

    # -- filters -------------------------------------------------------------

    def eq(self, field: str, value: Any):
        self._filters.append(lambda row: row.get(field) == value)
        return self

    def neq(self, field: str, value: Any):
        self._filters.append(lambda row: row.get(field) != value)
        return self

    def in_(self, field: str, values: List):
        self._filters.append(lambda row: row.get(field) in values)
        return self

    def is_(self, field: str, value: Any):
        expected = None if value in ("null", None) else value
        self._filters.append(lambda row: row.get(field) is expected)
        return self

    @property
    def not_(self) -> _NotProxy:
        return _NotProxy(self)

    def order(self, field: str, desc: bool = False, **kwargs):
        self._order.append((field, desc))
        return self

    def limit(self, count: int, **kwargs):
        self._limit = count
        return self

    # -- execution -----------------------------------------------------------

    def execute(self) -> FakeResponse:
        self._db.calls.append((self._table, self._op))
        failure = self._db.failures.get((self._table, self._op))
        if failure is not None:
            raise APIError({"message": failure, "code": "XX000", "hint": None, "details": None})
        with self._db.lock:
            return getattr(self, f"_execute_{self._op}")()

    def _matching(self, rows: List[Dict]) -> List[Dict]:
        return [row for row in rows if all(f(row) for f in self._filters)]

    def _project(self, row: Dict) -> Dict:
        # Embedded relations are not modelled; return the full row.
        if self._columns.strip() == "*" or "(" in self._columns:
            return dict(row)
        names = [c.strip() for c in self._columns.split(",") if c.strip()]
        return {name: row.get(name) for name in names}

    def _execute_select(self) -> FakeResponse:
        rows = self._matching(self._db.tables.setdefault(self._table, []))
        for field, desc in reversed(self._order):
            rows = sorted(
                rows,
                key=lambda r: (r.get(field) is None, r.get(field) or ""),
                reverse=desc,
            )
        count = len(rows) if self._count else None
        if self._limit is not None:
            rows = rows[: self._limit]
        return FakeResponse([self._project(r) for r in rows], count)

    def _check_unique(self, candidate: Dict, ignore: Optional[Dict] = None) -> None:
        for column in UNIQUE_COLUMNS.get(self._table, []):
            if column not in candidate:
                continue
            for row in self._db.tables.setdefault(self._table, []):
                if row is not ignore and row.get(column) == candidate[column]:
                    raise APIError(
                        {
                            "message": (
                                f'duplicate key value violates unique constraint '
                                f'"{self._table}_{column}_key"'
                            ),
                            "code": "23505",
                            "hint": None,
                            "details": None,
                        }
                    )

    def _new_row(self, payload: Dict) -> Dict:
        row = dict(DEFAULTS.get(self._table, {}))
        if self._table not in NO_ID_TABLES:
            row["id"] = str(uuid.uuid4())
        row["created_at"] = _now()
        row.update(payload)
        return row

    def _execute_insert(self) -> FakeResponse:
        payloads = self._payload if isinstance(self._payload, list) else [self._payload]
        inserted = []
        for payload in payloads:
            row = self._new_row(payload)
            self._check_unique(row)
            self._db.tables.setdefault(self._table, []).append(row)
            inserted.append(dict(row))
        return FakeResponse(inserted)

    def _execute_update(self) -> FakeResponse:
        updated = []
        for row in self._matching(self._db.tables.setdefault(self._table, [])):
            self._check_unique(self._payload, ignore=row)
            row.update(self._payload)
            updated.append(dict(row))
        return FakeResponse(updated)

    def _execute_upsert(self) -> FakeResponse:
        payload = self._payload
        rows = self._db.tables.setdefault(self._table, [])
        conflict = self._on_conflict or ("id" if self._table not in NO_ID_TABLES else None)
        existing = next(
            (r for r in rows if conflict and r.get(conflict) == payload.get(conflict)),
            None,
        )
        if existing is not None:
            existing.update(payload)
            return FakeResponse([dict(existing)])
        row = self._new_row(payload)
        self._check_unique(row)
        rows.append(row)
        return FakeResponse([dict(row)])

    def _execute_delete(self) -> FakeResponse:
        rows = self._db.tables.setdefault(self._table, [])
        doomed = self._matching(rows)
        self._db.tables[self._table] = [r for r in rows if r not in doomed]
        return FakeResponse([dict(r) for r in doomed])


# ============================================================================
# AUTH
# ============================================================================


def make_auth_user(
    user_id: Optional[str] = None,
    email: str = "user@example.com",
    provider: str = "email",
) -> SimpleNamespace:
    """A GoTrue-like ``User`` object."""
    return SimpleNamespace(
        id=user_id or str(uuid.uuid4()),
        email=email,
        created_at=datetime(2026, 1, 15, tzinfo=timezone.utc),
        last_sign_in_at=None,
        app_metadata={"provider": provider},
    )


class FakeAuthAdmin:
    def __init__(self, auth: "FakeAuth"):
        self._auth = auth
        self.deleted: List[str] = []
        self.signed_out: List[str] = []
        self.list_calls: List[Dict[str, int]] = []

    def list_users(self, page: int = None, per_page: int = None):
        self.list_calls.append({"page": page, "per_page": per_page})
        users = list(self._auth.users_by_id.values())
        start = ((page or 1) - 1) * (per_page or 50)
        return users[start:start + (per_page or 50)]

    def get_user_by_id(self, uid: str):
        user = self._auth.users_by_id.get(uid)
        if user is None:
            raise Exception("User not found")
        return SimpleNamespace(user=user)

    def delete_user(self, uid: str, should_soft_delete: bool = False):
        if self._auth.fail_admin:
            raise Exception(self._auth.fail_admin)
        self._auth.users_by_id.pop(uid, None)
        self.deleted.append(uid)

    def sign_out(self, jwt: str, scope: str = "global"):
        self.signed_out.append(jwt)
        self._auth.tokens.pop(jwt, None)


class FakeAuth:
    """Tokens map to users; anything else is rejected like an invalid JWT."""

    def __init__(self):
        self.tokens: Dict[str, SimpleNamespace] = {}
        self.users_by_id: Dict[str, SimpleNamespace] = {}
        self.passwords: Dict[str, str] = {}
        self.reset_emails: List[str] = []
        self.fail_admin: Optional[str] = None
        self.admin = FakeAuthAdmin(self)

    def add_user(
        self,
        user: SimpleNamespace,
        token: Optional[str] = None,
        password: Optional[str] = None,
    ) -> SimpleNamespace:
        self.users_by_id[user.id] = user
        if token:
            self.tokens[token] = user
        if password:
            self.passwords[user.email] = password
        return user

    def get_user(self, jwt: Optional[str] = None):
        user = self.tokens.get(jwt)
        if user is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)

    def reset_password_for_email(self, email: str, options: Optional[dict] = None):
        self.reset_emails.append(email)

    def sign_in_with_password(self, credentials: Dict[str, str]):
        email = credentials.get("email")
        user = next((u for u in self.users_by_id.values() if u.email == email), None)
        if user is None or self.passwords.get(email) != credentials.get("password"):
            raise Exception("Invalid login credentials")
        token = f"session-{uuid.uuid4().hex}"
        self.tokens[token] = user
        session = SimpleNamespace(access_token=token, refresh_token="refresh", expires_in=3600)
        return SimpleNamespace(session=session, user=user)


# ============================================================================
# CLIENT
# ============================================================================


class FakeSupabase:
    """Drop-in for ``supabase.Client`` as used by the admin managers."""

    def __init__(self, tables: Optional[Dict[str, List[Dict]]] = None):
        self.tables: Dict[str, List[Dict]] = {k: list(v) for k, v in (tables or {}).items()}
        self.auth = FakeAuth()
        self.lock = threading.Lock()
        self.failures: Dict[tuple, str] = {}
        self.calls: List[tuple] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail_on(self, table: str, op: str, message: str = "connection refused") -> None:
        """Make every ``op`` against ``table`` raise ``APIError(message)``."""
        self.failures[(table, op)] = message

    def rows(self, table: str) -> List[Dict]:
        return self.tables.get(table, [])

    def mutations(self) -> List[tuple]:
        return [c for c in self.calls if c[1] != "select"]
