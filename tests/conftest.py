"""
Shared fixtures: an in-memory stand-in for the Supabase client.

FakeSupabase implements the part of the PostgREST query builder and of the
auth API that the services use, and records every table access so tests can
assert that a request never reached the store.
"""

import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from showcase.main import app
from showcase.database.supabase_client import get_supabase, get_client_factory

EPOCH = datetime(2024, 9, 1, tzinfo=timezone.utc)

TABLE_DEFAULTS = {
    "projects": {"featured": False, "likes_count": 0},
}


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.row_limit = None
        self.maybe = False

    def select(self, columns="*", count=None):
        self.op = "select"
        self.columns = columns
        return self

    def insert(self, data):
        self.op = "insert"
        self.payload = data
        return self

    def update(self, data):
        self.op = "update"
        self.payload = data
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def or_(self, expression):
        clauses = []
        for part in expression.split(","):
            column, operator, pattern = part.split(".", 2)
            assert operator == "ilike"
            clauses.append((column, pattern.strip("%").lower()))
        self.filters.append(
            lambda row: any(needle in (row.get(col) or "").lower() for col, needle in clauses)
        )
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    def maybe_single(self):
        self.maybe = True
        return self

    def _matching(self):
        return [row for row in self.db.tables[self.table] if all(f(row) for f in self.filters)]

    def _embed(self, row):
        row = dict(row)
        if self.table == "project_bookmarks" and "projects (" in self.columns:
            project = self.db.find("projects", row["project_id"])
            if project is not None:
                project = dict(project)
                project["profiles"] = self.db.find("profiles", project.get("user_id"))
            row["projects"] = project
        elif "profiles:user_id" in self.columns:
            row["profiles"] = self.db.find("profiles", row.get("user_id"))
        return row

    def execute(self):
        if self.db.fail_with is not None:
            raise self.db.fail_with

        if self.op == "insert":
            row = dict(TABLE_DEFAULTS.get(self.table, {}))
            row.update(self.payload)
            row.setdefault("id", str(uuid.uuid4()))
            stamp = self.db.next_timestamp()
            row.setdefault("created_at", stamp)
            row.setdefault("updated_at", stamp)
            self.db.tables[self.table].append(row)
            return SimpleNamespace(data=[dict(row)], count=None)

        rows = self._matching()
        if self.op == "update":
            for row in rows:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in rows], count=None)
        if self.op == "delete":
            self.db.tables[self.table] = [r for r in self.db.tables[self.table] if r not in rows]
            return SimpleNamespace(data=[dict(row) for row in rows], count=None)

        if self.order_by:
            column, desc = self.order_by
            rows = sorted(rows, key=lambda r: r.get(column) or "", reverse=desc)
        if self.row_limit is not None:
            rows = rows[:self.row_limit]
        rows = [self._embed(row) for row in rows]
        if self.maybe:
            # postgrest returns no response at all when maybe_single matches nothing
            return SimpleNamespace(data=rows[0], count=None) if rows else None
        return SimpleNamespace(data=rows, count=len(rows))


class FakeSubscription:
    def __init__(self, listeners, callback):
        self.listeners = listeners
        self.callback = callback

    def unsubscribe(self):
        if self.callback in self.listeners:
            self.listeners.remove(self.callback)


class FakeDirectory:
    """Accounts and issued tokens, shared by every client of one project"""

    def __init__(self):
        self.users = {}
        self.tokens = {}
        self.revoked = []


class FakeAdmin:
    def __init__(self, directory):
        self.directory = directory

    def sign_out(self, jwt, scope="global"):
        self.directory.revoked.append(jwt)
        self.directory.tokens.pop(jwt, None)


class FakeAuth:
    """Auth API of one client: the session and listeners are its own"""

    def __init__(self, directory):
        self.directory = directory
        self.admin = FakeAdmin(directory)
        self.session = None
        self.listeners = []

    @property
    def users(self):
        return self.directory.users

    @property
    def tokens(self):
        return self.directory.tokens

    @property
    def revoked(self):
        return self.directory.revoked

    def _make_user(self, email, metadata):
        now = datetime.now(timezone.utc)
        return SimpleNamespace(
            id=str(uuid.uuid4()), email=email, user_metadata=metadata,
            app_metadata={}, created_at=now, updated_at=now,
        )

    def create_user(self, email, password="secret123", metadata=None):
        user = self._make_user(email, metadata or {})
        self.users[email] = (user, password)
        token = f"token-{user.id}"
        self.tokens[token] = user
        return user, token

    def _notify(self, event, session):
        for callback in list(self.listeners):
            callback(event, session)

    def sign_up(self, credentials):
        if credentials["email"] in self.users:
            raise Exception("User already registered")
        metadata = credentials.get("options", {}).get("data", {})
        user, _ = self.create_user(credentials["email"], credentials["password"], metadata)
        return SimpleNamespace(user=user, session=None)

    def sign_in_with_password(self, credentials):
        entry = self.users.get(credentials["email"])
        if entry is None or entry[1] != credentials["password"]:
            raise Exception("Invalid login credentials")
        user = entry[0]
        token = f"token-{user.id}"
        self.tokens[token] = user
        self.session = SimpleNamespace(access_token=token, user=user)
        self._notify("SIGNED_IN", self.session)
        return SimpleNamespace(user=user, session=self.session)

    def get_user(self, jwt=None):
        user = self.tokens.get(jwt)
        if user is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)

    def get_session(self):
        return self.session

    def sign_out(self):
        self.session = None
        self._notify("SIGNED_OUT", None)

    def on_auth_state_change(self, callback):
        self.listeners.append(callback)
        return FakeSubscription(self.listeners, callback)


class FakePostgrest:
    def __init__(self, client):
        self.client = client

    def auth(self, token):
        self.client.token = token


class FakeSupabase:
    """One client; clients made by new_client() share the root's tables.

    Every table access is logged in ``identities`` together with the token the
    client was acting as (None for the anon key).
    """

    def __init__(self, root=None):
        self.root = root or self
        if root is None:
            self.tables = {
                name: [] for name in (
                    "profiles", "projects", "project_likes", "project_bookmarks",
                    "project_comments", "project_tags",
                )
            }
            self.directory = FakeDirectory()
            self.calls = []
            self.identities = []
            self.clients = []
            self.fail_with = None
            self._clock = 0
        self.token = None
        self.postgrest = FakePostgrest(self)
        self.auth = FakeAuth(self.root.directory)
        # A real client swaps its store credentials when its own session changes
        self.auth.on_auth_state_change(self._on_own_session_change)

    def _on_own_session_change(self, event, session):
        self.token = session.access_token if session else None

    def new_client(self):
        client = FakeSupabase(root=self.root)
        self.root.clients.append(client)
        return client

    def table(self, name):
        self.root.calls.append(name)
        self.root.identities.append((name, self.token))
        return FakeQuery(self.root, name)

    def next_timestamp(self):
        self._clock += 1
        return (EPOCH + timedelta(minutes=self._clock)).isoformat()

    def find(self, table, row_id):
        for row in self.tables[table]:
            if row["id"] == row_id:
                return dict(row)
        return None

    def add_user(self, email, name=None, with_profile=True):
        """Create an auth user (and profile); returns (user_id, auth headers)"""
        user, token = self.auth.create_user(email, metadata={"name": name} if name else {})
        if with_profile:
            self.tables["profiles"].append({
                "id": user.id, "name": name, "email": email, "github_url": None,
                "avatar_url": None, "bio": None,
                "created_at": self.next_timestamp(), "updated_at": None,
            })
        return user.id, {"Authorization": f"Bearer {token}"}

    def add_project(self, user_id, **fields):
        row = {
            "id": str(uuid.uuid4()), "user_id": user_id, "title": "Untitled",
            "description": None, "tech_stack": None, "category": "Web",
            "thumbnail_url": None, "github_url": None, "demo_url": None,
            "featured": False, "likes_count": 0,
        }
        row.update(fields)
        stamp = self.next_timestamp()
        row.setdefault("created_at", stamp)
        row.setdefault("updated_at", stamp)
        self.tables["projects"].append(row)
        return row["id"]


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def client(supabase):
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_client_factory] = lambda: supabase.new_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def alice(supabase):
    return supabase.add_user("alice@club.edu", name="Alice")


@pytest.fixture
def bob(supabase):
    return supabase.add_user("bob@club.edu", name="Bob")
