"""Shared fixtures: an in-memory Realtime Database and connection doubles."""

from __future__ import annotations

import copy
from typing import Any
from unittest.mock import MagicMock

import pytest

from firebase_tools_cli.query import build_default_registry
from firebase_tools_cli.query.evaluator import MemoryOperatorRegistry

DATABASE_URL = "https://demo-project-default-rtdb.firebaseio.com"


def _child(value: Any, path: str) -> Any:
    for part in [p for p in path.split("/") if p]:
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _rtdb_rank(value: Any) -> tuple[Any, ...]:
    # Realtime Database ordering: null < false < true < numbers < strings < objects
    if value is None:
        return (0,)
    if value is False:
        return (1,)
    if value is True:
        return (2,)
    if isinstance(value, int | float):
        return (3, value)
    if isinstance(value, str):
        return (4, value)
    return (5,)


class FakeQuery:
    """Order/bound/limit chain over a snapshot of a fake tree node.

    Results come back in reverse key order to mimic a backend that does
    not preserve the requested ordering.
    """

    def __init__(self, data: Any, calls: list[tuple[str, Any]]) -> None:
        self._data = data
        self._calls = calls
        self._order_child: str | None = None
        self._order_key = False
        self._bounds: list[tuple[str, Any]] = []
        self._limit: int | None = None

    def _record(self, name: str, arg: Any) -> FakeQuery:
        self._calls.append((name, arg))
        return self

    def order_by_child(self, path: str) -> FakeQuery:
        self._order_child = path
        return self._record("order_by_child", path)

    def order_by_key(self) -> FakeQuery:
        self._order_key = True
        return self._record("order_by_key", None)

    def equal_to(self, value: Any) -> FakeQuery:
        if value is None:
            raise ValueError("Equal to value must not be None.")
        self._bounds.append(("eq", value))
        return self._record("equal_to", value)

    def start_at(self, value: Any) -> FakeQuery:
        if value is None:
            raise ValueError("Start value must not be None.")
        self._bounds.append(("ge", value))
        return self._record("start_at", value)

    def end_at(self, value: Any) -> FakeQuery:
        if value is None:
            raise ValueError("End value must not be None.")
        self._bounds.append(("le", value))
        return self._record("end_at", value)

    def limit_to_first(self, limit: int) -> FakeQuery:
        self._limit = limit
        return self._record("limit_to_first", limit)

    def _key(self, item: tuple[str, Any]) -> tuple[Any, ...]:
        if self._order_child is not None:
            return (_rtdb_rank(_child(item[1], self._order_child)), item[0])
        return (item[0],)

    def get(self) -> Any:
        self._calls.append(("get", None))
        if not isinstance(self._data, dict):
            return copy.deepcopy(self._data)
        items = sorted(self._data.items(), key=self._key)
        for kind, bound in self._bounds:
            rank = _rtdb_rank(bound)
            if kind == "eq":
                items = [
                    i for i in items
                    if _rtdb_rank(_child(i[1], self._order_child or "")) == rank
                ]
            elif kind == "ge":
                items = [i for i in items if self._key(i)[0] >= rank]
            else:
                items = [i for i in items if self._key(i)[0] <= rank]
        if self._limit is not None:
            items = items[: self._limit]
        return {k: copy.deepcopy(v) for k, v in reversed(items)}


class FakeReference:
    def __init__(self, tree: dict[str, Any], path: str, calls: list[tuple[str, Any]]) -> None:
        self._tree = tree
        self.path = path
        self._calls = calls

    def _data(self) -> Any:
        return _child(self._tree, self.path)

    def order_by_child(self, path: str) -> FakeQuery:
        return FakeQuery(self._data(), self._calls).order_by_child(path)

    def order_by_key(self) -> FakeQuery:
        return FakeQuery(self._data(), self._calls).order_by_key()

    def get(self) -> Any:
        self._calls.append(("get", None))
        return copy.deepcopy(self._data())


class FakeDatabase:
    """In-memory stand-in for ``firebase_admin.db`` rooted at one tree."""

    def __init__(self, tree: dict[str, Any] | None = None) -> None:
        self.tree = tree if tree is not None else {}
        self.calls: list[tuple[str, Any]] = []

    def reference(self, path: str = "/") -> FakeReference:
        self.calls.append(("reference", path))
        return FakeReference(self.tree, path, self.calls)

    def reads(self) -> int:
        return sum(1 for name, _ in self.calls if name == "get")


class FakeConnection:
    """Duck-typed FirebaseConnection over a FakeDatabase and a mock Firestore."""

    def __init__(
        self,
        database: FakeDatabase | None = None,
        firestore_client: Any = None,
        *,
        database_url: str | None = DATABASE_URL,
        project_id: str | None = "demo-project",
    ) -> None:
        self.database = database or FakeDatabase()
        self.firestore_client = firestore_client or MagicMock(name="firestore")
        self.database_url = database_url
        self.project_id = project_id
        self.closed = False

    def reference(self, path: str = "/") -> FakeReference:
        return self.database.reference(path)

    def firestore(self) -> Any:
        return self.firestore_client

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeConnection:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


@pytest.fixture
def registry() -> MemoryOperatorRegistry:
    return build_default_registry()


@pytest.fixture
def users_db() -> FakeDatabase:
    return FakeDatabase(
        {
            "users": {
                "u1": {"name": "Ada", "age": 30, "city": "London"},
                "u2": {"name": "Bob", "age": 17, "city": "Paris"},
                "u3": {"name": "Cy", "age": 25, "city": "Berlin"},
            },
            "settings": {"theme": "dark"},
            "motd": "hello",
        }
    )


@pytest.fixture
def connection(users_db: FakeDatabase) -> FakeConnection:
    return FakeConnection(users_db)


@pytest.fixture
def make_connection() -> Any:
    """Build a FakeConnection over an arbitrary tree."""

    def factory(tree: dict[str, Any] | None = None, **kwargs: Any) -> FakeConnection:
        return FakeConnection(FakeDatabase(tree), **kwargs)

    return factory


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Any, monkeypatch: pytest.MonkeyPatch) -> Any:
    """Keep tests away from the real ~/.firebase-tools-cli directory."""
    home = tmp_path / "cli-home"
    monkeypatch.setenv("FIREBASE_TOOLS_CLI_HOME", str(home))
    for name in ("GOOGLE_APPLICATION_CREDENTIALS", "FIREBASE_PROJECT", "FIREBASE_DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)
    return home
