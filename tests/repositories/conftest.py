"""
Motor stand-ins for repository tests.
Each collection is a MagicMock whose awaitable methods are AsyncMocks.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock


class FakeCursor:
    """Chainable find() cursor that also supports `async for`."""

    def __init__(self, docs=None):
        self.docs = list(docs or [])
        self.sort = MagicMock(return_value=self)
        self.skip = MagicMock(return_value=self)
        self.limit = MagicMock(return_value=self)
        self.to_list = AsyncMock(side_effect=lambda length=None: list(self.docs))

    def __aiter__(self):
        self._iter = iter(self.docs)
        return self

    async def __anext__(self):
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration


def make_collection():
    collection = MagicMock()
    for method in (
        "insert_one", "find_one", "find_one_and_update",
        "update_one", "update_many", "delete_one", "delete_many", "count_documents",
    ):
        setattr(collection, method, AsyncMock())
    collection.find = MagicMock(return_value=FakeCursor())
    collection.aggregate = MagicMock(return_value=FakeCursor())
    return collection


@pytest.fixture
def fake_db():
    """Database whose collections are created on first access."""
    collections = {}

    def collection(name):
        if name not in collections:
            collections[name] = make_collection()
        return collections[name]

    db = MagicMock()
    db.__getitem__.side_effect = collection
    return db


@pytest.fixture
def cursor():
    """Build a FakeCursor over the given documents."""
    return FakeCursor
