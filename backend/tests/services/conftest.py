"""Service test fixtures - fresh GroupStore + FastAPI test client.

Invariants:
    - Every test gets its own GroupStore with deterministic ids (g1, g2, ...)
    - get_group_store dependency overridden to return that store

Design Decisions:
    - ASGITransport does not run the lifespan, so the process-wide store is never
      built during route tests; the override is the only store the app sees
"""

import itertools

import pytest
from httpx import ASGITransport, AsyncClient

from knowledge_base.core.domain_types import GroupId
from knowledge_base.core.group_store import GroupSeed, build_group_store
from knowledge_base.infrastructure.store import get_group_store
from knowledge_base.main import app


@pytest.fixture
def store():
    """Built-in "Getting Started" (g1, active) plus editable "Docs" (g2), capacity 2."""
    counter = itertools.count(1)
    return build_group_store(
        [
            GroupSeed(name="Getting Started", urls=["https://example.com/start"]),
            GroupSeed(name="Docs", is_editable=True),
        ],
        max_urls=2,
        id_factory=lambda: GroupId(f"g{next(counter)}"),
    )


@pytest.fixture
async def client(store):
    """FastAPI test client with the group store dependency overridden."""
    app.dependency_overrides[get_group_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
