# tests/conftest.py
from __future__ import annotations

import pytest
from loguru import logger

from tracedoc.context import RenderContext
from tracedoc.config.render_config import RenderConfig
from tracedoc.store.memory import DictActorRegistry, InMemoryFactStore


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture
def store() -> InMemoryFactStore:
    return InMemoryFactStore()


@pytest.fixture
def actors() -> DictActorRegistry:
    return DictActorRegistry({"producer": None, "consumer": None})


@pytest.fixture
def producer_consumer_store() -> InMemoryFactStore:
    """
    producer -> consumer，三个 item，每个 item 一个 ack：
        spawned x2 + sent x6
    """
    s = InMemoryFactStore()
    s.assert_fact("spawned", "producer", tick=0)
    s.assert_fact("spawned", "consumer", tick=0)
    for i in range(3):
        t = 2 * i + 1
        s.assert_fact("sent", "producer", "consumer", ["item", i], t, tick=t)
        s.assert_fact("sent", "consumer", "producer", ["ack", i], t + 1, tick=t + 1)
    return s


@pytest.fixture
def make_ctx(actors):
    """
    Factory fixture for RenderContext (testing only).

    Usage:
        ctx = make_ctx(store)
        ctx = make_ctx(store, config=RenderConfig(facts_table_limit=2))
    """

    def _make(store, config: RenderConfig | None = None, registry=None) -> RenderContext:
        return RenderContext(
            store=store.snapshot(),
            actors=registry if registry is not None else actors,
            config=config or RenderConfig(),
        )

    return _make
