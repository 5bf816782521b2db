# tracedoc/store/memory.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from tracedoc.core.facts import Binding, Fact, Goal
from tracedoc.core.terms import to_term
from tracedoc.core.unify import match
from tracedoc.store.interface import ActorRegistry, FactStore
from tracedoc.utils.logger import logs


class _TraceEvaluator(FactStore):
    """
    Query + temporal operators over ``self.facts()``.

    always(goal):
        the goal holds at every distinct tick at which any fact exists,
        i.e. for each such tick some fact recorded at that tick matches.
        An empty trace is vacuously true.
    eventually(goal) / possibly(goal):
        some fact anywhere in the trace matches.
    never(goal):
        not eventually(goal).
    """

    def query(self, goal: Goal) -> List[Binding]:
        results: List[Binding] = []
        for fact in self.facts():
            binding = match(goal, fact)
            if binding is not None:
                results.append(binding)
        return results

    def always(self, goal: Goal) -> bool:
        ticks: Dict[int, bool] = {}
        for fact in self.facts():
            held = ticks.get(fact.tick, False)
            ticks[fact.tick] = held or match(goal, fact) is not None
        return all(ticks.values())

    def eventually(self, goal: Goal) -> bool:
        return any(match(goal, fact) is not None for fact in self.facts())

    def never(self, goal: Goal) -> bool:
        return not self.eventually(goal)

    def possibly(self, goal: Goal) -> bool:
        return self.eventually(goal)


class TraceSnapshot(_TraceEvaluator):
    """
    不可变 trace 视图（一次渲染 pass 共享同一个 snapshot）
    """

    def __init__(self, facts: Sequence[Fact] = ()):
        self._facts: Tuple[Fact, ...] = tuple(facts)

    def facts(self) -> Tuple[Fact, ...]:
        return self._facts

    def snapshot(self) -> "TraceSnapshot":
        return self

    def __len__(self) -> int:
        return len(self._facts)


class InMemoryFactStore(_TraceEvaluator):
    """
    Append-only in-memory trace.

    Stands in for the external store in the CLI host and in tests.
    """

    def __init__(self, facts: Sequence[Fact] = ()):
        self._facts: List[Fact] = []
        self.time_now = 0
        for fact in facts:
            self._append(fact)

    # --------------------------------------------------
    # writes
    # --------------------------------------------------
    def assert_fact(self, predicate: str, *args: Any, tick: Optional[int] = None) -> Fact:
        fact = Fact(
            predicate,
            tuple(to_term(a) for a in args),
            self.time_now if tick is None else int(tick),
        )
        self._append(fact)
        return fact

    def _append(self, fact: Fact) -> None:
        self._facts.append(fact)
        self.time_now = max(self.time_now, fact.tick)

    def advance(self, ticks: int = 1) -> int:
        self.time_now += ticks
        return self.time_now

    # --------------------------------------------------
    # reads
    # --------------------------------------------------
    def facts(self) -> Tuple[Fact, ...]:
        return tuple(self._facts)

    def snapshot(self) -> TraceSnapshot:
        logs.debug(f"[Store] snapshot taken: {len(self._facts)} facts")
        return TraceSnapshot(self._facts)

    def __len__(self) -> int:
        return len(self._facts)


@contextmanager
def snapshot_of(store: FactStore) -> Iterator[FactStore]:
    """
    Scoped read-only view of ``store`` for one render pass.

    Stores exposing ``snapshot()`` provide their own immutable handle;
    any other store is copied into a TraceSnapshot of its current facts.
    """
    take = getattr(store, "snapshot", None)
    view = take() if callable(take) else TraceSnapshot(store.facts())
    try:
        yield view
    finally:
        logs.debug(f"[Store] snapshot released: {type(view).__name__}")


class DictActorRegistry(ActorRegistry):
    """Actor registry backed by a plain mapping name -> definition."""

    def __init__(self, definitions: Optional[Mapping[str, Any]] = None):
        self._defs: Dict[str, Any] = dict(definitions or {})

    def register(self, name: str, definition: Any = None) -> None:
        self._defs[name] = definition

    def lookup(self, name: str) -> Tuple[bool, Any]:
        if name in self._defs:
            return True, self._defs[name]
        return False, None

