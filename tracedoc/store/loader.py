#!filepath: tracedoc/store/loader.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from tracedoc.core.facts import Fact
from tracedoc.core.terms import String, Term, to_term
from tracedoc.store.memory import InMemoryFactStore
from tracedoc.utils.errors import TermConversionError, TraceLoadError
from tracedoc.utils.logger import logs


class TraceLoader:
    """
    TraceLoader（FINAL）

    职责：
      - trace 文件 -> InMemoryFactStore
      - 支持 JSON Lines（一行一个 fact）和 JSON array

    record 格式：
      {"predicate": "sent", "args": ["producer", "consumer", ["item", 1], 0], "tick": 0}

    args 中的对象 {"str": "..."} 表示 String term，其余按 to_term 规则转换。
    """

    def load(self, path: Path | str) -> InMemoryFactStore:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Trace file not found: {path}")

        text = path.read_text(encoding="utf-8")
        records = self._records(text, path)
        facts = [self._to_fact(rec, where) for where, rec in records]

        logs.info(f"[Loader] {path.name}: {len(facts)} facts loaded")
        return InMemoryFactStore(facts)

    # --------------------------------------------------
    def _records(self, text: str, path: Path) -> List[Tuple[str, Any]]:
        stripped = text.lstrip()
        if stripped.startswith("["):
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise TraceLoadError(f"{path.name}: invalid JSON array ({e.msg})") from e
            return [(f"{path.name}[{i}]", rec) for i, rec in enumerate(data)]

        records = []
        for lineno, line in enumerate(text.splitlines(), start=1):
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            try:
                records.append((f"{path.name}:{lineno}", json.loads(line)))
            except json.JSONDecodeError as e:
                raise TraceLoadError(f"{path.name}:{lineno}: invalid JSON ({e.msg})") from e
        return records

    def _to_fact(self, rec: Any, where: str) -> Fact:
        if not isinstance(rec, dict):
            raise TraceLoadError(f"{where}: record must be an object")
        predicate = rec.get("predicate")
        if not isinstance(predicate, str) or not predicate:
            raise TraceLoadError(f"{where}: missing predicate")

        tick = rec.get("tick", 0)
        if isinstance(tick, bool) or not isinstance(tick, int):
            raise TraceLoadError(f"{where}: tick must be an integer")

        try:
            args = tuple(self._to_term(a) for a in rec.get("args", []))
        except TermConversionError as e:
            raise TraceLoadError(f"{where}: {e}") from e

        return Fact(predicate, args, tick)

    def _to_term(self, value: Any) -> Term:
        if isinstance(value, dict):
            if set(value) == {"str"} and isinstance(value["str"], str):
                return String(value["str"])
            raise TermConversionError(f"unsupported object term: {value!r}")
        if isinstance(value, list):
            return to_term([self._to_term(v) for v in value])
        return to_term(value)


@logs.catch("trace load failed")
def load_trace(path: Path | str) -> InMemoryFactStore:
    return TraceLoader().load(path)


def facts_from_dicts(records: Iterable[Dict[str, Any]]) -> InMemoryFactStore:
    """Build a store from already-parsed records (same shape as the file format)."""
    loader = TraceLoader()
    return InMemoryFactStore(
        [loader._to_fact(rec, f"record[{i}]") for i, rec in enumerate(records)]
    )
