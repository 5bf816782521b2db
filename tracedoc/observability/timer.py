#!filepath: tracedoc/observability/timer.py
import time
from typing import Dict


class Timer:
    """
    directive 渲染计时器（perf_counter）

    label 形如 "facts_table@12"（directive 名 @ span 起点）
    - start(label)
    - end(label) → 本次耗时（秒），同时累加到 totals[directive 名]

    同一 label 不可嵌套：重复 start 覆盖之前的起点。
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._open: Dict[str, float] = {}
        self.totals: Dict[str, float] = {}

    def start(self, label: str):
        if self.enabled:
            self._open[label] = time.perf_counter()

    def end(self, label: str) -> float:
        started = self._open.pop(label, None)
        if not self.enabled or started is None:
            return 0.0

        elapsed = time.perf_counter() - started
        directive = label.split("@", 1)[0]
        self.totals[directive] = self.totals.get(directive, 0.0) + elapsed
        return elapsed
