#!filepath: tracedoc/observability/instrumentation.py
from __future__ import annotations

from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict

from tracedoc.observability.metrics import MetricRecorder
from tracedoc.observability.timeline_reporter import TimelineReporter
from tracedoc.observability.timer import Timer


@dataclass
class Instrumentation:
    """
    Instrumentation（Leaf-only accounting）

    设计铁律：
    1. Timeline 只记录叶子节点（record=True），即单个 directive 的渲染
    2. record=False 的 timer 不产生任何副作用
    3. Instrumentation 本身不在热路径打日志
    """

    enabled: bool = True

    def __post_init__(self):
        self._timer = Timer(enabled=self.enabled)
        self.metrics = MetricRecorder(enabled=self.enabled)

        # timeline: OrderedDict[leaf_name, elapsed_seconds]
        self.timeline: Dict[str, float] = OrderedDict()

    # ---------------------------------------------------------
    # Context Manager Timer（唯一入口）
    # ---------------------------------------------------------
    def timer(self, name: str, *, record: bool = True):
        """
        Context-manager timer.

        Parameters
        ----------
        name : str
            计时名称
        record : bool
            - True  : 叶子节点，记录到 timeline
            - False : 父级 scope，仅定义 wall-time（不产生副作用）
        """
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            inst._timer.start(name)
            try:
                yield
            finally:
                elapsed = inst._timer.end(name)
                if record:
                    inst.timeline[name] = elapsed

        return _ctx()

    def directive_totals(self) -> Dict[str, float]:
        """按 directive 名汇总的渲染耗时"""
        return dict(self._timer.totals)

    # ---------------------------------------------------------
    # Timeline 输出（冷路径）
    # ---------------------------------------------------------
    def generate_timeline_report(self, title: str):
        TimelineReporter(self.timeline, title).print()


# -------------------------------------------------------------
# No-op Instrumentation（禁用 observability）
# -------------------------------------------------------------
class NoOpInstrumentation:
    """Instrumentation disabled 时使用。"""

    def __init__(self):
        self.metrics = MetricRecorder(enabled=False)
        self.timeline: Dict[str, float] = {}

    def timer(self, name: str, *, record: bool = True):
        return _NoOpTimer()

    def directive_totals(self) -> Dict[str, float]:
        return {}

    def generate_timeline_report(self, title: str):
        pass


class _NoOpTimer:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc, tb):
        pass
