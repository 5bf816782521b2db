#!filepath: tracedoc/observability/timeline_reporter.py
from typing import Dict

from tracedoc.utils.logger import logs


class TimelineReporter:
    """
    渲染 Timeline 报告：
    - directive → 耗时秒数
    """

    def __init__(self, timeline: Dict[str, float], title: str):
        self.timeline = timeline
        self.title = title

    def print(self):
        logs.info(f"[Timeline] ===== Render timeline for {self.title} =====")

        total = 0.0
        for name, sec in self.timeline.items():
            logs.info(f"[Timeline] {str(name):<30} {sec:>8.3f}s")
            total += sec

        logs.info(f"[Timeline] Total{'':<27} {total:>8.3f}s")
        logs.info("[Timeline] ===========================================")
