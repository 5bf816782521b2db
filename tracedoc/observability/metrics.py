#!filepath: tracedoc/observability/metrics.py
from dataclasses import dataclass, field
from typing import Dict

from tracedoc.utils.logger import logs


@dataclass
class MetricRecorder:
    """
    单次 render pass 的计数器（directives_total / rendered / diagnostics）

    日志只走 debug 级别。
    """

    enabled: bool = True
    metrics: Dict[str, int] = field(default_factory=dict)

    def record(self, name: str, value: int):
        if not self.enabled:
            return
        self.metrics[name] = value
        logs.debug(f"[Metric] {name} = {value}")

    def summary(self) -> str:
        return " ".join(f"{k}={v}" for k, v in self.metrics.items())
