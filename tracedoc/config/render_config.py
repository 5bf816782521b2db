# tracedoc/config/render_config.py
from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


DEFAULT_CHECKS = [
    "No deadlock: never? '(deadlock ?a ?b)'",
    "Messages exchanged: eventually? '(sent ?from ?to ?msg ?time)'",
    "Actors spawned: eventually? '(spawned ?actor)'",
]


class RenderConfig(BaseModel):
    """
    RenderConfig（FINAL）

    语义：
      - 渲染层的全部可调常量
      - 不定义路径，不持有 store
    """

    # facts_table / facts_list 默认截断
    facts_table_limit: int = Field(10, ge=1)
    facts_list_limit: int = Field(20, ge=1)

    # metrics_chart：x 轴分桶数 + y 轴余量
    chart_buckets: int = Field(10, ge=1)
    chart_y_margin: int = Field(10, ge=0)

    # 进程启动标记谓词（metrics_chart fallback 时排除）
    bookkeeping_predicate: str = "spawned"

    # sequence_diagram 查询的消息谓词
    message_predicate: str = "sent"

    # properties 未给 checks 时使用
    default_checks: List[str] = Field(default_factory=lambda: list(DEFAULT_CHECKS))

    diagram_fence: str = "mermaid"
