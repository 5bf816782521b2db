#!filepath: tracedoc/store/interface.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Sequence, Tuple

from tracedoc.core.facts import Binding, Fact, Goal


class FactStore(ABC):
    """
    FactStore（契约 / FROZEN）

    渲染层只读消费 fact trace：
      - query(goal)      : 位置合一，一条匹配 fact -> 一个 Binding（trace 顺序）
      - facts()          : 完整 trace（记录顺序）
      - always / eventually / never / possibly : trace 级时序谓词

    Implementations must honour repeated-variable consistency: a variable
    used twice in one goal only matches facts whose two positions are equal.
    """

    @abstractmethod
    def query(self, goal: Goal) -> List[Binding]:
        ...

    @abstractmethod
    def facts(self) -> Sequence[Fact]:
        ...

    @abstractmethod
    def always(self, goal: Goal) -> bool:
        ...

    @abstractmethod
    def eventually(self, goal: Goal) -> bool:
        ...

    @abstractmethod
    def never(self, goal: Goal) -> bool:
        ...

    @abstractmethod
    def possibly(self, goal: Goal) -> bool:
        ...


class ActorRegistry(ABC):
    """
    Actor 定义注册表（外部协作者）

    只用于存在性检查；definition handle 对渲染层不透明。
    """

    @abstractmethod
    def lookup(self, name: str) -> Tuple[bool, Any]:
        ...

    def exists(self, name: str) -> bool:
        found, _ = self.lookup(name)
        return found
