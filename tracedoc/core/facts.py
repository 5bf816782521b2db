# tracedoc/core/facts.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from tracedoc.core.terms import Term, to_term

# 变量名 -> 绑定的 Term；一次成功匹配产生一个 Binding
Binding = Dict[str, Term]


@dataclass(frozen=True)
class Fact:
    """
    Fact（FINAL / FROZEN）

    不可变事实：
      - predicate + args（有序 Term）
      - tick：逻辑时间
    """

    predicate: str
    args: Tuple[Term, ...] = ()
    tick: int = 0

    @classmethod
    def of(cls, predicate: str, *args, tick: int = 0) -> "Fact":
        return cls(predicate, tuple(to_term(a) for a in args), int(tick))

    def display(self) -> str:
        return " ".join([self.predicate, *(a.display() for a in self.args)])

    def __str__(self) -> str:
        return "(" + " ".join([self.predicate, *(str(a) for a in self.args)]) + ")"


@dataclass(frozen=True)
class Goal:
    """
    查询模式：predicate + args（可含 Variable）
    调用方持有，不落盘。
    """

    predicate: str = ""
    args: Tuple[Term, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, predicate: str, *args) -> "Goal":
        return cls(predicate, tuple(to_term(a) for a in args))

    @property
    def is_empty(self) -> bool:
        return not self.predicate

    def __str__(self) -> str:
        return "(" + " ".join([self.predicate, *(str(a) for a in self.args)]) + ")"
