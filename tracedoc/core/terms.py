from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Union

from tracedoc.utils.errors import TermConversionError

# tracedoc/core/terms.py


@dataclass(frozen=True)
class Term:
    """
    Term 基类（FINAL / FROZEN）

    - 具体数据由子类持有
    - dataclass eq 比较 class，不同 tag 的 Term 永远不相等
    """

    @property
    def is_var(self) -> bool:
        return False

    def display(self) -> str:
        """表格 / 图中使用的展示形式。"""
        return str(self)


@dataclass(frozen=True)
class Variable(Term):
    name: str

    @property
    def is_var(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"?{self.name}"


@dataclass(frozen=True)
class Atom(Term):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Number(Term):
    value: float

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class String(Term):
    value: str

    def __str__(self) -> str:
        return '"' + self.value.replace("\\", "\\\\").replace('"', '\\"') + '"'

    def display(self) -> str:
        return self.value


@dataclass(frozen=True)
class ListTerm(Term):
    items: Tuple[Term, ...] = ()

    def __str__(self) -> str:
        return "(" + " ".join(str(t) for t in self.items) + ")"

    def display(self) -> str:
        return "[" + ", ".join(t.display() for t in self.items) + "]"


def format_number(value: Union[int, float]) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


# ------------------------------------------------------------------
# Python value -> Term
# ------------------------------------------------------------------
def to_term(value: Any) -> Term:
    """
    Convert a plain Python value into a Term.

    str      -> Variable if it starts with '?', else Atom
    int/float-> Number
    list     -> ListTerm (recursively)
    """
    if isinstance(value, Term):
        return value
    if isinstance(value, bool):
        raise TermConversionError(f"booleans have no Term form: {value!r}")
    if isinstance(value, (int, float)):
        return Number(value)
    if isinstance(value, str):
        if value.startswith("?") and len(value) > 1:
            return Variable(value[1:])
        return Atom(value)
    if isinstance(value, (list, tuple)):
        return ListTerm(tuple(to_term(v) for v in value))
    raise TermConversionError(f"cannot convert {type(value).__name__} to Term: {value!r}")
