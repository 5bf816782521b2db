# tracedoc/directives/formula.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from tracedoc.core.facts import Goal
from tracedoc.core.terms import Atom, ListTerm, Number, String, Term, Variable


class Quantifier(str, Enum):
    ALWAYS = "always"
    EVENTUALLY = "eventually"
    NEVER = "never"
    POSSIBLY = "possibly"


# (prefix, quantifier, negated)
# never? / AG(not / AG(¬ 必须排在裸 AG 之前
PREFIXES: Tuple[Tuple[str, Quantifier, bool], ...] = (
    ("always?", Quantifier.ALWAYS, False),
    ("eventually?", Quantifier.EVENTUALLY, False),
    ("AF", Quantifier.EVENTUALLY, False),
    ("never?", Quantifier.NEVER, False),
    ("AG(not", Quantifier.NEVER, True),
    ("AG(¬", Quantifier.NEVER, True),
    ("AG", Quantifier.ALWAYS, False),
    ("possibly?", Quantifier.POSSIBLY, False),
    ("EF", Quantifier.POSSIBLY, False),
)

_QUOTES = "'\"`"
_NEGATIONS = ("not", "¬")


@dataclass(frozen=True)
class Formula:
    """
    Formula（FINAL）

    text        : 原始公式文本
    quantifier  : None 表示前缀无法识别
    goal        : 空 Goal 表示 pattern 无法解析
    """

    text: str
    quantifier: Optional[Quantifier] = None
    goal: Goal = field(default_factory=Goal)

    @property
    def resolved(self) -> bool:
        return self.quantifier is not None and not self.goal.is_empty


def _compact(text: str) -> str:
    """'AG ( not x)' -> 'AG(not x)' for prefix matching only."""
    head, sep, tail = text.partition("(")
    if not sep:
        return text
    return head.rstrip() + "(" + tail.lstrip()


def match_prefix(text: str) -> Optional[Tuple[Quantifier, bool, int]]:
    """
    Returns (quantifier, negated, body_offset) for the first matching prefix.

    For the negated AG forms the body starts at the '(' after AG, so the
    balanced scan still sees the whole outer group.
    """
    compact = _compact(text)
    for prefix, quantifier, negated in PREFIXES:
        if not compact.startswith(prefix):
            continue
        if negated:
            rest = compact[len(prefix):]
            if prefix.endswith("not") and rest[:1] not in ("", " ", "\t", "\n", "("):
                # AG(nothing ...) is a plain AG pattern
                continue
            return quantifier, True, len("AG")
        return quantifier, False, len(prefix)
    return None


def balanced_group(text: str, open_at: int) -> Optional[str]:
    """text[open_at] == '(' -> the whole balanced group including both parens."""
    depth = 0
    for pos in range(open_at, len(text)):
        ch = text[pos]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return text[open_at:pos + 1]
    return None


def _strip_outer(group: str) -> str:
    if group.startswith("(") and balanced_group(group, 0) == group:
        return group[1:-1].strip()
    return group.strip()


def tokenize(pattern: str) -> List[str]:
    """
    Whitespace tokenizer that keeps parenthesised groups and quoted
    strings as single tokens.
    """
    tokens: List[str] = []
    i, n = 0, len(pattern)
    while i < n:
        ch = pattern[i]
        if ch.isspace():
            i += 1
            continue
        if ch == "(":
            group = balanced_group(pattern, i)
            if group is None:
                # 不平衡的括号：余下部分作为一个 token
                tokens.append(pattern[i:])
                break
            tokens.append(group)
            i += len(group)
            continue
        if ch == '"':
            end = pattern.find('"', i + 1)
            end = n - 1 if end == -1 else end
            tokens.append(pattern[i:end + 1])
            i = end + 1
            continue
        start = i
        while i < n and not pattern[i].isspace() and pattern[i] != "(":
            i += 1
        tokens.append(pattern[start:i])
    return tokens


def token_to_term(token: str) -> Term:
    if token.startswith("(") and token.endswith(")"):
        return ListTerm(tuple(token_to_term(t) for t in tokenize(token[1:-1])))
    if len(token) > 1 and token.startswith("?"):
        return Variable(token[1:])
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        return String(token[1:-1])
    try:
        return Number(int(token))
    except ValueError:
        pass
    try:
        return Number(float(token))
    except ValueError:
        return Atom(token)


def pattern_to_goal(pattern: str) -> Goal:
    tokens = tokenize(_strip_outer(pattern))
    if not tokens or tokens[0].startswith(("(", '"', "?")):
        return Goal()
    return Goal(tokens[0], tuple(token_to_term(t) for t in tokens[1:]))


def extract_formula(formula: str) -> Formula:
    """
    Parse the restricted property surface syntax into a Formula.

        always? '(ready ?a)'       -> ALWAYS   ready(?a)
        never? '(deadlock ?a ?b)'  -> NEVER    deadlock(?a, ?b)
        AG(not deadlock)           -> NEVER    deadlock()
        EF(sale completed)         -> POSSIBLY sale(completed)

    Never raises: an unknown prefix or unusable pattern gives an
    unresolved Formula.
    """
    text = formula.strip()
    found = match_prefix(text)
    if found is None:
        return Formula(formula)

    quantifier, negated, offset = found
    body = text[offset:].lstrip().lstrip(_QUOTES)

    open_at = body.find("(")
    if open_at == -1:
        return Formula(formula, quantifier)

    group = balanced_group(body, open_at)
    if group is None:
        return Formula(formula, quantifier)

    if negated:
        inner = _strip_outer(group)
        for neg in _NEGATIONS:
            if inner.startswith(neg):
                inner = inner[len(neg):].strip()
                break
        group = inner

    return Formula(formula, quantifier, pattern_to_goal(group))
