# tracedoc/core/unify.py
from __future__ import annotations

from typing import Optional, Sequence

from tracedoc.core.facts import Binding, Fact, Goal
from tracedoc.core.terms import ListTerm, Term, Variable


def deref(term: Term, binding: Binding) -> Term:
    """沿变量绑定链找到实际 Term（list 元素逐个 deref）。"""
    while isinstance(term, Variable) and term.name in binding:
        term = binding[term.name]
    if isinstance(term, ListTerm):
        return ListTerm(tuple(deref(t, binding) for t in term.items))
    return term


def unify(t1: Term, t2: Term, binding: Binding) -> Optional[Binding]:
    """
    Unify two terms under ``binding``.

    Returns the extended binding (a new dict) or None on failure.
    The input binding is never mutated.
    """
    t1 = deref(t1, binding)
    t2 = deref(t2, binding)

    if isinstance(t1, Variable) and isinstance(t2, Variable):
        if t1.name == t2.name:
            return binding
        return {**binding, t1.name: t2}

    if isinstance(t1, Variable):
        return {**binding, t1.name: t2}
    if isinstance(t2, Variable):
        return {**binding, t2.name: t1}

    if isinstance(t1, ListTerm) and isinstance(t2, ListTerm):
        return unify_args(t1.items, t2.items, binding)

    return binding if t1 == t2 else None


def unify_args(
    args1: Sequence[Term],
    args2: Sequence[Term],
    binding: Binding,
) -> Optional[Binding]:
    if len(args1) != len(args2):
        return None
    current: Optional[Binding] = binding
    for a, b in zip(args1, args2):
        current = unify(a, b, current)
        if current is None:
            return None
    return current


def match(goal: Goal, fact: Fact) -> Optional[Binding]:
    """
    Match one fact against a goal.

    A variable repeated inside the goal is bound by its first position, so
    the second position only unifies with a structurally equal term.
    The returned binding holds every goal variable, fully dereferenced.
    """
    if goal.predicate != fact.predicate:
        return None
    binding = unify_args(goal.args, fact.args, {})
    if binding is None:
        return None
    return {name: deref(term, binding) for name, term in binding.items()}
