"""
Term / Fact model (FINAL / FROZEN)

- terms : tagged values (Variable / Atom / Number / String / ListTerm)
- facts : Fact (immutable, time-stamped), Goal (query pattern), Binding
- unify : positional unification with repeated-variable consistency
"""

from tracedoc.core.terms import Atom, ListTerm, Number, String, Term, Variable, to_term
from tracedoc.core.facts import Binding, Fact, Goal
from tracedoc.core.unify import match, unify, unify_args

__all__ = [
    "Term", "Variable", "Atom", "Number", "String", "ListTerm", "to_term",
    "Fact", "Goal", "Binding",
    "unify", "unify_args", "match",
]
