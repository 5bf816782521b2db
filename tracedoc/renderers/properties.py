# tracedoc/renderers/properties.py
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from tracedoc.context import RenderContext
from tracedoc.directives.formula import Quantifier, extract_formula, match_prefix
from tracedoc.renderers.base import Renderer, split_list, table_cell
from tracedoc.store.interface import FactStore
from tracedoc.utils.logger import logs

HEADER = [
    "| Property | Formula | Result |",
    "|----------|---------|--------|",
]


def evaluate(store: FactStore, formula: str) -> str:
    """formula -> 'true' | 'false' | 'unknown'"""
    parsed = extract_formula(formula)
    if not parsed.resolved:
        logs.debug(f"[Renderer:property] unresolved formula: {formula!r}")
        return "unknown"

    check = {
        Quantifier.ALWAYS: store.always,
        Quantifier.EVENTUALLY: store.eventually,
        Quantifier.NEVER: store.never,
        Quantifier.POSSIBLY: store.possibly,
    }[parsed.quantifier]
    return "true" if check(parsed.goal) else "false"


def property_row(store: FactStore, formula: str, name: Optional[str] = None) -> str:
    formula = formula.strip()
    label = (name or "").strip() or formula
    code = formula.replace("`", "'")
    return f"| {table_cell(label)} | `{table_cell(code)}` | {evaluate(store, formula)} |"


def split_check(entry: str) -> Tuple[Optional[str], str]:
    """
    'No deadlock: never? ...' -> ('No deadlock', 'never? ...')
    'never? ...'              -> (None, 'never? ...')
    'AGent safety: never? ...' -> ('AGent safety', 'never? ...')

    The first ':' splits whenever a formula prefix follows it and the name
    holds no brackets or quotes. Otherwise a leading formula stays whole.
    """
    entry = entry.strip()
    name, sep, formula = entry.partition(":")
    formula = formula.strip()
    if sep and match_prefix(formula) is not None and not any(c in name for c in "()'\"`"):
        return name.strip(), formula
    if match_prefix(entry) is not None:
        return None, entry
    if not sep or not formula:
        return None, entry
    return name.strip(), formula


class PropertyRenderer(Renderer):
    name = "property"
    required = ("formula",)

    def render(self, ctx: RenderContext, args: Dict[str, str]) -> str:
        row = property_row(ctx.store, args["formula"], args.get("name"))
        return "\n".join(HEADER + [row]) + "\n"


class PropertiesRenderer(Renderer):
    """
    properties(checks?)

    checks: 'name: formula; formula; ...'
    缺省时使用 RenderConfig.default_checks
    """

    name = "properties"

    def render(self, ctx: RenderContext, args: Dict[str, str]) -> str:
        entries: List[str] = split_list(args.get("checks"), ";") or list(ctx.config.default_checks)

        rows = []
        for entry in entries:
            label, formula = split_check(entry)
            rows.append(property_row(ctx.store, formula, label))
        return "\n".join(HEADER + rows) + "\n"
