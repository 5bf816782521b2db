# tracedoc/renderers/facts.py
from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence

from tracedoc.context import RenderContext
from tracedoc.core.facts import Fact
from tracedoc.renderers.base import Renderer, int_arg, table_cell

NO_FACTS = "*No facts collected yet*\n"


def facts_for(facts: Sequence[Fact], predicate: str) -> List[Fact]:
    return [f for f in facts if f.predicate == predicate]


def more_marker(total: int, limit: int) -> str:
    return f"\n*...and {total - limit} more*\n" if total > limit else ""


def no_facts_for(predicate: str) -> str:
    return f"*No facts for predicate `{predicate}`*\n"


def summary(facts: Sequence[Fact]) -> str:
    """Count-by-predicate table, predicates in lexicographic order."""
    if not facts:
        return NO_FACTS

    counts = Counter(f.predicate for f in facts)
    lines = [
        "| Predicate | Count |",
        "|-----------|-------|",
    ]
    for predicate in sorted(counts):
        lines.append(f"| {table_cell(predicate)} | {counts[predicate]} |")
    lines.append(f"| **Total** | **{len(facts)}** |")
    return "\n".join(lines) + "\n"


class FactsTableRenderer(Renderer):
    """
    facts_table(predicate?, limit=10)

    无 predicate 时输出 summary
    """

    name = "facts_table"

    def render(self, ctx: RenderContext, args: Dict[str, str]) -> str:
        facts = ctx.store.facts()
        predicate = (args.get("predicate") or "").strip()
        if not predicate:
            return summary(facts)

        limit = int_arg(self.name, args, "limit", ctx.config.facts_table_limit)
        matching = facts_for(facts, predicate)
        if not matching:
            return no_facts_for(predicate)

        lines = [
            "| # | Fact |",
            "|---|------|",
        ]
        for i, fact in enumerate(matching[:limit], start=1):
            lines.append(f"| {i} | {table_cell(fact.display())} |")
        return "\n".join(lines) + "\n" + more_marker(len(matching), limit)


class FactsListRenderer(Renderer):
    """
    facts_list(predicate?, limit=20)

    按 predicate 分组（字典序），每组截断到 limit，逐条带 tick。
    """

    name = "facts_list"

    def render(self, ctx: RenderContext, args: Dict[str, str]) -> str:
        facts = ctx.store.facts()
        predicate = (args.get("predicate") or "").strip()
        limit = int_arg(self.name, args, "limit", ctx.config.facts_list_limit)

        if predicate:
            matching = facts_for(facts, predicate)
            if not matching:
                return no_facts_for(predicate)
            return self._group(predicate, matching, limit)

        if not facts:
            return NO_FACTS

        predicates = sorted({f.predicate for f in facts})
        return "\n".join(self._group(p, facts_for(facts, p), limit) for p in predicates)

    def _group(self, predicate: str, facts: List[Fact], limit: int) -> str:
        lines = [f"**{predicate}** ({len(facts)})", ""]
        lines += [f"- {fact.display()} (t={fact.tick})" for fact in facts[:limit]]
        return "\n".join(lines) + "\n" + more_marker(len(facts), limit)
