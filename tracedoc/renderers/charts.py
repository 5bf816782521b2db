# tracedoc/renderers/charts.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from tracedoc.context import RenderContext
from tracedoc.core.facts import Fact
from tracedoc.renderers.base import Renderer, fenced, split_list

NO_DATA_WARNING = "> ⚠️ No simulation data: the trace is empty, run the simulation first.\n"


@dataclass(frozen=True)
class Buckets:
    """
    x 轴分桶

    step       : max(1, ceil(max_time / n_buckets))
    boundaries : 0, step, 2*step, ... <= max_time（最多 n_buckets + 1 个）
    bucket i   : [boundaries[i], boundaries[i] + step)
    """

    step: int
    boundaries: Tuple[int, ...]

    @classmethod
    def build(cls, max_time: int, n_buckets: int = 10) -> "Buckets":
        step = max(1, -(-max_time // n_buckets))
        boundaries = tuple(range(0, max_time + 1, step))[: n_buckets + 1]
        return cls(step, boundaries)

    def cumulative(self, ticks: Sequence[int]) -> List[int]:
        """Running total of ticks per bucket, carried from bucket 0."""
        edges = np.asarray(self.boundaries, dtype=np.int64)
        arr = np.asarray(ticks, dtype=np.int64)

        idx = np.searchsorted(edges, arr, side="right") - 1
        inside = (idx >= 0) & (arr < edges[idx.clip(min=0)] + self.step)
        counts = np.bincount(idx[inside], minlength=len(edges))
        return [int(c) for c in np.cumsum(counts)]


def select_predicates(
    facts: Sequence[Fact],
    requested: List[str],
    bookkeeping: str,
) -> Tuple[List[str], bool]:
    """
    -> (predicates, fallback)

    Requested names that occur in the trace, in requested order. If none
    occur, every predicate present except the bookkeeping one, sorted.
    """
    present = {f.predicate for f in facts}
    chosen = [p for p in dict.fromkeys(requested) if p in present]
    if chosen:
        return chosen, False
    return sorted(p for p in present if p != bookkeeping), True


class MetricsChartRenderer(Renderer):
    """
    metrics_chart(title?, predicates?)

    Mermaid xychart-beta，每个 predicate 一条累计计数折线。
    """

    name = "metrics_chart"

    def render(self, ctx: RenderContext, args: Dict[str, str]) -> str:
        cfg = ctx.config
        facts = ctx.store.facts()
        title = (args.get("title") or "").strip().replace('"', "'")

        lines = ["xychart-beta"]
        if title:
            lines.append(f'    title "{title}"')

        if not facts:
            lines += [
                "    x-axis [0]",
                f'    y-axis "Count" 0 --> {cfg.chart_y_margin}',
                "    %% series 1: no data",
                "    line [0]",
            ]
            return fenced(cfg.diagram_fence, lines) + "\n" + NO_DATA_WARNING

        requested = split_list(args.get("predicates"))
        predicates, fallback = select_predicates(facts, requested, cfg.bookkeeping_predicate)

        buckets = Buckets.build(max(f.tick for f in facts), cfg.chart_buckets)
        lines.append(f"    x-axis [{', '.join(str(b) for b in buckets.boundaries)}]")

        series = {
            p: buckets.cumulative([f.tick for f in facts if f.predicate == p])
            for p in predicates
        }
        max_y = max((max(v) for v in series.values()), default=0)
        lines.append(f'    y-axis "Count" 0 --> {max_y + cfg.chart_y_margin}')

        if fallback:
            lines.append(f"    %% fallback: all predicates except {cfg.bookkeeping_predicate}")
        for i, (p, values) in enumerate(series.items(), start=1):
            lines.append(f"    %% series {i}: {p}")
            lines.append(f"    line [{', '.join(str(v) for v in values)}]")
        if not series:
            lines.append("    %% series 1: no data")
            lines.append(f"    line [{', '.join('0' for _ in buckets.boundaries)}]")

        notes = []
        if fallback and requested:
            notes.append(
                f"> Requested predicates not found ({', '.join(requested)}); "
                f"showing all predicates except `{cfg.bookkeeping_predicate}`.\n"
            )
        elif fallback:
            notes.append(f"> Showing all predicates except `{cfg.bookkeeping_predicate}`.\n")
        if not series:
            notes.append("> No chartable predicates in the trace.\n")
        if series:
            notes.append(f"*Series: {', '.join(series)}*\n")

        return fenced(cfg.diagram_fence, lines) + "\n" + "".join(notes)
