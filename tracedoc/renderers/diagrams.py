# tracedoc/renderers/diagrams.py
from __future__ import annotations

from typing import Dict, List

from tracedoc.context import RenderContext
from tracedoc.core.facts import Binding, Goal
from tracedoc.core.terms import Number, Variable
from tracedoc.renderers.base import Renderer, diagnostic, fenced, split_list
from tracedoc.utils.errors import InvalidArgumentError, MissingArgumentError


class StateDiagramRenderer(Renderer):
    """
    state_diagram(actor)

    只做 registry 存在性检查；状态 / 转移不从定义中推导。
    """

    name = "state_diagram"
    required = ("actor",)

    def render(self, ctx: RenderContext, args: Dict[str, str]) -> str:
        actor = args["actor"].strip()
        if not ctx.actors.exists(actor):
            return diagnostic(self.name, f"actor '{actor}' not found")

        initial = f"{actor}_Initial"
        return fenced(ctx.config.diagram_fence, [
            "stateDiagram-v2",
            f"    [*] --> {initial}",
            f"    note right of {initial}",
            f"        Actor: {actor}",
            "        (state skeleton)",
            "    end note",
        ])


class SequenceDiagramRenderer(Renderer):
    """
    sequence_diagram(actors, time_range?)

    time_range:
      all    : 全部消息（默认）
      last-N : 最后 N 条
      A-B    : ?time 落在 [A, B] 的消息
    """

    name = "sequence_diagram"
    required = ("actors",)

    def render(self, ctx: RenderContext, args: Dict[str, str]) -> str:
        actors = split_list(args["actors"])
        if not actors:
            raise MissingArgumentError(self.name, "actors")

        goal = Goal(
            ctx.config.message_predicate,
            (Variable("from"), Variable("to"), Variable("msg"), Variable("time")),
        )
        messages = self._select(ctx.store.query(goal), args.get("time_range", "all"))

        lines = ["sequenceDiagram"]
        lines += [f"    participant {a}" for a in actors]
        for b in messages:
            lines.append(f"    {b['from'].display()}->>{b['to'].display()}: {b['msg'].display()}")
        if not messages:
            lines.append(f"    Note over {actors[0]}: No messages recorded yet")

        return fenced(ctx.config.diagram_fence, lines)

    def _select(self, messages: List[Binding], time_range: str) -> List[Binding]:
        spec = (time_range or "all").strip().lower()
        if spec == "all":
            return messages

        if spec.startswith("last-"):
            try:
                n = int(spec[len("last-"):])
            except ValueError:
                raise InvalidArgumentError(self.name, "time_range", time_range, "expected last-N") from None
            if n < 0:
                raise InvalidArgumentError(self.name, "time_range", time_range, "N must be >= 0")
            return messages[-n:] if n else []

        lo, sep, hi = spec.partition("-")
        try:
            low, high = int(lo), int(hi)
        except ValueError:
            raise InvalidArgumentError(
                self.name, "time_range", time_range, "expected all, last-N or A-B"
            ) from None
        if not sep or low > high:
            raise InvalidArgumentError(self.name, "time_range", time_range, "expected A-B with A <= B")

        return [b for b in messages if _in_range(b.get("time"), low, high)]


def _in_range(term, low: int, high: int) -> bool:
    return isinstance(term, Number) and low <= term.value <= high
