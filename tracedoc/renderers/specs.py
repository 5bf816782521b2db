# tracedoc/renderers/specs.py
from __future__ import annotations

from typing import Dict

from tracedoc.context import RenderContext
from tracedoc.renderers.base import Renderer, diagnostic, fenced


class _ActorSpecRenderer(Renderer):
    """Formal-spec skeleton for a registered actor."""

    required = ("actor",)
    lang: str = ""

    def render(self, ctx: RenderContext, args: Dict[str, str]) -> str:
        actor = args["actor"].strip()
        if not ctx.actors.exists(actor):
            return diagnostic(self.name, f"actor '{actor}' not found")
        return fenced(self.lang, self.skeleton(actor))

    def skeleton(self, actor: str) -> list:
        raise NotImplementedError


class TlaSpecRenderer(_ActorSpecRenderer):
    name = "tla_spec"
    lang = "tla"

    def skeleton(self, actor: str) -> list:
        return [
            f"---- MODULE {actor} ----",
            "EXTENDS Naturals, Sequences",
            "",
            "VARIABLES state, inbox, outbox",
            "",
            "Init ==",
            '    /\\ state = "Idle"',
            "    /\\ inbox = <<>>",
            "    /\\ outbox = <<>>",
            "",
            "Next ==",
            "    \\/ ReceiveMessage",
            "    \\/ ProcessMessage",
            "",
            f"(* Skeleton for actor {actor} *)",
            "====",
        ]


class AlloySpecRenderer(_ActorSpecRenderer):
    name = "alloy_spec"
    lang = "alloy"

    def skeleton(self, actor: str) -> list:
        return [
            f"module {actor}",
            "",
            "sig State {}",
            "one sig Idle, Processing extends State {}",
            "",
            "sig Actor {",
            "    state: one State,",
            "    inbox: seq Message",
            "}",
            "",
            "sig Message {}",
            "",
            f"// Skeleton for actor {actor}",
        ]
