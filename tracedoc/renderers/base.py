# tracedoc/renderers/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional, Tuple

from tracedoc.context import RenderContext
from tracedoc.directives.parser import Directive
from tracedoc.utils.errors import InvalidArgumentError, MissingArgumentError


class Renderer(ABC):
    """
    Renderer (FINAL / FROZEN)

    (RenderContext, directive args) -> text fragment

    Renderer Contract (Frozen)

    Renderers are pure functions of the trace snapshot and the directive args.

    Renderers must not assert, retract or reorder facts.

    Missing data renders as a visible "No ..." fragment, never as "".

    Argument problems are raised as DirectiveError; the assembler turns
    them into inline diagnostics.
    """

    name: str = ""
    required: Tuple[str, ...] = ()

    def __call__(self, ctx: RenderContext, directive: Directive) -> str:
        for arg in self.required:
            if not (directive.get(arg) or "").strip():
                raise MissingArgumentError(self.name, arg)
        return self.render(ctx, directive.args)

    @abstractmethod
    def render(self, ctx: RenderContext, args: Dict[str, str]) -> str:
        ...


# ------------------------------------------------------------------
# shared helpers
# ------------------------------------------------------------------
def diagnostic(name: str, message: str) -> str:
    return f"<!-- {name}: {message} -->"


def fenced(lang: str, lines: Iterable[str]) -> str:
    body = "\n".join(lines)
    return f"```{lang}\n{body}\n```\n"


def int_arg(
    directive: str,
    args: Dict[str, str],
    key: str,
    default: int,
    minimum: int = 0,
) -> int:
    raw: Optional[str] = args.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise InvalidArgumentError(directive, key, raw, "expected an integer") from None
    if value < minimum:
        raise InvalidArgumentError(directive, key, raw, f"must be >= {minimum}")
    return value


def split_list(raw: Optional[str], sep: str = ",") -> list:
    """'a, b,,c' -> ['a', 'b', 'c']"""
    if not raw:
        return []
    return [part.strip() for part in raw.split(sep) if part.strip()]


def table_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")
