#!filepath: tracedoc/directives/parser.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from tracedoc.utils.errors import MalformedDirectiveError
from tracedoc.utils.logger import logs

OPEN = "{{"
CLOSE = "}}"


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_-"


def _line_end(doc: str, pos: int) -> int:
    nl = doc.find("\n", pos)
    return len(doc) if nl == -1 else nl


@dataclass(frozen=True)
class Directive:
    """
    一个 {{name key="value" ...}} span 解析后的结果
    args 保留出现顺序；重复 key 以最后一次为准。
    """

    name: str
    args: Dict[str, str] = field(default_factory=dict)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.args.get(key, default)


@dataclass(frozen=True)
class DirectiveSpan:
    """
    document[start:end] 对应的 span

    directive 与 error 二选一：
      - directive : 解析成功
      - error     : MalformedDirectiveError（span 渲染为诊断注释）
    """

    start: int
    end: int
    directive: Optional[Directive] = None
    error: Optional[MalformedDirectiveError] = None

    @property
    def malformed(self) -> bool:
        return self.error is not None


class _State(Enum):
    NAME = "name"
    BETWEEN = "between"
    KEY = "key"
    EQUALS = "equals"
    VALUE = "value"
    AFTER_VALUE = "after_value"


class DirectiveScanner:
    """
    Hand-written scanner for the directive micro-syntax.

    States::

        OUTSIDE --'{{'+ident--> NAME --ws--> BETWEEN --ident--> KEY
        KEY --'='--> EQUALS --'"'--> VALUE --'"'--> AFTER_VALUE --ws--> BETWEEN
        NAME / BETWEEN / AFTER_VALUE --'}}'--> OUTSIDE

    A '{{' opens a directive only when an identifier character follows it
    directly; any other '{{' is plain text. Every problem inside an opened
    directive yields a malformed span instead of an exception, and scanning
    resumes after it. A directive that never closes is cut at the end of its
    first line, so the text after it survives.
    """

    def scan(self, document: str) -> List[DirectiveSpan]:
        spans: List[DirectiveSpan] = []
        pos = 0
        n = len(document)

        while pos < n:
            start = document.find(OPEN, pos)
            if start == -1:
                break
            body = start + len(OPEN)
            if body >= n or not _is_ident_start(document[body]):
                pos = start + 1
                continue

            span = self._scan_one(document, start)
            spans.append(span)
            pos = span.end

        if spans:
            bad = sum(1 for s in spans if s.malformed)
            logs.debug(f"[Parser] {len(spans)} spans found ({bad} malformed)")
        return spans

    # --------------------------------------------------
    def _scan_one(self, doc: str, start: int) -> DirectiveSpan:
        n = len(doc)
        i = start + len(OPEN)
        state = _State.NAME

        name_start = i
        name = ""
        key = ""
        key_start = 0
        value_start = 0
        args: Dict[str, str] = {}

        while i < n:
            ch = doc[i]
            closing = doc.startswith(CLOSE, i)

            if state is _State.NAME:
                if _is_ident_char(ch):
                    i += 1
                    continue
                name = doc[name_start:i]
                if closing:
                    return DirectiveSpan(start, i + 2, Directive(name, args))
                if ch.isspace():
                    state = _State.BETWEEN
                    continue
                return self._malformed(doc, start, i, f"unexpected character {ch!r} after directive name")

            if state is _State.BETWEEN or state is _State.AFTER_VALUE:
                if closing:
                    return DirectiveSpan(start, i + 2, Directive(name, args))
                if ch.isspace():
                    state = _State.BETWEEN
                    i += 1
                    continue
                if state is _State.AFTER_VALUE:
                    return self._malformed(doc, start, i, "arguments must be separated by whitespace")
                if _is_ident_start(ch):
                    state = _State.KEY
                    key_start = i
                    continue
                return self._malformed(doc, start, i, f"unexpected character {ch!r} in arguments")

            if state is _State.KEY:
                if _is_ident_char(ch):
                    i += 1
                    continue
                key = doc[key_start:i]
                if ch == "=":
                    state = _State.EQUALS
                    i += 1
                    continue
                return self._malformed(doc, start, i, f"expected '=' after argument '{key}'")

            if state is _State.EQUALS:
                if ch == '"':
                    state = _State.VALUE
                    value_start = i + 1
                    i += 1
                    continue
                return self._malformed(doc, start, i, f"value of argument '{key}' must be double-quoted")

            if state is _State.VALUE:
                if ch == '"':
                    if key in args:
                        logs.debug(f"[Parser] {name}: duplicate argument '{key}', last value wins")
                    args[key] = doc[value_start:i]
                    state = _State.AFTER_VALUE
                    i += 1
                    continue
                if closing:
                    return DirectiveSpan(
                        start, i + 2,
                        error=MalformedDirectiveError(f"unterminated quote in argument '{key}'"),
                    )
                if doc.startswith(OPEN, i):
                    # '}}' ahead belongs to this newer '{{'
                    return DirectiveSpan(
                        start, i,
                        error=MalformedDirectiveError(f"unterminated quote in argument '{key}'"),
                    )
                i += 1

        if state is _State.VALUE:
            reason = f"unterminated quote in argument '{key}'; missing closing '}}}}'"
        else:
            reason = "missing closing '}}'"
        return DirectiveSpan(start, _line_end(doc, start), error=MalformedDirectiveError(reason))

    def _malformed(self, doc: str, start: int, at: int, reason: str) -> DirectiveSpan:
        """
        Close a malformed span.

        It ends after the next '}}', unless another '{{' opens first: then
        this '{{' is unbalanced and the span stops right before the new one.
        With no '}}' left at all, only the line holding the '{{' is taken.
        """
        close = doc.find(CLOSE, at)
        reopen = doc.find(OPEN, start + len(OPEN))
        if reopen != -1 and (close == -1 or reopen < close):
            return DirectiveSpan(start, reopen, error=MalformedDirectiveError("unbalanced '{{' without closing '}}'"))
        if close == -1:
            return DirectiveSpan(
                start, _line_end(doc, start),
                error=MalformedDirectiveError(reason + "; missing closing '}}'"),
            )
        return DirectiveSpan(start, close + len(CLOSE), error=MalformedDirectiveError(reason))


def parse_directives(document: str) -> List[DirectiveSpan]:
    return DirectiveScanner().scan(document)
