#!filepath: tracedoc/assembler.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from tracedoc.config.render_config import RenderConfig
from tracedoc.context import RenderContext
from tracedoc.directives.parser import DirectiveScanner, DirectiveSpan
from tracedoc.observability.instrumentation import Instrumentation, NoOpInstrumentation
from tracedoc.renderers.registry import RendererRegistry
from tracedoc.sanitizer import DiagramSanitizer
from tracedoc.store.interface import ActorRegistry, FactStore
from tracedoc.store.memory import DictActorRegistry, snapshot_of
from tracedoc.utils.errors import DirectiveError
from tracedoc.utils.logger import logs


@dataclass(frozen=True)
class RenderReport:
    spans: int = 0
    rendered: int = 0
    diagnostics: int = 0


class DocumentAssembler:
    """
    DocumentAssembler = 调度器

    parse -> dispatch -> substitute -> sanitize

    设计铁律：
    - 一次 pass 只取一个 trace snapshot，所有 Renderer 看到同一个 snapshot
    - 单个 directive 失败只产生局部诊断，不中断整篇文档
    - 只清洗 Renderer 生成的 fragment，文档原文不动
    """

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        inst: Instrumentation | None = None,
        registry: type = RendererRegistry,
    ):
        self.config = config or RenderConfig()
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )
        self.registry = registry
        self.scanner = DirectiveScanner()
        self.sanitizer = DiagramSanitizer(fence=self.config.diagram_fence)

    def render(
        self,
        document: str,
        store: FactStore,
        actors: Optional[ActorRegistry] = None,
    ) -> str:
        text, _ = self.render_with_report(document, store, actors)
        return text

    def render_with_report(
        self,
        document: str,
        store: FactStore,
        actors: Optional[ActorRegistry] = None,
    ) -> Tuple[str, RenderReport]:
        spans = self.scanner.scan(document)
        if not spans:
            return document, RenderReport()

        logs.info(f"[Assembler] ====== START {len(spans)} directives ======")

        fragments: List[str] = []
        diagnostics = 0
        with snapshot_of(store) as view:
            ctx = RenderContext(
                store=view,
                actors=actors if actors is not None else DictActorRegistry(),
                config=self.config,
            )
            for span in spans:
                fragment, ok = self._render_span(ctx, document, span)
                fragments.append(fragment)
                diagnostics += 0 if ok else 1

        # 第二遍：只清洗生成的 fragment
        fragments = [self.sanitizer.sanitize(f) for f in fragments]

        pieces: List[str] = []
        pos = 0
        for span, fragment in zip(spans, fragments):
            pieces.append(document[pos:span.start])
            pieces.append(fragment)
            pos = span.end
        pieces.append(document[pos:])

        report = RenderReport(
            spans=len(spans),
            rendered=len(spans) - diagnostics,
            diagnostics=diagnostics,
        )
        self.inst.metrics.record("directives_total", report.spans)
        self.inst.metrics.record("directives_rendered", report.rendered)
        self.inst.metrics.record("directives_diagnostics", report.diagnostics)
        logs.debug(f"[Assembler] metrics: {self.inst.metrics.summary()}")
        self.inst.generate_timeline_report(f"{len(spans)} directives")

        return "".join(pieces), report

    # --------------------------------------------------
    def _render_span(self, ctx: RenderContext, document: str, span: DirectiveSpan) -> Tuple[str, bool]:
        if span.malformed:
            snippet = document[span.start:span.end][:40]
            logs.info(f"[Assembler] malformed directive at {span.start}: {span.error.reason} ({snippet!r})")
            return span.error.diagnostic(), False

        directive = span.directive
        try:
            renderer = self.registry.create(directive.name)
            with self.inst.timer(f"{directive.name}@{span.start}"):
                fragment = renderer(ctx, directive)
        except DirectiveError as e:
            logs.info(f"[Assembler] diagnostic -> {e}")
            return e.diagnostic(), False
        except Exception as e:
            logs.exception(f"[Renderer:{directive.name}] render failed")
            return f"<!-- {directive.name}: render failed ({type(e).__name__}: {e}) -->", False

        return fragment, True
