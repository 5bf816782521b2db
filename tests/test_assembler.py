#!filepath: tests/test_assembler.py
import pytest

from tracedoc.assembler import DocumentAssembler
from tracedoc.config.render_config import RenderConfig
from tracedoc.observability.instrumentation import Instrumentation
from tracedoc.renderers.base import Renderer
from tracedoc.renderers.registry import RendererRegistry
from tracedoc.store.memory import DictActorRegistry, InMemoryFactStore


class _BoomRenderer(Renderer):
    name = "boom"

    def render(self, ctx, args):
        raise ValueError("kaput")


class _WriterRenderer(Renderer):
    """渲染中途往原 store 写 fact；同一 pass 的 snapshot 不应看到写入"""

    name = "writer"
    target = None

    def render(self, ctx, args):
        self.target.assert_fact("written")
        return str(len(ctx.store.facts()))


class _TestRegistry(RendererRegistry):
    _REGISTRY = {
        **RendererRegistry._REGISTRY,
        _BoomRenderer.name: _BoomRenderer,
        _WriterRenderer.name: _WriterRenderer,
    }


@pytest.fixture
def assembler():
    return DocumentAssembler()


@pytest.mark.parametrize(
    "doc",
    [
        "",
        "# Title\n\nNo directives here.\n",
        "Some { braces } and {{ spaced }} and {{}}\n```mermaid\na->>b: \"raw\";\n```\n",
    ],
)
def test_identity_without_directives(assembler, store, actors, doc):
    assert assembler.render(doc, store, actors) == doc


def test_text_around_directives_preserved(assembler, producer_consumer_store, actors):
    doc = "# Report\n\n{{facts_table}}\n\nTail text.\n"
    out = assembler.render(doc, producer_consumer_store, actors)

    assert out.startswith("# Report\n\n| Predicate | Count |")
    assert out.endswith("\n\nTail text.\n")
    assert "| **Total** | **8** |" in out


def test_unknown_directive(assembler, store, actors):
    out = assembler.render("a {{gantt chart=\"x\"}} b", store, actors)
    assert out == "a <!-- Unknown directive: gantt --> b"


def test_missing_required_argument(assembler, store, actors):
    out = assembler.render("{{property}}\n{{state_diagram}}", store, actors)
    assert out == "<!-- property: missing formula arg -->\n<!-- state_diagram: missing actor arg -->"


def test_malformed_directive(assembler, store, actors):
    out = assembler.render('x {{facts_table limit=2}} y', store, actors)
    assert out.startswith("x <!-- malformed directive: ")
    assert out.endswith(" y")
    assert "limit=2" not in out


def test_unclosed_directive_does_not_swallow_rest(assembler, store, actors):
    doc = "Intro {{facts_table}}\n\nWrite {{name to interpolate.\n\n## Results\nImportant paragraph.\n"
    out, report = assembler.render_with_report(doc, store, actors)

    assert out.startswith("Intro *No facts collected yet*\n")
    assert "<!-- malformed directive: expected '=' after argument 'to'; missing closing '}}' -->" in out
    assert out.endswith("\n\n## Results\nImportant paragraph.\n")
    assert report.diagnostics == 1


def test_unterminated_quote_does_not_swallow_rest(assembler, store, actors):
    doc = 'A {{property formula="never? (x)\n\n## Section 2\nbody text\n'
    out = assembler.render(doc, store, actors)

    assert out.startswith("A <!-- malformed directive: unterminated quote in argument 'formula'")
    assert out.endswith("-->\n\n## Section 2\nbody text\n")


def test_failure_is_isolated(store, actors):
    assembler = DocumentAssembler(registry=_TestRegistry)
    doc = "{{boom}}\n{{facts_table}}"
    out, report = assembler.render_with_report(doc, store, actors)

    first, second = out.split("\n", 1)
    assert first == "<!-- boom: render failed (ValueError: kaput) -->"
    assert second == "*No facts collected yet*\n"
    assert report.spans == 2
    assert report.rendered == 1
    assert report.diagnostics == 1


def test_one_snapshot_per_pass(actors):
    store = InMemoryFactStore()
    store.assert_fact("a")
    _WriterRenderer.target = store
    assembler = DocumentAssembler(registry=_TestRegistry)

    out = assembler.render("{{writer}} {{writer}}", store, actors)
    assert out == "1 1"
    assert len(store) == 3


def test_absent_data_never_empty(assembler, store):
    doc = "\n".join([
        '{{state_diagram actor="ghost"}}',
        '{{sequence_diagram actors="producer,consumer"}}',
        '{{property formula="never? \'(deadlock ?a ?b)\'"}}',
        "{{properties}}",
        '{{facts_table predicate="sale"}}',
        '{{facts_list predicate="sale"}}',
        "{{metrics_chart}}",
        '{{tla_spec actor="ghost"}}',
    ])
    out, report = assembler.render_with_report(doc, store, DictActorRegistry())

    assert report.rendered == 8
    assert "not found" in out
    assert "No messages recorded yet" in out
    assert "No facts for predicate `sale`" in out
    assert "No simulation data" in out


def test_generated_diagrams_are_sanitized(actors):
    store = InMemoryFactStore()
    store.assert_fact("sent", "producer", "consumer", "req;x:=1", 0, tick=0)

    out = DocumentAssembler().render('{{sequence_diagram actors="producer,consumer"}}', store, actors)
    assert "    producer->>consumer: reqx=1" in out


def test_custom_config(store, actors):
    cfg = RenderConfig(facts_table_limit=1)
    store.assert_fact("sale", 1)
    store.assert_fact("sale", 2)

    out = DocumentAssembler(config=cfg).render('{{facts_table predicate="sale"}}', store, actors)
    assert "*...and 1 more*" in out


def test_instrumentation_records_metrics(store, actors):
    inst = Instrumentation(enabled=True)
    DocumentAssembler(inst=inst).render("{{facts_table}} {{nope}}", store, actors)

    assert inst.metrics.metrics == {
        "directives_total": 2,
        "directives_rendered": 1,
        "directives_diagnostics": 1,
    }
    assert "facts_table@0" in inst.timeline


def test_default_actor_registry(assembler, store):
    out = assembler.render('{{state_diagram actor="producer"}}', store)
    assert out == "<!-- state_diagram: actor 'producer' not found -->"
