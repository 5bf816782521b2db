#!filepath: tests/directives/test_parser.py
import pytest

from tracedoc.directives.parser import Directive, parse_directives


def test_no_directives():
    assert parse_directives("# Title\n\nplain text { not } {{ 1 }}\n") == []


def test_single_directive_span():
    doc = 'before {{facts_table predicate="sale" limit="2"}} after'
    [span] = parse_directives(doc)

    assert not span.malformed
    assert doc[span.start:span.end] == '{{facts_table predicate="sale" limit="2"}}'
    assert span.directive == Directive("facts_table", {"predicate": "sale", "limit": "2"})


def test_directive_without_args():
    [span] = parse_directives("{{properties}}")
    assert span.directive.name == "properties"
    assert span.directive.args == {}


def test_whitespace_and_newlines_between_args():
    doc = '{{sequence_diagram\n   actors="producer, consumer"\n   time_range="last-2" }}'
    [span] = parse_directives(doc)
    assert span.directive.args == {"actors": "producer, consumer", "time_range": "last-2"}
    assert span.end == len(doc)


def test_value_may_contain_braces_and_quotes_of_other_kind():
    doc = "{{property formula=\"never? '(deadlock ?a ?b)'\"}}"
    [span] = parse_directives(doc)
    assert span.directive.get("formula") == "never? '(deadlock ?a ?b)'"


def test_duplicate_key_last_wins():
    [span] = parse_directives('{{facts_table limit="1" limit="3"}}')
    assert span.directive.get("limit") == "3"


def test_multiple_spans_in_order():
    doc = "{{a}} text {{b x=\"1\"}} more {{c}}"
    spans = parse_directives(doc)
    assert [s.directive.name for s in spans] == ["a", "b", "c"]
    assert spans[0].end <= spans[1].start <= spans[1].end <= spans[2].start


def test_brace_not_followed_by_identifier_is_text():
    doc = "{{ spaced }} and {{1}} and {{}}"
    assert parse_directives(doc) == []


@pytest.mark.parametrize(
    "doc, reason",
    [
        ('{{facts_table limit=2}}', "must be double-quoted"),
        ('{{facts_table limit}}', "expected '='"),
        ('{{facts_table a="1"b="2"}}', "separated by whitespace"),
        ('{{facts!table}}', "after directive name"),
        ('{{facts_table limit="2}}', "unterminated quote"),
        ('{{facts_table limit="2"', "missing closing"),
    ],
)
def test_malformed_reasons(doc, reason):
    [span] = parse_directives(doc)
    assert span.malformed
    assert reason in span.error.reason
    assert span.error.diagnostic().startswith("<!-- malformed directive: ")


def test_malformed_span_consumes_through_close():
    doc = "x {{facts_table limit=2}} y"
    [span] = parse_directives(doc)
    assert doc[span.end:] == " y"


def test_unbalanced_open_then_valid_directive():
    doc = "{{broken limit=2 {{facts_table}}"
    spans = parse_directives(doc)

    assert len(spans) == 2
    assert spans[0].malformed
    assert "unbalanced" in spans[0].error.reason
    assert doc[spans[0].end:spans[1].start] == ""
    assert spans[1].directive.name == "facts_table"


def test_unterminated_quote_before_next_directive():
    doc = '{{property formula="never? {{facts_table}}'
    spans = parse_directives(doc)

    assert spans[0].malformed
    assert "unterminated quote" in spans[0].error.reason
    assert spans[1].directive.name == "facts_table"


def test_unclosed_at_end_of_document():
    doc = "text {{facts_table"
    [span] = parse_directives(doc)
    assert span.malformed
    assert span.end == len(doc)
    assert span.error.reason == "missing closing '}}'"


def test_unclosed_directive_keeps_following_lines():
    doc = "Write {{name to interpolate.\n\n## Results\nImportant paragraph.\n"
    [span] = parse_directives(doc)

    assert span.malformed
    assert span.error.reason.endswith("; missing closing '}}'")
    assert doc[span.start:span.end] == "{{name to interpolate."
    assert doc[span.end:] == "\n\n## Results\nImportant paragraph.\n"


def test_unterminated_quote_without_close_keeps_following_lines():
    doc = 'A {{property formula="never? (x)\n\n## Section 2\nbody text\n'
    [span] = parse_directives(doc)

    assert span.malformed
    assert "unterminated quote in argument 'formula'" in span.error.reason
    assert span.end == doc.index("\n")
    assert doc[span.end:] == "\n\n## Section 2\nbody text\n"


def test_valid_directive_after_unclosed_one_on_later_line():
    doc = "{{name oops\n{{facts_table}}"
    spans = parse_directives(doc)
    assert spans[0].malformed
    assert spans[1].directive.name == "facts_table"


def test_triple_brace_finds_inner_directive():
    doc = "{{{facts_table}}}"
    [span] = parse_directives(doc)

    assert span.start == 1
    assert span.directive.name == "facts_table"
    assert doc[span.end:] == "}"
