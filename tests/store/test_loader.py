#!filepath: tests/store/test_loader.py
import json

import pytest

from tracedoc.core.terms import Atom, ListTerm, Number, String
from tracedoc.store.loader import facts_from_dicts, load_trace
from tracedoc.utils.errors import TraceLoadError, UserInputError


def test_load_jsonl(tmp_path):
    p = tmp_path / "trace.jsonl"
    p.write_text(
        "# producer/consumer run\n"
        '{"predicate": "spawned", "args": ["producer"], "tick": 0}\n'
        "\n"
        '{"predicate": "sent", "args": ["producer", "consumer", ["item", 0], 1], "tick": 1}\n',
        encoding="utf-8",
    )

    store = load_trace(p)
    facts = store.facts()

    assert len(facts) == 2
    assert facts[1].args == (
        Atom("producer"), Atom("consumer"), ListTerm((Atom("item"), Number(0))), Number(1),
    )
    assert store.time_now == 1


def test_load_json_array(tmp_path):
    p = tmp_path / "trace.json"
    p.write_text(json.dumps([
        {"predicate": "note", "args": [{"str": "hello world"}]},
        {"predicate": "sale", "args": ["completed"], "tick": 4},
    ]), encoding="utf-8")

    facts = load_trace(p).facts()
    assert facts[0].args == (String("hello world"),)
    assert facts[0].tick == 0
    assert facts[1].tick == 4


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_trace(tmp_path / "nope.jsonl")


@pytest.mark.parametrize(
    "line, reason",
    [
        ("{not json", "invalid JSON"),
        ('["a"]', "must be an object"),
        ('{"args": []}', "missing predicate"),
        ('{"predicate": "a", "tick": "3"}', "tick must be an integer"),
        ('{"predicate": "a", "tick": true}', "tick must be an integer"),
        ('{"predicate": "a", "args": [true]}', "booleans"),
        ('{"predicate": "a", "args": [{"x": 1}]}', "unsupported object term"),
    ],
)
def test_bad_records(tmp_path, line, reason):
    p = tmp_path / "bad.jsonl"
    p.write_text('{"predicate": "ok"}\n' + line + "\n", encoding="utf-8")

    with pytest.raises(TraceLoadError) as exc:
        load_trace(p)

    assert reason in str(exc.value)
    assert "bad.jsonl:2" in str(exc.value)


def test_trace_load_error_is_user_input_error():
    assert issubclass(TraceLoadError, UserInputError)


def test_facts_from_dicts():
    store = facts_from_dicts([{"predicate": "sale", "args": ["completed", 3], "tick": 2}])
    [fact] = store.facts()
    assert fact.display() == "sale completed 3"
    assert fact.tick == 2
