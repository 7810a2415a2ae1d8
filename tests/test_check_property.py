import json

import pytest

from prettystrict.check_property import (
    Property,
    PropertyList,
    Rule,
    check_at_rule,
    check_props,
    load_known_props,
)
from prettystrict.errors import ErrorKind, LintError

DATA = {"properties": ["color", "width"], "at-rules": ["@media", "@font-face"]}


def known():
    return PropertyList.from_dict(DATA)


def test_from_dict_reads_hyphenated_key():
    props = known()
    assert props.properties == ["color", "width"]
    assert props.at_rules == ["@media", "@font-face"]


def test_from_dict_missing_key_raises():
    with pytest.raises(ValueError):
        PropertyList.from_dict({"properties": []})


def test_load_round_trip(tmp_path):
    path = tmp_path / "props.json"
    path.write_text(json.dumps(DATA), encoding="utf-8")
    assert load_known_props(path) == known()


def test_load_missing_file_is_io_error(tmp_path):
    with pytest.raises(LintError) as info:
        load_known_props(tmp_path / "absent.json")
    assert info.value.kind.kind is ErrorKind.IO_ERROR


def test_load_bad_json_is_json_error(tmp_path):
    path = tmp_path / "props.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(LintError) as info:
        load_known_props(path)
    assert info.value.kind.kind is ErrorKind.JSON_ERROR


def test_check_props_reports_unknown_only():
    rule = Rule(".a", [Property("color", "red"), Property("colr", "red")])
    errors = check_props(rule, known())
    assert [e.property for e in errors] == ["colr"]
    assert errors[0].message == "colr is unknown"
    assert errors[0].selector == ".a"
    assert errors[0].kind.kind is ErrorKind.UNKNOWN_PROPERTY


def test_check_at_rule_adds_at_sign():
    rule = Rule(".a", [], ["media", "@supports (display: grid)"])
    errors = check_at_rule(rule, known())
    assert [e.property for e in errors] == ["@supports (display: grid)"]
    assert errors[0].message == "Unknown at-rule: @supports (display: grid)"
    assert errors[0].selector == ""


def test_check_at_rule_known_passes():
    rule = Rule("", [], ["@font-face"])
    assert check_at_rule(rule, known()) == []