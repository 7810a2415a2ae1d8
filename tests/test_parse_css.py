import pytest

from prettystrict.check_property import Property, Rule
from prettystrict.errors import ErrorKind, LintError
from prettystrict.parse_css import (
    parse_css,
    parse_css_default,
    parse_css_fallback,
    parse_css_file,
    parse_css_with_recovery,
)


def _color(value):
    return parse_css(f"a {{ color: {value}; }}")[0].declaration[0].value


def test_default_stylesheet():
    rules = parse_css_default()
    assert [r.selector for r in rules] == [".foo", ".bar"]
    assert rules[0].declaration == [
        Property("color", "#ff0000"),
        Property("font-size", "16px"),
    ]
    assert rules[0].at_rule == []
    assert rules[1].declaration == []
    assert rules[1].at_rule == ["@media (max-width: 600px)"]


def test_hex_color_kept():
    rules = parse_css("a { background-color: #123456; }")
    assert rules == [Rule("a", [Property("background-color", "#123456")], [])]


def test_color_forms_agree():
    assert _color("rgb(18, 52, 86)") == _color("#123456")
    assert _color("#abc") == _color("#aabbcc")
    assert _color("rgba(18, 52, 86, 1)") == _color("#123456")


def test_transparent_color():
    assert _color("transparent") == "rgba(0, 0, 0, 0)"


def test_partial_alpha_uses_rgba():
    assert _color("rgba(1, 2, 3, 0.5)").startswith("rgba(1, 2, 3, 0.")


def test_unlisted_properties_skipped():
    rules = parse_css("a { background: blue; --x: 1; color: #112233 }")
    assert [p.name for p in rules[0].declaration] == ["color"]


def test_important_declarations_skipped():
    rules = parse_css("a { color: #112233 !important; width: 10px }")
    assert rules[0].declaration == [Property("width", "10px")]


def test_vendor_prefix_folded():
    rules = parse_css("a { -webkit-transform: rotate(45deg); }")
    assert rules[0].declaration == [Property("transform", "rotate(45deg)")]


def test_selector_tidy_is_idempotent():
    selector = parse_css("a>b ,  c { width: 1px }")[0].selector
    assert " > " in selector
    assert parse_css(f"{selector} {{ width: 1px }}")[0].selector == selector


def test_nested_at_rules_stack():
    css = "@supports (display: grid) { @media print { a { width: 1px } } } b { width: 2px }"
    rules = parse_css(css)
    assert rules[0].at_rule == ["@supports (display: grid)", "@media print"]
    assert rules[1].at_rule == []


def test_keyframes():
    rules = parse_css("@keyframes fade { from { opacity: 0 } to { opacity: 1 } }")
    assert [r.selector for r in rules] == ["from", "to"]
    assert [r.declaration for r in rules] == [
        [Property("opacity", "0")],
        [Property("opacity", "1")],
    ]
    printed = rules[0].at_rule[0]
    assert printed.startswith("@keyframes fade {")
    assert printed.endswith("}")
    assert "opacity: 0;" in printed
    assert rules[0].at_rule == rules[1].at_rule


def test_font_face():
    rules = parse_css("@font-face { font-family: Foo; }")
    assert rules == [
        Rule("", [Property("font-face-property", "font-family: Foo")], ["@font-face"])
    ]


def test_comments_ignored():
    assert parse_css("/* x { */ a { width: 1px }") == parse_css("a { width: 1px }")


@pytest.mark.parametrize(
    "css",
    ["}", "{ color: red }", "a { color red }", "color: red;", "@media print;"],
)
def test_parse_errors(css):
    with pytest.raises(LintError) as info:
        parse_css(css)
    assert info.value.message.startswith("Failed to parse CSS")
    assert info.value.kind.kind is ErrorKind.CUSTOM
    assert info.value.kind.detail == "parse_css"


def test_parse_css_file_round_trip(tmp_path):
    css = "a { width: 3px }"
    path = tmp_path / "styles.css"
    path.write_text(css, encoding="utf-8")
    assert parse_css_file(path) == parse_css(css)


def test_parse_css_file_missing(tmp_path):
    with pytest.raises(LintError) as info:
        parse_css_file(tmp_path / "missing.css")
    assert info.value.message.startswith("Failed to read CSS file")
    assert info.value.kind.kind is ErrorKind.IO_ERROR


def test_recovery_valid_input():
    css = "a { width: 3px }"
    assert parse_css_with_recovery(css) == parse_css(css)


def test_recovery_falls_back(capsys):
    css = "a {\n color: red\n}\n}"
    assert parse_css_with_recovery(css) == parse_css_fallback(css)
    assert "Warning: CSS parsing failed" in capsys.readouterr().err


def test_fallback():
    css = ".a {\n color: red;;\n}\n@media x {\n.b {\n}\n}"
    assert parse_css_fallback(css) == [
        Rule(".a", [Property("color", "red")], ["@media x {"]),
        Rule("@media x", [], ["@media x {"]),
    ]