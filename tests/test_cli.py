import json

import pytest

from prettystrict.cli import check, main
from prettystrict.errors import ErrorKind, PrettystrictError

PROPS = {"properties": ["color", "font-size"], "at-rules": ["@media"]}
VALUES = {
    "color": {"allowed": ["#ff0000"]},
    "font-size": {"units": ["px"], "range": {"min": 0, "max": 100}},
}
MEDIA_LINE = "[1:1] @media (max-width: 600px): Unknown at-rule: @media (max-width: 600px)"


def _write_known(directory):
    props = directory / "Props.json"
    values = directory / "Values.json"
    props.write_text(json.dumps(PROPS), encoding="utf-8")
    values.write_text(json.dumps(VALUES), encoding="utf-8")
    return str(props), str(values)


def test_check_watch(capsys):
    assert check(None, True) is None
    assert capsys.readouterr().out == "Watching for changes...\n"


def test_check_reads_file(tmp_path, capsys):
    path = tmp_path / "styles.css"
    path.write_text("a { width: 1px }", encoding="utf-8")
    assert check(str(path), False) == "a { width: 1px }"
    assert capsys.readouterr().out == f"Checking {path}\n"


def test_check_missing_file(tmp_path):
    with pytest.raises(PrettystrictError) as info:
        check(str(tmp_path / "missing.css"), False)
    assert info.value.kind is ErrorKind.IO_ERROR


def test_main_default_stylesheet(tmp_path, capsys):
    props, values = _write_known(tmp_path)
    assert main(["--props", props, "--values", values]) == 0
    assert capsys.readouterr().out.splitlines() == [MEDIA_LINE]


def test_main_default_paths(tmp_path, monkeypatch, capsys):
    css_dir = tmp_path / "src" / "CSS"
    css_dir.mkdir(parents=True)
    _write_known(css_dir)
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    assert capsys.readouterr().out.splitlines() == [MEDIA_LINE]


def test_main_check_file(tmp_path, capsys):
    props, values = _write_known(tmp_path)
    css = tmp_path / "styles.css"
    css.write_text("a { width: 5px }", encoding="utf-8")
    assert main(["--props", props, "--values", values, "check", str(css)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == f"Checking {css}"
    assert "[1:1] width: width is unknown" in lines


def test_main_watch(tmp_path, capsys):
    props, values = _write_known(tmp_path)
    assert main(["--props", props, "--values", values, "check", "--watch"]) == 0
    assert capsys.readouterr().out == "Watching for changes...\n"


def test_main_missing_props(tmp_path, capsys):
    _, values = _write_known(tmp_path)
    code = main(["--props", str(tmp_path / "none.json"), "--values", values])
    assert code == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_main_parse_failure(tmp_path, capsys):
    props, values = _write_known(tmp_path)
    css = tmp_path / "bad.css"
    css.write_text("}", encoding="utf-8")
    assert main(["--props", props, "--values", values, "check", str(css)]) == 1
    assert "Failed to parse CSS" in capsys.readouterr().err