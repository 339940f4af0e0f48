"""End-to-end tests for the ``line_chopper.cli`` program.

Input comes from temporary files or a patched stdin; output is read back
through ``capsys``.
"""
import io
import json

import pytest

from line_chopper.cli import main


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "app.log"
    path.write_text(
        "2024-01-02 INFO   started worker\n"
        "2024-01-02 WARN   disk  almost full\n",
        encoding="utf-8",
    )
    return path


def test_json_output(log_file, capsys):
    rc = main(["-p", "date 11 level msg", "-o", "json", str(log_file)])
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data == [
        {"date": "2024-01-02", "level": "INFO", "msg": "started worker"},
        {"date": "2024-01-02", "level": "WARN", "msg": "disk  almost full"},
    ]


def test_template_output(log_file, capsys):
    rc = main(["-p", "date 11 level msg", "-o", "{{ .level }}|{{ .msg }}", str(log_file)])
    assert rc == 0
    assert capsys.readouterr().out == "INFO|started worker\nWARN|disk  almost full\n"


def test_default_output_is_whole_line(log_file, capsys):
    assert main(["-n", str(log_file)]) == 0
    assert capsys.readouterr().out == "2024-01-02 INFO   started worker2024-01-02 WARN   disk  almost full"


def test_no_trim(tmp_path, capsys):
    path = tmp_path / "in.txt"
    path.write_text(" a , b \n", encoding="utf-8")
    assert main(["-t", "-p", "x ',' y", "-o", "[{{ .x }}][{{ .y }}]", str(path)]) == 0
    assert capsys.readouterr().out == "[ a ][ b ]\n"


def test_escapes_apply_to_expression_only(tmp_path, capsys):
    path = tmp_path / "in.tsv"
    path.write_text("a\tb\tc\n", encoding="utf-8")
    assert main(["-d", "\t", "-p", "x y z", "-o", "json", str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == [{"x": "a", "y": "b", "z": "c"}]

    assert main(["-p", r"x '\t' rest", "-o", "{{ .rest }}", str(path)]) == 0
    assert capsys.readouterr().out == "b\tc\n"


def test_delimiter_with_backslash_is_literal(tmp_path, capsys):
    path = tmp_path / "paths.txt"
    path.write_text("C:\\Users\\bob\n", encoding="utf-8")
    assert main(["-d", "\\", "-p", "drive dir user", "-o", "json", str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == [{"drive": "C:", "dir": "Users", "user": "bob"}]

    assert main(["-d", r"\t", "-p", "a b", "-o", "json", str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == [{"a": "C:\\Users\\bob", "b": ""}]


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("k=v\nx=y\n"))
    assert main(["-p", "key '=' value", "-o", "{{ .value }}"]) == 0
    assert capsys.readouterr().out == "v\ny\n"


def test_empty_input_json(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main(["-o", "json", "-"]) == 0
    assert json.loads(capsys.readouterr().out) == []


def test_no_arguments_prints_usage(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().err


def test_bad_template_fails(log_file, capsys):
    assert main(["-o", "{{ .level", str(log_file)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "unclosed action" in captured.err


def test_bad_escape_fails(log_file, capsys):
    assert main(["-p", r"a '\q' b", str(log_file)]) == 1
    assert "unknown escape" in capsys.readouterr().err


def test_missing_file_fails(tmp_path, capsys):
    assert main(["-p", "a", str(tmp_path / "missing.txt")]) == 1
    assert "missing.txt" in capsys.readouterr().err


def test_file_without_options_prints_usage(log_file, capsys):
    assert main([str(log_file)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "usage" in captured.err


def test_lines_split_on_newline_only(tmp_path, capsys):
    path = tmp_path / "cr.txt"
    path.write_bytes(b"a\rb,1\nc,2\r\n")
    assert main(["-p", "x ',' y", "-o", "json", str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == [
        {"x": "a\rb", "y": "1"},
        {"x": "c", "y": "2"},
    ]


def _bytes_stdin(monkeypatch, data):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(data), encoding="utf-8"))


def test_stdin_split_like_files(monkeypatch, capsys):
    _bytes_stdin(monkeypatch, b"a\rb,1\nc,2\r\n")
    assert main(["-p", "x ',' y", "-o", "json"]) == 0
    assert json.loads(capsys.readouterr().out) == [
        {"x": "a\rb", "y": "1"},
        {"x": "c", "y": "2"},
    ]


def test_invalid_utf8_is_replaced_for_stdin_and_files(tmp_path, monkeypatch, capsys):
    data = b"ok,1\n\xff\xfe,2\n"
    expected = [{"k": "ok", "v": "1"}, {"k": "\ufffd\ufffd", "v": "2"}]

    _bytes_stdin(monkeypatch, data)
    assert main(["-p", "k ',' v", "-o", "json"]) == 0
    assert json.loads(capsys.readouterr().out) == expected

    path = tmp_path / "bad.txt"
    path.write_bytes(data)
    assert main(["-p", "k ',' v", "-o", "json", str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == expected


def test_fault_mid_stream_stops_and_closes_json(tmp_path, monkeypatch, capsys):
    import line_chopper.cli as cli

    path = tmp_path / "three.txt"
    path.write_text("1\n2\n3\n", encoding="utf-8")
    real_apply = cli.apply
    seen = []

    def failing_apply(pipeline, line, config=None, values=None):
        seen.append(line)
        if line == "2":
            raise RuntimeError("chopper exploded")
        return real_apply(pipeline, line, config, values)

    monkeypatch.setattr(cli, "apply", failing_apply)
    assert main(["-p", "n", "-o", "json", str(path)]) == 1
    captured = capsys.readouterr()
    assert seen == ["1", "2"]
    assert "line-chopper: chopper exploded" in captured.err
    assert captured.out.endswith("\n]\n")
    assert json.loads(captured.out) == [{"n": "1"}]
