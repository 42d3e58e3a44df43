"""Tests for the command line entry point."""

import json

import pytest

from field_formatter.cli import main


@pytest.fixture
def jsonl_input(tmp_path):
    path = tmp_path / "rows.jsonl"
    rows = [{"id": 1, "name": "Smith, John"}, {"id": 2, "name": "O'Brien"}]
    path.write_text("\n".join(json.dumps(r) for r in rows) + "\n", encoding="utf-8")
    return path


def test_cli_writes_stdout(jsonl_input, capsys):
    assert main(["--input", str(jsonl_input), "--preset", "mysql"]) == 0
    out = capsys.readouterr().out
    assert out == "1,'Smith, John'\n2,O\\'Brien\n"


def test_cli_json_array_and_output_file(tmp_path):
    src = tmp_path / "rows.json"
    src.write_text(json.dumps([["a", None], ["b", "c"]]), encoding="utf-8")
    dst = tmp_path / "out" / "rows.txt"
    rc = main(
        [
            "--input",
            str(src),
            "--output",
            str(dst),
            "--fields-terminated-by",
            "\\t",
            "--enclosed-by",
            '"',
            "--escaped-by",
            "\\",
            "--enclose-required",
            "--null-string",
            "\\N",
        ]
    )
    assert rc == 0
    assert dst.read_text(encoding="utf-8") == '"a"\t\\N\n"b"\t"c"\n'


def test_cli_sentinel_disables_enclosing(jsonl_input, capsys):
    rc = main(["--input", str(jsonl_input), "--preset", "mysql", "--enclosed-by", "\\0"])
    assert rc == 0
    assert capsys.readouterr().out == "1,Smith, John\n2,O'Brien\n"


def test_cli_empty_input_fails(tmp_path):
    src = tmp_path / "empty.json"
    src.write_text("", encoding="utf-8")
    assert main(["--input", str(src)]) == 1


def test_cli_jsonl_with_array_rows(tmp_path, capsys):
    src = tmp_path / "rows.jsonl"
    src.write_text('["a", 1]\n["b,c", 2]\n', encoding="utf-8")
    assert main(["--input", str(src), "--preset", "mysql"]) == 0
    assert capsys.readouterr().out == "a,1\n'b,c',2\n"


def test_cli_single_line_row(tmp_path, capsys):
    src = tmp_path / "row.jsonl"
    src.write_text('["a", null]\n', encoding="utf-8")
    assert main(["--input", str(src)]) == 0
    assert capsys.readouterr().out == "a,null\n"


def test_cli_invalid_jsonl_line_fails(tmp_path, caplog):
    src = tmp_path / "bad.jsonl"
    src.write_text('["ok"]\n{not json}\n', encoding="utf-8")
    assert main(["--input", str(src)]) == 1
    assert "Invalid JSON on line 2" in caplog.text


def test_cli_scalar_document_fails(tmp_path):
    src = tmp_path / "scalar.json"
    src.write_text("42", encoding="utf-8")
    assert main(["--input", str(src)]) == 1


def test_cli_missing_file_fails(tmp_path):
    assert main(["--input", str(tmp_path / "nope.json")]) == 1


def test_cli_bad_preset_exits_with_usage_error(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["--input", str(tmp_path / "x.json"), "--preset", "excel"])
    assert excinfo.value.code == 2
