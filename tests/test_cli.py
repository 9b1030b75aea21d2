import io
import json
from pathlib import Path
from typer.testing import CliRunner
from litbook.cli import main
from litbook.services.render.cli import app as render_app
from conftest import write

BODY = "pub fn body() {\n    // Hello\n    let x = 1;\n}\n"


def payload(content: str) -> str:
    context = {"root": ".", "config": {}, "renderer": "html", "mdbook_version": "0.4.40"}
    chapter = {
        "Chapter": {
            "name": "Code",
            "content": content,
            "number": [1],
            "sub_items": [],
            "path": "code.rs",
            "source_path": "code.rs",
            "parent_names": [],
        }
    }
    return json.dumps([context, {"sections": [chapter], "__non_exhaustive": None}])


def test_supports_any_renderer():
    assert main(["supports", "html"]) == 0
    assert main(["supports", "epub"]) == 0


def test_bad_invocation_is_usage_error(capsys):
    assert main(["supports"]) == 1
    assert main(["unknown", "args"]) == 1
    assert "Usage:" in capsys.readouterr().err


def test_preprocess_stdin_to_stdout(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(payload(BODY)))
    assert main([]) == 0
    book = json.loads(capsys.readouterr().out)
    content = book["sections"][0]["Chapter"]["content"]
    assert content == "Hello\n\n```rust\nlet x = 1;\n```\n"


def test_preprocess_failure_exits_1(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(payload("fn body( {\n")))
    assert main([]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "code.rs" in captured.err


def test_render_to_stdout(tmp_path: Path):
    source = write(tmp_path / "chapter.rs", BODY)
    result = CliRunner().invoke(render_app, [str(source)])
    assert result.exit_code == 0, result.output
    assert result.output == "Hello\n\n```rust\nlet x = 1;\n```\n"


def test_render_to_file(tmp_path: Path):
    source = write(tmp_path / "chapter.rs", BODY)
    target = tmp_path / "out" / "chapter.md"
    result = CliRunner().invoke(render_app, [str(source), "--out", str(target), "--ignore"])
    assert result.exit_code == 0, result.output
    assert target.read_text(encoding="utf-8").startswith("Hello\n\n```rust,ignore\n")


def test_render_parse_error(tmp_path: Path):
    source = write(tmp_path / "broken.rs", "fn body( {\n")
    result = CliRunner().invoke(render_app, [str(source)])
    assert result.exit_code == 1


def test_usage_errors_from_subcommands_exit_1(tmp_path: Path, capsys):
    assert main(["supports", "html", "extra"]) == 1
    assert main(["render", "run", str(tmp_path / "missing.rs")]) == 1
    assert main(["book", "run", "--no-such-option"]) == 1
    assert capsys.readouterr().err.count("Invalid arguments:") == 3


def test_command_exit_codes_pass_through(tmp_path: Path):
    source = write(tmp_path / "broken.rs", "fn body( {\n")
    assert main(["render", "run", str(source)]) == 1
    assert main(["render", "run", str(write(tmp_path / "ok.rs", BODY))]) == 0
