import io
import json

import pytest

from seitekit.agent_stream import (
    chat_loop,
    is_exit_command,
    list_templates,
    render_stream,
    summarize_tool_input,
    truncate,
)


def _event(obj):
    return json.dumps(obj) + "\n"


def test_truncate_short_text_unchanged():
    assert truncate("hello", 10) == "hello"


def test_truncate_exact_length_unchanged():
    assert truncate("abcde", 5) == "abcde"


def test_truncate_long_text_adds_ellipsis():
    result = truncate("a" * 10, 5)
    assert result == "a" * 5 + "..."


def test_truncate_replaces_newlines():
    assert "\n" not in truncate("line one\nline two", 100)
    assert truncate("x\ny", 100) == "x y"


def test_truncate_multibyte_characters():
    text = "é" * 10
    assert truncate(text, 3) == "é" * 3 + "..."


@pytest.mark.parametrize("tool", ["Read", "Write", "Edit"])
def test_summarize_file_tools(tool):
    assert summarize_tool_input(tool, {"file_path": "content/a.md"}) == "content/a.md"


@pytest.mark.parametrize("tool", ["Glob", "Grep"])
def test_summarize_pattern_tools(tool):
    assert summarize_tool_input(tool, {"pattern": "*.md"}) == "*.md"


def test_summarize_bash_truncates():
    command = "echo " + "x" * 200
    summary = summarize_tool_input("Bash", {"command": command})
    assert summary == command[:80] + "..."


def test_summarize_unknown_tool_and_missing_fields():
    assert summarize_tool_input("WebSearch", {"query": "q"}) == ""
    assert summarize_tool_input("Read", {}) == ""
    assert summarize_tool_input("Read", None) == ""


def test_render_stream_text_and_session():
    lines = [
        _event({"type": "assistant", "message": {"content": [{"type": "text", "text": "Hi there"}]}}),
        _event({"type": "result", "session_id": "abc"}),
    ]
    out = io.StringIO()
    sid = render_stream(lines, out)
    assert sid == "abc"
    assert out.getvalue() == "Hi there\n"


def test_render_stream_tool_use_and_thinking():
    lines = [
        _event({
            "type": "assistant",
            "message": {"content": [
                {"type": "thinking", "thinking": "pondering"},
                {"type": "tool_use", "name": "Read", "input": {"file_path": "seite.toml"}},
            ]},
        }),
    ]
    out = io.StringIO()
    assert render_stream(lines, out) is None
    text = out.getvalue()
    assert "pondering" in text
    assert "tool: Read seite.toml" in text


def test_render_stream_skips_garbage_and_blank_lines():
    lines = ["", "not json\n", "\n", _event({"type": "other"}), _event([1, 2])]
    out = io.StringIO()
    assert render_stream(lines, out) is None
    assert out.getvalue() == ""


def test_render_stream_text_then_tool_breaks_line():
    lines = [
        _event({"type": "assistant", "message": {"content": [
            {"type": "text", "text": "abc"},
            {"type": "tool_use", "name": "Zzz"},
        ]}}),
    ]
    out = io.StringIO()
    render_stream(lines, out)
    assert out.getvalue().startswith("abc\n")
    assert "tool: Zzz" in out.getvalue()


@pytest.mark.parametrize("word", ["done", "quit", "exit", "stop", "  done  "])
def test_is_exit_command_true(word):
    assert is_exit_command(word) is True


@pytest.mark.parametrize("word", ["", "hello", "Done please"])
def test_is_exit_command_false(word):
    assert is_exit_command(word) is False


def test_list_templates_sorted_relative(tmp_path):
    (tmp_path / "shortcodes").mkdir()
    (tmp_path / "shortcodes" / "note.html").write_text("x")
    (tmp_path / "base.html").write_text("x")
    (tmp_path / "post.html").write_text("x")
    assert list_templates(tmp_path) == ["base.html", "post.html", "shortcodes/note.html"]


def test_list_templates_missing_dir(tmp_path):
    assert list_templates(tmp_path / "nope") == []


def test_chat_loop_ends_on_exit_command():
    out = io.StringIO()
    chat_loop("sid", "Read", io.StringIO("\n\ndone\n"), out)
    text = out.getvalue()
    assert text.endswith("Agent session ended.\n")
    assert text.count("you> ") == 3


def test_chat_loop_ends_on_eof():
    out = io.StringIO()
    chat_loop("sid", "Read", io.StringIO(""), out)
    assert out.getvalue().endswith("you> ")
    assert "Agent session ended." not in out.getvalue()