"""Drive the Claude Code agent and render its streamed JSON events."""

from __future__ import annotations

import json
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Any, Iterable, TextIO

EXIT_COMMANDS = frozenset({"done", "quit", "exit", "stop"})

_PATH_FIELDS = {
    "Read": "file_path",
    "Write": "file_path",
    "Edit": "file_path",
    "Glob": "pattern",
    "Grep": "pattern",
}


def truncate(text: str, max_len: int) -> str:
    """Flatten newlines and cut *text* to *max_len* characters, adding ``...``."""
    text = text.replace("\n", " ")
    if len(text) <= max_len:
        return text
    return text[:max_len] + "..."


def summarize_tool_input(tool_name: str, tool_input: Any) -> str:
    """Return a short description of a tool invocation for display."""
    if not isinstance(tool_input, dict):
        return ""
    if tool_name == "Bash":
        command = tool_input.get("command")
        return truncate(command, 80) if isinstance(command, str) else ""
    field = _PATH_FIELDS.get(tool_name)
    if field is None:
        return ""
    value = tool_input.get(field)
    return value if isinstance(value, str) else ""


def _get(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _str(obj: Any, key: str) -> str | None:
    value = _get(obj, key)
    return value if isinstance(value, str) else None


def render_stream(lines: Iterable[str], out: TextIO) -> str | None:
    """Render stream-json event lines to *out*; return the session id, if any."""
    session_id: str | None = None
    in_text = False

    def end_text() -> None:
        nonlocal in_text
        if in_text:
            out.write("\n")
            in_text = False

    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line:
            continue
        try:
            event = json.loads(line)
        except ValueError:
            continue

        event_type = _str(event, "type") or ""
        if event_type == "assistant":
            blocks = _get(_get(event, "message"), "content")
            if not isinstance(blocks, list):
                continue
            for block in blocks:
                block_type = _str(block, "type") or ""
                if block_type == "thinking":
                    end_text()
                    thinking = _str(block, "thinking")
                    if thinking:
                        out.write(f"  thinking: {truncate(thinking, 200)}\n")
                elif block_type == "tool_use":
                    end_text()
                    name = _str(block, "name") or "?"
                    detail = summarize_tool_input(name, _get(block, "input"))
                    out.write(f"  tool: {name} {detail}\n")
                elif block_type == "text":
                    text = _str(block, "text")
                    if text:
                        out.write(text)
                        out.flush()
                        in_text = True
        elif event_type == "result":
            end_text()
            sid = _str(event, "session_id")
            if sid is not None:
                session_id = sid

    end_text()
    return session_id


def is_exit_command(line: str) -> bool:
    """True if the chat input asks to end the session."""
    return line.strip() in EXIT_COMMANDS


def list_templates(templates_dir: str | Path) -> list[str]:
    """Return the sorted relative paths of all files under *templates_dir*."""
    root = Path(templates_dir)
    if not root.exists():
        return []
    names = [
        path.relative_to(root).as_posix()
        for path in root.rglob("*")
        if path.is_file()
    ]
    return sorted(names)


def _claude_command() -> list[str]:
    if os.name == "nt":
        return ["cmd", "/C", "claude"]
    return [shutil.which("claude") or "claude"]


def _run_streaming(
    prompt: str,
    session_id: str | None,
    system_prompt: str,
    allowed_tools: str,
    out: TextIO,
) -> str | None:
    cmd = _claude_command() + [
        "-p", prompt,
        "--output-format", "stream-json",
        "--verbose",
        "--allowedTools", allowed_tools,
    ]
    if session_id is not None:
        cmd += ["--resume", session_id]
    else:
        cmd += ["--append-system-prompt", system_prompt]

    try:
        proc = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise RuntimeError(f"failed to run claude: {exc}") from exc

    with proc:
        assert proc.stdout is not None
        result = render_stream(proc.stdout, out)
    return result


def run_streaming(
    prompt: str,
    session_id: str | None,
    system_prompt: str,
    allowed_tools: str,
) -> str | None:
    """Run one agent prompt with live output; return the session id for follow-ups."""
    return _run_streaming(prompt, session_id, system_prompt, allowed_tools, sys.stdout)


def chat_loop(
    session_id: str,
    allowed_tools: str,
    input_stream: TextIO | None = None,
    out: TextIO | None = None,
) -> None:
    """Read follow-up messages and send each to the same agent session."""
    input_stream = sys.stdin if input_stream is None else input_stream
    out = sys.stdout if out is None else out

    out.write('\nChat session active. Type follow-up messages, or "done" to exit.\n\n')
    while True:
        out.write("you> ")
        out.flush()
        raw = input_stream.readline()
        if not raw:
            break
        line = raw.strip()
        if not line:
            continue
        if is_exit_command(line):
            out.write("Agent session ended.\n")
            break
        out.write("\n")
        try:
            _run_streaming(line, session_id, "", allowed_tools, out)
        except Exception as exc:  # noqa: BLE001 - report and end the chat
            out.write(f"Agent error: {exc}\n")
            break
        out.write("\n")