"""Assemble a releases page from a directory of changelog entries."""

from __future__ import annotations

from pathlib import Path

RELEASES_FRONTMATTER = (
    "---\n"
    'title: "Releases"\n'
    'description: "Release history and changelog."\n'
    "weight: 12\n"
    "---"
)

NO_RELEASES = "\n\nNo releases documented yet.\n"

_DIGITS = "0123456789"


def _lines(content: str) -> list[str]:
    """Split text into lines, dropping a final empty line and trailing CRs."""
    parts = content.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def collect_changelog_files(directory: str | Path) -> list[Path]:
    """Return the ``.md`` files in *directory*, newest (reverse by name) first."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    files = [p for p in directory.iterdir() if p.suffix == ".md"]
    return sorted(files, key=lambda p: p.name, reverse=True)


def extract_title(content: str) -> str | None:
    """Return the ``title:`` value from the frontmatter, if it has one."""
    in_frontmatter = False
    for line in _lines(content):
        if line.strip() == "---":
            if in_frontmatter:
                return None
            in_frontmatter = True
            continue
        if in_frontmatter and line.startswith("title:"):
            return line[len("title:"):].strip().strip('"')
    return None


def derive_title_from_filename(path: str | Path) -> str:
    """Turn ``2026-02-20-v0-1-0.md`` into ``v0.1.0``."""
    stem = Path(path).stem
    if len(stem) > 11 and stem[4] == "-" and stem[7] == "-" and stem[10] == "-":
        slug = stem[11:]
    else:
        slug = stem

    result = []
    last = len(slug) - 1
    for i, ch in enumerate(slug):
        if (
            ch == "-"
            and 0 < i < last
            and slug[i - 1] in _DIGITS
            and slug[i + 1] in _DIGITS
        ):
            result.append(".")
        else:
            result.append(ch)
    return "".join(result)


def extract_body(content: str) -> str:
    """Return everything after the second ``---`` line."""
    dashes = 0
    body_lines: list[str] = []
    in_body = False
    for line in _lines(content):
        if in_body:
            body_lines.append(line)
        elif line.strip() == "---":
            dashes += 1
            if dashes == 2:
                in_body = True

    body = "\n".join(body_lines)
    if content.endswith("\n") and body_lines:
        body += "\n"
    return body


def assemble_releases(directory: str | Path) -> str:
    """Build the releases markdown document from the changelog directory."""
    output = RELEASES_FRONTMATTER
    files = collect_changelog_files(directory)
    if not files:
        return output + NO_RELEASES

    for file in files:
        content = file.read_text(encoding="utf-8")
        title = extract_title(content)
        if title is None:
            title = derive_title_from_filename(file)
        body = extract_body(content).lstrip("\n")
        output += f"\n\n## {title}\n{body}"

    if not output.endswith("\n"):
        output += "\n"
    return output


def write_releases(directory: str | Path, out_path: str | Path) -> str:
    """Assemble the releases document, write it to *out_path* and return it."""
    text = assemble_releases(directory)
    Path(out_path).write_text(text, encoding="utf-8")
    return text