# seitekit

Supporting tooling for a static site generator whose pages ship as HTML,
markdown and structured data. The package covers four jobs:

- **Release notes** — assemble one `releases.md` page from a directory of
  changelog entries (`seitekit.releases`).
- **Contact forms** — describe, parse and validate a contact form provider
  configuration (`seitekit.contact`).
- **Agent sessions** — run a Claude Code agent with streaming JSON output and
  render its events to a terminal (`seitekit.agent_stream`).
- **Self-update** — resolve release versions, build download URLs, verify
  SHA-256 checksums and install a new `seite` binary
  (`seitekit.release_assets`, `seitekit.selfupdate`).

It has no third-party runtime dependencies.

## Installation

```bash
pip install .
```

To run the test suite:

```bash
pip install ".[test]"
pytest
```

## Command line

Installing the package provides the `seitekit` command with two
subcommands:

```bash
seitekit releases content/changelog                  # print the releases page
seitekit releases content/changelog -o releases.md   # write it to a file
seitekit self-update --check                         # report whether a newer release exists
seitekit self-update                                 # install the latest release
seitekit self-update --target-version 0.2.0          # install a specific release
seitekit --version
```

`self-update --check` installs nothing and exits with status 1 when a newer
release is available, 0 otherwise. Errors from downloading, checksum
verification or installation are printed to standard error and give exit
status 1.

The options `-v/--verbose`, `--json`, `-c/--config`, `-d/--dir` and
`-s/--site` are accepted before or after a subcommand, but neither
subcommand acts on them.

## Library use

### Building a releases page

Changelog entries are markdown files with YAML frontmatter. Files are ordered
by file name, reversed (newest first for date-prefixed names). The `title:`
field becomes the section heading; when it is missing, a title is derived
from the file name (`2026-02-20-v0-1-0.md` becomes `v0.1.0`). The body is
everything after the second `---` line. An empty or missing directory gives a
page saying that no releases are documented yet.

```python
from seitekit.releases import assemble_releases, write_releases

text = assemble_releases("content/changelog")
write_releases("content/changelog", "content/docs/releases.md")
```

The helpers `collect_changelog_files`, `extract_title`, `extract_body` and
`derive_title_from_filename` are available on their own.

### Contact form configuration

```python
from seitekit.contact import ContactSection, contact_page_markdown, parse_provider

provider = parse_provider("Formspree")
print(provider.display_name())          # Formspree

section = ContactSection.from_dict({"provider": "formspree", "endpoint": "xpznqkdl"})
print(section.to_dict())                # {'provider': 'formspree', 'endpoint': 'xpznqkdl'}

print(contact_page_markdown())          # default pages/contact.md content
```

Providers are `ContactProvider.FORMSPREE`, `WEB3FORMS`, `NETLIFY`, `HUBSPOT`
and `TYPEFORM`. `parse_provider` and `ContactSection.from_dict` raise
`ValueError` for an unknown provider; `from_dict` also raises it for a
missing `provider` or `endpoint` or a non-string field. `to_dict` leaves out
`region`, `redirect` and `subject` when they are unset.

### Agent sessions

```python
import sys
from seitekit.agent_stream import render_stream, run_streaming, chat_loop

session = run_streaming("Write a post about Rust", None, "site context...", "Read,Write,Edit")
if session:
    chat_loop(session, "Read,Write,Edit")
```

`run_streaming` starts the `claude` executable (which must be on `PATH`) and
returns the session id reported by the agent; it raises `RuntimeError` if the
program cannot be started. `chat_loop` reads follow-up messages until end of
input or one of `done`, `quit`, `exit`, `stop`. `render_stream(lines, out)`
renders any iterable of stream-json lines to a text stream, showing text,
thinking previews (200 characters) and tool calls; `truncate`,
`summarize_tool_input`, `is_exit_command` and `list_templates` are the
helpers it is built from.

### Release assets and checksums

```python
from seitekit.release_assets import (
    archive_name,
    detect_target_triple,
    download_url,
    normalize_tag,
    verify_checksum,
    version_cmp,
)

tag = normalize_tag("0.4.4")                  # "v0.4.4"
name = archive_name(detect_target_triple())  # e.g. "seite-x86_64-unknown-linux-gnu.tar.gz"
url = download_url(tag, name)

verify_checksum("archive.tar.gz", "checksums-sha256.txt", "archive.tar.gz")
```

`verify_checksum` uses the first line of the checksums file that names the
archive, and raises `ChecksumError` when the archive is not listed or the
digests differ. `version_cmp` returns -1, 0 or 1, comparing
`major.minor.patch` numerically; anything with fewer than three parts counts
as `0.0.0`, non-numeric parts count as 0 and extra parts are ignored.
`detect_target_triple` supports Linux and macOS on x86_64 and aarch64 and
raises `RuntimeError` elsewhere.

### Updating the installed binary

```python
from seitekit.selfupdate import self_update

code = self_update(target_version=None, check=True, current_version="0.4.4")
```

`self_update` asks for the latest tag (a version file first, the GitHub
releases API second), downloads the archive and its checksums, verifies them,
unpacks `seite` and copies it over the installed binary, keeping a `.old`
backup until the copy succeeds. Failures raise `UpdateError` or
`ChecksumError`.

## What this package does not do

It does not build, serve or deploy sites, read a site configuration file,
create content, or manage themes, collections or workspaces. The contact form
helpers describe a configuration but do not write it anywhere, and the agent
helpers only run the external `claude` program and display its output.