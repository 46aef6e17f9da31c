"""Release asset naming, version comparison and checksum verification."""

from __future__ import annotations

import hashlib
import platform
import re
from pathlib import Path

REPO = "seite-sh/seite"
DOWNLOAD_BASE = "https://seite.sh/download"
CHECKSUMS_NAME = "checksums-sha256.txt"

_U64_MAX = 2**64 - 1
_NUMBER = re.compile(r"\+?[0-9]+")


class ChecksumError(Exception):
    """A downloaded archive could not be verified against its checksums."""


def _parse_part(part: str) -> int:
    if not _NUMBER.fullmatch(part):
        return 0
    value = int(part)
    return value if value <= _U64_MAX else 0


def _parse_version(version: str) -> tuple[int, int, int]:
    parts = version.split(".")
    if len(parts) < 3:
        return (0, 0, 0)
    return (_parse_part(parts[0]), _parse_part(parts[1]), _parse_part(parts[2]))


def version_cmp(a: str, b: str) -> int:
    """Compare two ``major.minor.patch`` strings; return -1, 0 or 1.

    Versions with fewer than three parts count as ``0.0.0``; parts that are
    not numbers count as 0, and anything past the third part is ignored.
    """
    left, right = _parse_version(a), _parse_version(b)
    return (left > right) - (left < right)


def normalize_tag(version: str) -> str:
    """Return *version* as a release tag, with a leading ``v``."""
    return version if version.startswith("v") else f"v{version}"


def strip_tag(tag: str) -> str:
    """Return the version number of a tag, without any leading ``v``."""
    return tag.lstrip("v")


def detect_target_triple() -> str:
    """Return the release target triple for this machine.

    Raises RuntimeError on platforms that have no release binary.
    """
    system = platform.system()
    if system == "Darwin":
        os_part = "apple-darwin"
    elif system == "Linux":
        os_part = "unknown-linux-gnu"
    elif system == "Windows":
        raise RuntimeError(
            "Self-update is not supported on Windows. Use the PowerShell installer:\n"
            "  irm https://seite.sh/install.ps1 | iex"
        )
    else:
        raise RuntimeError(
            "Unsupported operating system. Install from source: cargo install seite"
        )

    machine = platform.machine().lower()
    if machine in ("x86_64", "amd64"):
        arch = "x86_64"
    elif machine in ("aarch64", "arm64"):
        arch = "aarch64"
    else:
        raise RuntimeError(
            "Unsupported architecture. Install from source: cargo install seite"
        )
    return f"{arch}-{os_part}"


def archive_name(target_triple: str) -> str:
    """Name of the release archive for *target_triple*."""
    return f"seite-{target_triple}.tar.gz"


def download_url(tag: str, archive_name: str) -> str:
    """URL of a release archive."""
    return f"{DOWNLOAD_BASE}/{tag}/{archive_name}"


def checksums_url(tag: str) -> str:
    """URL of the checksums file of a release."""
    return f"{DOWNLOAD_BASE}/{tag}/{CHECKSUMS_NAME}"


def github_latest_release_url() -> str:
    """GitHub API URL that describes the latest release."""
    return f"https://api.github.com/repos/{REPO}/releases/latest"


def sha256_hex(data: bytes) -> str:
    """Hex SHA-256 digest of *data*."""
    return hashlib.sha256(data).hexdigest()


def sha256_file(path: str | Path) -> str:
    """Hex SHA-256 digest of the file at *path*, read in chunks."""
    digest = hashlib.sha256()
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(8192), b""):
            digest.update(chunk)
    return digest.hexdigest()


def verify_checksum(
    archive: str | Path, checksums_file: str | Path, archive_name: str
) -> None:
    """Check *archive* against its entry in *checksums_file*.

    The first line naming the archive is used. Raises ChecksumError when the
    archive is not listed or its digest differs, and OSError when a file
    cannot be read.
    """
    actual = sha256_file(archive)
    checksums = Path(checksums_file).read_text(encoding="utf-8")

    expected: str | None = None
    for line in checksums.splitlines():
        if line.endswith(archive_name) or archive_name in line:
            fields = line.split()
            expected = fields[0] if fields else None
            break
    if expected is None:
        raise ChecksumError(f"Archive {archive_name} not found in checksums file")

    if actual != expected:
        raise ChecksumError(
            f"Checksum mismatch!\n  Expected: {expected}\n  Actual:   {actual}"
        )