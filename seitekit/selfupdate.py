"""Replace the installed ``seite`` binary with a published release."""

from __future__ import annotations

import json
import os
import shutil
import sys
import tarfile
import tempfile
import urllib.request
from pathlib import Path

from seitekit.release_assets import (
    CHECKSUMS_NAME,
    archive_name as make_archive_name,
    checksums_url,
    detect_target_triple,
    download_url,
    github_latest_release_url,
    normalize_tag,
    strip_tag,
    verify_checksum,
    version_cmp,
)

CURRENT_VERSION = "0.4.4"
VERSION_URL = "https://seite.sh/version.txt"
USER_AGENT = "seite-self-update"
BINARY_NAME = "seite"


class UpdateError(Exception):
    """The update could not be fetched, unpacked or installed."""


def _open(url: str, headers: dict[str, str] | None = None):
    request = urllib.request.Request(
        url, headers={"User-Agent": USER_AGENT, **(headers or {})}
    )
    return urllib.request.urlopen(request, timeout=30)


def backup_path(path: str | Path) -> Path:
    """Where the old binary is kept while the new one is installed."""
    return Path(path).with_suffix(".old")


def extract_binary(archive: str | Path, dest_dir: str | Path) -> Path:
    """Unpack the ``seite`` binary from a ``.tar.gz`` archive into *dest_dir*."""
    dest = Path(dest_dir) / BINARY_NAME
    try:
        with tarfile.open(archive, "r:gz") as tar:
            member = next(
                (
                    m
                    for m in tar.getmembers()
                    if m.isfile() and os.path.normpath(m.name) == BINARY_NAME
                ),
                None,
            )
            if member is None:
                raise UpdateError(f"Binary '{BINARY_NAME}' not found in archive")
            source = tar.extractfile(member)
            if source is None:
                raise UpdateError(f"Binary '{BINARY_NAME}' not found in archive")
            with source, open(dest, "wb") as target:
                shutil.copyfileobj(source, target)
    except (tarfile.TarError, OSError, EOFError) as exc:
        raise UpdateError(f"Failed to extract archive: {exc}") from exc
    return dest


def replace_binary(new_binary: str | Path, current_exe: str | Path) -> None:
    """Install *new_binary* over *current_exe*, restoring the old one on failure."""
    try:
        real_path = Path(current_exe).resolve(strict=True)
    except OSError as exc:
        raise UpdateError(f"Cannot resolve binary at {current_exe}: {exc}") from exc
    backup = backup_path(real_path)

    try:
        os.replace(real_path, backup)
    except OSError as exc:
        raise UpdateError(
            f"Cannot replace binary at {real_path}: {exc}\n"
            "You may need to run with elevated permissions or update manually."
        ) from exc

    try:
        shutil.copyfile(new_binary, real_path)
    except OSError as exc:
        try:
            os.replace(backup, real_path)
        except OSError:
            pass
        raise UpdateError(f"Failed to install new binary: {exc}") from exc

    os.chmod(real_path, 0o755)

    try:
        backup.unlink()
    except OSError:
        pass


def fetch_latest_tag() -> str:
    """Return the latest release tag, asking seite.sh first and GitHub second."""
    try:
        with _open(VERSION_URL) as response:
            tag = response.read().decode("utf-8").strip()
        if tag:
            return tag
    except (OSError, UnicodeDecodeError):
        pass

    try:
        with _open(
            github_latest_release_url(),
            {"Accept": "application/vnd.github+json"},
        ) as response:
            data = json.loads(response.read().decode("utf-8"))
    except OSError as exc:
        raise UpdateError(f"Failed to check for updates: {exc}") from exc
    except ValueError as exc:
        raise UpdateError("Could not parse latest release tag from GitHub") from exc

    tag = data.get("tag_name") if isinstance(data, dict) else None
    if not isinstance(tag, str):
        raise UpdateError("Could not parse latest release tag from GitHub")
    return tag


def download_file(url: str, dest: str | Path) -> None:
    """Download *url* to the file *dest*."""
    try:
        with _open(url) as response, open(dest, "wb") as target:
            shutil.copyfileobj(response, target)
    except OSError as exc:
        raise UpdateError(f"Download failed ({url}): {exc}") from exc


def _current_executable() -> Path:
    found = shutil.which(BINARY_NAME)
    if found:
        return Path(found)
    return Path(sys.argv[0])


def self_update(
    target_version: str | None = None,
    check: bool = False,
    current_version: str = CURRENT_VERSION,
) -> int:
    """Update the installed binary; return the process exit code.

    In check mode nothing is installed and the code is 1 when a newer
    release is available, 0 otherwise.
    """
    if target_version is not None:
        tag = normalize_tag(target_version)
        print(f"Targeting version {tag}...")
    else:
        print("Checking for updates...")
        tag = fetch_latest_tag()

    version = strip_tag(tag)
    if version == current_version:
        print(f"Already up to date (seite {current_version}).")
        return 0

    is_upgrade = version_cmp(version, current_version) > 0
    direction = "Upgrade" if is_upgrade else "Downgrade"
    print(f"{direction}: {current_version} → {version}")

    if check:
        if is_upgrade:
            print(f"Run `seite self-update` to install seite {version}.")
            return 1
        return 0

    archive = make_archive_name(detect_target_triple())
    print(f"Downloading {archive}...")

    with tempfile.TemporaryDirectory() as tmp:
        tmp_dir = Path(tmp)
        archive_path = tmp_dir / archive
        checksums_path = tmp_dir / CHECKSUMS_NAME

        download_file(download_url(tag, archive), archive_path)
        download_file(checksums_url(tag), checksums_path)

        print("Verifying checksum...")
        verify_checksum(archive_path, checksums_path, archive)
        print("Checksum verified.")

        binary = extract_binary(archive_path, tmp_dir)
        replace_binary(binary, _current_executable())

    print(f"Updated seite {current_version} → {version}")
    print("Run `seite upgrade` in your projects to update their config files.")
    return 0