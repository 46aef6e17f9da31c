"""Releases page assembly, contact form configuration, agent stream rendering and self-update helpers."""

__version__ = "0.4.4"

__all__ = [
    "agent_stream",
    "cli",
    "contact",
    "release_assets",
    "releases",
    "selfupdate",
]