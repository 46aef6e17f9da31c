"""Contact form configuration: providers and the ``[contact]`` section."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

_AVAILABLE = "formspree, web3forms, netlify, hubspot, typeform"

_DISPLAY_NAMES = {
    "formspree": "Formspree",
    "web3forms": "Web3Forms",
    "netlify": "Netlify Forms",
    "hubspot": "HubSpot",
    "typeform": "Typeform",
}


class ContactProvider(Enum):
    """A hosted form backend."""

    FORMSPREE = "formspree"
    WEB3FORMS = "web3forms"
    NETLIFY = "netlify"
    HUBSPOT = "hubspot"
    TYPEFORM = "typeform"

    def display_name(self) -> str:
        """Human-readable provider name."""
        return _DISPLAY_NAMES[self.value]


def parse_provider(text: str) -> ContactProvider:
    """Parse a provider name case-insensitively; raise ValueError if unknown."""
    try:
        return ContactProvider(text.lower())
    except ValueError:
        raise ValueError(
            f"unknown contact provider '{text}'. Available: {_AVAILABLE}"
        ) from None


@dataclass
class ContactSection:
    """The ``[contact]`` table of a site configuration."""

    provider: ContactProvider
    endpoint: str
    region: str | None = None
    redirect: str | None = None
    subject: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Serialise to a plain mapping, leaving out unset optional fields."""
        data = {"provider": self.provider.value, "endpoint": self.endpoint}
        for key in ("region", "redirect", "subject"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ContactSection":
        """Build a section from a mapping; raise ValueError if it is invalid."""
        for key in ("provider", "endpoint"):
            if key not in data:
                raise ValueError(f"contact section is missing '{key}'")
        try:
            provider = ContactProvider(data["provider"])
        except ValueError:
            raise ValueError(
                f"unknown contact provider '{data['provider']}'. Available: {_AVAILABLE}"
            ) from None
        fields = {}
        for key in ("endpoint", "region", "redirect", "subject"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"contact field '{key}' must be a string")
            fields[key] = value
        return cls(provider=provider, **fields)


def contact_page_markdown() -> str:
    """Content of the default ``pages/contact.md`` page."""
    return "---\ntitle: Contact\ndescription: Get in touch\n---\n\n{{< contact_form() >}}\n"