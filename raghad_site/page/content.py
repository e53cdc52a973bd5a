"""Marketing copy for the landing page.

The defaults below are the company's published copy. A YAML file can
override any part of it (see ``load_content``).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Mapping

from raghad_site.config.loader import read_yaml_mapping
from raghad_site.core.errors import ConfigError


@dataclass(frozen=True, slots=True)
class Link:
    label: str
    href: str
    style: str = "primary"


@dataclass(frozen=True, slots=True)
class Card:
    icon: str
    title: str
    body: str


@dataclass(frozen=True, slots=True)
class Stat:
    number: str
    label: str


@dataclass(frozen=True, slots=True)
class ContactItem:
    icon: str
    text: str


@dataclass(frozen=True, slots=True)
class Hero:
    title: str = "Raghad"
    subtitle: str = "Unleash your business potential in the major Gulf markets"
    description: str = "Years of experience in the Gulf markets at your fingertips."
    image: str = "assets/images/hero-image.jpg"
    image_alt: str = "Raghad Business Solutions"
    buttons: tuple[Link, ...] = (
        Link("Our Services", "#services", "primary"),
        Link("Get Started", "#contact", "secondary"),
    )


@dataclass(frozen=True, slots=True)
class Vision:
    heading: str = "Our Vision?"
    body: str = (
        "We aim to be the leading business establishment partner in the Gulf region, providing "
        "comprehensive solutions that enable companies to thrive in these dynamic markets."
    )
    features: tuple[Card, ...] = (
        Card(
            "fa-shield-alt",
            "Guaranteed Establishment",
            "Open your business bank account once your company is ready to operate; or you get your money back",
        ),
        Card(
            "fa-rocket",
            "Rapid Results",
            "Fast-track your business setup with our streamlined processes and expert guidance",
        ),
    )


@dataclass(frozen=True, slots=True)
class Services:
    heading: str = "Our Services"
    intro: str = "Years of experience in the Gulf markets at your fingertips."
    items: tuple[Card, ...] = (
        Card("fa-building", "Company Formation", "Complete business setup services across major Gulf markets"),
        Card("fa-file-contract", "Legal Documentation", "Comprehensive legal support and documentation services"),
        Card("fa-university", "Bank Account Opening", "Assistance with business bank account setup and management"),
        Card("fa-chart-line", "Business Consulting", "Strategic guidance for market entry and expansion"),
    )


@dataclass(frozen=True, slots=True)
class WhyChoose:
    heading: str = "Why Raghad Business?"
    body: str = (
        "Join the 3000+ successful companies established by Raghad and expand their business horizons with us"
    )
    stats: tuple[Stat, ...] = (
        Stat("3000+", "Companies Established"),
        Stat("15+", "Years Experience"),
        Stat("6", "Gulf Markets"),
        Stat("100%", "Success Rate"),
    )


@dataclass(frozen=True, slots=True)
class Contact:
    heading: str = "Get Started Today"
    body: str = "Ready to establish your business in the Gulf markets? Contact us for a consultation."
    items: tuple[ContactItem, ...] = (
        ContactItem("fa-phone", "+966 54 698 7943"),
        ContactItem("fa-envelope", "info@raghad10.com"),
        ContactItem("fa-map-marker-alt", "Gulf Region"),
    )
    buttons: tuple[Link, ...] = (
        Link("Call Now", "tel:+966546987943", "primary"),
        Link("Email Us", "mailto:info@raghad10.com", "secondary"),
    )


@dataclass(frozen=True, slots=True)
class NavItem:
    label: str
    href: str


@dataclass(frozen=True, slots=True)
class PageContent:
    brand: str = "Raghad"
    nav: tuple[NavItem, ...] = (
        NavItem("Vision", "#vision"),
        NavItem("Services", "#services"),
        NavItem("Contact", "#contact"),
    )
    hero: Hero = field(default_factory=Hero)
    vision: Vision = field(default_factory=Vision)
    services: Services = field(default_factory=Services)
    why_choose: WhyChoose = field(default_factory=WhyChoose)
    contact: Contact = field(default_factory=Contact)
    footer_note: str = "Raghad Company. All rights reserved."


# Element types for tuple-valued fields, used when building from YAML.
_ITEM_TYPES: dict[tuple[type, str], type] = {
    (Hero, "buttons"): Link,
    (Vision, "features"): Card,
    (Services, "items"): Card,
    (WhyChoose, "stats"): Stat,
    (Contact, "items"): ContactItem,
    (Contact, "buttons"): Link,
    (PageContent, "nav"): NavItem,
}


def _build(cls: type, raw: Mapping[str, Any], *, path: str) -> Any:
    try:
        return cls(**raw)
    except TypeError as e:
        raise ConfigError(f"invalid entry: {e}", path=path) from e


def _override(obj: Any, raw: Mapping[str, Any], *, path: str) -> Any:
    known = {f.name: f for f in fields(obj)}
    updates: dict[str, Any] = {}

    for key, value in raw.items():
        key_path = f"{path}.{key}" if path else str(key)
        if key not in known:
            raise ConfigError("unknown content field", path=key_path)

        current = getattr(obj, key)
        item_type = _ITEM_TYPES.get((type(obj), key))
        if item_type is not None:
            if not isinstance(value, list):
                raise ConfigError("must be a list", path=key_path)
            updates[key] = tuple(
                _build(item_type, v, path=f"{key_path}[{i}]") if isinstance(v, Mapping) else _bad(key_path, i)
                for i, v in enumerate(value)
            )
        elif is_dataclass(current):
            if not isinstance(value, Mapping):
                raise ConfigError("must be a mapping", path=key_path)
            updates[key] = _override(current, value, path=key_path)
        else:
            updates[key] = str(value)

    return type(obj)(**{**{name: getattr(obj, name) for name in known}, **updates})


def _bad(key_path: str, index: int) -> Any:
    raise ConfigError("list entries must be mappings", path=f"{key_path}[{index}]")


def content_from_mapping(raw: Mapping[str, Any]) -> PageContent:
    return _override(PageContent(), raw, path="content")


def load_content(path: str | Path | None) -> PageContent:
    """Default copy, with the YAML file at ``path`` merged over it."""

    if path is None:
        return PageContent()

    p = Path(path)
    if not p.exists():
        raise ConfigError("content file not found", path=str(p))
    return content_from_mapping(read_yaml_mapping(p))
