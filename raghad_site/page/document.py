"""Headless document model for a rendered page.

Just enough of a DOM for the page-session enhancements: elements with
attributes, classes, text and children, plus simple queries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag


@dataclass(eq=False)
class Element:
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Element] = field(default_factory=list)
    parent: Element | None = field(default=None, repr=False)
    text: str = ""
    style: dict[str, str] = field(default_factory=dict)

    @property
    def classes(self) -> list[str]:
        return self.attrs.get("class", "").split()

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def add_class(self, name: str) -> None:
        if not self.has_class(name):
            self.attrs["class"] = " ".join([*self.classes, name])

    def remove_class(self, name: str) -> None:
        if self.has_class(name):
            self.attrs["class"] = " ".join(c for c in self.classes if c != name)

    def toggle_class(self, name: str, force: bool) -> None:
        if force:
            self.add_class(name)
        else:
            self.remove_class(name)

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attrs.get(name, default)

    def set(self, name: str, value: str) -> None:
        self.attrs[name] = value

    @property
    def disabled(self) -> bool:
        return "disabled" in self.attrs

    @disabled.setter
    def disabled(self, value: bool) -> None:
        if value:
            self.attrs["disabled"] = ""
        else:
            self.attrs.pop("disabled", None)

    def iter(self) -> Iterator[Element]:
        """Depth-first walk of this element's descendants."""

        for child in self.children:
            yield child
            yield from child.iter()

    def query_all(self, predicate: Callable[[Element], bool]) -> list[Element]:
        return [el for el in self.iter() if predicate(el)]

    def first(self, predicate: Callable[[Element], bool]) -> Element | None:
        return next((el for el in self.iter() if predicate(el)), None)


def by_tag(tag: str) -> Callable[[Element], bool]:
    return lambda el: el.tag == tag


def by_class(name: str) -> Callable[[Element], bool]:
    return lambda el: el.has_class(name)


def has_attr(tag: str, attr: str) -> Callable[[Element], bool]:
    return lambda el: el.tag == tag and attr in el.attrs


def _convert(tag: Tag, parent: Element) -> Element:
    el = Element(tag=tag.name, attrs={k: v or "" for k, v in tag.attrs.items()}, parent=parent)
    for child in tag.children:
        if isinstance(child, Tag):
            el.children.append(_convert(child, el))
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            el.text += str(child)
    return el


class Form:
    """View over a ``<form>`` element."""

    def __init__(self, element: Element) -> None:
        if element.tag != "form":
            raise ValueError(f"expected a <form> element, got <{element.tag}>")
        self.element = element
        self._initial = {id(el): self._value_of(el) for el in self._controls()}

    @property
    def action(self) -> str:
        return self.element.get("action", "") or ""

    @property
    def method(self) -> str:
        return (self.element.get("method", "get") or "get").upper()

    @property
    def submit_button(self) -> Element | None:
        return self.element.first(lambda el: el.tag == "button" and el.get("type", "submit") == "submit")

    def _controls(self) -> list[Element]:
        return self.element.query_all(lambda el: el.tag in {"input", "textarea", "select"} and "name" in el.attrs)

    @staticmethod
    def _value_of(el: Element) -> str:
        if el.tag == "textarea":
            return el.text
        return el.get("value", "") or ""

    def fields(self) -> dict[str, str]:
        return {el.attrs["name"]: self._value_of(el) for el in self._controls()}

    def fill(self, **values: str) -> None:
        for el in self._controls():
            name = el.attrs["name"]
            if name not in values:
                continue
            if el.tag == "textarea":
                el.text = values[name]
            else:
                el.set("value", values[name])

    def reset(self) -> None:
        for el in self._controls():
            initial = self._initial.get(id(el), "")
            if el.tag == "textarea":
                el.text = initial
            else:
                el.set("value", initial)


class Document:
    def __init__(self, root: Element) -> None:
        self.root = root

    @classmethod
    def from_html(cls, html: str) -> Document:
        # Keep attribute values as plain strings; "class" is split by Element.
        soup = BeautifulSoup(html, "html.parser", multi_valued_attributes=None)
        root = Element(tag="#document")
        root.children = [_convert(child, root) for child in soup.children if isinstance(child, Tag)]
        return cls(root)

    def query_all(self, predicate: Callable[[Element], bool]) -> list[Element]:
        return self.root.query_all(predicate)

    def first(self, predicate: Callable[[Element], bool]) -> Element | None:
        return self.root.first(predicate)

    def images(self) -> list[Element]:
        return self.query_all(by_tag("img"))

    def deferred_images(self) -> list[Element]:
        return self.query_all(has_attr("img", "data-src"))

    def forms(self) -> list[Form]:
        return [Form(el) for el in self.query_all(by_tag("form"))]
