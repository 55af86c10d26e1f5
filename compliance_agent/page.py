from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from bs4 import BeautifulSoup, Comment, NavigableString, Tag


@dataclass(frozen=True)
class PageElement:
    tag: str
    attrs: Mapping[str, str] = field(default_factory=dict)
    text: str = ""
    # inline body, only set for <script>
    script: str = ""

    def attr(self, name: str) -> str:
        return self.attrs.get(name, "")


@dataclass(frozen=True)
class ParsedPage:
    elements: tuple[PageElement, ...]
    markup: str
    body_text: str = ""

    def elements_by_tag(self, name: str) -> tuple[PageElement, ...]:
        name = name.lower()
        return tuple(e for e in self.elements if e.tag == name)

    @property
    def links(self) -> tuple[PageElement, ...]:
        return tuple(e for e in self.elements if e.tag == "a" and "href" in e.attrs)

    @property
    def scripts(self) -> tuple[PageElement, ...]:
        return self.elements_by_tag("script")

    @property
    def forms(self) -> tuple[PageElement, ...]:
        return self.elements_by_tag("form")

    @property
    def images(self) -> tuple[PageElement, ...]:
        return self.elements_by_tag("img")


def _normalize_space(text: str) -> str:
    return " ".join(text.split())


def _attr_value(value) -> str:
    # bs4 hands back lists for multi-valued attributes such as class
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return "" if value is None else str(value)


def _to_element(tag: Tag) -> PageElement:
    name = (tag.name or "").lower()
    attrs = {str(k).lower(): _attr_value(v) for k, v in (tag.attrs or {}).items()}
    if name == "script":
        body = tag.string or ""
        return PageElement(tag=name, attrs=attrs, text="", script=str(body))
    if name == "a":
        text = tag.get_text(" ")
    else:
        # own strings only; nested text is read from the nested elements
        text = " ".join(str(s) for s in tag.children if isinstance(s, NavigableString) and not isinstance(s, Comment))
    return PageElement(tag=name, attrs=attrs, text=_normalize_space(text))


def parse_html(html: str) -> ParsedPage:
    soup = BeautifulSoup(html or "", "html.parser")
    elements = tuple(_to_element(t) for t in soup.find_all(True))
    body = soup.body if soup.body is not None else soup
    return ParsedPage(
        elements=elements,
        markup=str(soup),
        body_text=_normalize_space(body.get_text(" ")),
    )
