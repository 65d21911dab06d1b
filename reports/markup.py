"""Markup query layer.

A small DOM-like facade over BeautifulSoup so extractors only depend on a
handful of queries: CSS selection, tag search, label/value cells, attribute
access and parent/sibling traversal.
"""
from __future__ import annotations

from typing import Callable, Iterator, List, Optional

from bs4 import BeautifulSoup
from bs4.element import PreformattedString, Tag

from core.text_utils import collapse_ws

HTML_BUILDER = 'html.parser'
_INVISIBLE = frozenset({'script', 'style', 'template', 'noscript'})


class Markup:
    """Wrapper around one parsed element (or the whole document)."""

    __slots__ = ('node',)

    def __init__(self, node: Tag):
        self.node = node

    @classmethod
    def parse(cls, html: str) -> 'Markup':
        return cls(BeautifulSoup(html, HTML_BUILDER))

    def __repr__(self) -> str:
        return f'Markup(<{self.name}>)'

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Markup) and other.node is self.node

    def __hash__(self) -> int:
        return id(self.node)

    @property
    def name(self) -> str:
        return self.node.name or ''

    # -- selection ---------------------------------------------------------

    def select(self, css: str) -> List['Markup']:
        return [Markup(n) for n in self.node.select(css)]

    def select_one(self, css: str) -> Optional['Markup']:
        found = self.node.select_one(css)
        return Markup(found) if found is not None else None

    def find_all(self, *names: str) -> List['Markup']:
        """Descendant elements by tag name, in document order."""
        return [Markup(n) for n in self.node.find_all(list(names))]

    def find(self, *names: str) -> Optional['Markup']:
        found = self.node.find(list(names))
        return Markup(found) if found is not None else None

    def children(self) -> List['Markup']:
        return [Markup(c) for c in self.node.children if isinstance(c, Tag)]

    def descendants_where(self, predicate: Callable[['Markup'], bool]) -> List['Markup']:
        return [m for m in (Markup(n) for n in self.node.find_all(True)) if predicate(m)]

    def first_containing(self, tag: str, label: str) -> Optional['Markup']:
        """First descendant <tag> whose text contains label (case-sensitive, like :contains)."""
        for el in self.find_all(tag):
            if label in el.text():
                return el
        return None

    def labelled_cell(self, label: str, tag: str = 'th') -> Optional['Markup']:
        """Value cell next to the first <th> containing label ('Schedule:' -> its <td>)."""
        header = self.first_containing(tag, label)
        return header.next_sibling() if header else None

    # -- traversal ---------------------------------------------------------

    def next_sibling(self) -> Optional['Markup']:
        sib = self.node.find_next_sibling()
        return Markup(sib) if sib is not None else None

    def closest(self, name: str) -> Optional['Markup']:
        """Self or nearest ancestor with the given tag name."""
        if self.node.name == name:
            return self
        parent = self.node.find_parent(name)
        return Markup(parent) if parent is not None else None

    # -- content -----------------------------------------------------------

    def text(self, sep: str = '') -> str:
        return self.node.get_text(sep)

    def clean_text(self, sep: str = '') -> str:
        return collapse_ws(self.node.get_text(sep))

    def lines(self) -> List[str]:
        """Non-empty whitespace-collapsed text lines, one per text node or line break."""
        out = (collapse_ws(line) for line in self.node.get_text('\n').splitlines())
        return [line for line in out if line]

    def visible_strings(self) -> Iterator[str]:
        for s in self.node.find_all(string=True):
            if isinstance(s, PreformattedString):
                continue
            if s.parent is not None and s.parent.name in _INVISIBLE:
                continue
            yield str(s)

    def visible_text(self, sep: str = ' ') -> str:
        """Document text without script/style content."""
        return sep.join(self.visible_strings())

    def attr(self, name: str) -> str:
        """Attribute value as a string; multi-valued attributes (class) are space-joined."""
        value = self.node.get(name)
        if value is None:
            return ''
        if isinstance(value, (list, tuple)):
            return ' '.join(value)
        return str(value)

    def colspan(self) -> int:
        try:
            return max(1, int(self.attr('colspan') or 1))
        except ValueError:
            return 1


def body_of(doc: Markup) -> Markup:
    """The <body> element when present, else the document itself."""
    return doc.find('body') or doc


def table_rows(table: Markup) -> List[Markup]:
    return table.find_all('tr')


def body_rows(table: Markup) -> List[Markup]:
    """Data rows: rows under <tbody> when the table has one, else rows outside <thead>."""
    bodies = table.find_all('tbody')
    if bodies:
        return [row for body in bodies for row in body.find_all('tr')]
    return [row for row in table.find_all('tr') if row.node.find_parent('thead') is None]


def header_rows(table: Markup) -> List[Markup]:
    """Rows under <thead>, else the first two rows of the table."""
    heads = table.find_all('thead')
    if heads:
        return [row for head in heads for row in head.find_all('tr')]
    return table.find_all('tr')[:2]


def header_cells(table: Markup) -> List[Markup]:
    """<th> cells of the header: <thead> when present, else the first row holding <th>."""
    heads = table.find_all('thead')
    if heads:
        return [th for head in heads for th in head.find_all('th')]
    for row in table.find_all('tr'):
        ths = row.find_all('th')
        if ths:
            return ths
    return []


def cell_texts(row: Markup, *names: str) -> List[str]:
    """Whitespace-collapsed text of each cell in a row (td by default)."""
    return [cell.clean_text() for cell in row.find_all(*(names or ('td',)))]
