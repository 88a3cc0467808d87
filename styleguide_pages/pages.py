"""Group style guide sections into pages and build their navigation.

Every build emits one homepage (``index.html``), one page per root
reference (``section-<root>.html``), and optionally one page per section
(``item-<reference>.html``). File names derive from the URI-safe form of the
page reference, so they are stable across builds.

Example
-------
>>> from styleguide_pages.styleguide import Section, StyleGuide
>>> guide = StyleGuide(entries=(Section("1"), Section("1.1"), Section("2")))
>>> [page.file_name for page in assemble_pages(guide, include_items=False)]
['index.html', 'section-1.html', 'section-2.html']
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from ._constants import PAGE_EXTENSION
from .styleguide import reference_to_uri

if typ.TYPE_CHECKING:
    from .styleguide import Section, StyleGuide


class PageKind(enum.Enum):
    """The three kinds of generated page; values double as template names."""

    HOMEPAGE = "index"
    SECTION = "section"
    ITEM = "item"


@dc.dataclass(frozen=True, slots=True)
class Page:
    """A page to render: its kind, root reference, and sections."""

    kind: PageKind
    reference: str | None
    sections: tuple[Section, ...] = ()

    @property
    def file_name(self) -> str:
        """Return the output document name for this page."""
        if self.reference is None:
            return f"{self.kind.value}{PAGE_EXTENSION}"
        uri = reference_to_uri(self.reference)
        return f"{self.kind.value}-{uri}{PAGE_EXTENSION}"


@dc.dataclass(slots=True)
class MenuItem:
    """Navigation entry for a section, with children for the active root."""

    header: str
    reference: str
    reference_uri: str
    depth: int
    root_uri: str
    is_active: bool = False
    children: list[MenuItem] = dc.field(default_factory=list)

    @property
    def href(self) -> str:
        """Return the section page link for this entry."""
        page = f"{PageKind.SECTION.value}-{self.root_uri}{PAGE_EXTENSION}"
        return f"{page}#kssref-{self.reference_uri}"


def assemble_pages(styleguide: StyleGuide, *, include_items: bool = True) -> list[Page]:
    """Return the homepage, one page per root reference, and item pages.

    Parameters
    ----------
    styleguide : StyleGuide
        Source of the sections to group.
    include_items : bool, optional
        When ``True`` (default) emit one single-section page per section.

    Returns
    -------
    list[Page]
        Pages in build order: homepage, section pages, then item pages.
    """
    pages = [Page(kind=PageKind.HOMEPAGE, reference=None)]
    for root in styleguide.root_references():
        pages.append(
            Page(
                kind=PageKind.SECTION,
                reference=root,
                sections=tuple(styleguide.sections(f"{root}.*")),
            )
        )
    if include_items:
        for section in styleguide.sections():
            pages.append(
                Page(kind=PageKind.ITEM, reference=section.reference, sections=(section,))
            )
    return pages


def build_menu(styleguide: StyleGuide, page_reference: str | None) -> list[MenuItem]:
    """Return root menu entries, expanding the children of the active root.

    ``page_reference`` is the reference of the page being written; any
    section reference is accepted and activates its root. ``None`` (the
    homepage) activates nothing.
    """
    active_root = None
    if page_reference is not None:
        active_root = _root_of(styleguide, page_reference)
    menu: list[MenuItem] = []
    for root in styleguide.root_references():
        root_section = styleguide.get(root)
        item = _menu_item(root_section, root)
        if root == active_root:
            item.is_active = True
            item.children = [
                _menu_item(section, section.reference)
                for section in styleguide.sections(f"{root}.*")
                if section.depth == 2
            ]
        menu.append(item)
    return menu


def _menu_item(section: Section | None, reference: str) -> MenuItem:
    if section is None:
        return MenuItem(
            header=reference,
            reference=reference,
            reference_uri=reference_to_uri(reference),
            depth=1,
            root_uri=reference_to_uri(reference),
        )
    return MenuItem(
        header=section.header or section.reference,
        reference=section.reference,
        reference_uri=section.reference_uri,
        depth=section.depth,
        root_uri=reference_to_uri(section.root_reference),
    )


def _root_of(styleguide: StyleGuide, reference: str) -> str:
    section = styleguide.get(reference)
    if section is not None:
        return section.root_reference
    return reference


__all__ = ["MenuItem", "Page", "PageKind", "assemble_pages", "build_menu"]
