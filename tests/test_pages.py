"""Tests for page grouping, output file names, and navigation menus."""

from __future__ import annotations

from styleguide_pages.pages import PageKind, assemble_pages, build_menu
from styleguide_pages.styleguide import Section, StyleGuide


def _guide() -> StyleGuide:
    return StyleGuide(
        entries=(
            Section("1", header="Buttons"),
            Section("1.1", header="Primary"),
            Section("1.1.1", header="Large"),
            Section("1.2", header="Secondary"),
            Section("2", header="Forms"),
            Section("10", header="Tables"),
        )
    )


def test_section_page_holds_root_and_descendants() -> None:
    pages = assemble_pages(_guide(), include_items=False)
    section_one = next(page for page in pages if page.reference == "1")
    assert [section.reference for section in section_one.sections] == [
        "1",
        "1.1",
        "1.1.1",
        "1.2",
    ], "section 10 shares a prefix with 1 but must not be grouped with it"


def test_pages_follow_build_order_and_naming() -> None:
    pages = assemble_pages(_guide())
    names = [page.file_name for page in pages]
    assert names[:4] == ["index.html", "section-1.html", "section-2.html", "section-10.html"]
    assert "item-1-1-1.html" in names
    assert pages[0].kind is PageKind.HOMEPAGE
    assert pages[-1].kind is PageKind.ITEM


def test_item_pages_can_be_disabled() -> None:
    pages = assemble_pages(_guide(), include_items=False)
    assert all(page.kind is not PageKind.ITEM for page in pages)


def test_word_references_group_by_first_segment() -> None:
    guide = StyleGuide(
        entries=(
            Section("Forms", header="Forms"),
            Section("Forms - Buttons", header="Buttons"),
            Section("Formsets", header="Formsets"),
        )
    )
    pages = assemble_pages(guide, include_items=False)
    forms = next(page for page in pages if page.reference == "Forms")
    assert [section.reference for section in forms.sections] == [
        "Forms",
        "Forms - Buttons",
    ]
    assert forms.file_name == "section-forms.html"


def test_menu_expands_only_the_active_root() -> None:
    menu = build_menu(_guide(), "1.1.1")
    assert [item.reference for item in menu] == ["1", "2", "10"]
    active = menu[0]
    assert active.is_active
    assert [child.reference for child in active.children] == ["1.1", "1.2"]
    assert active.children[0].href == "section-1.html#kssref-1-1"
    assert not menu[1].children


def test_homepage_menu_has_no_active_root() -> None:
    menu = build_menu(_guide(), None)
    assert not any(item.is_active for item in menu)
