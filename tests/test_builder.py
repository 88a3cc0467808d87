"""End-to-end tests for building style guide pages."""

from __future__ import annotations

import logging
import os
import typing as typ

import pytest
from bs4 import BeautifulSoup

from styleguide_pages.builder import StyleGuideBuilder
from styleguide_pages.config import BuilderConfig
from styleguide_pages.errors import PageWriteError, TemplateCompileError
from styleguide_pages.styleguide import Modifier, Section, StyleGuide

if typ.TYPE_CHECKING:
    from pathlib import Path

WriteFile = typ.Callable[["Path", str], "Path"]


@pytest.fixture
def project(tmp_path: Path, write_file: WriteFile) -> Path:
    """Create a component source root with a card template and homepage."""
    source = tmp_path / "components"
    write_file(source / "card.jinja", '<div class="card">{{ title }}</div>')
    write_file(source / "card.json", '{"title": "Card title"}')
    write_file(source / "homepage.md", "# Welcome\n\nHello **world**.\n")
    return tmp_path


def _guide() -> StyleGuide:
    return StyleGuide(
        entries=(
            Section(
                "1",
                header="Buttons",
                markup='<button class="{{ modifier_class }}">Hi</button>',
                modifiers=(Modifier(".disabled", "Disabled state"),),
            ),
            Section("1.1", header="Cards", markup="card.jinja"),
            Section("2", header="Missing", markup="missing.jinja"),
        )
    )


def _config(project: Path, **overrides: typ.Any) -> BuilderConfig:
    return BuilderConfig(
        source=[project / "components"], destination=project / "out", **overrides
    )


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def test_build_writes_every_page(project: Path) -> None:
    written = StyleGuideBuilder(_config(project)).run(_guide())
    assert [path.name for path in written] == [
        "index.html",
        "section-1.html",
        "section-2.html",
        "item-1.html",
        "item-1-1.html",
        "item-2.html",
    ]
    assert all(path.is_file() for path in written)


def test_section_page_renders_modifiers_and_samples(project: Path) -> None:
    StyleGuideBuilder(_config(project)).run(_guide())
    soup = _soup(project / "out" / "section-1.html")

    modifier = soup.select_one('[data-modifier="disabled"]')
    assert modifier is not None
    assert modifier.decode_contents().strip() == '<button class="disabled">Hi</button>'

    markup = soup.select_one("#kssref-1 [data-test=markup]")
    assert markup is not None
    assert markup.get_text() == '<button class="[modifier class]">Hi</button>'

    card = soup.select_one("#kssref-1-1 [data-test=example]")
    assert card is not None
    assert card.get_text(strip=True) == "Card title"

    active = soup.select_one(".kss-menu__item.is-active")
    assert active is not None
    assert active["data-reference"] == "1"


def test_homepage_renders_markdown(project: Path) -> None:
    StyleGuideBuilder(_config(project)).run(_guide())
    soup = _soup(project / "out" / "index.html")
    heading = soup.select_one("[data-test=homepage] h1")
    assert heading is not None
    assert heading.get_text() == "Welcome"


def test_missing_homepage_logs_warning(
    project: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.WARNING)
    (project / "components" / "homepage.md").unlink()
    StyleGuideBuilder(_config(project)).run(_guide())
    assert "no homepage content found in homepage.md." in caplog.text
    assert (project / "out" / "index.html").is_file()


def test_missing_template_still_builds(
    project: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.WARNING)
    StyleGuideBuilder(_config(project)).run(_guide())
    soup = _soup(project / "out" / "section-2.html")
    markup = soup.select_one("#kssref-2 [data-test=markup]")
    assert markup is not None
    assert markup.get_text() == "missing.jinja NOT FOUND!"
    assert "In section 2, missing.jinja NOT FOUND!" in caplog.text


def test_rebuild_picks_up_changed_templates(project: Path, write_file: WriteFile) -> None:
    builder = StyleGuideBuilder(_config(project))
    builder.run(_guide())
    write_file(
        project / "components" / "card.jinja", '<div class="card">New {{ title }}</div>'
    )
    builder.run(_guide())
    soup = _soup(project / "out" / "item-1-1.html")
    card = soup.select_one("#kssref-1-1 [data-test=example]")
    assert card is not None
    assert card.get_text(strip=True) == "New Card title", (
        "a second build must recompile templates instead of reusing stale ones"
    )


def test_item_pages_can_be_disabled(project: Path) -> None:
    written = StyleGuideBuilder(_config(project, item_pages=False)).run(_guide())
    assert [path.name for path in written] == [
        "index.html",
        "section-1.html",
        "section-2.html",
    ]


def test_custom_page_templates_fall_back(project: Path, write_file: WriteFile) -> None:
    builder_dir = project / "theme"
    write_file(
        builder_dir / "index.jinja",
        "{% if template.is_homepage %}HOME{% else %}"
        "{% for section in sections %}[{{ section.reference }}]{% endfor %}"
        "{% endif %}",
    )
    write_file(builder_dir / "item.jinja", "ITEM {{ sections[0].reference }}")
    StyleGuideBuilder(_config(project, builder=builder_dir)).run(_guide())

    out = project / "out"
    assert (out / "index.html").read_text(encoding="utf-8") == "HOME\n"
    assert (out / "section-1.html").read_text(encoding="utf-8") == "[1][1.1]\n"
    assert (out / "item-1-1.html").read_text(encoding="utf-8") == "ITEM 1.1\n"


def test_missing_index_template_fails(project: Path) -> None:
    empty_builder = project / "empty-theme"
    empty_builder.mkdir()
    with pytest.raises(TemplateCompileError):
        StyleGuideBuilder(_config(project, builder=empty_builder)).run(_guide())


def test_unwritable_page_raises(project: Path) -> None:
    (project / "out" / "index.html").mkdir(parents=True)
    with pytest.raises(PageWriteError):
        StyleGuideBuilder(_config(project)).run(_guide())


def test_build_logs_progress_at_info(
    project: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="styleguide_pages")
    StyleGuideBuilder(_config(project)).run(_guide())
    assert "Building your style guide!" in caplog.text
    assert " - 1.1: card.jinja" in caplog.text


def test_progress_is_silent_at_warning_level(
    project: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.WARNING, logger="styleguide_pages")
    StyleGuideBuilder(_config(project, verbose=True)).run(_guide())
    assert "Building your style guide!" not in caplog.text


def test_rebuild_reloads_included_partials(project: Path, write_file: WriteFile) -> None:
    source = project / "components"
    write_file(source / "card.jinja", '<div class="card">{% include "partial.jinja" %}</div>')
    partial = write_file(source / "partial.jinja", "OLD")
    builder = StyleGuideBuilder(_config(project))
    builder.run(_guide())

    stat = partial.stat()
    partial.write_text("NEW", encoding="utf-8")
    os.utime(partial, ns=(stat.st_atime_ns, stat.st_mtime_ns))
    builder.run(_guide())

    card = _soup(project / "out" / "item-1-1.html").select_one(
        "#kssref-1-1 [data-test=example]"
    )
    assert card is not None
    assert card.get_text(strip=True) == "NEW", (
        "a rebuild must not reuse cached includes even when the mtime is unchanged"
    )


def test_unwritable_destination_raises(project: Path, write_file: WriteFile) -> None:
    blocker = write_file(project / "out", "not a directory")
    with pytest.raises(PageWriteError) as excinfo:
        StyleGuideBuilder(_config(project)).run(_guide())
    assert excinfo.value.path == blocker


def test_extension_filters_are_available_to_sections(
    project: Path, write_file: WriteFile
) -> None:
    write_file(
        project / "extensions" / "shout.py",
        "def extend(env, config):\n"
        "    env.filters['shout'] = lambda text: text.upper() + '!'\n",
    )
    guide = StyleGuide(
        entries=(Section("1", header="Loud", markup='<p>{{ "hi"|shout }}</p>'),)
    )
    StyleGuideBuilder(_config(project, extend=[project / "extensions"])).run(guide)
    example = _soup(project / "out" / "item-1.html").select_one(
        "#kssref-1 [data-test=example]"
    )
    assert example is not None
    assert example.decode_contents() == "<p>HI!</p>"
