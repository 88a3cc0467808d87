"""Apply page templates to rendered sections and write the HTML documents.

The writer owns the page-level templates. ``index.jinja`` is required.
``section.jinja`` falls back to the index template, and ``item.jinja`` falls
back to the section template (or the index when the section template is also
missing). Templates are compiled through the builder's
:class:`~styleguide_pages.templating.TemplatingService` under the ``builder``
namespace, so they can include partials from the same directory.
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import datetime as dt
import logging
import typing as typ
from html import escape
from pathlib import Path

from markupsafe import Markup

from ._constants import BUILDER_NAMESPACE
from .errors import PageWriteError
from .pages import PageKind

if typ.TYPE_CHECKING:
    from .config import BuilderConfig
    from .locator import TemplateLocator
    from .pages import MenuItem, Page
    from .prose import ProseRenderer
    from .renderer import RenderedSection
    from .styleguide import StyleGuide
    from .templating import TemplatingService

logger = logging.getLogger(__name__)

PAGE_TEMPLATE_FALLBACKS: dict[PageKind, tuple[PageKind, ...]] = {
    PageKind.HOMEPAGE: (),
    PageKind.SECTION: (PageKind.HOMEPAGE,),
    PageKind.ITEM: (PageKind.SECTION, PageKind.HOMEPAGE),
}


class PageWriter:
    """Render page templates and persist the resulting documents."""

    def __init__(
        self,
        templating: TemplatingService,
        config: BuilderConfig,
        *,
        locator: TemplateLocator,
        prose: ProseRenderer,
    ) -> None:
        """Bind the writer to the build services and configuration.

        Parameters
        ----------
        templating : TemplatingService
            Service that compiles and renders the page templates.
        config : BuilderConfig
            Builder options; supplies the destination, homepage document name,
            stylesheets, scripts, and title.
        locator : TemplateLocator
            Locator used to find the homepage document in the source roots.
        prose : ProseRenderer
            Markdown converter for the homepage document.
        """
        self.templating = templating
        self.config = config
        self.locator = locator
        self.prose = prose
        self.page_templates: dict[PageKind, str] = {}

    async def load_page_templates(self) -> dict[PageKind, str]:
        """Compile the page templates and settle the fallback chain.

        Returns
        -------
        dict[PageKind, str]
            Registry identity used for each page kind.

        Raises
        ------
        TemplateCompileError
            If ``index.jinja`` is missing or any page template fails to parse.
        """
        available: dict[PageKind, str] = {}
        for kind in PageKind:
            identity = f"{BUILDER_NAMESPACE}/{kind.value}.jinja"
            path = self.config.builder / f"{kind.value}.jinja"
            exists = await asyncio.to_thread(path.is_file)
            if kind is not PageKind.HOMEPAGE and not exists:
                continue
            await self.templating.compile_file(identity, path)
            available[kind] = identity

        resolved: dict[PageKind, str] = {}
        for kind, fallbacks in PAGE_TEMPLATE_FALLBACKS.items():
            for candidate in (kind, *fallbacks):
                if candidate in available:
                    resolved[kind] = available[candidate]
                    break
        self.page_templates = resolved
        return resolved

    async def homepage_html(self) -> str:
        """Return the homepage document converted to HTML, or ``""``."""
        path = await self.locator.find_first(self.config.homepage)
        if path is None:
            logger.warning("no homepage content found in %s.", self.config.homepage)
            return ""
        text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        return self.prose.markdown(text)

    async def write(
        self,
        page: Page,
        styleguide: StyleGuide,
        sections: cabc.Sequence[RenderedSection],
        menu: cabc.Sequence[MenuItem],
    ) -> Path:
        """Render ``page`` and write it into the destination directory.

        Raises
        ------
        PageWriteError
            If the destination file cannot be written.
        """
        self._log_page(page, styleguide)
        homepage: str | bool = False
        if page.kind is PageKind.HOMEPAGE:
            homepage = Markup(await self.homepage_html())
        context = self._build_context(page, styleguide, sections, menu, homepage)
        html = await self.templating.render(self.page_templates[page.kind], context)
        if not html.endswith("\n"):
            html += "\n"
        output_path = self.config.destination / page.file_name
        try:
            await asyncio.to_thread(output_path.write_text, html, encoding="utf-8")
        except OSError as exc:
            raise PageWriteError(output_path, str(exc)) from exc
        return output_path

    def _build_context(
        self,
        page: Page,
        styleguide: StyleGuide,
        sections: cabc.Sequence[RenderedSection],
        menu: cabc.Sequence[MenuItem],
        homepage: str | bool,
    ) -> dict[str, typ.Any]:
        return {
            "page": page,
            "template": {
                "is_homepage": page.kind is PageKind.HOMEPAGE,
                "is_section": page.kind is PageKind.SECTION,
                "is_item": page.kind is PageKind.ITEM,
            },
            "styleguide": styleguide,
            "sections": [section.to_context() for section in sections],
            "has_numeric_references": styleguide.has_numeric_references,
            "menu": list(menu),
            "homepage": homepage,
            "title": self.config.title,
            "styles": Markup(_link_tags(self.config.css)),
            "scripts": Markup(_script_tags(self.config.js)),
            "pygments_css": Markup(self.prose.stylesheet),
            "options": self.config,
            "generated_at": dt.datetime.now(dt.UTC),
        }

    @staticmethod
    def _log_page(page: Page, styleguide: StyleGuide) -> None:
        if page.reference is None:
            logger.info(" - homepage")
            return
        section = styleguide.get(page.reference)
        header = section.header if section and section.header else "Unnamed"
        logger.info(" - %s %s [%s]", page.kind.value, page.reference, header)


def _link_tags(urls: cabc.Iterable[str]) -> str:
    return "".join(
        f'<link rel="stylesheet" href="{escape(url, quote=True)}">\n' for url in urls
    )


def _script_tags(urls: cabc.Iterable[str]) -> str:
    return "".join(
        f'<script src="{escape(url, quote=True)}"></script>\n' for url in urls
    )


__all__ = ["PAGE_TEMPLATE_FALLBACKS", "PageWriter"]
