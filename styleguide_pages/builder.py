"""High-level orchestration for style guide generation.

:class:`StyleGuideBuilder` wires the templating service, template locator,
sample data loader, section resolver, renderer, and page writer into one
pipeline. A build:

1. resets the template registry and the Jinja template cache, so the same builder can rebuild in a
   long-lived process (for example, a watch loop);
2. compiles the page templates;
3. resolves every section's markup concurrently and waits for all of them;
4. groups sections into pages;
5. renders and writes every page concurrently.

Example
-------
>>> from pathlib import Path
>>> from styleguide_pages.config import BuilderConfig
>>> from styleguide_pages.styleguide import load_styleguide
>>> config = BuilderConfig(source=[Path("components")])  # doctest: +SKIP
>>> builder = StyleGuideBuilder(config)  # doctest: +SKIP
>>> builder.run(load_styleguide(Path("styleguide.json")))  # doctest: +SKIP
[PosixPath('styleguide/index.html'), ...]
"""

from __future__ import annotations

import asyncio
import logging
import typing as typ

from ._constants import BUILDER_NAMESPACE
from .errors import PageWriteError
from .extend import load_extensions
from .locator import TemplateLocator
from .pages import Page, PageKind, assemble_pages, build_menu
from .prose import ProseRenderer
from .renderer import SectionRenderer
from .resolver import SectionTemplateResolver
from .sample_data import SampleContextLoader
from .templating import TemplatingService
from .writer import PageWriter

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import BuilderConfig
    from .resolver import TemplateRecord
    from .styleguide import StyleGuide

logger = logging.getLogger(__name__)


class StyleGuideBuilder:
    """Build HTML style guide pages from a :class:`StyleGuide`."""

    def __init__(self, config: BuilderConfig) -> None:
        """Create the per-builder services from ``config``.

        Parameters
        ----------
        config : BuilderConfig
            Source roots, destination, page templates, and presentation
            options for the build. The configuration is never modified.

        Raises
        ------
        ExtensionError
            If a configured extension directory or module cannot be loaded.
        """
        self.config = config
        namespaces = {BUILDER_NAMESPACE: config.builder, **config.namespaces}
        self.templating = TemplatingService(namespaces, search_paths=config.source)
        load_extensions(self.templating.env, config)
        self.locator = TemplateLocator(config.source)
        self.sample_loader = SampleContextLoader()
        self.prose = ProseRenderer()
        self.resolver = SectionTemplateResolver(
            self.templating,
            self.locator,
            self.sample_loader,
        )
        self.writer = PageWriter(
            self.templating, config, locator=self.locator, prose=self.prose
        )
        self.records: dict[str, TemplateRecord] = {}

    def run(self, styleguide: StyleGuide) -> list[Path]:
        """Build synchronously; see :meth:`build`."""
        return asyncio.run(self.build(styleguide))

    async def build(self, styleguide: StyleGuide) -> list[Path]:
        """Render every page of ``styleguide`` into the destination directory.

        Returns
        -------
        list[Path]
            Written documents: the homepage, section pages, then item pages.

        Raises
        ------
        StyleGuideBuildError
            Raised for template compile or render failures and for a
            destination or page that cannot be written; the build stops at the first such failure.
        """
        self.templating.reset_registry()
        self.records = {}
        self._log_banner(styleguide)

        destination = self.config.destination
        try:
            await asyncio.to_thread(destination.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise PageWriteError(destination, str(exc)) from exc
        await self.writer.load_page_templates()
        self.records = await self.resolver.resolve_all(styleguide)

        logger.info("...Building style guide pages:")
        pages = assemble_pages(styleguide, include_items=self.config.item_pages)
        renderer = SectionRenderer(
            self.templating, self.records, placeholder=self.config.placeholder
        )
        return list(
            await asyncio.gather(
                *(self._build_page(page, styleguide, renderer) for page in pages)
            )
        )

    async def _build_page(
        self, page: Page, styleguide: StyleGuide, renderer: SectionRenderer
    ) -> Path:
        sections = await renderer.render_sections(page.sections)
        menu = build_menu(
            styleguide, None if page.kind is PageKind.HOMEPAGE else page.reference
        )
        return await self.writer.write(page, styleguide, sections, menu)

    def _log_banner(self, styleguide: StyleGuide) -> None:
        logger.info("Building your style guide!")
        logger.info(
            " * Source      : %s", ", ".join(str(path) for path in self.config.source)
        )
        logger.info(" * Destination : %s", self.config.destination)
        logger.info(" * Builder     : %s", self.config.builder)
        if self.config.namespaces:
            logger.info(
                " * Namespace   : %s",
                ", ".join(
                    f"{name}:{path}" for name, path in self.config.namespaces.items()
                ),
            )
        for file in styleguide.files:
            logger.info(" - %s", file)


__all__ = ["StyleGuideBuilder"]
