"""Resolve every section's markup into compiled templates and sample data.

For each :class:`~styleguide_pages.styleguide.Section` the resolver decides
whether the markup is inline text or a template file reference. Inline
markup is compiled under the section reference. File references are located
across the configured source roots (together with an optional
``kss-example-`` override), compiled once, and paired with their sample
data. Missing files are a recoverable condition: the section keeps a
``NOT FOUND!`` marker and still renders.

The outcome for each section is a :class:`TemplateRecord`, collected into a
per-build mapping keyed by section reference.
"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from ._constants import EMPTY_TEMPLATE, EXAMPLE_PREFIX, NOT_FOUND_MARKER
from .locator import LocateOutcome
from .sample_data import SampleContext
from .styleguide import is_file_reference

if typ.TYPE_CHECKING:
    from .locator import LocatedTemplates, TemplateLocator
    from .sample_data import SampleContextLoader
    from .styleguide import Section, StyleGuide
    from .templating import TemplatingService

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class TemplateRecord:
    """Compiled-template bookkeeping for one section.

    Attributes
    ----------
    reference : str
        Reference of the section the record belongs to.
    identity : str
        Registry identity of the main template.
    context : SampleContext
        Sample data for the main template.
    example_identity : str or None
        Registry identity of the example override, set only when one was
        located and compiled.
    example_context : SampleContext
        Sample data for the example override.
    markup : str
        Markup as displayed; carries a ``NOT FOUND!`` marker when the
        referenced file could not be located.
    file : Path or None
        Resolved main template path, when file based.
    example_file : Path or None
        Resolved example template path, when located.
    """

    reference: str
    identity: str
    context: SampleContext = dc.field(default_factory=SampleContext.empty)
    example_identity: str | None = None
    example_context: SampleContext = dc.field(default_factory=SampleContext.empty)
    markup: str = ""
    file: Path | None = None
    example_file: Path | None = None

    @property
    def has_distinct_example(self) -> bool:
        """Return ``True`` when an example override replaces the main template."""
        return self.example_identity is not None

    @property
    def render_identity(self) -> str:
        """Identity used for the example view and modifier renderings."""
        return self.example_identity or self.identity

    @property
    def render_context(self) -> SampleContext:
        """Sample data paired with :attr:`render_identity`."""
        if self.example_identity is not None:
            return self.example_context
        return self.context


class SectionTemplateResolver:
    """Build :class:`TemplateRecord` objects for the sections of a style guide."""

    def __init__(
        self,
        templating: TemplatingService,
        locator: TemplateLocator,
        sample_loader: SampleContextLoader,
    ) -> None:
        self.templating = templating
        self.locator = locator
        self.sample_loader = sample_loader

    async def resolve_all(self, styleguide: StyleGuide) -> dict[str, TemplateRecord]:
        """Resolve every section concurrently and return records by reference.

        Sections without markup produce no record. The call returns only once
        every section has settled; compile failures propagate.
        """
        logger.info("...Determining section markup:")
        sections = [section for section in styleguide.sections() if section.markup]
        records = await asyncio.gather(
            *(self.resolve(section) for section in sections)
        )
        return {record.reference: record for record in records}

    async def resolve(self, section: Section) -> TemplateRecord:
        """Resolve a single section's markup into a :class:`TemplateRecord`."""
        if not is_file_reference(section.markup):
            logger.info(" - %s: inline markup", section.reference)
            await self.templating.compile_inline(section.reference, section.markup)
            return TemplateRecord(
                reference=section.reference,
                identity=section.reference,
                markup=section.markup,
            )
        return await self._resolve_file(section)

    async def _resolve_file(self, section: Section) -> TemplateRecord:
        markup = section.markup.strip()
        name = Path(markup).name
        example_name = EXAMPLE_PREFIX + name
        located = await self.locator.locate(markup, example_name)

        if located.outcome is LocateOutcome.NEITHER:
            markup = f"{markup}{NOT_FOUND_MARKER}"
            logger.warning("In section %s, %s", section.reference, markup)

        _, example_identity, context, example_context = await asyncio.gather(
            self._compile_main(name, located, markup),
            self._compile_example(example_name, located.example),
            self._load_context(located.main, name),
            self._load_context(located.example, example_name),
        )
        logger.info(" - %s: %s", section.reference, markup)
        return TemplateRecord(
            reference=section.reference,
            identity=name,
            context=context,
            example_identity=example_identity,
            example_context=example_context,
            markup=markup,
            file=located.main,
            example_file=located.example,
        )

    async def _compile_main(
        self, name: str, located: LocatedTemplates, markup: str
    ) -> None:
        match located.outcome:
            case LocateOutcome.NEITHER:
                await self.templating.compile_inline(name, markup)
            case LocateOutcome.EXAMPLE_ONLY:
                await self.templating.compile_inline(name, EMPTY_TEMPLATE)
            case _:
                await self.templating.compile_file(name, typ.cast("Path", located.main))

    async def _compile_example(self, example_name: str, path: Path | None) -> str | None:
        if path is None:
            return None
        await self.templating.compile_file(example_name, path)
        return example_name

    async def _load_context(self, path: Path | None, name: str) -> SampleContext:
        if path is None:
            return SampleContext.empty()
        return await self.sample_loader.aload(path, name)


__all__ = ["SectionTemplateResolver", "TemplateRecord"]
