"""Render section markup, example views, and modifier variants.

Each section with markup renders three kinds of HTML:

* ``markup``: the main template rendered with the placeholder modifier
  class, shown as the copyable source;
* ``example``: the same output, or the ``kss-example-`` override when one
  exists;
* one rendering per :class:`~styleguide_pages.styleguide.Modifier`, using the
  modifier's own class name.

Every rendering starts from a fresh copy of the sample data, so setting
``modifier_class`` for one variant never leaks into another.
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import dataclasses as dc
import typing as typ

from markupsafe import Markup

from .templating import mark_safe

if typ.TYPE_CHECKING:
    from .resolver import TemplateRecord
    from .sample_data import SampleContext
    from .styleguide import Modifier, Section
    from .templating import TemplatingService

MODIFIER_CLASS_FIELD = "modifier_class"


@dc.dataclass(frozen=True, slots=True)
class RenderedModifier:
    """A modifier together with the markup rendered for it."""

    name: str
    class_name: str
    description: str
    markup: Markup

    def to_context(self) -> dict[str, typ.Any]:
        """Return template-friendly data for this modifier."""
        return {
            "name": self.name,
            "class_name": self.class_name,
            "description": self.description,
            "markup": self.markup,
        }


@dc.dataclass(frozen=True, slots=True)
class RenderedSection:
    """A section with its canonical markup, example, and modifier renderings."""

    section: Section
    markup: Markup
    example: Markup
    modifiers: tuple[RenderedModifier, ...]
    markup_source: str = ""

    def to_context(self) -> dict[str, typ.Any]:
        """Return template-friendly data for this section."""
        section = self.section
        return {
            "reference": section.reference,
            "reference_uri": section.reference_uri,
            "header": section.header,
            "description": Markup(section.description),
            "depth": section.depth,
            "markup": self.markup,
            "example": self.example,
            "markup_file": section.markup_file,
            "markup_source": self.markup_source,
            "modifiers": [modifier.to_context() for modifier in self.modifiers],
        }


class SectionRenderer:
    """Render sections against the template records of the current build."""

    def __init__(
        self,
        templating: TemplatingService,
        records: cabc.Mapping[str, TemplateRecord],
        placeholder: str = "",
    ) -> None:
        self.templating = templating
        self.records = records
        self.placeholder = placeholder

    async def render_sections(
        self, sections: cabc.Iterable[Section]
    ) -> list[RenderedSection]:
        """Render ``sections`` concurrently, keeping their order."""
        return list(
            await asyncio.gather(*(self.render_section(section) for section in sections))
        )

    async def render_section(self, section: Section) -> RenderedSection:
        """Render one section and each of its modifiers."""
        record = self.records.get(section.reference) if section.markup else None
        if record is None:
            return RenderedSection(
                section=section,
                markup=Markup(""),
                example=Markup(""),
                modifiers=tuple(_blank_modifier(modifier) for modifier in section.modifiers),
            )

        has_modifiers = bool(section.modifiers)
        markup = await self._render(
            record.identity, self._with_placeholder(record.context, has_modifiers)
        )
        example = markup
        if record.has_distinct_example:
            example = await self._render(
                record.render_identity,
                self._with_placeholder(record.example_context, has_modifiers),
            )

        modifiers = await asyncio.gather(
            *(self._render_modifier(record, modifier) for modifier in section.modifiers)
        )
        return RenderedSection(
            section=section,
            markup=markup,
            example=example,
            modifiers=tuple(modifiers),
            markup_source=record.markup,
        )

    async def _render_modifier(
        self, record: TemplateRecord, modifier: Modifier
    ) -> RenderedModifier:
        data = record.render_context.fresh()
        existing = str(data.get(MODIFIER_CLASS_FIELD) or "")
        data[MODIFIER_CLASS_FIELD] = _join_classes(existing, modifier.class_name)
        markup = await self._render(record.render_identity, data)
        return RenderedModifier(
            name=modifier.name,
            class_name=modifier.class_name,
            description=modifier.description,
            markup=markup,
        )

    def _with_placeholder(
        self, context: SampleContext, has_modifiers: bool
    ) -> dict[str, typ.Any]:
        data = context.fresh()
        value = str(data.get(MODIFIER_CLASS_FIELD) or "")
        if has_modifiers and self.placeholder:
            value = _join_classes(value, self.placeholder)
        data[MODIFIER_CLASS_FIELD] = value
        return data

    async def _render(self, identity: str, data: dict[str, typ.Any]) -> Markup:
        return Markup(await self.templating.render(identity, mark_safe(data)))


def _join_classes(existing: str, extra: str) -> str:
    if existing:
        return f"{existing} {extra}"
    return extra


def _blank_modifier(modifier: Modifier) -> RenderedModifier:
    return RenderedModifier(
        name=modifier.name,
        class_name=modifier.class_name,
        description=modifier.description,
        markup=Markup(""),
    )


__all__ = ["MODIFIER_CLASS_FIELD", "RenderedModifier", "RenderedSection", "SectionRenderer"]
