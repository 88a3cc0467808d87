r"""Immutable style guide model consumed by the builder.

A :class:`StyleGuide` is an ordered collection of :class:`Section` objects,
each documenting a UI component: its hierarchical reference (``"1.2"`` or
``"Forms - Buttons"``), header, description, markup, and style variants
(:class:`Modifier`). The builder never mutates this model; rendered output
lives in separate objects.

:func:`load_styleguide` reads the model from a YAML or JSON document, which
is how documentation parsers hand their results to the builder.

Example
-------
>>> section = Section(reference="1.2", header="Buttons", markup="button.jinja")
>>> section.root_reference
'1'
>>> section.reference_uri
'1-2'
>>> Modifier(".is-active.big").class_name
'is-active big'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from ._constants import TEMPLATE_EXTENSION

REFERENCE_DELIMITER = re.compile(r"\.|\ \-\ ")
NUMERIC_REFERENCE = re.compile(r"^[0-9]+(?:\.[0-9]+)*$")
URI_UNSAFE = re.compile(r"[^\w-]+")


class StyleGuideError(ValueError):
    """Raised when a style guide document cannot be turned into a model."""


@dc.dataclass(frozen=True, slots=True)
class Modifier:
    """A named style variant of a section, rendered with an added class."""

    name: str
    description: str = ""

    @property
    def class_name(self) -> str:
        """Return the CSS class string that applies this modifier."""
        return self.name.replace(".", " ").replace(":", " pseudo-class-").strip()


@dc.dataclass(frozen=True, slots=True)
class Section:
    """A documented unit of UI markup."""

    reference: str
    header: str = ""
    description: str = ""
    markup: str = ""
    modifiers: tuple[Modifier, ...] = ()

    @property
    def reference_parts(self) -> list[str]:
        """Return the reference split on its delimiters."""
        return REFERENCE_DELIMITER.split(self.reference)

    @property
    def root_reference(self) -> str:
        """Return the top-level segment of the reference."""
        return self.reference_parts[0]

    @property
    def depth(self) -> int:
        """Return the nesting level; root sections have depth 1."""
        return len(self.reference_parts)

    @property
    def reference_uri(self) -> str:
        """Return the reference in a form safe for file names and URLs."""
        return reference_to_uri(self.reference)

    @property
    def markup_file(self) -> str | None:
        """Return the markup when it names a template file, else ``None``."""
        if is_file_reference(self.markup):
            return self.markup.strip()
        return None

    def is_within(self, root: str) -> bool:
        """Return ``True`` when the section equals or descends from ``root``."""
        if self.reference == root:
            return True
        return any(
            self.reference.startswith(root + delimiter) for delimiter in (".", " - ")
        )


@dc.dataclass(frozen=True, slots=True)
class StyleGuide:
    """Ordered, immutable collection of sections plus source metadata."""

    entries: tuple[Section, ...] = ()
    files: tuple[str, ...] = ()

    def sections(self, query: str | None = None) -> list[Section]:
        """Return sections matching ``query``.

        ``None`` returns every section, ``"1.*"`` returns section ``1`` and
        all of its descendants, and any other value returns the section with
        exactly that reference (as a one-element list) or an empty list.
        """
        if query is None:
            return list(self.entries)
        if query.endswith(".*"):
            root = query[:-2]
            return [section for section in self.entries if section.is_within(root)]
        return [section for section in self.entries if section.reference == query]

    def get(self, reference: str) -> Section | None:
        """Return the section with ``reference`` or ``None``."""
        return next(
            (section for section in self.entries if section.reference == reference),
            None,
        )

    def root_references(self) -> list[str]:
        """Return distinct root references in order of first appearance."""
        roots: list[str] = []
        for section in self.entries:
            if section.root_reference not in roots:
                roots.append(section.root_reference)
        return roots

    @property
    def has_numeric_references(self) -> bool:
        """Return ``True`` when every reference is dotted digits."""
        return bool(self.entries) and all(
            NUMERIC_REFERENCE.match(section.reference) for section in self.entries
        )


def is_file_reference(markup: str) -> bool:
    """Return ``True`` when ``markup`` is a single-line template file name."""
    candidate = markup.strip()
    return (
        bool(candidate)
        and "\n" not in candidate
        and "\r" not in candidate
        and candidate.endswith(TEMPLATE_EXTENSION)
    )


def reference_to_uri(reference: str) -> str:
    """Convert a section reference into a URI-safe token."""
    return URI_UNSAFE.sub("-", reference.replace(" - ", "-")).lower()


def load_styleguide(path: Path) -> StyleGuide:
    """Load a style guide document (YAML or JSON) into the immutable model.

    Parameters
    ----------
    path : Path
        Document with a ``sections`` list; each entry needs a ``reference``
        and may carry ``header``, ``description``, ``markup`` and
        ``modifiers`` (``name``/``description`` mappings). An optional
        ``files`` list records the documentation sources. Every scalar is read
        as written, so references such as ``1.10`` keep their digits.

    Returns
    -------
    StyleGuide
        Sections ordered by their reference path.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    StyleGuideError
        If the document does not describe a list of sections.
    """
    if not path.exists():
        msg = f"Style guide file '{path}' not found."
        raise FileNotFoundError(msg)

    # Scalars stay text: an unquoted 1.10 must not collapse into 1.1.
    loader = YAML(typ="base")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    match loaded:
        case {"sections": list() as entries, **rest}:
            files = rest.get("files") or []
        case _:
            msg = f"Style guide file '{path}' must define a 'sections' list."
            raise StyleGuideError(msg)

    sections = [_build_section(entry) for entry in entries]
    sections.sort(key=_sort_key)
    return StyleGuide(entries=tuple(sections), files=tuple(str(f) for f in files))


def _build_section(entry: object) -> Section:
    match entry:
        case {"reference": str() as reference, **rest} if reference.strip():
            pass
        case _:
            msg = "Every style guide section requires a 'reference'."
            raise StyleGuideError(msg)
    return Section(
        reference=reference.strip(),
        header=str(rest.get("header") or ""),
        description=str(rest.get("description") or ""),
        markup=str(rest.get("markup") or ""),
        modifiers=_build_modifiers(rest.get("modifiers")),
    )


def _build_modifiers(entries: object) -> tuple[Modifier, ...]:
    modifiers: list[Modifier] = []
    if not isinstance(entries, list):
        return ()
    for entry in entries:
        match entry:
            case str() as name:
                modifiers.append(Modifier(name=name))
            case {"name": name, **rest}:
                modifiers.append(
                    Modifier(name=str(name), description=str(rest.get("description") or ""))
                )
            case _:
                msg = "Modifiers must be names or mappings with a 'name'."
                raise StyleGuideError(msg)
    return tuple(modifiers)


def _sort_key(section: Section) -> list[tuple[int, typ.Any]]:
    key: list[tuple[int, typ.Any]] = []
    for part in section.reference_parts:
        if part.isdigit():
            key.append((0, int(part)))
        else:
            key.append((1, part.lower()))
    return key


__all__ = [
    "Modifier",
    "Section",
    "StyleGuide",
    "StyleGuideError",
    "is_file_reference",
    "load_styleguide",
    "reference_to_uri",
]
