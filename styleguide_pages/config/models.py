"""Typed dataclasses describing style guide builder configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from .._constants import DEFAULT_HOMEPAGE, DEFAULT_PLACEHOLDER

DEFAULT_BUILDER_DIR = Path(__file__).resolve().parents[1] / "templates"


class BuilderConfigError(ValueError):
    """Raised when the builder configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class BuilderConfig:
    """Options consumed by :class:`~styleguide_pages.builder.StyleGuideBuilder`.

    Attributes
    ----------
    source : list[Path]
        Ordered source roots searched for component templates, sample data,
        and the homepage document. Earlier roots win.
    destination : Path
        Directory that receives the generated HTML pages.
    builder : Path
        Directory holding ``index.jinja`` and the optional ``section.jinja``
        and ``item.jinja`` page templates.
    homepage : str
        File name of the Markdown homepage document.
    placeholder : str
        Class text shown in canonical markup for sections with modifiers.
    namespaces : dict[str, Path]
        Extra template namespaces, included as ``"<name>/<template>"``.
    css : list[str]
        Stylesheet URLs linked from every page.
    js : list[str]
        Script URLs loaded by every page.
    extend : list[Path]
        Directories of Python modules whose ``extend(env, config)`` function
        customizes the Jinja environment.
    title : str
        Style guide title shown by the page templates.
    item_pages : bool
        Whether to write one page per section.
    verbose : bool
        Whether to log build progress.
    """

    source: list[Path]
    destination: Path = Path("styleguide")
    builder: Path = DEFAULT_BUILDER_DIR
    homepage: str = DEFAULT_HOMEPAGE
    placeholder: str = DEFAULT_PLACEHOLDER
    namespaces: dict[str, Path] = dc.field(default_factory=dict)
    css: list[str] = dc.field(default_factory=list)
    js: list[str] = dc.field(default_factory=list)
    extend: list[Path] = dc.field(default_factory=list)
    title: str = "Style guide"
    item_pages: bool = True
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.source:
            msg = "At least one source directory is required."
            raise BuilderConfigError(msg)

    def with_overrides(self, **overrides: typ.Any) -> BuilderConfig:
        """Return a copy with every non-``None`` override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        unknown = set(changes) - {field.name for field in dc.fields(self)}
        if unknown:
            msg = f"Unknown configuration options: {', '.join(sorted(unknown))}"
            raise BuilderConfigError(msg)
        return dc.replace(self, **changes)


__all__ = ["DEFAULT_BUILDER_DIR", "BuilderConfig", "BuilderConfigError"]
