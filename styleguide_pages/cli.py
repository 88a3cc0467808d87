"""Cyclopts CLI entrypoint for building HTML style guides.

The ``styleguide`` console script defined here loads a style guide section
tree (YAML or JSON), merges builder options from an optional
``styleguide.yaml`` with command-line overrides, and writes the homepage,
section pages, and item pages into the destination directory.

Examples
--------
Build with a configuration file:

>>> from styleguide_pages.cli import main
>>> main()  # doctest: +SKIP

Build from the command line only:

>>> from styleguide_pages.cli import app
>>> app(
...     ["build", "--styleguide", "sections.yaml", "--source", "components"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .builder import StyleGuideBuilder
from .config import BuilderConfig, build_builder_config, load_builder_config
from .styleguide import load_styleguide

DEFAULT_CONFIG = Path("styleguide.yaml")
LOGGER_NAME = "styleguide_pages"

app = App(name="styleguide", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def configure_logging(*, verbose: bool = False, stream: typ.TextIO | None = None) -> None:
    """Send package log records to ``stream`` as ``[LEVEL] message`` lines.

    Warnings always show; progress messages appear only when ``verbose``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO if verbose else logging.WARNING)
    logger.handlers.clear()
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.addHandler(handler)


def resolve_config(
    config: Path | None,
    *,
    source: list[Path] | None = None,
    **overrides: typ.Any,
) -> BuilderConfig:
    """Combine the optional config file with command-line overrides.

    Parameters
    ----------
    config : Path or None
        Configuration file to load. When ``None``, ``styleguide.yaml`` in the
        working directory is used if present.
    source : list[Path] or None, optional
        Source roots that replace the configured ones.
    **overrides : Any
        Remaining :class:`BuilderConfig` fields; ``None`` values are ignored.

    Returns
    -------
    BuilderConfig
        The effective builder configuration.

    Raises
    ------
    BuilderConfigError
        If no source directory is configured anywhere.
    """
    config_path = config or (DEFAULT_CONFIG if DEFAULT_CONFIG.exists() else None)
    if config_path is not None:
        base = load_builder_config(config_path)
        if source:
            base = base.with_overrides(source=list(source))
    else:
        raw = {"source": [str(path) for path in source or []]}
        base = build_builder_config(raw, base_dir=Path.cwd())
    return base.with_overrides(**overrides)


@app.command(help="Build the HTML style guide from a section tree.")
def build(
    *,
    styleguide: typ.Annotated[
        Path, Parameter(help="Section tree (YAML or JSON)", env_var="INPUT_STYLEGUIDE")
    ],
    config: typ.Annotated[
        Path | None, Parameter(help="Path to builder config", env_var="INPUT_CONFIG")
    ] = None,
    source: typ.Annotated[
        list[Path] | None,
        Parameter(help="Source directory; repeat to add more", env_var="INPUT_SOURCE"),
    ] = None,
    destination: typ.Annotated[
        Path | None,
        Parameter(help="Output folder", env_var="INPUT_DESTINATION"),
    ] = None,
    extend: typ.Annotated[
        list[Path] | None,
        Parameter(
            help="Folder of Jinja extension modules; repeat to add more",
            env_var="INPUT_EXTEND",
        ),
    ] = None,
    builder: typ.Annotated[
        Path | None,
        Parameter(help="Folder holding the page templates", env_var="INPUT_BUILDER"),
    ] = None,
    homepage: typ.Annotated[
        str | None,
        Parameter(help="File name of the homepage Markdown", env_var="INPUT_HOMEPAGE"),
    ] = None,
    placeholder: typ.Annotated[
        str | None,
        Parameter(
            help="Placeholder text for modifier classes", env_var="INPUT_PLACEHOLDER"
        ),
    ] = None,
    title: typ.Annotated[
        str | None, Parameter(help="Style guide title", env_var="INPUT_TITLE")
    ] = None,
    item_pages: typ.Annotated[
        bool | None,
        Parameter(help="Write one page per section", env_var="INPUT_ITEM_PAGES"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log build progress", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Build the style guide and print each written page.

    Parameters
    ----------
    styleguide : Path
        Section tree document produced by the documentation parser.
    config : Path or None, optional
        Builder configuration file; defaults to ``styleguide.yaml`` when it
        exists.
    source, destination, extend, builder, homepage, placeholder, title, item_pages
        Overrides for the matching :class:`BuilderConfig` fields.
    verbose : bool, optional
        Log build progress in addition to warnings.

    Returns
    -------
    None
        Writes the pages and prints their paths.

    Raises
    ------
    StyleGuideBuildError
        If a template fails to compile or render, or a page cannot be written.
    """
    builder_config = resolve_config(
        config,
        source=source,
        destination=destination,
        extend=extend,
        builder=builder,
        homepage=homepage,
        placeholder=placeholder,
        title=title,
        item_pages=item_pages,
        verbose=verbose or None,
    )
    configure_logging(verbose=builder_config.verbose)
    written = StyleGuideBuilder(builder_config).run(load_styleguide(styleguide))
    for path in written:
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``styleguide`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
