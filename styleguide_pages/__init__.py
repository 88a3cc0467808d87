"""Build static HTML style guides from documented UI sections.

This package resolves each section's markup (inline snippets or Jinja
template files found under the configured source roots), renders the
canonical markup, example views, and modifier variants with sample data, and
writes a homepage, one page per top-level section, and one page per section.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``StyleGuideBuilder``: Programmatic entry point for builds.

Examples
--------
>>> from styleguide_pages import main
>>> main()  # doctest: +SKIP
>>> from styleguide_pages import app
>>> app.name[0] if isinstance(app.name, tuple) else app.name
'styleguide'
"""

from __future__ import annotations

from .builder import StyleGuideBuilder
from .cli import app, main

__all__ = ["StyleGuideBuilder", "app", "main"]
