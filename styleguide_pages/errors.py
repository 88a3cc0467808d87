"""Fatal error types raised while building a style guide.

Recoverable conditions (missing templates, missing sample data, a missing
homepage document) are handled where they are detected and never surface as
these exceptions. Anything raised from here aborts the build.
"""

from __future__ import annotations

from pathlib import Path


class StyleGuideBuildError(RuntimeError):
    """Base class for errors that abort a style guide build."""


class TemplateCompileError(StyleGuideBuildError):
    """Raised when a template cannot be read or parsed."""

    def __init__(self, identity: str, reason: str) -> None:
        self.identity = identity
        self.reason = reason
        super().__init__(f"Unable to compile template '{identity}': {reason}")


class TemplateRenderError(StyleGuideBuildError):
    """Raised when a compiled template fails against its context."""

    def __init__(self, identity: str, reason: str) -> None:
        self.identity = identity
        self.reason = reason
        super().__init__(f"Unable to render template '{identity}': {reason}")


class ExtensionError(StyleGuideBuildError):
    """Raised when a template extension module cannot be loaded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to load extension '{path}': {reason}")


class PageWriteError(StyleGuideBuildError):
    """Raised when a rendered page cannot be written to the destination."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to write page '{path}': {reason}")


__all__ = [
    "ExtensionError",
    "PageWriteError",
    "StyleGuideBuildError",
    "TemplateCompileError",
    "TemplateRenderError",
]
