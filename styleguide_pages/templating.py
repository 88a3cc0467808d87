"""Jinja2 templating service with an owned, resettable compile registry.

Every builder owns one :class:`TemplatingService`. Templates are compiled
from inline text or from a file path under an *identity* (a section
reference, a template basename, or a namespaced page template such as
``builder/index.jinja``). Each identity is compiled exactly once per build:
the registry stores one pending task per identity, so concurrent callers
await the same compilation instead of racing. ``reset_registry`` drops every
identity so a long-lived process can rebuild without seeing stale handles.

Example
-------
>>> import asyncio
>>> service = TemplatingService()
>>> async def demo() -> str:
...     await service.compile_inline("1.1", "<b>{{ label }}</b>")
...     return await service.render("1.1", {"label": "Hi"})
>>> asyncio.run(demo())
'<b>Hi</b>'
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PrefixLoader,
    Template,
    TemplateError,
    TemplateSyntaxError,
)
from markupsafe import Markup

from .errors import TemplateCompileError, TemplateRenderError

logger = logging.getLogger(__name__)


class TemplatingService:
    """Compile, cache, and render Jinja templates for a single builder."""

    def __init__(
        self,
        namespaces: cabc.Mapping[str, Path] | None = None,
        *,
        search_paths: cabc.Sequence[Path] = (),
    ) -> None:
        """Configure the Jinja environment and an empty registry.

        Parameters
        ----------
        namespaces : Mapping[str, Path], optional
            Template namespaces exposed to ``include``/``extends`` as
            ``"<namespace>/<path>"``.
        search_paths : Sequence[Path], optional
            Source roots searched for un-namespaced includes.
        """
        self.namespaces = dict(namespaces or {})
        loaders: list[BaseLoader] = []
        if self.namespaces:
            loaders.append(
                PrefixLoader(
                    {
                        name: FileSystemLoader(str(path))
                        for name, path in self.namespaces.items()
                    }
                )
            )
        if search_paths:
            loaders.append(FileSystemLoader([str(path) for path in search_paths]))
        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            enable_async=True,
        )
        self._registry: dict[str, asyncio.Future[Template]] = {}

    @property
    def identities(self) -> list[str]:
        """Return the identities currently held by the registry."""
        return list(self._registry)

    def has(self, identity: str) -> bool:
        """Return ``True`` when ``identity`` has been compiled or is compiling."""
        return identity in self._registry

    def reset_registry(self) -> None:
        """Forget every compiled identity; call once at the start of a build."""
        if self._registry:
            logger.debug("Resetting %d compiled templates", len(self._registry))
        self._registry = {}
        # Included and extended templates live in the environment cache.
        if self.env.cache is not None:
            self.env.cache.clear()

    async def compile_inline(self, identity: str, text: str) -> Template:
        """Compile ``text`` under ``identity``, reusing an earlier compilation."""
        return await self._compile_once(
            identity, lambda: self._compile_source(identity, text)
        )

    async def compile_file(self, identity: str, path: Path) -> Template:
        """Compile the template stored at ``path`` under ``identity``.

        Raises
        ------
        TemplateCompileError
            If ``path`` is not a readable file or its content does not parse.
        """
        return await self._compile_once(
            identity, lambda: self._compile_path(identity, path)
        )

    async def load(self, identity: str) -> Template:
        """Return the compiled template for ``identity``.

        Raises
        ------
        KeyError
            If nothing was compiled under ``identity`` during this build.
        """
        try:
            pending = self._registry[identity]
        except KeyError as exc:
            msg = f"Template '{identity}' has not been compiled."
            raise KeyError(msg) from exc
        return await pending

    async def render(self, identity: str, context: cabc.Mapping[str, typ.Any]) -> str:
        """Render the template registered as ``identity`` against ``context``.

        Raises
        ------
        TemplateRenderError
            If the template fails while rendering (for example, attribute
            access on an undefined variable).
        """
        template = await self.load(identity)
        try:
            return await template.render_async(context)
        except (TemplateError, TypeError, ValueError) as exc:
            raise TemplateRenderError(identity, str(exc)) from exc

    def _compile_once(
        self,
        identity: str,
        factory: cabc.Callable[[], cabc.Coroutine[typ.Any, typ.Any, Template]],
    ) -> asyncio.Future[Template]:
        # Lookup and insert happen without an await in between.
        pending = self._registry.get(identity)
        if pending is None:
            pending = asyncio.ensure_future(factory())
            self._registry[identity] = pending
        return pending

    async def _compile_path(self, identity: str, path: Path) -> Template:
        try:
            source = await asyncio.to_thread(_read_template, path)
        except OSError as exc:
            reason = f"Unable to find template file {path}"
            raise TemplateCompileError(identity, reason) from exc
        return self._build(identity, source, filename=str(path))

    async def _compile_source(self, identity: str, text: str) -> Template:
        return self._build(identity, text, filename=None)

    def _build(self, identity: str, source: str, *, filename: str | None) -> Template:
        try:
            code = self.env.compile(source, name=identity, filename=filename)
        except TemplateSyntaxError as exc:
            raise TemplateCompileError(identity, str(exc)) from exc
        logger.debug("Compiled template %s", identity)
        return self.env.template_class.from_code(
            self.env, code, self.env.make_globals(None), None
        )


def mark_safe(value: typ.Any) -> typ.Any:
    """Return ``value`` with every string wrapped in :class:`Markup`.

    Sample data is trusted HTML, so strings must not be escaped when they are
    interpolated into component markup. Containers are rebuilt rather than
    modified.

    Examples
    --------
    >>> mark_safe({"label": "<em>Hi</em>", "count": 2})
    {'label': Markup('<em>Hi</em>'), 'count': 2}
    """
    if isinstance(value, str):
        return Markup(value)
    if isinstance(value, cabc.Mapping):
        return {key: mark_safe(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [mark_safe(item) for item in value]
    return value


def _read_template(path: Path) -> str:
    if not path.is_file():
        msg = f"{path} is not a file"
        raise FileNotFoundError(msg)
    return path.read_text(encoding="utf-8")


__all__ = ["TemplatingService", "mark_safe"]
